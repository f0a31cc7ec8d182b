"""HTTP Handler — ASGI entry point composing decoder, use case and presenter.

Invariants:
    - One decode, one handle, one present per request, in that order; no retries
    - The handler never inspects inputs or outputs: a failing stage hands the
      next one an error-carrying value instead of raising
    - The same RequestContext reaches the use case and the presenter
    - Stateless across requests: safe to serve concurrent requests

Design Decisions:
    - Plain ASGI callable over a FastAPI route function: mounts with
      app.add_route(path, handler, methods=[...]) on any Starlette router
    - The writer is closed after present(): a presenter that wrote nothing
      yields an empty 200 instead of a hung connection
    - A presenter that raises after its status line still gets the response
      closed before the error propagates; one that raises earlier leaves the
      response unstarted so the server's error middleware can send its 500
"""

import logging
from typing import Generic, TypeVar

from fastapi import Request
from starlette.types import Receive, Scope, Send

from cleanflow.api.response_writer import ASGIResponseWriter
from cleanflow.config import Settings, get_settings
from cleanflow.core.contracts import Presenter, RequestDecoder, UseCaseHandler
from cleanflow.core.request_context import RequestContext

logger = logging.getLogger(__name__)

I = TypeVar("I")
O = TypeVar("O")


class HTTPHandler(Generic[I, O]):
    """One endpoint: request decoder -> use case handler -> presenter."""

    def __init__(
        self,
        request_decoder: RequestDecoder[I],
        use_case_handler: UseCaseHandler[I, O],
        presenter: Presenter[O],
        settings: Settings | None = None,
    ):
        self.request_decoder = request_decoder
        self.use_case_handler = use_case_handler
        self.presenter = presenter
        self.settings = settings or get_settings()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            raise RuntimeError(f"HTTPHandler cannot serve '{scope['type']}' scopes")

        request = Request(scope, receive)
        context = RequestContext.from_request(
            request,
            timeout_seconds=self.settings.request_timeout_seconds,
            request_id_header=self.settings.request_id_header,
        )
        logger.debug(
            f"Dispatching {context.method} {context.path}",
            extra={"request_id": context.request_id, "path": context.path},
        )

        use_case_input = await self.request_decoder.decode(request)
        output = await self.use_case_handler.handle(context, use_case_input)

        writer = ASGIResponseWriter(send)
        try:
            await self.presenter.present(context, writer, output)
        except Exception:
            # finish a started response; an unstarted one is left to the server
            if writer.started:
                await writer.close()
            raise
        await writer.close()
