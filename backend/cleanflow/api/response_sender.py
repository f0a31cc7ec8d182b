"""HTTP Response Sender — write a view model with common headers and a safe fallback.

Invariants:
    - Exactly one status line and one body per send()
    - content-type, then every configured header, are set before the status line
    - Configured headers replace any value already present under the same name
    - encode() failure never propagates: the response becomes 500 with the
      configured fallback payload (or b"internal error"), whatever status the
      view model declared

Design Decisions:
    - Status is read only after a successful encode(): a view model that
      cannot encode does not get to choose the status line
    - Broad except around encode(): the sender is the last stage, a raised
      error here would leave the client with a half-written response
"""

import logging

from cleanflow.core.contracts import ResponseWriter, ViewModel
from cleanflow.core.errors import ViewModelEncodingError
from cleanflow.core.request_context import RequestContext
from cleanflow.core.response_config import ResponseConfig

logger = logging.getLogger(__name__)

INTERNAL_ERROR_STATUS = 500


class HTTPResponseSender:
    """Sends view models using one shared, immutable ResponseConfig."""

    def __init__(self, config: ResponseConfig | None = None):
        self.config = config or ResponseConfig()

    async def send(
        self, context: RequestContext, writer: ResponseWriter, view_model: ViewModel,
    ) -> None:
        writer.headers["content-type"] = view_model.content_type()
        self._apply_headers(writer)

        try:
            body = view_model.encode()
        except Exception as exc:
            error = ViewModelEncodingError(type(view_model).__name__, str(exc))
            logger.error(
                f"{error.message}, sending fallback payload",
                extra={
                    "request_id": context.request_id,
                    "path": context.path,
                    "error_code": error.code,
                    "view_model_type": error.view_model_type,
                    "status_code": INTERNAL_ERROR_STATUS,
                },
                exc_info=True,
            )
            await writer.write_header(INTERNAL_ERROR_STATUS)
            await writer.write(self.config.effective_fallback_payload)
            return

        await writer.write_header(view_model.status_code())
        await writer.write(body)

    def _apply_headers(self, writer: ResponseWriter) -> None:
        for name, values in self.config.headers:
            del writer.headers[name]
            for value in values:
                writer.headers.append(name, value)
