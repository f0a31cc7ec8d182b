"""Response Writers — ASGI-bound sink and in-memory recorder.

Invariants:
    - At most one status line per response; later write_header() calls are
      ignored with a warning
    - Headers are frozen into the status line when it is written: changes to
      `headers` afterwards never reach the client
    - write() before write_header() implies status 200
    - close() always completes the response, even if nothing was written

Design Decisions:
    - Starlette MutableHeaders as the header map: case-insensitive,
      multi-value, and its .raw list is already the ASGI wire shape
    - ResponseRecorder mirrors the writer contract so presenters and senders
      are unit-tested without a server
"""

import logging

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import Send

logger = logging.getLogger(__name__)


class ASGIResponseWriter:
    """Writes a response through the ASGI `send` channel."""

    def __init__(self, send: Send):
        self._send = send
        self.headers = MutableHeaders()
        self.status_code: int | None = None
        self._closed = False

    @property
    def started(self) -> bool:
        return self.status_code is not None

    async def write_header(self, status_code: int) -> None:
        if self.started:
            logger.warning(
                f"Superfluous write_header({status_code}), status already {self.status_code}",
                extra={"status_code": status_code},
            )
            return
        self.status_code = status_code
        await self._send({
            "type": "http.response.start",
            "status": status_code,
            "headers": list(self.headers.raw),
        })

    async def write(self, body: bytes) -> None:
        if self._closed:
            raise RuntimeError("response already closed")
        if not self.started:
            await self.write_header(200)
        if body:
            await self._send({
                "type": "http.response.body", "body": bytes(body), "more_body": True,
            })

    async def close(self) -> None:
        if self._closed:
            return
        if not self.started:
            await self.write_header(200)
        self._closed = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})


class ResponseRecorder:
    """Records what a presenter wrote. Test double for ResponseWriter."""

    def __init__(self):
        self.headers = MutableHeaders()
        self.status_code: int | None = None
        self.written_headers: Headers | None = None
        self.body = bytearray()
        self.header_writes = 0

    async def write_header(self, status_code: int) -> None:
        self.header_writes += 1
        if self.status_code is not None:
            return
        self.status_code = status_code
        self.written_headers = Headers(raw=list(self.headers.raw))

    async def write(self, body: bytes) -> None:
        if self.status_code is None:
            await self.write_header(200)
        self.body.extend(body)

    async def close(self) -> None:
        if self.status_code is None:
            await self.write_header(200)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")
