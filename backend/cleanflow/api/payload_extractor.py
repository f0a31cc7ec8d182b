"""Request Payload Extractor — decode a request body, then let it validate itself.

Invariants:
    - The request body stream is consumed exactly once per extract() call
    - Decode failures (including an unreadable body) are raised as
      PayloadExtractionError chained to the codec's exception
    - Validation failures are raised exactly as validate() raised them
    - A payload is returned only after its validate() returned

Design Decisions:
    - Raise instead of returning (payload, error): callers that want a
      Result wrap extract() in their request decoder
    - __call__ delegates to extract() so an extractor doubles as a FastAPI
      dependency: `payload: Todo = Depends(extractor)`
"""

import logging
from typing import Generic, TypeVar

from fastapi import Request

from cleanflow.core.contracts import PayloadCodec, Validatable
from cleanflow.core.errors import ErrorContext, PayloadExtractionError
from cleanflow.infrastructure.codecs import Codec, codec_name, resolve_codec

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=Validatable)


class RequestPayloadExtractor(Generic[P]):
    """Extracts and validates request bodies of one payload type."""

    def __init__(
        self, payload_type: type[P], codec: "Codec | str | PayloadCodec" = Codec.JSON,
    ):
        if not callable(getattr(payload_type, "validate", None)):
            raise TypeError(f"{payload_type.__name__} has no validate() method")
        self.payload_type = payload_type
        self.codec = resolve_codec(codec)

    async def extract(self, request: Request) -> P:
        try:
            body = await request.body()
            payload = self.codec.decode(body, self.payload_type)
        except Exception as exc:
            logger.debug(
                f"Payload extraction failed: {exc}",
                extra={
                    "payload_type": self.payload_type.__name__,
                    "codec": codec_name(self.codec),
                    "path": request.url.path,
                },
            )
            raise PayloadExtractionError(
                str(exc), ErrorContext(path=request.url.path),
            ) from exc

        payload.validate()
        return payload

    async def __call__(self, request: Request) -> P:
        return await self.extract(request)
