"""Payload Request Decoder — stock RequestDecoder built on a payload extractor.

Invariants:
    - decode() never raises for a bad body: extraction and validation errors
      come back as Failure, a valid payload as Success
    - The extraction/validation distinction survives: callers test
      is_extraction_error(failure.error)
"""

from typing import Generic, TypeVar

from fastapi import Request

from cleanflow.api.payload_extractor import RequestPayloadExtractor
from cleanflow.core.result import Failure, Result, Success


P = TypeVar("P")


class PayloadRequestDecoder(Generic[P]):
    """Turns RequestPayloadExtractor's raise-or-return into a Result."""

    def __init__(self, extractor: RequestPayloadExtractor[P]):
        self.extractor = extractor

    async def decode(self, request: Request) -> Result[P]:
        try:
            payload = await self.extractor.extract(request)
        except Exception as exc:
            return Failure(exc)
        return Success(payload)
