"""View Model Schemas — pydantic bases that satisfy the ViewModel protocol.

Invariants:
    - Instances are frozen once built by a presenter
    - content_type/status_code/encode are pure functions of the instance

Design Decisions:
    - Status as a ClassVar (http_status): one subclass per response shape,
      override status_code() when it depends on the data
    - exclude_none on encode: optional envelope branches (data/error) vanish
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class JSONViewModel(BaseModel):
    """JSON response body. Subclass and declare fields."""
    model_config = ConfigDict(frozen=True)

    http_status: ClassVar[int] = 200
    media_type: ClassVar[str] = "application/json"

    def content_type(self) -> str:
        return self.media_type

    def status_code(self) -> int:
        return self.http_status

    def encode(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


class ErrorBody(BaseModel):
    """Error branch of the standard envelope."""
    code: str
    message: str


class ErrorViewModel(JSONViewModel):
    """`{"error": {"code", "message"}}` with a per-instance status."""
    error: ErrorBody
    status: int = 500

    def status_code(self) -> int:
        return self.status

    def encode(self) -> bytes:
        return self.model_dump_json(include={"error"}).encode("utf-8")

    @classmethod
    def from_exception(cls, exc: BaseException, default_status: int = 500) -> "ErrorViewModel":
        """Build from a CleanflowError (code/message/http_status) or any exception."""
        code = getattr(exc, "code", "INTERNAL_ERROR")
        status = getattr(exc, "http_status", default_status)
        message = getattr(exc, "message", None)
        if message is None:
            message = "An unexpected error occurred" if status >= 500 else str(exc)
        return cls(error=ErrorBody(code=code, message=message), status=status)
