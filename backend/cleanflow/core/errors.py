"""Error Hierarchy — typed, categorized exceptions for the request pipeline.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - PayloadExtractionError is the single extraction sentinel: every decode
      failure raised by the payload extractor is an instance of it
    - Validation errors raised by payloads are never wrapped by the pipeline
    - to_response() produces the REST envelope; no internal details in messages

Design Decisions:
    - Sentinel as an exception class: isinstance() is the identity test, the
      codec's own exception stays reachable through __cause__
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    EXTRACTION = "extraction"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    path: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None


class CleanflowError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "request_id": self.context.request_id,
                    "path": self.context.path,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class PayloadExtractionError(CleanflowError):
    """Request body could not be decoded by the codec."""
    def __init__(self, cause: str, context: ErrorContext | None = None):
        super().__init__(
            f"request payload extraction failed caused by {cause}",
            "PAYLOAD_EXTRACTION_FAILED", ErrorCategory.EXTRACTION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.cause = cause


class PayloadValidationError(CleanflowError):
    """Decoded payload broke one of its own rules.

    Optional base for application payloads; the extractor re-raises
    whatever validate() raised, subclass of this or not.
    """
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )
        self.field = field


class BusinessRuleError(CleanflowError):
    """Use case rejected the input. Carried inside a Failure output."""
    def __init__(self, message: str, code: str = "BUSINESS_RULE_VIOLATION",
                 context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Internal Errors (500-level) ────────────────────────────────

class ViewModelEncodingError(CleanflowError):
    """View model failed to encode itself at send time."""
    def __init__(self, view_model_type: str, cause: str, context: ErrorContext | None = None):
        super().__init__(
            f"{view_model_type} encoding failed: {cause}",
            "VIEW_MODEL_ENCODING_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.view_model_type = view_model_type


def is_extraction_error(exc: BaseException | None) -> bool:
    """True if exc, or anything in its cause chain, is the extraction sentinel."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, PayloadExtractionError):
            return True
        seen.add(id(exc))
        exc = exc.__cause__
    return False
