"""Request Context — per-request identity and deadline, forwarded opaquely.

Invariants:
    - Built once per request by the orchestrator, never mutated afterwards
    - The pipeline forwards it unchanged; only use cases interpret the deadline
    - deadline is a time.monotonic() timestamp, or None when no timeout is set

Design Decisions:
    - Frozen dataclass over contextvars: explicit parameter keeps use cases
      testable without an event loop or a running request
"""

import time
import uuid
from dataclasses import dataclass, field

from starlette.requests import Request


@dataclass(frozen=True)
class RequestContext:
    """Identity and cancellation data for one in-flight request."""
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    method: str = "GET"
    path: str = "/"
    deadline: float | None = None

    @classmethod
    def from_request(
        cls,
        request: Request,
        timeout_seconds: float | None = None,
        request_id_header: str = "x-request-id",
    ) -> "RequestContext":
        """Build from a Starlette request, reusing the caller's request id if sent."""
        request_id = request.headers.get(request_id_header) or uuid.uuid4().hex
        deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )
        return cls(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            deadline=deadline,
        )

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), None if unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline
