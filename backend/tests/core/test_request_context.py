"""Request Context — verifies identity and deadline handling.

Tests:
    - from_request reuses the caller's request id header
    - A fresh id is generated when none is sent
    - deadline None means unbounded
    - remaining() never goes negative; expired flips once the deadline passes
"""

import time

from starlette.requests import Request

from cleanflow.core.request_context import RequestContext


def _request(headers=None, method="POST", path="/todos"):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({
        "type": "http", "method": method, "path": path,
        "headers": raw, "query_string": b"",
        "scheme": "http", "server": ("test", 80),
    })


def test_from_request_reuses_request_id():
    ctx = RequestContext.from_request(_request({"X-Request-ID": "abc-123"}))
    assert ctx.request_id == "abc-123"
    assert ctx.method == "POST"
    assert ctx.path == "/todos"


def test_from_request_custom_header_name():
    ctx = RequestContext.from_request(
        _request({"X-Correlation-ID": "corr-1"}), request_id_header="x-correlation-id",
    )
    assert ctx.request_id == "corr-1"


def test_from_request_generates_request_id():
    first = RequestContext.from_request(_request())
    second = RequestContext.from_request(_request())
    assert first.request_id
    assert first.request_id != second.request_id


def test_no_timeout_is_unbounded():
    ctx = RequestContext.from_request(_request())
    assert ctx.deadline is None
    assert ctx.remaining() is None
    assert not ctx.expired


def test_deadline_from_timeout():
    ctx = RequestContext.from_request(_request(), timeout_seconds=30)
    remaining = ctx.remaining()
    assert 0 < remaining <= 30
    assert not ctx.expired


def test_past_deadline_is_expired():
    ctx = RequestContext(deadline=time.monotonic() - 1)
    assert ctx.expired
    assert ctx.remaining() == 0.0
