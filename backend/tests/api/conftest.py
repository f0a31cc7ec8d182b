"""API test fixtures — raw ASGI requests and a request context.

Invariants:
    - make_request builds a real Starlette Request whose body stream can be
      read once; receive_calls counts how often the stream was pulled
"""

import pytest
from starlette.requests import Request

from cleanflow.core.request_context import RequestContext


@pytest.fixture
def make_request():
    def _make(body: bytes = b"", method: str = "POST", path: str = "/", headers=None):
        receive_calls = []

        async def receive():
            receive_calls.append(1)
            if len(receive_calls) > 1:
                return {"type": "http.disconnect"}
            return {"type": "http.request", "body": body, "more_body": False}

        raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
        request = Request({
            "type": "http", "method": method, "path": path,
            "headers": raw, "query_string": b"",
            "scheme": "http", "server": ("test", 80),
        }, receive)
        request.state.receive_calls = receive_calls
        return request
    return _make


@pytest.fixture
def context():
    return RequestContext(request_id="req-test", method="POST", path="/")
