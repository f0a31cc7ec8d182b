"""HTTP Response Sender — header composition and encoding-failure fallback.

Tests:
    - Successful encode: view model status, body, content-type, configured headers
    - Failed encode: 500 and the configured fallback, whatever status was declared
    - Failed encode without fallback: 500 and b"internal error"
    - Exactly one status line per send; headers complete before it
    - Configured headers replace existing values, multi-values all sent
    - Encoding failures are logged, never raised
"""

import logging

from cleanflow.api.response_sender import HTTPResponseSender
from cleanflow.api.response_writer import ResponseRecorder
from cleanflow.core.response_config import ResponseConfig

from tests.api.fakes import BrokenViewModel, SuccessViewModel


async def test_success_writes_status_headers_and_body(context):
    sender = HTTPResponseSender(ResponseConfig.build(headers={
        "content-encoding": ["bzip"],
        "x-custom-header": ["custom header value"],
    }))
    recorder = ResponseRecorder()

    await sender.send(context, recorder, SuccessViewModel("success response payload"))

    assert recorder.status_code == 200
    assert recorder.written_headers["content-type"] == "application/json"
    assert recorder.written_headers["content-encoding"] == "bzip"
    assert recorder.written_headers["x-custom-header"] == "custom header value"
    assert recorder.text == '{"data": "success response payload"}'
    assert recorder.header_writes == 1


async def test_encoding_failure_sends_custom_fallback(context):
    sender = HTTPResponseSender(
        ResponseConfig.build(fallback_payload=b'{"error":"custom internal error"}'),
    )
    recorder = ResponseRecorder()

    await sender.send(context, recorder, BrokenViewModel())

    assert recorder.status_code == 500
    assert bytes(recorder.body) == b'{"error":"custom internal error"}'
    assert recorder.header_writes == 1


async def test_encoding_failure_sends_default_fallback(context):
    recorder = ResponseRecorder()

    await HTTPResponseSender().send(context, recorder, BrokenViewModel())

    assert recorder.status_code == 500
    assert bytes(recorder.body) == b"internal error"


async def test_encoding_failure_keeps_headers(context):
    sender = HTTPResponseSender(ResponseConfig.build(headers={"x-service": ["todos"]}))
    recorder = ResponseRecorder()

    await sender.send(context, recorder, BrokenViewModel())

    assert recorder.written_headers["x-service"] == "todos"
    assert recorder.written_headers["content-type"] == "application/json"


async def test_encoding_failure_is_logged(context, caplog):
    with caplog.at_level(logging.ERROR, logger="cleanflow.api.response_sender"):
        await HTTPResponseSender().send(context, ResponseRecorder(), BrokenViewModel())

    record = caplog.records[-1]
    assert "BrokenViewModel encoding failed: some encoding error" in record.getMessage()
    assert record.error_code == "VIEW_MODEL_ENCODING_FAILED"
    assert record.request_id == "req-test"
    assert record.exc_info is not None


async def test_configured_headers_replace_existing(context):
    sender = HTTPResponseSender(ResponseConfig.build(headers={
        "content-type": ["application/vnd.todos+json"],
        "vary": ["accept", "origin"],
    }))
    recorder = ResponseRecorder()
    recorder.headers["vary"] = "cookie"

    await sender.send(context, recorder, SuccessViewModel("x"))

    assert recorder.written_headers.getlist("content-type") == ["application/vnd.todos+json"]
    assert recorder.written_headers.getlist("vary") == ["accept", "origin"]


async def test_sender_is_reusable_across_requests(context):
    sender = HTTPResponseSender(ResponseConfig.build(headers={"x-a": ["1"]}))
    first, second = ResponseRecorder(), ResponseRecorder()

    await sender.send(context, first, BrokenViewModel())
    await sender.send(context, second, SuccessViewModel("ok"))

    assert first.status_code == 500
    assert second.status_code == 200
    assert second.written_headers.getlist("x-a") == ["1"]
