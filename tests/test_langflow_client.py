import pytest
import requests

from gateway.core.request_builder import build_run_request
from gateway.tools.langflow_client import (
    BufferedReply,
    StreamingReply,
    TransportFailed,
    UpstreamRejected,
    is_streaming_content_type,
)


@pytest.mark.parametrize(
    "content_type",
    [
        "text/event-stream",
        "text/event-stream; charset=utf-8",
        "TEXT/EVENT-STREAM",
        "application/stream",
        "application/stream+json",
    ],
)
def test_stream_content_types(content_type):
    assert is_streaming_content_type(content_type) is True


@pytest.mark.parametrize(
    "content_type",
    [None, "", "application/json", "application/json; charset=utf-8", "text/plain", "text/html", "application/x-ndjson"],
)
def test_buffered_content_types(content_type):
    assert is_streaming_content_type(content_type) is False


def test_request_shape(langflow_client, upstream):
    langflow_client.send(build_run_request("Hello", "u7"))

    upstream.post.assert_called_once()
    args, kwargs = upstream.post.call_args
    assert args[0] == "https://langflow.example.test/lf/endpoint-abc/api/v1/run/flow-123"
    assert kwargs["json"] == {
        "input_value": "Hello",
        "output_type": "chat",
        "input_type": "chat",
        "session_id": "u7",
    }
    assert kwargs["headers"]["Authorization"] == "Bearer test-token"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["stream"] is True
    assert kwargs["timeout"] == 5.0


def test_buffered_reply_is_parsed_and_closed(langflow_client, upstream, langflow_payload, make_response):
    response = make_response(json_body=langflow_payload)
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert result == BufferedReply(payload=langflow_payload)
    assert response.closed


def test_streaming_reply_is_not_read_up_front(langflow_client, upstream, make_response):
    response = make_response(content_type="text/event-stream", chunks=[b"data: a\n\n", b"data: b\n\n"])
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, StreamingReply)
    assert result.content_type == "text/event-stream"
    assert response.chunks_read == []
    assert response.json_calls == 0
    assert not response.closed

    assert next(result.chunks) == b"data: a\n\n"
    assert response.chunks_read == [b"data: a\n\n"]

    assert list(result.chunks) == [b"data: b\n\n"]
    assert response.closed


def test_streaming_reply_close_hook(langflow_client, upstream, make_response):
    response = make_response(content_type="application/stream", chunks=[b"x"])
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))
    result.close()

    assert response.closed
    assert response.chunks_read == []


def test_stream_interrupted_midway_ends_relay(langflow_client, upstream, make_response):
    response = make_response(
        content_type="text/event-stream",
        chunks=[b"data: a\n\n"],
        stream_error=requests.exceptions.ChunkedEncodingError("connection broken"),
    )
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert list(result.chunks) == [b"data: a\n\n"]
    assert response.closed


def test_non_success_status_is_rejected(langflow_client, upstream, make_response):
    response = make_response(status_code=503, reason="Service Unavailable", json_body={"detail": "down"})
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert result == UpstreamRejected(status_code=503, reason="Service Unavailable")
    assert response.json_calls == 0
    assert response.closed


def test_rejection_wins_over_stream_content_type(langflow_client, upstream, make_response):
    upstream.post.return_value = make_response(
        status_code=401, reason="Unauthorized", content_type="text/event-stream"
    )

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, UpstreamRejected)
    assert result.status_code == 401


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_network_failures(langflow_client, upstream, error):
    upstream.post.side_effect = error

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, TransportFailed)
    assert str(error) in result.message


def test_malformed_json_body(langflow_client, upstream, make_response):
    response = make_response(json_error=ValueError("Expecting value: line 1 column 1 (char 0)"))
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, TransportFailed)
    assert "Expecting value" in result.message
    assert response.closed


def test_body_read_failure(langflow_client, upstream, make_response):
    upstream.post.return_value = make_response(json_error=requests.ConnectionError("reset by peer"))

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, TransportFailed)
    assert "reset by peer" in result.message


@pytest.mark.parametrize("status_code,reason", [(304, "Not Modified"), (300, "Multiple Choices"), (302, "Found")])
def test_unfollowed_redirect_is_rejected(langflow_client, upstream, make_response, status_code, reason):
    response = make_response(
        status_code=status_code,
        reason=reason,
        json_error=ValueError("Expecting value: line 1 column 1 (char 0)"),
    )
    upstream.post.return_value = response

    result = langflow_client.send(build_run_request("Hello"))

    assert result == UpstreamRejected(status_code=status_code, reason=reason)
    assert response.json_calls == 0
    assert response.closed


def test_redirect_with_json_body_is_still_rejected(langflow_client, upstream, make_response, langflow_payload):
    upstream.post.return_value = make_response(status_code=302, reason="Found", json_body=langflow_payload)

    result = langflow_client.send(build_run_request("Hello"))

    assert isinstance(result, UpstreamRejected)
    assert result.status_code == 302
