"""
Shared pytest configuration.

Sets the Langflow environment before the app is imported (gateway.main refuses to start without a token)
and provides a fake upstream so no test talks to the network.
"""

import os
import time

os.environ.setdefault("LANGFLOW_API_TOKEN", "test-token")
os.environ.setdefault("LANGFLOW_BASE_URL", "https://langflow.example.test")
os.environ.setdefault("LANGFLOW_FLOW_ID", "flow-123")
os.environ.setdefault("LANGFLOW_ENDPOINT_ID", "endpoint-abc")

from typing import Any, Iterable, List, Optional
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient
from requests.structures import CaseInsensitiveDict

from gateway.api.deps import get_chat_gateway
from gateway.config import LangflowSettings
from gateway.core.chat_gateway import ChatGateway
from gateway.main import app
from gateway.tools.langflow_client import LangflowClient


class FakeUpstreamResponse:
    """Just enough of requests.Response for LangflowClient."""

    def __init__(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content_type: Optional[str] = "application/json",
        chunks: Iterable[bytes] = (),
        reason: str = "OK",
        json_error: Optional[Exception] = None,
        stream_error: Optional[Exception] = None,
        chunk_delay: float = 0.0,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict()
        if content_type is not None:
            self.headers["content-type"] = content_type
        self._json_body = json_body
        self._json_error = json_error
        self._chunks = list(chunks)
        self._stream_error = stream_error
        self._chunk_delay = chunk_delay
        self.chunks_read: List[bytes] = []
        self.json_calls = 0
        self.closed = False

    @property
    def ok(self) -> bool:
        return self.status_code < 400  # same as requests: 3xx counts as "ok"

    def json(self) -> Any:
        self.json_calls += 1
        if self._json_error is not None:
            raise self._json_error
        return self._json_body

    def iter_content(self, chunk_size=None):
        for chunk in self._chunks:
            if self._chunk_delay:
                time.sleep(self._chunk_delay)
            self.chunks_read.append(chunk)
            yield chunk
        if self._stream_error is not None:
            raise self._stream_error

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> LangflowSettings:
    return LangflowSettings(
        api_token="test-token",
        base_url="https://langflow.example.test/",
        flow_id="flow-123",
        endpoint_id="endpoint-abc",
        timeout_seconds=5.0,
    )


@pytest.fixture
def upstream():
    """
    Fake requests.Session. Tests set upstream.post.return_value (a FakeUpstreamResponse)
    or upstream.post.side_effect (an exception).
    """
    session = MagicMock(spec=requests.Session)
    session.post.return_value = FakeUpstreamResponse(json_body={})
    return session


@pytest.fixture
def langflow_client(settings, upstream) -> LangflowClient:
    return LangflowClient(settings, http=upstream)


@pytest.fixture
def chat_gateway(settings, langflow_client) -> ChatGateway:
    return ChatGateway(settings, client=langflow_client)


@pytest.fixture
def client(chat_gateway):
    app.dependency_overrides[get_chat_gateway] = lambda: chat_gateway
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def langflow_payload() -> dict:
    """A trimmed but realistic run response."""
    return {
        "session_id": "s1",
        "outputs": [
            {
                "inputs": {"input_value": "Hello"},
                "outputs": [
                    {
                        "results": {"message": {"text": "Hi there", "sender": "Machine", "session_id": "s1"}},
                        "artifacts": {"message": "Hi there", "sender": "Machine", "files": [], "type": "text"},
                        "outputs": {"message": {"message": "Hi there", "type": "text"}},
                        "logs": {"message": []},
                        "messages": [{"message": "Hi there", "sender": "Machine", "session_id": "s1"}],
                        "timedelta": None,
                        "duration": None,
                        "component_display_name": "Chat Output",
                        "component_id": "ChatOutput-abc12",
                        "used_frozen_result": False,
                    }
                ],
            }
        ],
    }


@pytest.fixture
def make_response():
    return FakeUpstreamResponse
