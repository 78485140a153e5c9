import json
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from main import app
from israelgpt.shared.config import ChatSettings, get_chat_settings
from israelgpt.shared.dependencies import get_http_client

TEST_API_KEY = "test-mistral-key-1234"


class UpstreamStub:
    """Records outbound requests and answers them with a configurable handler."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": "Shalom"}}]},
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def sent_json(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def upstream():
    return UpstreamStub()


@pytest.fixture
def settings():
    return ChatSettings(api_key=TEST_API_KEY, is_production=False)


@pytest.fixture
def client(upstream, settings):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app.dependency_overrides[get_http_client] = lambda: http_client
    app.dependency_overrides[get_chat_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()
