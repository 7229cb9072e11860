"""Shared fixtures: an n8n client wired to an in-process stub of the REST API."""

import json
from typing import Any, Callable, List

import httpx
import pytest

from n8n_workflow_builder.client import N8NClient
from n8n_workflow_builder.tools import ToolDispatcher

TEST_HOST = "http://n8n.test"
TEST_API_KEY = "test-api-key"


class StubN8N:
    """Records every request and answers with a fixed status and body."""

    def __init__(self, status_code: int = 200, body: Any = None):
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        content = self.last.content
        return json.loads(content) if content else None


@pytest.fixture
def stub():
    return StubN8N(body={"ok": True})


@pytest.fixture
def make_client() -> Callable[..., N8NClient]:
    def _make(handler, host: str = TEST_HOST, api_key: str = TEST_API_KEY) -> N8NClient:
        return N8NClient(host, api_key, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
async def client(make_client, stub):
    c = make_client(stub)
    yield c
    await c.aclose()


@pytest.fixture
def dispatcher(client):
    return ToolDispatcher(client)
