"""
Tests for the n8n REST client: URL building, headers, per-operation
requests and error normalization.
"""

import httpx
import pytest

from n8n_workflow_builder.client import API_KEY_HEADER, N8NClient, normalize_base_url
from n8n_workflow_builder.config import Settings
from n8n_workflow_builder.exceptions import N8NAPIError
from tests.conftest import TEST_API_KEY, TEST_HOST, StubN8N


class TestBaseUrl:
    def test_trailing_slash_stripped_and_api_path_added(self):
        assert normalize_base_url("http://h/") == "http://h/api/v1"

    def test_existing_api_path_left_unchanged(self):
        assert normalize_base_url("http://h/api/v1") == "http://h/api/v1"

    def test_only_one_trailing_slash_stripped(self):
        assert normalize_base_url("http://h//") == "http://h//api/v1"

    def test_default_host(self):
        assert normalize_base_url("http://localhost:5678") == "http://localhost:5678/api/v1"

    async def test_client_exposes_normalized_base_url(self):
        client = N8NClient("http://h/", "k")
        try:
            assert client.base_url == "http://h/api/v1"
        finally:
            await client.aclose()

    async def test_from_settings(self):
        settings = Settings(n8n_host="http://remote:5678/", n8n_api_key="secret")
        client = N8NClient.from_settings(settings)
        try:
            assert client.base_url == "http://remote:5678/api/v1"
            assert client.headers[API_KEY_HEADER] == "secret"
        finally:
            await client.aclose()


class TestHeaders:
    async def test_every_request_carries_api_key_and_content_type(self, client, stub):
        await client.list_workflows()

        assert stub.last.headers[API_KEY_HEADER] == TEST_API_KEY
        assert stub.last.headers["Content-Type"] == "application/json"

    async def test_headers_property_is_a_copy(self, client):
        headers = client.headers
        headers[API_KEY_HEADER] = "tampered"  # type: ignore[index]

        assert client.headers[API_KEY_HEADER] == TEST_API_KEY


class TestOperations:
    @pytest.mark.parametrize(
        "call, method, path",
        [
            (lambda c: c.list_workflows(), "GET", "/api/v1/workflows"),
            (lambda c: c.get_workflow("1"), "GET", "/api/v1/workflows/1"),
            (lambda c: c.delete_workflow("1"), "DELETE", "/api/v1/workflows/1"),
            (lambda c: c.activate_workflow("1"), "POST", "/api/v1/workflows/1/activate"),
            (lambda c: c.deactivate_workflow("1"), "POST", "/api/v1/workflows/1/deactivate"),
            (lambda c: c.execute_workflow("1"), "POST", "/api/v1/workflows/1/execute"),
        ],
    )
    async def test_method_and_path(self, client, stub, call, method, path):
        await call(client)

        assert stub.last.method == method
        assert stub.last.url.host == "n8n.test"
        assert stub.last.url.path == path
        assert stub.last.content == b""

    async def test_create_sends_workflow_body(self, client, stub):
        workflow = {"name": "New", "nodes": [], "connections": {}}

        await client.create_workflow(workflow)

        assert stub.last.method == "POST"
        assert stub.last.url.path == "/api/v1/workflows"
        assert stub.last_json() == workflow

    async def test_update_sends_workflow_body(self, client, stub):
        workflow = {"name": "Renamed", "nodes": [{"type": "n8n-nodes-base.start"}]}

        await client.update_workflow("9", workflow)

        assert stub.last.method == "PUT"
        assert stub.last.url.path == "/api/v1/workflows/9"
        assert stub.last_json() == workflow

    async def test_execute_sends_data(self, client, stub):
        await client.execute_workflow("3", {"input": 1})

        assert stub.last.url.path == "/api/v1/workflows/3/execute"
        assert stub.last_json() == {"input": 1}

    async def test_executions_without_filter(self, client, stub):
        await client.get_executions()

        assert stub.last.method == "GET"
        assert str(stub.last.url) == f"{TEST_HOST}/api/v1/executions"

    async def test_executions_with_filter(self, client, stub):
        await client.get_executions("7")

        assert str(stub.last.url) == f"{TEST_HOST}/api/v1/executions?workflowId=7"

    async def test_executions_empty_filter_is_unfiltered(self, client, stub):
        await client.get_executions("")

        assert stub.last.url.query == b""


class TestResponses:
    async def test_returns_body_as_received(self, make_client):
        body = {"data": [{"id": "1", "name": "Test"}], "nextCursor": None}
        client = make_client(StubN8N(body=body))
        try:
            assert await client.list_workflows() == body
        finally:
            await client.aclose()

    async def test_empty_body_returns_none(self, make_client):
        client = make_client(StubN8N(status_code=204))
        try:
            assert await client.delete_workflow("1") is None
        finally:
            await client.aclose()

    async def test_non_json_body_returned_as_text(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="plain"))
        try:
            assert await client.get_workflow("1") == "plain"
        finally:
            await client.aclose()


class TestErrors:
    async def test_remote_message_preferred(self, make_client):
        client = make_client(StubN8N(status_code=500, body={"message": "boom"}))
        try:
            with pytest.raises(N8NAPIError) as exc_info:
                await client.get_workflow("1")
        finally:
            await client.aclose()

        assert str(exc_info.value) == "N8N API Error: boom"
        assert exc_info.value.status_code == 500

    async def test_falls_back_to_transport_message_without_message_field(self, make_client):
        client = make_client(StubN8N(status_code=404, body={"code": 404}))
        try:
            with pytest.raises(N8NAPIError) as exc_info:
                await client.get_workflow("missing")
        finally:
            await client.aclose()

        message = str(exc_info.value)
        assert message.startswith("N8N API Error: ")
        assert "404" in message
        assert exc_info.value.status_code == 404

    async def test_falls_back_for_non_json_error_body(self, make_client):
        client = make_client(lambda request: httpx.Response(401, text="Unauthorized"))
        try:
            with pytest.raises(N8NAPIError) as exc_info:
                await client.list_workflows()
        finally:
            await client.aclose()

        assert "401" in str(exc_info.value)

    async def test_network_failure_normalized(self, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(refuse)
        try:
            with pytest.raises(N8NAPIError) as exc_info:
                await client.list_workflows()
        finally:
            await client.aclose()

        assert str(exc_info.value) == "N8N API Error: connection refused"
        assert exc_info.value.status_code is None

    async def test_single_request_no_retry(self, make_client):
        stub = StubN8N(status_code=503, body={"message": "unavailable"})
        client = make_client(stub)
        try:
            with pytest.raises(N8NAPIError):
                await client.activate_workflow("1")
        finally:
            await client.aclose()

        assert len(stub.requests) == 1
