"""
n8n REST API client.

Single point of outbound communication with the n8n instance. Every failure,
whether a network error or a non-2xx response, leaves this module as an
N8NAPIError.
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from n8n_workflow_builder.config import Settings
from n8n_workflow_builder.exceptions import N8NAPIError
from n8n_workflow_builder.logging_config import get_logger

API_PATH = "/api/v1"
API_KEY_HEADER = "X-N8N-API-KEY"

logger = get_logger("client")


def normalize_base_url(host: str) -> str:
    """
    Strip one trailing slash and make sure the versioned API path is present.

    >>> normalize_base_url("http://h/")
    'http://h/api/v1'
    """
    base = host[:-1] if host.endswith("/") else host
    if API_PATH not in base:
        base += API_PATH
    return base


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_message(exc: httpx.HTTPError) -> str:
    """Prefer n8n's own `message` field, fall back to the transport message."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(exc)


class N8NClient:
    """
    Async wrapper around the n8n public REST API.

    Base URL and headers are fixed at construction and shared by every call.
    """

    def __init__(
        self,
        host: str,
        api_key: str = "",
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = normalize_base_url(host)
        self._headers = {
            "Content-Type": "application/json",
            API_KEY_HEADER: api_key,
        }

        client_kwargs: Dict[str, Any] = {}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**client_kwargs)
        logger.info("N8NClient initialized for %s", self._base_url)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "N8NClient":
        return cls(
            settings.n8n_host,
            settings.n8n_api_key,
            timeout=settings.request_timeout,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def headers(self) -> Mapping[str, str]:
        return dict(self._headers)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Issue exactly one HTTP call and return the decoded response body.

        Raises N8NAPIError on any transport failure or non-2xx status.
        """
        url = f"{self._base_url}{endpoint}"
        try:
            logger.info("HTTP %s %s params=%s", method.upper(), url, params)
            resp = await self._http.request(
                method,
                url,
                headers=self._headers,
                json=body,
                params=params,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "HTTP %s failed url=%s status=%s",
                method.upper(),
                url,
                e.response.status_code,
            )
            raise N8NAPIError(_error_message(e), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("HTTP %s unexpected error url=%s error=%s", method.upper(), url, e)
            raise N8NAPIError(_error_message(e)) from e

        return _decode_body(resp)

    # -----------------------------
    # Workflows
    # -----------------------------

    async def list_workflows(self) -> Any:
        return await self.request("GET", "/workflows")

    async def get_workflow(self, workflow_id: str) -> Any:
        return await self.request("GET", f"/workflows/{workflow_id}")

    async def create_workflow(self, workflow: Any) -> Any:
        return await self.request("POST", "/workflows", workflow)

    async def update_workflow(self, workflow_id: str, workflow: Any) -> Any:
        return await self.request("PUT", f"/workflows/{workflow_id}", workflow)

    async def delete_workflow(self, workflow_id: str) -> Any:
        return await self.request("DELETE", f"/workflows/{workflow_id}")

    async def activate_workflow(self, workflow_id: str) -> Any:
        return await self.request("POST", f"/workflows/{workflow_id}/activate")

    async def deactivate_workflow(self, workflow_id: str) -> Any:
        return await self.request("POST", f"/workflows/{workflow_id}/deactivate")

    async def execute_workflow(self, workflow_id: str, data: Any = None) -> Any:
        return await self.request("POST", f"/workflows/{workflow_id}/execute", data)

    # -----------------------------
    # Executions
    # -----------------------------

    async def get_executions(self, workflow_id: Optional[str] = None) -> Any:
        """Single page of executions, optionally filtered by workflow."""
        params = {"workflowId": str(workflow_id)} if workflow_id else None
        return await self.request("GET", "/executions", params=params)
