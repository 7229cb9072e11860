"""
Runtime configuration for the n8n MCP server.

Environment:
  N8N_API_URL / N8N_HOST   (default: http://localhost:5678)  -- n8n instance
  N8N_API_KEY              (default: "")                     -- X-N8N-API-KEY value
  PORT                     (default: 3000)                   -- reserved for an HTTP wrapper
  N8N_REQUEST_TIMEOUT      (default: httpx default)          -- seconds per request
  N8N_VALIDATE_WORKFLOWS   (default: off)                    -- structural check on create/update
  LOG_LEVEL                (default: INFO)
  LOG_DIR                  (default: logs)
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_N8N_HOST = "http://localhost:5678"
DEFAULT_PORT = 3000

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process-wide settings, built once at startup."""

    model_config = ConfigDict(frozen=True)

    n8n_host: str = DEFAULT_N8N_HOST
    n8n_api_key: str = ""
    port: int = DEFAULT_PORT
    request_timeout: Optional[float] = None
    validate_workflows: bool = False
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        timeout = os.getenv("N8N_REQUEST_TIMEOUT")
        return cls(
            n8n_host=os.getenv("N8N_API_URL") or os.getenv("N8N_HOST") or DEFAULT_N8N_HOST,
            n8n_api_key=os.getenv("N8N_API_KEY", ""),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            request_timeout=float(timeout) if timeout else None,
            validate_workflows=os.getenv("N8N_VALIDATE_WORKFLOWS", "").strip().lower() in _TRUTHY,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=os.getenv("LOG_DIR", "logs"),
        )
