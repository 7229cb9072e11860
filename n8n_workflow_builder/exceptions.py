"""Exception hierarchy for the n8n MCP server."""

from typing import Iterable, Optional


class N8NMCPError(Exception):
    """Base exception for the n8n MCP server"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class N8NAPIError(N8NMCPError):
    """Any failed call to the n8n REST API, whatever the cause."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(f"N8N API Error: {message}")


class UnknownToolError(N8NMCPError):
    def __init__(self, name: str):
        self.tool_name = name
        super().__init__(f"Unknown tool: {name}")


class ToolArgumentError(N8NMCPError):
    def __init__(self, tool_name: str, missing: Iterable[str]):
        self.tool_name = tool_name
        self.missing = list(missing)
        super().__init__(
            f"Missing required argument(s) for {tool_name}: {', '.join(self.missing)}"
        )
