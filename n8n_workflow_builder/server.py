"""
Stdio MCP server for n8n.

The process binds to the agent host over stdin/stdout; it opens no network
listener of its own. PORT is read into settings but left to an external HTTP
wrapper.

Usage:
    n8n-mcp
    # or
    python -m n8n_workflow_builder
"""

import asyncio
import sys
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from n8n_workflow_builder import __version__
from n8n_workflow_builder.client import N8NClient
from n8n_workflow_builder.config import Settings
from n8n_workflow_builder.logging_config import get_logger, setup_logging
from n8n_workflow_builder.tools import ToolDispatcher

SERVER_NAME = "n8n-workflow-builder"

logger = get_logger("server")


def build_server(dispatcher: ToolDispatcher) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    # Argument checks belong to the dispatcher, so the SDK's schema validation is off.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    client = N8NClient.from_settings(settings)
    dispatcher = ToolDispatcher(client, validate_workflows=settings.validate_workflows)
    server = build_server(dispatcher)

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("N8N MCP Server running...")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.aclose()
        logger.info("N8N MCP Server stopped")


def main():
    try:
        settings = Settings.from_env()
        setup_logging(settings.log_level, settings.log_dir)
        logger.info(
            "Starting N8N MCP Server (n8n=%s, reserved port=%s)",
            settings.n8n_host,
            settings.port,
        )
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("N8N MCP Server failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
