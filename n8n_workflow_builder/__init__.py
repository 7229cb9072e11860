"""
n8n workflow builder - MCP tool server for n8n.

Exposes workflow and execution operations of an n8n instance as MCP tools
over a stdio transport.
"""

__version__ = "1.0.0"
