# kube_mcp/mcp/__init__.py
"""
MCP (Model Context Protocol) Subpackage

The JSON-RPC server that hosts the Kubernetes tools and a client to call it.
"""

from .server import ToolServer, create_server, start_mcp_server
from .client import call_tool, call_tool_async, list_tools, test_connection

__all__ = [
    "ToolServer",
    "create_server",
    "start_mcp_server",
    "call_tool",
    "call_tool_async",
    "list_tools",
    "test_connection"
]
