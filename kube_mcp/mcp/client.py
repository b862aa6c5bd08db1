# kube_mcp/mcp/client.py
"""
MCP (Model Context Protocol) Client

This client sends JSON-RPC 2.0 requests to the Kubernetes MCP server. It
handles request formatting and response parsing, and supports both
synchronous (requests) and asynchronous (httpx) execution.

Every function returns a dict with a 'success' flag. Note that a tool which
failed on the cluster side still comes back with success=True: the failure is
in the returned text, which starts with "Failed to ...".
"""

import requests
import httpx
from typing import Dict, Any, Optional

from ..settings import settings

DEFAULT_TIMEOUT = 30.0


def default_url() -> str:
    return f"http://{settings.MCP_SERVER_HOST}:{settings.MCP_SERVER_PORT}"


def _payload(method: str, params: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1
    }


def _extract_text(result: Any) -> Dict[str, Any]:
    """Pull the text out of a {"content": [{"type": "text", ...}]} result."""
    if not isinstance(result, dict) or "content" not in result:
        return {"success": False, "error": "No result returned"}
    text = "".join(
        item.get("text", "")
        for item in result["content"]
        if isinstance(item, dict) and item.get("type") == "text"
    )
    return {"success": True, "text": text}


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return error.get("message", str(error))
    return str(error)


# -----------------------------------------------------------------------------
# ASYNCHRONOUS IMPLEMENTATION
# -----------------------------------------------------------------------------

async def call_tool_async(tool_name: str, arguments: Dict[str, Any], url: Optional[str] = None) -> Dict[str, Any]:
    """Execute a tool asynchronously using httpx."""
    url = url or default_url()
    payload = _payload("tools/call", {"name": tool_name, "arguments": arguments})

    try:
        async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            result = response.json()
    except httpx.ConnectError:
        return {
            "success": False,
            "error": f"Cannot connect to MCP server at {url}. Is it running?"
        }
    except httpx.TimeoutException:
        return {"success": False, "error": "Request timed out"}
    except httpx.HTTPError as e:
        return {"success": False, "error": f"Async error: {str(e)}"}
    except ValueError:
        return {"success": False, "error": f"Invalid JSON response from {url}"}

    if "error" in result:
        return {"success": False, "error": _error_message(result["error"])}
    return _extract_text(result.get("result"))


# -----------------------------------------------------------------------------
# SYNCHRONOUS IMPLEMENTATION
# -----------------------------------------------------------------------------

def _sync_call(url: str, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
    """Internal synchronous helper using requests."""
    try:
        response = requests.post(url, json=_payload(method, params), timeout=DEFAULT_TIMEOUT)
        response.raise_for_status()
        result = response.json()
    except requests.exceptions.ConnectionError:
        return {"success": False, "error": f"Cannot connect to server at {url}"}
    except requests.exceptions.RequestException as e:
        return {"success": False, "error": f"Error: {str(e)}"}
    except ValueError:
        return {"success": False, "error": f"Invalid JSON response from {url}"}

    if "error" in result:
        return {"success": False, "error": _error_message(result["error"])}
    return {"success": True, "result": result.get("result")}


def call_tool(tool_name: str, arguments: Dict[str, Any], url: Optional[str] = None) -> Dict[str, Any]:
    """
    Call a tool on the server.

    Returns:
        Dict[str, Any]: {"success": True, "text": ...} or {"success": False, "error": ...}
    """
    res = _sync_call(url or default_url(), "tools/call", {"name": tool_name, "arguments": arguments})
    if not res["success"]:
        return res
    return _extract_text(res["result"])


def list_tools(url: Optional[str] = None) -> Dict[str, Any]:
    """
    List the tools registered on the server.

    Returns:
        Dict[str, Any]: {"success": True, "tools": [...]} or {"success": False, "error": ...}
    """
    res = _sync_call(url or default_url(), "tools/list", {})
    if not res["success"]:
        return res
    result = res["result"] or {}
    return {"success": True, "tools": result.get("tools", [])}


def test_connection(url: Optional[str] = None) -> bool:
    """Check that the MCP server answers."""
    return list_tools(url)["success"]
