# kube_mcp/mcp/server.py
"""
Kubernetes MCP (Model Context Protocol) Server

This server exposes the Kubernetes tools as JSON-RPC 2.0 methods. It uses the
Werkzeug WSGI server for HTTP handling and the json-rpc library for the
protocol. Each registered tool is callable two ways:

* directly, with the tool name as the method and the arguments as params
* through "tools/call" with {"name": ..., "arguments": {...}}

Both return {"content": [{"type": "text", "text": ...}]}. A tool failure is
part of that text; JSON-RPC errors are reserved for protocol problems such as
an unknown method or an unknown tool.
"""

import logging
from typing import Any, Dict, List, Optional

# Import the JSON-RPC library for handling JSON-RPC 2.0 requests
from jsonrpc import JSONRPCResponseManager, Dispatcher
from jsonrpc.exceptions import JSONRPCDispatchException
# Import Werkzeug for WSGI server and request handling
from werkzeug.serving import run_simple
from werkzeug.wrappers import Request, Response

from .. import __version__
from ..k8s_tools import ClusterManager, K8sTool, register_configmap_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Kubernetes MCP Server"

# JSON-RPC 2.0 "Invalid params"
INVALID_PARAMS = -32602


def text_result(text: str) -> Dict[str, Any]:
    """Wrap tool output in the MCP text content shape."""
    return {"content": [{"type": "text", "text": text}]}


class ToolServer:
    """
    A JSON-RPC server that tools can be registered on.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 8083):
        self.host = host
        self.port = port
        self.dispatcher = Dispatcher()
        self._tools: Dict[str, K8sTool] = {}

        self.dispatcher.add_method(self._initialize, "initialize")
        self.dispatcher.add_method(self._list_tools, "tools/list")
        self.dispatcher.add_method(self._call_tool, "tools/call")

    def add_tool(self, tool: K8sTool):
        """
        Register a tool and expose it as a JSON-RPC method named after it.
        """
        self._tools[tool.name] = tool
        self.dispatcher.add_method(self._create_tool_handler(tool), tool.name)
        logger.debug("registered tool %s", tool.name)

    def get_tools(self) -> List[K8sTool]:
        return list(self._tools.values())

    def get_tool(self, name: str) -> Optional[K8sTool]:
        return self._tools.get(name)

    def _create_tool_handler(self, tool: K8sTool):
        """
        Create the JSON-RPC handler for one tool.

        Tools report their own failures as text, so the handler only wraps
        the result.
        """
        def handler(**arguments) -> Dict[str, Any]:
            return text_result(tool.run(arguments))
        return handler

    @staticmethod
    def _initialize(**params) -> Dict[str, Any]:
        return {
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "capabilities": {"tools": {}}
        }

    def _list_tools(self) -> Dict[str, Any]:
        return {
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "inputSchema": tool.get_parameters_schema()
                }
                for tool in self.get_tools()
            ]
        }

    def _call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        tool = self.get_tool(name)
        if tool is None:
            raise JSONRPCDispatchException(code=INVALID_PARAMS, message=f"Unknown tool: {name}")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise JSONRPCDispatchException(code=INVALID_PARAMS, message="'arguments' must be an object")
        return text_result(tool.run(arguments))

    def application(self, environ, start_response):
        """
        WSGI application function that handles HTTP requests for the tools.

        Args:
            environ (dict): WSGI environment dictionary
            start_response (function): WSGI start_response callable

        Returns:
            WSGI response iterable
        """
        request = Request(environ)
        request_body = request.get_data(as_text=True)

        response = JSONRPCResponseManager.handle(request_body, self.dispatcher)

        # Notifications get no JSON-RPC response
        if response is None:
            wsgi_response = Response(status=204)
        else:
            wsgi_response = Response(response.json, mimetype='application/json')
        return wsgi_response(environ, start_response)

    def serve(self):
        """
        Start the Werkzeug server. Blocks until stopped.
        """
        logger.info("%s running at http://%s:%s", SERVER_NAME, self.host, self.port)
        logger.info("available tools: %s", [tool.name for tool in self.get_tools()])
        run_simple(
            hostname=self.host,
            port=self.port,
            application=self.application,
            use_reloader=False,
            use_debugger=False,
            threaded=True  # One thread per request
        )


def create_server(settings=None, host: Optional[str] = None, port: Optional[int] = None) -> ToolServer:
    """
    Build a ToolServer with the ConfigMap tools registered against a cluster
    manager configured from settings.
    """
    if settings is None:
        from ..settings import settings
    cluster_manager = ClusterManager.from_settings(settings)
    server = ToolServer(
        host=host or settings.MCP_SERVER_HOST,
        port=port or settings.MCP_SERVER_PORT
    )
    register_configmap_tools(server, cluster_manager)
    logger.info("Kubernetes API: %s (namespace %s)", cluster_manager.get_api_url(),
                cluster_manager.get_current_namespace())
    return server


def start_mcp_server(host: Optional[str] = None, port: Optional[int] = None):
    """
    Start the Kubernetes MCP server with settings from the environment.
    """
    create_server(host=host, port=port).serve()


# Example of what a JSON-RPC request looks like:
# {
#     "jsonrpc": "2.0",
#     "method": "get_configmap",
#     "params": {
#         "name": "app-config",
#         "namespace": "default"
#     },
#     "id": 1
# }

# Example of what a JSON-RPC response looks like:
# {
#     "jsonrpc": "2.0",
#     "result": {
#         "content": [
#             {
#                 "type": "text",
#                 "text": "ConfigMap \"app-config\" in namespace \"default\":\nData:\n  key1=value1"
#             }
#         ]
#     },
#     "id": 1
# }
