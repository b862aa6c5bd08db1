# kube_mcp/cli.py
"""
Command-Line Interface (CLI)

This module defines the command-line interface for the Kube MCP tool server.
It uses Typer for argument parsing and help text. From here you can start the
server, see which tools it offers, and call a tool by hand.
"""

import json
import typer
from typing import Optional

from . import get_package_info
from .logging_config import setup_logging
from .settings import settings
from .mcp import client

# Create the main Typer application instance
app = typer.Typer(
    name="kube-mcp",
    help="Kubernetes ConfigMap tools for AI agents, served over JSON-RPC.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich"
)

@app.command(
    name="serve",
    help="Start the Kubernetes MCP server."
)
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        "-h",
        help="Host address to bind the server to (default: KUBE_MCP_MCP_SERVER_HOST)"
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="Port number to listen on (default: KUBE_MCP_MCP_SERVER_PORT)"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
):
    """
    Start the server that exposes the ConfigMap tools as JSON-RPC methods.

    Examples:
        kube-mcp serve
        kube-mcp serve --host 0.0.0.0 --port 9000 --log-level DEBUG
    """
    from .k8s_tools import K8sError
    from .mcp.server import create_server

    setup_logging(log_level or settings.LOG_LEVEL)
    try:
        server = create_server(settings, host=host, port=port)
    except K8sError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"🚀 Starting Kubernetes MCP Server on http://{server.host}:{server.port}")
    typer.echo("   Press Ctrl+C to stop the server")
    try:
        server.serve()
    except KeyboardInterrupt:
        typer.echo("\n🛑 Server stopped")

@app.command(
    name="tools",
    help="List the tools offered by a running server."
)
def tools(
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Server URL (default from settings)")
):
    res = client.list_tools(url)
    if not res["success"]:
        typer.echo(f"❌ Error: {res['error']}", err=True)
        raise typer.Exit(code=1)

    for tool in res["tools"]:
        typer.echo(f"{tool['name']}: {tool.get('description', '')}")

@app.command(
    name="call",
    help="Call a tool on a running server and print its result."
)
def call(
    tool_name: str = typer.Argument(..., help="Tool to call (e.g., 'list_configmaps')"),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Server URL (default from settings)")
):
    """
    Examples:
        kube-mcp call list_configmaps --args '{"all_namespaces": true}'
        kube-mcp call get_configmap --args '{"name": "app-config"}'
    """
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        typer.echo(f"❌ Invalid JSON for --args: {e}", err=True)
        raise typer.Exit(code=1)
    if not isinstance(arguments, dict):
        typer.echo("❌ --args must be a JSON object", err=True)
        raise typer.Exit(code=1)

    res = client.call_tool(tool_name, arguments, url)
    if not res["success"]:
        typer.echo(f"❌ Error: {res['error']}", err=True)
        raise typer.Exit(code=1)
    typer.echo(res["text"])

@app.command(
    name="version",
    help="Show package version information."
)
def version():
    info = get_package_info()
    typer.echo(f"{info['name']} {info['version']}")
    typer.echo(info["description"])

def main():
    app()

if __name__ == "__main__":
    main()
