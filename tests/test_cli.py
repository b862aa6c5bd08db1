from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from kube_mcp import __version__, get_version
from kube_mcp.cli import app

runner = CliRunner()


@patch('kube_mcp.cli.client.call_tool')
def test_call_prints_text(mock_call_tool):
    mock_call_tool.return_value = {"success": True, "text": "ConfigMaps across all namespaces:\n- ns1/a (1 key)"}

    result = runner.invoke(app, ["call", "list_configmaps", "--args", '{"all_namespaces": true}'])

    assert result.exit_code == 0
    assert "ConfigMaps across all namespaces:" in result.output
    mock_call_tool.assert_called_once_with("list_configmaps", {"all_namespaces": True}, None)


@patch('kube_mcp.cli.client.call_tool')
def test_call_invalid_json(mock_call_tool):
    result = runner.invoke(app, ["call", "get_configmap", "--args", "{name: x}"])

    assert result.exit_code == 1
    mock_call_tool.assert_not_called()


@patch('kube_mcp.cli.client.call_tool')
def test_call_args_must_be_object(mock_call_tool):
    result = runner.invoke(app, ["call", "get_configmap", "--args", '["x"]'])

    assert result.exit_code == 1
    mock_call_tool.assert_not_called()


@patch('kube_mcp.cli.client.call_tool')
def test_call_server_down(mock_call_tool):
    mock_call_tool.return_value = {"success": False, "error": "Cannot connect to server at http://127.0.0.1:8083"}

    result = runner.invoke(app, ["call", "get_configmap", "--args", '{"name": "x"}'])

    assert result.exit_code == 1


@patch('kube_mcp.cli.client.list_tools')
def test_tools(mock_list_tools):
    mock_list_tools.return_value = {
        "success": True,
        "tools": [{"name": "get_configmap", "description": "Get detailed information about a specific ConfigMap"}]
    }

    result = runner.invoke(app, ["tools", "--url", "http://localhost:9000"])

    assert result.exit_code == 0
    assert "get_configmap: Get detailed information" in result.output
    mock_list_tools.assert_called_once_with("http://localhost:9000")


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"kube_mcp {get_version()}" in result.output
    assert get_version() == __version__


@patch('kube_mcp.mcp.server.create_server')
@patch('kube_mcp.cli.setup_logging')
def test_serve(mock_setup_logging, mock_create_server):
    server = MagicMock(host="127.0.0.1", port=9001)
    mock_create_server.return_value = server

    result = runner.invoke(app, ["serve", "--port", "9001", "--log-level", "DEBUG"])

    assert result.exit_code == 0
    mock_setup_logging.assert_called_once_with("DEBUG")
    assert mock_create_server.call_args.kwargs == {"host": None, "port": 9001}
    server.serve.assert_called_once_with()
