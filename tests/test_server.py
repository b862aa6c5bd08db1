import json
from unittest.mock import MagicMock, patch

import pytest
from werkzeug.test import Client

from kube_mcp.k8s_tools import ClusterManager, K8sError, register_configmap_tools, register_configmap_tools_with_factory
from kube_mcp.k8s_tools.constants import ERR_MISSING_NAME
from kube_mcp.mcp.server import ToolServer, create_server, start_mcp_server, text_result
from kube_mcp.settings import KubeMCPSettings


@pytest.fixture
def server(mock_cluster_manager, mock_factory):
    server = ToolServer()
    register_configmap_tools_with_factory(server, mock_cluster_manager, mock_factory)
    return server


@pytest.fixture
def client(server):
    return Client(server.application)


def rpc(client, method, params=None, request_id=1):
    payload = {"jsonrpc": "2.0", "method": method, "params": params or {}}
    if request_id is not None:
        payload["id"] = request_id
    return client.post("/", data=json.dumps(payload), content_type="application/json")


def result_text(response):
    body = json.loads(response.get_data(as_text=True))
    assert "error" not in body
    return body["result"]["content"][0]["text"]


def test_registers_tools(server):
    assert [t.name for t in server.get_tools()] == [
        "create_configmap",
        "get_configmap",
        "list_configmaps",
        "delete_configmap",
        "update_configmap",
    ]
    assert server.get_tool("get_configmap").name == "get_configmap"
    assert server.get_tool("missing") is None


def test_tool_called_by_method_name(client, mock_configmap):
    mock_configmap.get.return_value = 'ConfigMap "cfg" in namespace "default":\nData: <none>'

    response = rpc(client, "get_configmap", {"name": "cfg"})

    assert response.status_code == 200
    assert result_text(response) == 'ConfigMap "cfg" in namespace "default":\nData: <none>'


def test_tools_call(client, mock_configmap, mock_cluster_manager):
    mock_configmap.list.return_value = "ConfigMaps across all namespaces:\n- ns1/a (1 key)"

    response = rpc(client, "tools/call", {"name": "list_configmaps", "arguments": {"all_namespaces": True}})

    assert result_text(response).startswith("ConfigMaps across all namespaces:")
    mock_configmap.list.assert_called_once_with(mock_cluster_manager, True, "")


def test_validation_failure_is_a_result(client, mock_factory):
    response = rpc(client, "tools/call", {"name": "delete_configmap", "arguments": {}})

    assert result_text(response) == ERR_MISSING_NAME
    mock_factory.new_configmap.assert_not_called()


def test_operator_failure_is_a_result(client, mock_configmap):
    mock_configmap.create.side_effect = K8sError("namespace not found")

    response = rpc(client, "create_configmap", {"name": "cfg"})

    assert result_text(response) == "Failed to create ConfigMap: namespace not found"


def test_tools_list(client):
    body = json.loads(rpc(client, "tools/list").get_data(as_text=True))

    tools = body["result"]["tools"]
    assert len(tools) == 5
    get_tool = next(t for t in tools if t["name"] == "get_configmap")
    assert get_tool["description"] == "Get detailed information about a specific ConfigMap"
    assert get_tool["inputSchema"]["required"] == ["name"]


def test_tools_call_unknown_tool(client):
    body = json.loads(rpc(client, "tools/call", {"name": "get_secret"}).get_data(as_text=True))

    assert body["error"]["code"] == -32602
    assert "Unknown tool: get_secret" in body["error"]["message"]


def test_tools_call_bad_arguments(client):
    body = json.loads(
        rpc(client, "tools/call", {"name": "get_configmap", "arguments": ["cfg"]}).get_data(as_text=True)
    )

    assert body["error"]["code"] == -32602


def test_unknown_method(client):
    body = json.loads(rpc(client, "no_such_method").get_data(as_text=True))

    assert body["error"]["code"] == -32601


def test_initialize(client):
    body = json.loads(rpc(client, "initialize", {"protocolVersion": "2024-11-05", "self": "x"}).get_data(as_text=True))

    assert body["result"]["serverInfo"]["name"] == "Kubernetes MCP Server"
    assert "tools" in body["result"]["capabilities"]


def test_notification_has_no_body(client, mock_configmap):
    mock_configmap.get.return_value = "ok"

    response = rpc(client, "get_configmap", {"name": "cfg"}, request_id=None)

    assert response.status_code == 204
    mock_configmap.get.assert_called_once()


def test_text_result():
    assert text_result("hi") == {"content": [{"type": "text", "text": "hi"}]}


@patch('requests.request')
def test_end_to_end_not_found(mock_request):
    response = MagicMock()
    response.status_code = 404
    response.json.return_value = {"kind": "Status", "message": 'configmaps "missing" not found', "code": 404}
    mock_request.return_value = response

    server = ToolServer()
    register_configmap_tools(server, ClusterManager())
    client = Client(server.application)

    text = result_text(rpc(client, "get_configmap", {"name": "missing"}))

    assert text == 'Failed to get ConfigMap: ConfigMap "missing" not found in namespace "default"'
    assert mock_request.call_args.args == (
        "GET", "http://127.0.0.1:8001/api/v1/namespaces/default/configmaps/missing"
    )


def test_create_server_from_settings():
    settings = KubeMCPSettings(
        _env_file=None,
        API_URL="http://k8s-proxy:8001",
        DEFAULT_NAMESPACE="apps",
        MCP_SERVER_HOST="0.0.0.0",
        MCP_SERVER_PORT=9999,
    )

    server = create_server(settings)

    assert server.host == "0.0.0.0"
    assert server.port == 9999
    assert len(server.get_tools()) == 5
    cluster_manager = server.get_tool("get_configmap").cluster_manager
    assert cluster_manager.get_api_url() == "http://k8s-proxy:8001"
    assert cluster_manager.get_current_namespace() == "apps"


@patch('kube_mcp.mcp.server.run_simple')
def test_serve_runs_threaded(mock_run_simple):
    server = ToolServer(host="127.0.0.1", port=8123)

    server.serve()

    mock_run_simple.assert_called_once_with(
        hostname="127.0.0.1",
        port=8123,
        application=server.application,
        use_reloader=False,
        use_debugger=False,
        threaded=True
    )


@patch('kube_mcp.mcp.server.create_server')
def test_start_mcp_server(mock_create_server):
    start_mcp_server(host="0.0.0.0", port=9000)

    mock_create_server.assert_called_once_with(host="0.0.0.0", port=9000)
    mock_create_server.return_value.serve.assert_called_once_with()


@pytest.mark.parametrize("method,params", [
    ("tools/call", {"name": "get_configmap", "arguments": {"name": "cfg", "self": "x"}}),
    ("get_configmap", {"name": "cfg", "self": "x"}),
])
def test_reserved_argument_names_reach_the_tool(method, params, client, mock_configmap, mock_factory):
    mock_configmap.get.return_value = 'ConfigMap "cfg" in namespace "default":\nData: <none>'

    text = result_text(rpc(client, method, params))

    assert text == 'ConfigMap "cfg" in namespace "default":\nData: <none>'
    assert mock_factory.new_configmap.call_args.args[0].name == "cfg"
