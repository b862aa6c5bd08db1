import os
import logging
from unittest import mock

from kube_mcp.settings import KubeMCPSettings
from kube_mcp.logging_config import get_logging_config, setup_logging

def test_settings_defaults():
    """Test that settings load with correct default values."""
    with mock.patch.dict(os.environ, {}, clear=True):
        settings = KubeMCPSettings(_env_file=None)
        assert settings.API_URL == "http://127.0.0.1:8001"
        assert settings.TOKEN_PATH is None
        assert settings.VERIFY_SSL is True
        assert settings.DEFAULT_NAMESPACE == "default"
        assert settings.REQUEST_TIMEOUT == 10.0
        assert settings.MCP_SERVER_HOST == "127.0.0.1"
        assert settings.MCP_SERVER_PORT == 8083
        assert settings.LOG_LEVEL == "INFO"

def test_settings_env_override():
    """Test that environment variables override defaults."""
    env = {
        "KUBE_MCP_API_URL": "https://10.20.4.221:16443",
        "KUBE_MCP_VERIFY_SSL": "false",
        "KUBE_MCP_MCP_SERVER_PORT": "9000",
        "KUBE_MCP_DEFAULT_NAMESPACE": "apps",
    }
    with mock.patch.dict(os.environ, env, clear=True):
        settings = KubeMCPSettings(_env_file=None)
        assert settings.API_URL == "https://10.20.4.221:16443"
        assert settings.VERIFY_SSL is False
        assert settings.MCP_SERVER_PORT == 9000
        assert settings.DEFAULT_NAMESPACE == "apps"

def test_settings_env_file(tmp_path):
    """Test that a .env file is read with the KUBE_MCP_ prefix."""
    env_file = tmp_path / ".env"
    env_file.write_text("KUBE_MCP_REQUEST_TIMEOUT=2.5\nKUBE_MCP_LOG_LEVEL=DEBUG\nUNRELATED=1\n", encoding="utf-8")

    with mock.patch.dict(os.environ, {}, clear=True):
        settings = KubeMCPSettings(_env_file=str(env_file))
        assert settings.REQUEST_TIMEOUT == 2.5
        assert settings.LOG_LEVEL == "DEBUG"

def test_logging_config_levels():
    config = get_logging_config("debug")
    assert config["loggers"]["kube_mcp"]["level"] == "DEBUG"
    assert config["loggers"]["werkzeug"]["level"] == "WARNING"
    assert config["handlers"]["default"]["stream"] == "ext://sys.stderr"

def test_setup_logging():
    setup_logging("WARNING")
    assert logging.getLogger("kube_mcp").level == logging.WARNING
    setup_logging("INFO")
    assert logging.getLogger("kube_mcp").level == logging.INFO
