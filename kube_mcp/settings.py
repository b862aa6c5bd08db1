from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class KubeMCPSettings(BaseSettings):
    """
    Centralized configuration for the Kube MCP tool server.
    Reads from environment variables, .env file, and defaults.
    """
    # Kubernetes API Configuration
    API_URL: str = "http://127.0.0.1:8001"  # kubectl proxy
    TOKEN_PATH: Optional[str] = None  # Bearer token file for remote clusters
    VERIFY_SSL: bool = True
    DEFAULT_NAMESPACE: str = "default"
    REQUEST_TIMEOUT: float = 10.0  # Seconds per Kubernetes API call

    # Server Configuration
    MCP_SERVER_HOST: str = "127.0.0.1"
    MCP_SERVER_PORT: int = 8083

    # Logging
    LOG_LEVEL: str = "INFO"

    # Load from .env file if present
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KUBE_MCP_",  # Variables must start with KUBE_MCP_, e.g., KUBE_MCP_API_URL
        extra='ignore'
    )

# Instantiate global settings object
settings = KubeMCPSettings()
