# kube_mcp/k8s_tools/cluster_manager.py
"""
Cluster Manager

Holds everything the tools need to talk to a Kubernetes API server: the base
URL, the bearer token, SSL verification and the current namespace. Requests
go straight to the REST API with `requests`, either through a local
`kubectl proxy` (the default) or to a remote API server with a token.

One instance is shared by all tool invocations, which the server runs on
separate threads.
"""

import logging
import threading
from typing import Any, Dict, Optional

import requests
import urllib3

from .constants import DEFAULT_API_URL, DEFAULT_NAMESPACE
from .errors import K8sApiError, K8sConnectionError, K8sError

logger = logging.getLogger(__name__)


def load_token(token_path: str) -> str:
    """Load the Bearer token from a file."""
    try:
        with open(token_path, "r") as f:
            return f.read().strip()
    except OSError as e:
        raise K8sError(f"cannot read token file {token_path!r}: {e}") from e


class ClusterManager:
    """
    Connection settings and ambient context for one Kubernetes cluster.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        verify_ssl: bool = True,
        namespace: str = DEFAULT_NAMESPACE,
        timeout: float = 10.0,
    ):
        self._lock = threading.Lock()
        self._namespace = namespace or DEFAULT_NAMESPACE
        self.timeout = timeout
        self._configure(api_url, token, verify_ssl)

    @classmethod
    def from_settings(cls, settings) -> "ClusterManager":
        """
        Build a cluster manager from a KubeMCPSettings instance.

        When TOKEN_PATH is set the token is read from that file and sent as
        a Bearer header on every request.
        """
        token = load_token(settings.TOKEN_PATH) if settings.TOKEN_PATH else None
        return cls(
            api_url=settings.API_URL,
            token=token,
            verify_ssl=settings.VERIFY_SSL,
            namespace=settings.DEFAULT_NAMESPACE,
            timeout=settings.REQUEST_TIMEOUT,
        )

    def _configure(self, api_url: str, token: Optional[str], verify_ssl: bool):
        self.api_url = api_url.rstrip('/')
        self.token = token
        self.verify_ssl = verify_ssl
        self.headers = {"Accept": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        if not verify_ssl:
            # Self-signed certs are common on remote clusters
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def configure_remote(self, api_url: str, token: str, verify_ssl: bool = False):
        """
        Configure for a remote Kubernetes cluster.

        Args:
            api_url (str): The base URL of the Kubernetes API (e.g., "https://10.20.4.221:16443")
            token (str): The Bearer token for authentication
            verify_ssl (bool): Whether to verify SSL certificates (default: False for self-signed)
        """
        self._configure(api_url, token, verify_ssl)

    def get_api_url(self) -> str:
        return self.api_url

    def get_headers(self) -> Dict[str, str]:
        return dict(self.headers)

    def get_verify_ssl(self) -> bool:
        return self.verify_ssl

    def get_current_namespace(self) -> str:
        with self._lock:
            return self._namespace

    def set_current_namespace(self, namespace: str):
        """Set the namespace used when a tool call does not name one. Empty means "default"."""
        with self._lock:
            self._namespace = namespace or DEFAULT_NAMESPACE

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Perform a single request against the Kubernetes API.

        Args:
            method (str): HTTP method (GET, POST, PUT, DELETE)
            path (str): API path starting with '/', e.g. "/api/v1/namespaces/default/configmaps"
            params (dict): Optional query parameters
            body (dict): Optional JSON body

        Returns:
            Dict[str, Any]: The decoded JSON response (empty for empty bodies)

        Raises:
            K8sApiError: the API server answered with a non-2xx status
            K8sConnectionError: the API server could not be reached
        """
        url = f"{self.api_url}{path}"
        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = requests.request(
                method,
                url,
                headers=self.get_headers(),
                params=params,
                json=body,
                verify=self.verify_ssl,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise K8sConnectionError(f"request to {url} timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise K8sConnectionError(f"connection to {self.api_url} failed: {e}") from e

        if response.status_code >= 400:
            raise _api_error(response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise K8sError(f"invalid JSON in response from {url}") from e


def _api_error(response) -> K8sApiError:
    """Turn an error response into a K8sApiError, preferring the Status message."""
    message = None
    reason = None
    try:
        status = response.json()
    except ValueError:
        status = None
    if isinstance(status, dict):
        message = status.get("message")
        reason = status.get("reason")
    if not message:
        message = (response.text or "").strip() or f"HTTP {response.status_code}"
    return K8sApiError(message, status_code=response.status_code, reason=reason)
