# kube_mcp/k8s_tools/errors.py
"""
Domain errors raised by the cluster manager and resource operators.

Tool handlers catch these and render them as text, so their message is what
the calling agent ends up reading.
"""

from typing import Optional


class K8sError(Exception):
    """Base class for all Kubernetes-side failures."""


class K8sApiError(K8sError):
    """The Kubernetes API server answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, reason: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


class K8sConnectionError(K8sError):
    """The Kubernetes API server could not be reached."""
