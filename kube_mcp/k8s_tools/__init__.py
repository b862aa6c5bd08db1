# kube_mcp/k8s_tools/__init__.py
"""
Kubernetes Tools Module

This module centralizes the Kubernetes tools, the operators they delegate to
and the cluster manager they run against, so the server and the CLI can
import everything from one place.
"""

from .k8s_base import K8sTool, ResourceOperator
from .cluster_manager import ClusterManager, load_token
from .configmap import ConfigMap
from .configmap_tools import (
    CONFIGMAP_TOOL_CLASSES,
    ConfigMapFactory,
    DefaultConfigMapFactory,
    register_configmap_tools,
    register_configmap_tools_with_factory,
)
from .errors import K8sApiError, K8sConnectionError, K8sError
from .params import ConfigMapParams

__all__ = [
    "K8sTool",
    "ResourceOperator",
    "ClusterManager",
    "load_token",
    "ConfigMap",
    "ConfigMapParams",
    "ConfigMapFactory",
    "DefaultConfigMapFactory",
    "CONFIGMAP_TOOL_CLASSES",
    "register_configmap_tools",
    "register_configmap_tools_with_factory",
    "K8sError",
    "K8sApiError",
    "K8sConnectionError",
]
