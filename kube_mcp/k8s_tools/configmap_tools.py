# kube_mcp/k8s_tools/configmap_tools.py
"""
ConfigMap Tools

This module turns the ConfigMap operator into five tools an agent can call:
create_configmap, get_configmap, list_configmaps, delete_configmap and
update_configmap.

Every tool follows the same steps: check the name, work out the namespace,
pick up the optional maps, build an operator through the factory, call it,
and render the outcome. Whatever happens, the tool returns text. Failures
are reported as "Failed to <verb> ConfigMap: <error>" and never raised to the
server, so a caller only has to read the text to know what went wrong.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Type

from .configmap import ConfigMap
from .constants import (
    ERR_EMPTY_NAME,
    ERR_MISSING_NAME,
    FAILED_CREATE_CONFIGMAP,
    FAILED_DELETE_CONFIGMAP,
    FAILED_GET_CONFIGMAP,
    FAILED_LIST_CONFIGMAPS,
    FAILED_UPDATE_CONFIGMAP,
)
from .k8s_base import K8sTool, ResourceOperator
from .params import ConfigMapParams

logger = logging.getLogger(__name__)

# Optional map arguments and the ConfigMapParams field each one fills
MAP_ARGUMENTS = (
    ("data", "data"),
    ("binary_data", "binary_data"),
    ("labels", "labels"),
    ("annotations", "annotations"),
)


class ConfigMapFactory(ABC):
    """Builds ConfigMap operators. Swap it out to change or fake the backend."""

    @abstractmethod
    def new_configmap(self, params: ConfigMapParams) -> ResourceOperator:
        pass


class DefaultConfigMapFactory(ConfigMapFactory):
    """Builds operators that talk to the Kubernetes REST API."""

    def new_configmap(self, params: ConfigMapParams) -> ResourceOperator:
        return ConfigMap(params)


# -----------------------------------------------------------------------------
# ARGUMENT DECODING
# -----------------------------------------------------------------------------

def decode_name(arguments: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Read the required 'name' argument.

    Returns:
        (name, None) when the name is a non-empty string, otherwise
        (None, message) with ERR_MISSING_NAME or ERR_EMPTY_NAME.
    """
    name = arguments.get("name")
    if name is None:
        return None, ERR_MISSING_NAME
    if not isinstance(name, str) or not name:
        return None, ERR_EMPTY_NAME
    return name, None


def resolve_namespace(arguments: Dict[str, Any], cluster_manager) -> str:
    """An explicit non-empty 'namespace' wins, otherwise the cluster's current namespace."""
    namespace = cluster_manager.get_current_namespace()
    namespace_arg = arguments.get("namespace")
    if isinstance(namespace_arg, str) and namespace_arg:
        namespace = namespace_arg
    return namespace


def decode_map(value: Any) -> Optional[Dict[str, Any]]:
    """Return value if it is a string-keyed mapping, else None. Wrong shapes count as absent."""
    if isinstance(value, dict) and all(isinstance(key, str) for key in value):
        return value
    return None


def decode_maps(arguments: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Collect the well-typed optional map arguments, keyed by ConfigMapParams field."""
    maps = {}
    for argument, field in MAP_ARGUMENTS:
        value = decode_map(arguments.get(argument))
        if value is not None:
            maps[field] = value
    return maps


# -----------------------------------------------------------------------------
# TOOLS
# -----------------------------------------------------------------------------

def _string_schema(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


def _map_properties(replace: bool) -> Dict[str, Any]:
    suffix = " (replaces existing {})" if replace else ""
    return {
        "data": {
            "type": "object",
            "description": "Key-value pairs of configuration data" + suffix.format("data")
        },
        "binary_data": {
            "type": "object",
            "description": "Key-value pairs of binary data (base64 encoded)" + suffix.format("binary data")
        },
        "labels": {
            "type": "object",
            "description": "Labels to apply to the ConfigMap" + suffix.format("labels")
        },
        "annotations": {
            "type": "object",
            "description": "Annotations to apply to the ConfigMap" + suffix.format("annotations")
        },
    }


class ConfigMapTool(K8sTool):
    """
    Shared plumbing for the ConfigMap tools: the cluster manager and the
    factory every handler needs.
    """

    def __init__(self, cluster_manager, factory: Optional[ConfigMapFactory] = None):
        self.cluster_manager = cluster_manager
        self.factory = factory or DefaultConfigMapFactory()

    def _failed(self, prefix: str, error: Exception, **context) -> str:
        details = " ".join(f"{key}={value!r}" for key, value in context.items())
        logger.warning("%s failed (%s): %s", self.name, details, error)
        return f"{prefix}{error}"


class CreateConfigMapTool(ConfigMapTool):
    name = "create_configmap"
    description = "Create a new ConfigMap in the specified namespace"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": _string_schema("Name of the ConfigMap"),
                "namespace": _string_schema("Namespace for the ConfigMap (defaults to current namespace)"),
                **_map_properties(replace=False),
            },
            "required": ["name"]
        }

    def run(self, arguments: Dict[str, Any]) -> str:
        logger.debug("tool invoked: %s", self.name)

        name, error = decode_name(arguments)
        if error:
            return error

        namespace = resolve_namespace(arguments, self.cluster_manager)
        params = ConfigMapParams(name=name, namespace=namespace, **decode_maps(arguments))

        configmap = self.factory.new_configmap(params)
        try:
            return configmap.create(self.cluster_manager)
        except Exception as e:
            return self._failed(FAILED_CREATE_CONFIGMAP, e, name=name, namespace=namespace)


class GetConfigMapTool(ConfigMapTool):
    name = "get_configmap"
    description = "Get detailed information about a specific ConfigMap"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": _string_schema("Name of the ConfigMap"),
                "namespace": _string_schema("Namespace of the ConfigMap (defaults to current namespace)"),
            },
            "required": ["name"]
        }

    def run(self, arguments: Dict[str, Any]) -> str:
        logger.debug("tool invoked: %s", self.name)

        name, error = decode_name(arguments)
        if error:
            return error

        namespace = resolve_namespace(arguments, self.cluster_manager)
        params = ConfigMapParams(name=name, namespace=namespace)

        configmap = self.factory.new_configmap(params)
        try:
            return configmap.get(self.cluster_manager)
        except Exception as e:
            return self._failed(FAILED_GET_CONFIGMAP, e, name=name, namespace=namespace)


class ListConfigMapsTool(ConfigMapTool):
    name = "list_configmaps"
    description = "List ConfigMaps in the current namespace or across all namespaces"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "all_namespaces": {
                    "type": "boolean",
                    "description": "Whether to list ConfigMaps across all namespaces"
                },
                "namespace": _string_schema(
                    "Specific namespace to list ConfigMaps from (defaults to current namespace)"
                ),
                "label_selector": {
                    "type": "string",
                    "description": "Label selector to filter ConfigMaps (e.g., 'app=nginx,env=prod')"
                },
            },
            "required": []
        }

    def run(self, arguments: Dict[str, Any]) -> str:
        logger.debug("tool invoked: %s", self.name)

        all_namespaces = arguments.get("all_namespaces")
        if not isinstance(all_namespaces, bool):
            all_namespaces = False

        # The namespace is irrelevant when listing everywhere, so don't ask for it
        namespace = ""
        if not all_namespaces:
            namespace_arg = arguments.get("namespace")
            if isinstance(namespace_arg, str) and namespace_arg:
                namespace = namespace_arg
            else:
                namespace = self.cluster_manager.get_current_namespace()

        label_selector = arguments.get("label_selector")
        if not isinstance(label_selector, str):
            label_selector = ""

        params = ConfigMapParams(namespace=namespace)

        configmap = self.factory.new_configmap(params)
        try:
            return configmap.list(self.cluster_manager, all_namespaces, label_selector)
        except Exception as e:
            return self._failed(
                FAILED_LIST_CONFIGMAPS,
                e,
                all_namespaces=all_namespaces,
                namespace=namespace,
                label_selector=label_selector,
            )


class DeleteConfigMapTool(ConfigMapTool):
    name = "delete_configmap"
    description = "Delete a ConfigMap from the specified namespace"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": _string_schema("Name of the ConfigMap to delete"),
                "namespace": _string_schema("Namespace of the ConfigMap (defaults to current namespace)"),
            },
            "required": ["name"]
        }

    def run(self, arguments: Dict[str, Any]) -> str:
        logger.debug("tool invoked: %s", self.name)

        name, error = decode_name(arguments)
        if error:
            return error

        namespace = resolve_namespace(arguments, self.cluster_manager)
        params = ConfigMapParams(name=name, namespace=namespace)

        configmap = self.factory.new_configmap(params)
        try:
            return configmap.delete(self.cluster_manager)
        except Exception as e:
            return self._failed(FAILED_DELETE_CONFIGMAP, e, name=name, namespace=namespace)


class UpdateConfigMapTool(ConfigMapTool):
    name = "update_configmap"
    description = "Update an existing ConfigMap"

    def get_parameters_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": _string_schema("Name of the ConfigMap to update"),
                "namespace": _string_schema("Namespace of the ConfigMap (defaults to current namespace)"),
                **_map_properties(replace=True),
            },
            "required": ["name"]
        }

    def run(self, arguments: Dict[str, Any]) -> str:
        logger.debug("tool invoked: %s", self.name)

        name, error = decode_name(arguments)
        if error:
            return error

        namespace = resolve_namespace(arguments, self.cluster_manager)
        params = ConfigMapParams(name=name, namespace=namespace, **decode_maps(arguments))

        configmap = self.factory.new_configmap(params)
        try:
            return configmap.update(self.cluster_manager)
        except Exception as e:
            return self._failed(FAILED_UPDATE_CONFIGMAP, e, name=name, namespace=namespace)


# Registry of ConfigMap tools, in registration order
CONFIGMAP_TOOL_CLASSES: List[Type[ConfigMapTool]] = [
    CreateConfigMapTool,
    GetConfigMapTool,
    ListConfigMapsTool,
    DeleteConfigMapTool,
    UpdateConfigMapTool,
]


def register_configmap_tools(server, cluster_manager):
    """Register all ConfigMap tools on the server, backed by the REST operator."""
    register_configmap_tools_with_factory(server, cluster_manager, DefaultConfigMapFactory())


def register_configmap_tools_with_factory(server, cluster_manager, factory: ConfigMapFactory):
    """Register all ConfigMap tools on the server, building operators with the given factory."""
    for tool_cls in CONFIGMAP_TOOL_CLASSES:
        server.add_tool(tool_cls(cluster_manager, factory))
