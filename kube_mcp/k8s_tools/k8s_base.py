# kube_mcp/k8s_tools/k8s_base.py
"""
Base classes for the Kubernetes tools.

Two contracts live here:

* K8sTool is what the server registers and calls. Every tool has a name, a
  description, a JSON Schema for its arguments and a run() method that
  always returns text.
* ResourceOperator is what a tool delegates to. One subclass per resource
  kind (ConfigMap today) performs the actual create/get/list/delete/update
  against the cluster and raises a K8sError when that fails.
"""

# Import the Abstract Base Class (ABC) module
from abc import ABC, abstractmethod
from typing import Dict, Any

class K8sTool(ABC):
    """
    Abstract base class for all Kubernetes tools.
    """

    # These are class attributes that subclasses must define
    name: str  # Unique identifier for the tool (e.g., "get_configmap")
    description: str  # Human-readable description of what the tool does

    @abstractmethod
    def get_parameters_schema(self) -> Dict[str, Any]:
        """
        Return the JSON Schema for this tool's parameters.

        This schema tells the calling agent what arguments the tool accepts.

        Returns:
            Dict[str, Any]: JSON Schema describing the tool's parameters
        """
        pass

    @abstractmethod
    def run(self, arguments: Dict[str, Any]) -> str:
        """
        Execute the tool.

        Arguments arrive exactly as the caller sent them, so anything may be
        missing or of the wrong type. Implementations never raise: failures
        are returned as text.

        Args:
            arguments (dict): Untyped arguments from the tool call

        Returns:
            str: Human-readable result or failure message
        """
        pass


class ResourceOperator(ABC):
    """
    Executes one operation against a specific resource kind.

    An operator is built per invocation from a parameter model, used once and
    thrown away. Each method takes the cluster manager it should talk to and
    returns a human-readable string, or raises on failure.
    """

    @abstractmethod
    def create(self, cluster_manager) -> str:
        pass

    @abstractmethod
    def get(self, cluster_manager) -> str:
        pass

    @abstractmethod
    def list(self, cluster_manager, all_namespaces: bool, label_selector: str) -> str:
        pass

    @abstractmethod
    def delete(self, cluster_manager) -> str:
        pass

    @abstractmethod
    def update(self, cluster_manager) -> str:
        """Replace every supplied field wholesale, leave the others untouched."""
        pass
