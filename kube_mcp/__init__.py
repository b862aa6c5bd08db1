# kube_mcp/__init__.py
"""
Kube MCP Package Initialization

This file initializes the kube_mcp package and provides version and package
information. The package exposes Kubernetes ConfigMap management as a set of
JSON-RPC tools that an agent can call.
"""

# Package metadata
__version__ = "0.1.0"
__author__ = "Kube MCP Development Team"
__description__ = "Kubernetes ConfigMap tools served over JSON-RPC for AI agents"

__all__ = [
    "get_version",
    "get_package_info",
    "__version__"
]

def get_version():
    """
    Get the current version of the kube_mcp package.

    Returns:
        str: The version string in format "major.minor.patch"
    """
    return __version__

def get_package_info():
    """
    Get comprehensive package information.

    Returns:
        dict: Dictionary containing version, author, and description
    """
    return {
        "version": __version__,
        "author": __author__,
        "description": __description__,
        "name": "kube_mcp"
    }
