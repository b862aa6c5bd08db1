# kube_mcp/k8s_tools/constants.py
"""
Fixed strings shared by the Kubernetes tool handlers.

Callers detect failures by these exact messages and prefixes, so keep the
wording stable.
"""

# Validation messages
ERR_MISSING_NAME = "Required parameter 'name' is missing"
ERR_EMPTY_NAME = "Parameter 'name' must be a non-empty string"

# Failure prefixes (followed by the underlying error text)
FAILED_CREATE_CONFIGMAP = "Failed to create ConfigMap: "
FAILED_GET_CONFIGMAP = "Failed to get ConfigMap: "
FAILED_LIST_CONFIGMAPS = "Failed to list ConfigMaps: "
FAILED_DELETE_CONFIGMAP = "Failed to delete ConfigMap: "
FAILED_UPDATE_CONFIGMAP = "Failed to update ConfigMap: "

# Cluster defaults
DEFAULT_NAMESPACE = "default"
DEFAULT_API_URL = "http://127.0.0.1:8001"
