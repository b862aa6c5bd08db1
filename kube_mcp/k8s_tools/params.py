# kube_mcp/k8s_tools/params.py
"""
Parameter models passed from the tool handlers to the resource operators.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class ConfigMapParams(BaseModel):
    """
    Validated inputs for one ConfigMap operation.

    The handlers do all the checking before building this model, because
    what counts as valid depends on the operation (list has no name, for
    example). A map field left as None was not supplied by the caller, which
    is not the same thing as an empty map.
    """

    model_config = ConfigDict(frozen=True)

    # Empty for list operations
    name: str = Field("", description="Name of the ConfigMap")

    # Empty only when listing across all namespaces
    namespace: str = Field("", description="Namespace of the ConfigMap")

    data: Optional[Dict[str, Any]] = Field(
        None,
        description="Key-value pairs of configuration data"
    )

    binary_data: Optional[Dict[str, Any]] = Field(
        None,
        description="Key-value pairs of base64 encoded binary data"
    )

    labels: Optional[Dict[str, Any]] = Field(None, description="Labels of the ConfigMap")

    annotations: Optional[Dict[str, Any]] = Field(None, description="Annotations of the ConfigMap")
