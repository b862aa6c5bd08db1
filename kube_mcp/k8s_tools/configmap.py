# kube_mcp/k8s_tools/configmap.py
"""
ConfigMap operator backed by the Kubernetes REST API.

Every method issues its own requests through the cluster manager and renders
the outcome as text for the calling agent. Failures are raised as K8sError
with a message written for the same audience.
"""

import base64
import binascii
import json
from datetime import datetime, timezone
from typing import Any, Dict, List
from urllib.parse import quote

from .errors import K8sApiError, K8sError
from .k8s_base import ResourceOperator
from .params import ConfigMapParams

# Longer data values are cut off in get output
MAX_VALUE_LENGTH = 100


def _stringify(value: Any) -> str:
    # ConfigMap values are strings on the wire, JSON-encode everything else
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _string_map(values: Dict[str, Any]) -> Dict[str, str]:
    return {key: _stringify(value) for key, value in values.items()}


def _binary_map(values: Dict[str, Any]) -> Dict[str, str]:
    result = {}
    for key, value in values.items():
        if not isinstance(value, str):
            raise K8sError(f"binary_data key {key!r} must be a base64 encoded string")
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise K8sError(f"binary_data key {key!r} is not valid base64") from e
        result[key] = value
    return result


def _decoded_size(value: str) -> int:
    try:
        return len(base64.b64decode(value))
    except (binascii.Error, ValueError):
        return len(value)


def _join_pairs(values: Dict[str, Any]) -> str:
    return ", ".join(f"{key}={values[key]}" for key in sorted(values))


def _key_count(item: Dict[str, Any]) -> str:
    count = len(item.get("data") or {}) + len(item.get("binaryData") or {})
    return "1 key" if count == 1 else f"{count} keys"


def _data_value(value: str) -> str:
    size = len(value.encode("utf-8"))
    if len(value) > MAX_VALUE_LENGTH:
        return f"{value[:MAX_VALUE_LENGTH]}... ({size} bytes)"
    return value


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _age(timestamp: Any) -> str:
    """Render the time since an RFC 3339 creationTimestamp as 45s, 12m, 3h or 7d."""
    if not isinstance(timestamp, str):
        return "<unknown>"
    try:
        created = datetime.strptime(timestamp, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
    except ValueError:
        return "<unknown>"

    seconds = max(int((_now() - created).total_seconds()), 0)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


class ConfigMap(ResourceOperator):
    """
    ConfigMap operations for the resource described by a ConfigMapParams.
    """

    def __init__(self, params: ConfigMapParams):
        self.params = params

    @property
    def name(self) -> str:
        return self.params.name

    @property
    def namespace(self) -> str:
        return self.params.namespace

    def _collection_path(self) -> str:
        return f"/api/v1/namespaces/{quote(self.namespace, safe='')}/configmaps"

    def _item_path(self) -> str:
        return f"{self._collection_path()}/{quote(self.name, safe='')}"

    def _not_found(self) -> K8sError:
        return K8sError(f'ConfigMap "{self.name}" not found in namespace "{self.namespace}"')

    def _fetch(self, cluster_manager) -> Dict[str, Any]:
        try:
            return cluster_manager.request("GET", self._item_path())
        except K8sApiError as e:
            if e.is_not_found:
                raise self._not_found() from e
            raise

    def _ensure_namespace(self, cluster_manager):
        try:
            cluster_manager.request("GET", f"/api/v1/namespaces/{quote(self.namespace, safe='')}")
        except K8sApiError as e:
            if e.is_not_found:
                raise K8sError(f'namespace "{self.namespace}" not found') from e
            raise

    def create(self, cluster_manager) -> str:
        self._ensure_namespace(cluster_manager)

        metadata: Dict[str, Any] = {"name": self.name, "namespace": self.namespace}
        if self.params.labels is not None:
            metadata["labels"] = _string_map(self.params.labels)
        if self.params.annotations is not None:
            metadata["annotations"] = _string_map(self.params.annotations)

        body: Dict[str, Any] = {
            "apiVersion": "v1",
            "kind": "ConfigMap",
            "metadata": metadata,
            "data": _string_map(self.params.data or {}),
        }
        if self.params.binary_data is not None:
            body["binaryData"] = _binary_map(self.params.binary_data)

        try:
            cluster_manager.request("POST", self._collection_path(), body=body)
        except K8sApiError as e:
            if e.is_conflict:
                raise K8sError(
                    f'ConfigMap "{self.name}" already exists in namespace "{self.namespace}"'
                ) from e
            raise

        return f'ConfigMap "{self.name}" created successfully in namespace "{self.namespace}"'

    def get(self, cluster_manager) -> str:
        configmap = self._fetch(cluster_manager)
        metadata = configmap.get("metadata", {})

        lines: List[str] = [
            f'ConfigMap "{metadata.get("name", self.name)}" in namespace '
            f'"{metadata.get("namespace", self.namespace)}":'
        ]
        if metadata.get("creationTimestamp"):
            lines.append(f"Created: {metadata['creationTimestamp']}")
        if metadata.get("labels"):
            lines.append(f"Labels: {_join_pairs(metadata['labels'])}")
        if metadata.get("annotations"):
            lines.append(f"Annotations: {_join_pairs(metadata['annotations'])}")

        data = configmap.get("data") or {}
        if data:
            lines.append("Data:")
            lines.extend(f"  {key}={_data_value(_stringify(data[key]))}" for key in sorted(data))
        else:
            lines.append("Data: <none>")

        binary_data = configmap.get("binaryData") or {}
        if binary_data:
            lines.append("Binary Data:")
            lines.extend(
                f"  {key}: {_decoded_size(binary_data[key])} bytes" for key in sorted(binary_data)
            )

        return "\n".join(lines)

    def list(self, cluster_manager, all_namespaces: bool, label_selector: str) -> str:
        if all_namespaces:
            path = "/api/v1/configmaps"
            scope = "across all namespaces"
        else:
            path = self._collection_path()
            scope = f'in namespace "{self.namespace}"'

        params = None
        if label_selector:
            params = {"labelSelector": label_selector}
            scope += f" with label selector '{label_selector}'"

        response = cluster_manager.request("GET", path, params=params)
        items = response.get("items") or []
        if not items:
            if label_selector:
                raise K8sError("no ConfigMaps found matching the specified label selector")
            if all_namespaces:
                raise K8sError("no ConfigMaps found in any namespace")
            raise K8sError(f'no ConfigMaps found in namespace "{self.namespace}"')

        lines = [f"ConfigMaps {scope}:"]
        for item in items:
            metadata = item.get("metadata", {})
            name = metadata.get("name", "<unknown>")
            if all_namespaces:
                name = f"{metadata.get('namespace', '<unknown>')}/{name}"
            line = f"- {name} ({_key_count(item)}), Age: {_age(metadata.get('creationTimestamp'))}"
            if metadata.get("labels"):
                line += f", Labels: {len(metadata['labels'])}"
            lines.append(line)
        lines.append("")
        lines.append(f"Total: {len(items)} ConfigMap(s)")
        return "\n".join(lines)

    def delete(self, cluster_manager) -> str:
        try:
            cluster_manager.request("DELETE", self._item_path())
        except K8sApiError as e:
            if e.is_not_found:
                raise self._not_found() from e
            raise
        return f'ConfigMap "{self.name}" deleted successfully from namespace "{self.namespace}"'

    def update(self, cluster_manager) -> str:
        params = self.params

        # Validate before touching the cluster
        binary_data = _binary_map(params.binary_data) if params.binary_data is not None else None

        configmap = self._fetch(cluster_manager)
        metadata = configmap.setdefault("metadata", {})

        # Supplied fields replace the stored ones wholesale, no merging
        if params.data is not None:
            configmap["data"] = _string_map(params.data)
        if binary_data is not None:
            configmap["binaryData"] = binary_data
        if params.labels is not None:
            metadata["labels"] = _string_map(params.labels)
        if params.annotations is not None:
            metadata["annotations"] = _string_map(params.annotations)

        try:
            cluster_manager.request("PUT", self._item_path(), body=configmap)
        except K8sApiError as e:
            if e.is_not_found:
                raise self._not_found() from e
            raise

        return f'ConfigMap "{self.name}" updated successfully in namespace "{self.namespace}"'
