import pytest
from unittest.mock import MagicMock

from kube_mcp.k8s_tools import ClusterManager, ConfigMapFactory, ResourceOperator

DEFAULT_NAMESPACE = "default"
TEST_NAMESPACE = "test-namespace"
TEST_CONFIGMAP_NAME = "test-configmap"


@pytest.fixture
def mock_cluster_manager():
    """Cluster manager double whose current namespace is 'default'."""
    cluster_manager = MagicMock(spec=ClusterManager)
    cluster_manager.get_current_namespace.return_value = DEFAULT_NAMESPACE
    return cluster_manager


@pytest.fixture
def mock_configmap():
    """Operator double; configure create/get/list/delete/update per test."""
    return MagicMock(spec=ResourceOperator)


@pytest.fixture
def mock_factory(mock_configmap):
    """Factory double that records the params it was given and returns mock_configmap."""
    factory = MagicMock(spec=ConfigMapFactory)
    factory.new_configmap.return_value = mock_configmap
    return factory
