# tests/conftest.py

from typing import Dict, List, Optional

import pytest

from kubeperf.core.exceptions import MetricsUnavailableError, ResourceNotFoundError
from kubeperf.models.metrics import ContainerSample, NodeMetricSample, PodMetricSample
from kubeperf.models.pod import ContainerResources, OwnerReference, PodRecord

MI = 1024 * 1024


@pytest.fixture(autouse=True)
def mock_settings_env_vars(monkeypatch):
    """
    Autouse fixture that pins the environment-driven configuration so tests
    are isolated from the developer's shell and kubeconfig.
    """
    for key in ("NAMESPACE", "KUBECONFIG", "KUBE_CONTEXT", "REPORT_DIR"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("COLLECTION_WINDOW", "5m")
    monkeypatch.setenv("SAMPLING_INTERVAL", "30s")
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "10")


@pytest.fixture(autouse=True)
def reset_k8s_state():
    """Forget any Kubernetes configuration loaded by a previous test."""
    from kubeperf.core.k8s_client import reset_k8s_config

    reset_k8s_config()
    yield
    reset_k8s_config()


class FakeMetricsSource:
    """
    Scripted metrics source. Each call to list_pod_metrics/list_node_metrics
    pops the next entry; an Exception entry is raised instead of returned.
    """

    def __init__(self, pod_rounds=None, node_rounds=None, probe_error: Optional[Exception] = None):
        self.pod_rounds = list(pod_rounds or [])
        self.node_rounds = list(node_rounds or [])
        self.probe_error = probe_error
        self.probe_calls = 0
        self.pod_calls = 0
        self.node_calls = 0

    async def probe(self):
        self.probe_calls += 1
        if self.probe_error:
            raise self.probe_error

    async def list_pod_metrics(self) -> List[PodMetricSample]:
        self.pod_calls += 1
        item = self.pod_rounds.pop(0) if self.pod_rounds else []
        if isinstance(item, Exception):
            raise item
        return item

    async def list_node_metrics(self) -> List[NodeMetricSample]:
        self.node_calls += 1
        item = self.node_rounds.pop(0) if self.node_rounds else []
        if isinstance(item, Exception):
            raise item
        return item


class FakeOwnerLookup:
    """Owner lookup backed by a dict of (kind, namespace, name) -> owner references."""

    def __init__(self, objects: Dict[tuple, List[OwnerReference]], failing: Optional[set] = None):
        self.objects = objects
        self.failing = failing or set()
        self.calls = []

    async def get_owner_references(self, kind, name, namespace):
        self.calls.append((kind, namespace, name))
        key = (kind, namespace, name)
        if key in self.failing or key not in self.objects:
            raise ResourceNotFoundError(f"{kind} {namespace}/{name} not found")
        return self.objects[key]


def pod_sample(name, namespace="ns", **containers) -> PodMetricSample:
    """pod_sample("web-1", app=(100, 50 * MI)) -> PodMetricSample"""
    return PodMetricSample(
        name=name,
        namespace=namespace,
        containers=[ContainerSample(name=c, cpu=cpu, memory=mem) for c, (cpu, mem) in containers.items()],
    )


def node_sample(name, cpu, memory) -> NodeMetricSample:
    return NodeMetricSample(name=name, cpu=cpu, memory=memory)


def make_pod(name, namespace="ns", replica_set=None, limits=((500, 128 * MI),), owners=None) -> PodRecord:
    """Builds a PodRecord; ``limits`` is one (cpu_limit, memory_limit) pair per container."""
    if owners is None:
        owners = [OwnerReference(kind="ReplicaSet", name=replica_set)] if replica_set else []
    containers = [
        ContainerResources(name=f"c{i}", cpu_limit=cpu, memory_limit=mem) for i, (cpu, mem) in enumerate(limits)
    ]
    return PodRecord(name=name, namespace=namespace, owner_references=owners, containers=containers)


@pytest.fixture
def fake_source_factory():
    return FakeMetricsSource


@pytest.fixture
def unavailable_source():
    return FakeMetricsSource(probe_error=MetricsUnavailableError("metrics-server not installed"))
