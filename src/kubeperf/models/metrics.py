# src/kubeperf/models/metrics.py
"""
This module defines the Pydantic data models for the usage metrics sampled
from the Kubernetes metrics API. The snapshot models are accumulators: they
only ever keep the maximum value observed for each pod container and node
during a collection window.
"""

from typing import Dict, List

from pydantic import BaseModel, Field


def pod_key(namespace: str, name: str) -> str:
    """Return the identity used to key a pod in a MetricsSnapshot."""
    return f"{namespace}/{name}"


class ContainerSample(BaseModel):
    """A single usage reading for one container, as returned by the metrics API."""

    name: str = Field(..., description="The name of the container.")
    cpu: int = Field(0, ge=0, description="CPU usage in millicores.")
    memory: int = Field(0, ge=0, description="Memory usage in bytes.")


class PodMetricSample(BaseModel):
    """A single usage reading for all containers of a pod."""

    name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field(..., description="The namespace the pod belongs to.")
    containers: List[ContainerSample] = Field(default_factory=list)


class NodeMetricSample(BaseModel):
    """A single usage reading for a node."""

    name: str = Field(..., description="The name of the node.")
    cpu: int = Field(0, ge=0, description="CPU usage in millicores.")
    memory: int = Field(0, ge=0, description="Memory usage in bytes.")


class ContainerUsage(BaseModel):
    """Maximum usage observed for a container over the collection window."""

    max_cpu: int = Field(0, ge=0, description="Maximum CPU usage in millicores.")
    max_memory: int = Field(0, ge=0, description="Maximum memory usage in bytes.")

    def observe(self, cpu: int, memory: int) -> None:
        self.max_cpu = max(self.max_cpu, cpu)
        self.max_memory = max(self.max_memory, memory)


class NodeUsage(ContainerUsage):
    """Maximum usage observed for a node over the collection window."""


class PodUsage(BaseModel):
    """
    Maximum usage observed for each container of a pod.

    Container entries are created the first time a container is seen and are
    never removed during a run.
    """

    name: str
    namespace: str
    containers: Dict[str, ContainerUsage] = Field(default_factory=dict)

    def observe(self, sample: ContainerSample) -> None:
        usage = self.containers.get(sample.name)
        if usage is None:
            usage = ContainerUsage()
            self.containers[sample.name] = usage
        usage.observe(sample.cpu, sample.memory)


class SamplingStats(BaseModel):
    """Bookkeeping for a sampling run."""

    planned_iterations: int = 0
    completed_iterations: int = 0
    pod_fetch_failures: int = 0
    node_fetch_failures: int = 0

    @property
    def all_failed(self) -> bool:
        """True when iterations ran but none of them gathered any data."""
        return (
            self.completed_iterations > 0
            and self.pod_fetch_failures >= self.completed_iterations
            and self.node_fetch_failures >= self.completed_iterations
        )


class MetricsSnapshot(BaseModel):
    """
    Accumulated max-usage metrics for pods and nodes.

    Pods are keyed by ``"<namespace>/<name>"`` (see :func:`pod_key`) and nodes
    by name. Pods and nodes are tracked independently.
    """

    pods: Dict[str, PodUsage] = Field(default_factory=dict)
    nodes: Dict[str, NodeUsage] = Field(default_factory=dict)
    stats: SamplingStats = Field(default_factory=SamplingStats)

    def fold_pod_sample(self, sample: PodMetricSample) -> None:
        key = pod_key(sample.namespace, sample.name)
        usage = self.pods.get(key)
        if usage is None:
            usage = PodUsage(name=sample.name, namespace=sample.namespace)
            self.pods[key] = usage
        for container in sample.containers:
            usage.observe(container)

    def fold_node_sample(self, sample: NodeMetricSample) -> None:
        usage = self.nodes.get(sample.name)
        if usage is None:
            usage = NodeUsage()
            self.nodes[sample.name] = usage
        usage.observe(sample.cpu, sample.memory)

    def get_pod(self, namespace: str, name: str):
        return self.pods.get(pod_key(namespace, name))

    @property
    def is_empty(self) -> bool:
        return not self.pods and not self.nodes
