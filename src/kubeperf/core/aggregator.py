# src/kubeperf/core/aggregator.py
"""
Aggregates pods and their sampled usage into one DeploymentAggregate per
(namespace, deployment).
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..models.deployment import DeploymentAggregate
from ..models.metrics import MetricsSnapshot
from ..models.pod import PodRecord
from .ownership import OwnerLookup, resolve_deployment

logger = logging.getLogger(__name__)


def deployment_key(namespace: str, name: str) -> str:
    return f"{namespace}/{name}"


class DeploymentAggregator:
    """
    Incrementally folds pods into per-deployment aggregates.

    Aggregation rules:
    - Every pod counts toward ``total_pods``; pods where any container lacks
      a CPU or memory limit also count toward ``pods_without_limits``.
    - ``max_cpu``/``max_memory`` keep the largest container maximum seen.
    - ``avg_cpu``/``avg_memory`` are the running sums of container maxima
      divided by the number of containers observed so far (floor division).
      They are left untouched when a pod contributes no containers.
    """

    def __init__(self, snapshot: Optional[MetricsSnapshot] = None):
        self.snapshot = snapshot or MetricsSnapshot()
        self.aggregates: Dict[str, DeploymentAggregate] = {}

    def add_pod(self, pod: PodRecord, deployment_name: str) -> DeploymentAggregate:
        key = deployment_key(pod.namespace, deployment_name)
        aggregate = self.aggregates.get(key)
        if aggregate is None:
            aggregate = DeploymentAggregate(name=deployment_name, namespace=pod.namespace)
            self.aggregates[key] = aggregate

        aggregate.pods.append(pod.name)
        aggregate.total_pods += 1
        if not pod.has_limits:
            aggregate.pods_without_limits += 1

        usage = self.snapshot.get_pod(pod.namespace, pod.name)
        if usage is not None:
            for container in usage.containers.values():
                aggregate.max_cpu = max(aggregate.max_cpu, container.max_cpu)
                aggregate.max_memory = max(aggregate.max_memory, container.max_memory)
                aggregate.cpu_sum += container.max_cpu
                aggregate.memory_sum += container.max_memory
                aggregate.observed_containers += 1

            if usage.containers and aggregate.observed_containers:
                aggregate.avg_cpu = aggregate.cpu_sum // aggregate.observed_containers
                aggregate.avg_memory = aggregate.memory_sum // aggregate.observed_containers

        return aggregate


async def aggregate_deployments(
    pods: Iterable[PodRecord],
    snapshot: MetricsSnapshot,
    owner_lookup: OwnerLookup,
) -> Dict[str, DeploymentAggregate]:
    """
    Returns a mapping ``"<namespace>/<deployment>" -> DeploymentAggregate``.

    Pods without a Deployment owner are skipped. The mapping is unordered;
    use :func:`sorted_aggregates` for stable output.
    """
    aggregator = DeploymentAggregator(snapshot)
    skipped = 0
    for pod in pods:
        deployment = await resolve_deployment(pod, owner_lookup)
        if not deployment:
            skipped += 1
            continue
        aggregator.add_pod(pod, deployment)

    logger.info(
        "Aggregated %d deployments (%d pods without a deployment owner skipped).",
        len(aggregator.aggregates),
        skipped,
    )
    return aggregator.aggregates


def sorted_aggregates(aggregates: Dict[str, DeploymentAggregate]) -> List[DeploymentAggregate]:
    """Aggregates ordered by namespace, then deployment name."""
    return sorted(aggregates.values(), key=lambda a: (a.namespace, a.name))
