# src/kubeperf/collectors/metrics_collector.py
"""
Reads live CPU/memory usage from the metrics.k8s.io API served by
metrics-server.
"""

import logging
from typing import List, Optional

from kubeperf.core.exceptions import ClusterConnectionError, MetricsUnavailableError
from kubeperf.core.k8s_client import get_custom_objects_api, translate_api_error
from kubeperf.models.metrics import ContainerSample, NodeMetricSample, PodMetricSample

from ..utils.k8s_utils import parse_cpu_usage, parse_memory_usage
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"


class MetricsServerCollector(BaseCollector):
    """
    Metrics source backed by the Kubernetes resource metrics API.
    """

    def __init__(self, request_timeout: Optional[float] = None):
        super().__init__()
        self.request_timeout = request_timeout

    async def _create_api(self):
        return await get_custom_objects_api()

    async def _list(self, plural: str) -> list:
        api = await self._ensure_client()
        if not api:
            raise ClusterConnectionError("Kubernetes client not configured; cannot read metrics.")
        try:
            response = await api.list_cluster_custom_object(
                METRICS_GROUP,
                METRICS_VERSION,
                plural,
                _request_timeout=self.request_timeout,
            )
        except Exception as e:
            raise translate_api_error(e, f"{plural} metrics") from e
        return (response or {}).get("items") or []

    async def probe(self) -> None:
        """
        Verifies that the metrics API answers by listing node metrics once.

        Raises:
            MetricsUnavailableError: If the metrics API cannot be reached.
        """
        try:
            await self._list("nodes")
        except Exception as e:
            raise MetricsUnavailableError(
                f"Could not reach the metrics API ({METRICS_GROUP}/{METRICS_VERSION}): {e}. "
                "Make sure metrics-server is installed and running in the cluster."
            ) from e

    async def list_pod_metrics(self) -> List[PodMetricSample]:
        """Returns the current usage of every pod container in the cluster."""
        samples = []
        for item in await self._list("pods"):
            metadata = item.get("metadata", {})
            containers = [
                ContainerSample(
                    name=container.get("name", ""),
                    cpu=parse_cpu_usage(container.get("usage", {}).get("cpu")),
                    memory=parse_memory_usage(container.get("usage", {}).get("memory")),
                )
                for container in item.get("containers") or []
            ]
            samples.append(
                PodMetricSample(
                    name=metadata.get("name", ""),
                    namespace=metadata.get("namespace", ""),
                    containers=containers,
                )
            )
        return samples

    async def list_node_metrics(self) -> List[NodeMetricSample]:
        """Returns the current usage of every node in the cluster."""
        samples = []
        for item in await self._list("nodes"):
            usage = item.get("usage", {})
            samples.append(
                NodeMetricSample(
                    name=item.get("metadata", {}).get("name", ""),
                    cpu=parse_cpu_usage(usage.get("cpu")),
                    memory=parse_memory_usage(usage.get("memory")),
                )
            )
        return samples
