# src/kubeperf/collectors/pod_collector.py
"""
Lists pods from the Kubernetes API together with their owner references
and the resource requests/limits of every container.
"""

import logging
from typing import List, Optional

from kubeperf.core.exceptions import ClusterConnectionError
from kubeperf.core.k8s_client import get_core_v1_api, translate_api_error
from kubeperf.models.pod import ContainerResources, OwnerReference, PodRecord

from ..utils.k8s_utils import parse_cpu_request, parse_cpu_usage, parse_memory_request, parse_memory_usage
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class PodCollector(BaseCollector):
    """
    Connects to the K8s API to list pods as PodRecord objects.
    """

    def __init__(self, request_timeout: Optional[float] = None):
        super().__init__()
        self.request_timeout = request_timeout

    async def _create_api(self):
        return await get_core_v1_api()

    async def list_pods(self, namespace: Optional[str] = None) -> List[PodRecord]:
        """
        Fetches all pods, or only those of ``namespace`` when given.

        Raises:
            ClusterConnectionError: If the client is not configured or the API call fails.
        """
        api = await self._ensure_client()
        if not api:
            raise ClusterConnectionError("Kubernetes client not configured; cannot list pods.")

        try:
            if namespace:
                pod_list = await api.list_namespaced_pod(namespace, _request_timeout=self.request_timeout)
            else:
                pod_list = await api.list_pod_for_all_namespaces(watch=False, _request_timeout=self.request_timeout)
        except Exception as e:
            raise translate_api_error(e, "pods") from e

        records = [self._to_record(pod) for pod in pod_list.items]
        logger.debug(f"Collected {len(records)} pods.")
        return records

    @staticmethod
    def _to_record(pod) -> PodRecord:
        owners = [
            OwnerReference(kind=owner.kind, name=owner.name) for owner in (pod.metadata.owner_references or [])
        ]

        containers = []
        spec_containers = pod.spec.containers if pod.spec and pod.spec.containers else []
        for container in spec_containers:
            resources = container.resources
            requests = (resources.requests if resources else None) or {}
            limits = (resources.limits if resources else None) or {}
            containers.append(
                ContainerResources(
                    name=container.name,
                    cpu_request=parse_cpu_request(requests.get("cpu")),
                    memory_request=parse_memory_request(requests.get("memory")),
                    # Limits round up: any non-zero limit must stay non-zero.
                    cpu_limit=parse_cpu_usage(limits.get("cpu")),
                    memory_limit=parse_memory_usage(limits.get("memory")),
                )
            )

        return PodRecord(
            name=pod.metadata.name,
            namespace=pod.metadata.namespace,
            owner_references=owners,
            containers=containers,
        )
