# src/kubeperf/collectors/node_collector.py

import logging
from typing import List, Optional

from kubeperf.core.exceptions import ClusterConnectionError
from kubeperf.core.k8s_client import get_core_v1_api, translate_api_error

from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Lists the nodes of the Kubernetes cluster."""

    def __init__(self, request_timeout: Optional[float] = None):
        super().__init__()
        self.request_timeout = request_timeout

    async def _create_api(self):
        return await get_core_v1_api()

    async def list_nodes(self) -> List[str]:
        """
        Returns the names of all nodes in the cluster.

        Raises:
            ClusterConnectionError: If the client is not configured or the API call fails.
        """
        api = await self._ensure_client()
        if not api:
            raise ClusterConnectionError("Kubernetes client not configured; cannot list nodes.")

        try:
            nodes = await api.list_node(watch=False, _request_timeout=self.request_timeout)
        except Exception as e:
            raise translate_api_error(e, "nodes") from e

        names = [node.metadata.name for node in nodes.items]
        if not names:
            logger.warning("No nodes found in the cluster.")
        return names
