# src/kubeperf/collectors/replicaset_collector.py
"""
Fetches the owner references of workload controllers (ReplicaSets) so
pods can be traced back to their Deployment.
"""

import logging
from typing import Dict, List, Optional, Tuple

from kubeperf.core.exceptions import ClusterConnectionError, ClusterError
from kubeperf.core.k8s_client import get_apps_v1_api, translate_api_error
from kubeperf.models.pod import OwnerReference

from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

_READERS = {
    "ReplicaSet": "read_namespaced_replica_set",
}


class ReplicaSetCollector(BaseCollector):
    """
    Owner lookup backed by the AppsV1 API.

    With ``cache=True`` the owner references of each (kind, namespace, name)
    are fetched at most once per collector instance. Failed lookups are not
    cached.
    """

    def __init__(self, request_timeout: Optional[float] = None, cache: bool = True):
        super().__init__()
        self.request_timeout = request_timeout
        self.cache_enabled = cache
        self._cache: Dict[Tuple[str, str, str], List[OwnerReference]] = {}

    async def _create_api(self):
        return await get_apps_v1_api()

    async def get_owner_references(self, kind: str, name: str, namespace: str) -> List[OwnerReference]:
        """
        Returns the owner references of the ``kind`` object ``namespace/name``.

        Raises:
            ResourceNotFoundError: If the object does not exist.
            ClusterConnectionError: If the API call fails for any other reason.
            ClusterError: If ``kind`` is not an apps/v1 kind this collector reads.
        """
        key = (kind, namespace, name)
        if self.cache_enabled and key in self._cache:
            return self._cache[key]

        reader = _READERS.get(kind)
        if reader is None:
            raise ClusterError(f"Owner lookup for kind '{kind}' is not supported.")

        api = await self._ensure_client()
        if not api:
            raise ClusterConnectionError(f"Kubernetes client not configured; cannot read {kind} {namespace}/{name}.")

        try:
            obj = await getattr(api, reader)(name, namespace, _request_timeout=self.request_timeout)
        except Exception as e:
            raise translate_api_error(e, f"{kind} {namespace}/{name}") from e

        owners = [OwnerReference(kind=ref.kind, name=ref.name) for ref in (obj.metadata.owner_references or [])]
        if self.cache_enabled:
            self._cache[key] = owners
        return owners
