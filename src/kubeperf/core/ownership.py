# src/kubeperf/core/ownership.py
"""
Resolves the Deployment that owns a pod by following the owner references
pod -> ReplicaSet -> Deployment. Only this two-hop chain is followed; bare
pods and pods of Jobs, DaemonSets or StatefulSets resolve to None.
"""

import logging
from typing import Iterable, List, Optional, Protocol

from ..models.pod import OwnerReference, PodRecord
from .exceptions import ClusterError

logger = logging.getLogger(__name__)

REPLICA_SET = "ReplicaSet"
DEPLOYMENT = "Deployment"


class OwnerLookup(Protocol):
    async def get_owner_references(self, kind: str, name: str, namespace: str) -> List[OwnerReference]: ...


def find_owner(owners: Iterable[OwnerReference], kind: str) -> Optional[str]:
    """Name of the first owner of the given kind, if any."""
    for owner in owners:
        if owner.kind == kind:
            return owner.name
    return None


async def resolve_deployment(pod: PodRecord, owner_lookup: OwnerLookup) -> Optional[str]:
    """
    Returns the name of the Deployment owning ``pod``, or None.

    A ReplicaSet that cannot be fetched is skipped and the remaining owner
    references are still examined.
    """
    for owner in pod.owner_references:
        if owner.kind != REPLICA_SET:
            continue
        try:
            rs_owners = await owner_lookup.get_owner_references(REPLICA_SET, owner.name, pod.namespace)
        except ClusterError as e:
            logger.debug("Could not fetch ReplicaSet %s/%s for pod %s: %s", pod.namespace, owner.name, pod.name, e)
            continue

        deployment = find_owner(rs_owners, DEPLOYMENT)
        if deployment:
            return deployment
    return None
