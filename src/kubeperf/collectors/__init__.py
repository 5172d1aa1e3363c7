from .metrics_collector import MetricsServerCollector
from .node_collector import NodeCollector
from .pod_collector import PodCollector
from .replicaset_collector import ReplicaSetCollector

__all__ = [
    "MetricsServerCollector",
    "NodeCollector",
    "PodCollector",
    "ReplicaSetCollector",
]
