# src/kubeperf/core/factory.py
"""
Factory function to instantiate the PerformanceAnalyzer with its collectors.
"""

import logging
from datetime import timedelta
from typing import Optional

from ..collectors.metrics_collector import MetricsServerCollector
from ..collectors.node_collector import NodeCollector
from ..collectors.pod_collector import PodCollector
from ..collectors.replicaset_collector import ReplicaSetCollector
from .config import config
from .processor import PerformanceAnalyzer
from .recommender import Recommender
from .sampler import MetricsSampler

logger = logging.getLogger(__name__)


def get_analyzer(interval: Optional[timedelta] = None, request_timeout: Optional[float] = None) -> PerformanceAnalyzer:
    """
    Builds a PerformanceAnalyzer wired to the live Kubernetes API.

    Defaults come from the configuration (SAMPLING_INTERVAL and
    REQUEST_TIMEOUT_SECONDS).
    """
    interval = interval or config.sampling_interval
    timeout = request_timeout or config.REQUEST_TIMEOUT_SECONDS
    logger.debug("Building analyzer (interval=%s, request_timeout=%ss)", interval, timeout)

    return PerformanceAnalyzer(
        metrics_collector=MetricsServerCollector(request_timeout=timeout),
        pod_collector=PodCollector(request_timeout=timeout),
        node_collector=NodeCollector(request_timeout=timeout),
        replicaset_collector=ReplicaSetCollector(request_timeout=timeout),
        sampler=MetricsSampler(interval),
        recommender=Recommender(),
    )
