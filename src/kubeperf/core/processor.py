# src/kubeperf/core/processor.py
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from ..collectors.metrics_collector import MetricsServerCollector
from ..collectors.node_collector import NodeCollector
from ..collectors.pod_collector import PodCollector
from ..collectors.replicaset_collector import ReplicaSetCollector
from ..models.deployment import AnalysisResult
from ..models.metrics import MetricsSnapshot
from .aggregator import aggregate_deployments
from .exceptions import MetricsUnavailableError
from .k8s_client import get_current_context
from .recommender import Recommender
from .sampler import MetricsSampler

logger = logging.getLogger(__name__)


class PerformanceAnalyzer:
    """Orchestrates one analysis run: sampling, listing, aggregation and recommendations."""

    def __init__(
        self,
        metrics_collector: MetricsServerCollector,
        pod_collector: PodCollector,
        node_collector: NodeCollector,
        replicaset_collector: ReplicaSetCollector,
        sampler: MetricsSampler,
        recommender: Recommender,
    ):
        self.metrics_collector = metrics_collector
        self.pod_collector = pod_collector
        self.node_collector = node_collector
        self.replicaset_collector = replicaset_collector
        self.sampler = sampler
        self.recommender = recommender

    async def collect_metrics(
        self, window: timedelta, stop_event: Optional[asyncio.Event] = None
    ) -> Optional[MetricsSnapshot]:
        """
        Samples usage metrics. Returns None when the metrics API is
        unavailable so the caller can continue in degraded mode.
        """
        try:
            return await self.sampler.collect(self.metrics_collector, window, stop_event=stop_event)
        except MetricsUnavailableError as e:
            logger.warning("%s", e)
            logger.warning("Continuing the analysis without usage metrics.")
            return None

    async def run(
        self,
        window: timedelta,
        namespace: Optional[str] = None,
        stop_event: Optional[asyncio.Event] = None,
    ) -> AnalysisResult:
        """
        Executes the analysis pipeline.

        Raises:
            ClusterError: If pods or nodes cannot be listed.
        """
        logger.info("Starting analysis (window %s, namespace %s)...", window, namespace or "<all>")

        snapshot = await self.collect_metrics(window, stop_event=stop_event)
        metrics_available = snapshot is not None
        if snapshot is None:
            snapshot = MetricsSnapshot()

        logger.info("Listing pods...")
        pods = await self.pod_collector.list_pods(namespace)
        logger.info("Found %d pods", len(pods))

        logger.info("Listing nodes...")
        nodes = await self.node_collector.list_nodes()
        logger.info("Found %d nodes", len(nodes))

        deployments = await aggregate_deployments(pods, snapshot, self.replicaset_collector)
        recommendations = self.recommender.recommend_all(deployments.values())

        return AnalysisResult(
            context=get_current_context(),
            window=window,
            interval=self.sampler.interval,
            metrics_available=metrics_available,
            deployments=deployments,
            recommendations=recommendations,
            node_count=len(nodes),
            pod_count=len(pods),
            stats=snapshot.stats,
        )

    async def close(self):
        """Close every Kubernetes client opened during the run."""
        for collector in (
            self.metrics_collector,
            self.pod_collector,
            self.node_collector,
            self.replicaset_collector,
        ):
            try:
                await collector.close()
            except Exception as e:
                logger.debug("Error closing %s: %s", type(collector).__name__, e)
