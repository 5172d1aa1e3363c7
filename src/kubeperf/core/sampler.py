# src/kubeperf/core/sampler.py
"""
Periodically samples a metrics source over a bounded window and folds every
reading into a MetricsSnapshot that keeps the maximum usage per pod
container and per node.
"""

import asyncio
import logging
from datetime import timedelta
from typing import List, Optional, Protocol

from ..models.metrics import MetricsSnapshot, NodeMetricSample, PodMetricSample
from .exceptions import MetricsUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = timedelta(seconds=30)


class MetricsSource(Protocol):
    async def probe(self) -> None: ...

    async def list_pod_metrics(self) -> List[PodMetricSample]: ...

    async def list_node_metrics(self) -> List[NodeMetricSample]: ...


class MetricsSampler:
    """
    Runs the sampling loop.

    The window is divided into ``window // interval`` samples taken one
    interval apart. A window shorter than the interval yields an empty
    snapshot without touching the source beyond the initial probe.
    """

    def __init__(self, interval: timedelta = DEFAULT_INTERVAL):
        if interval <= timedelta(0):
            raise ValueError("Sampling interval must be greater than zero.")
        self.interval = interval

    @staticmethod
    def iterations_for(window: timedelta, interval: timedelta) -> int:
        if window <= timedelta(0):
            return 0
        return window // interval

    async def collect(
        self,
        source: MetricsSource,
        window: timedelta,
        stop_event: Optional[asyncio.Event] = None,
    ) -> MetricsSnapshot:
        """
        Samples ``source`` for ``window`` and returns the accumulated snapshot.

        Raises:
            MetricsUnavailableError: If the initial probe fails. No samples are taken.
        """
        try:
            await source.probe()
        except MetricsUnavailableError:
            raise
        except Exception as e:
            raise MetricsUnavailableError(f"Metrics source is unavailable: {e}") from e

        snapshot = MetricsSnapshot()
        iterations = self.iterations_for(window, self.interval)
        snapshot.stats.planned_iterations = iterations
        logger.info("Collecting metrics for %s (interval %s, %d samples)", window, self.interval, iterations)

        for i in range(iterations):
            if stop_event is not None and stop_event.is_set():
                logger.info("Sampling stopped after %d/%d samples.", i, iterations)
                break

            logger.info("Sample %d/%d...", i + 1, iterations)
            await self._sample_once(source, snapshot)
            snapshot.stats.completed_iterations += 1

            if i < iterations - 1:
                await self._wait(stop_event)

        if snapshot.stats.all_failed:
            logger.warning("Every sampling iteration failed; continuing with an empty snapshot.")
        return snapshot

    async def _wait(self, stop_event: Optional[asyncio.Event]) -> None:
        """Sleeps one interval, returning early once ``stop_event`` is set."""
        seconds = self.interval.total_seconds()
        if stop_event is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def _sample_once(self, source: MetricsSource, snapshot: MetricsSnapshot) -> None:
        try:
            pod_samples = await source.list_pod_metrics()
        except Exception as e:
            snapshot.stats.pod_fetch_failures += 1
            logger.warning("Failed to collect pod metrics: %s", e)
        else:
            for sample in pod_samples:
                snapshot.fold_pod_sample(sample)

        try:
            node_samples = await source.list_node_metrics()
        except Exception as e:
            snapshot.stats.node_fetch_failures += 1
            logger.warning("Failed to collect node metrics: %s", e)
        else:
            for sample in node_samples:
                snapshot.fold_node_sample(sample)


async def collect(
    source: MetricsSource,
    window: timedelta,
    interval: timedelta = DEFAULT_INTERVAL,
    stop_event: Optional[asyncio.Event] = None,
) -> MetricsSnapshot:
    """Convenience wrapper around :meth:`MetricsSampler.collect`."""
    return await MetricsSampler(interval).collect(source, window, stop_event=stop_event)
