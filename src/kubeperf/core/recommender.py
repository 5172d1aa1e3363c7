# src/kubeperf/core/recommender.py

import logging
from typing import Dict, Iterable, List

from kubeperf.models.deployment import DeploymentAggregate, Priority, Recommendation, RecommendationType
from kubeperf.utils.k8s_utils import to_mebibytes

LOG = logging.getLogger(__name__)


class Recommender:
    """
    Turns deployment aggregates into optimization recommendations.

    Limits are suggested from the maximum usage observed during the
    collection window and requests from the average usage.
    """

    def recommend(self, aggregate: DeploymentAggregate) -> List[Recommendation]:
        recommendations: List[Recommendation] = []

        if aggregate.pods_without_limits > 0:
            recommendations.append(
                Recommendation(
                    deployment=aggregate.name,
                    namespace=aggregate.namespace,
                    type=RecommendationType.MISSING_LIMITS,
                    priority=Priority.HIGH,
                    description=(
                        f"{aggregate.pods_without_limits} pod(s) without resource limits. "
                        "Define CPU and memory limits to prevent excessive consumption; "
                        "unbounded pods can degrade performance across the cluster."
                    ),
                )
            )

        if aggregate.has_usage:
            recommendations.append(
                Recommendation(
                    deployment=aggregate.name,
                    namespace=aggregate.namespace,
                    type=RecommendationType.SUGGESTED_LIMITS,
                    cpu=aggregate.max_cpu,
                    memory=aggregate.max_memory,
                    description=(
                        f"Suggested limits based on maximum observed usage: "
                        f"CPU {aggregate.max_cpu}m, memory {to_mebibytes(aggregate.max_memory)}Mi."
                    ),
                )
            )
            recommendations.append(
                Recommendation(
                    deployment=aggregate.name,
                    namespace=aggregate.namespace,
                    type=RecommendationType.SUGGESTED_REQUESTS,
                    cpu=aggregate.avg_cpu,
                    memory=aggregate.avg_memory,
                    description=(
                        f"Suggested requests based on average observed usage: "
                        f"CPU {aggregate.avg_cpu}m, memory {to_mebibytes(aggregate.avg_memory)}Mi."
                    ),
                )
            )

        LOG.debug("Generated %d recommendation(s) for %s", len(recommendations), aggregate.key)
        return recommendations

    def recommend_all(self, aggregates: Iterable[DeploymentAggregate]) -> Dict[str, List[Recommendation]]:
        return {aggregate.key: self.recommend(aggregate) for aggregate in aggregates}
