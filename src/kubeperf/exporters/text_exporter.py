import os
from typing import List

import aiofiles

from ..models.deployment import AnalysisResult, DeploymentAggregate, RecommendationType
from ..utils.date_utils import format_duration
from ..utils.k8s_utils import to_mebibytes
from .base_exporter import BaseExporter

SEPARATOR = "-" * 80


class TextExporter(BaseExporter):
    """Writes the human-readable optimization report."""

    EXTENSION = "txt"

    def render(self, result: AnalysisResult) -> str:
        period = format_duration(result.window)
        lines: List[str] = [
            "Kubernetes Optimization Recommendations",
            f"Context: {result.context or 'unknown'}",
            f"Analysis period: {period}",
            f"Generated at: {result.generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        ]
        if not result.metrics_available:
            lines.append("Warning: usage metrics were unavailable; only limit checks are reported.")
        lines += ["", "", "=== Recommendations by Deployment ===", "-" * 36]

        for deployment in result.sorted_deployments():
            lines += self._render_deployment(deployment, period, result)

        lines += [
            "",
            "=== Summary ===",
            f"Deployments analyzed: {len(result.deployments)}",
            f"Nodes monitored: {result.node_count}",
        ]
        return "\n".join(lines) + "\n"

    def _render_deployment(self, dm: DeploymentAggregate, period: str, result: AnalysisResult) -> List[str]:
        lines = [
            "",
            f"Deployment: {dm.name} (Namespace: {dm.namespace})",
            f"Total pods: {dm.total_pods}",
            f"Pods without limits: {dm.pods_without_limits}",
        ]

        if dm.has_usage:
            lines += [
                "",
                f"Metrics (period of {period}):",
                "  Maximum:",
                f"    CPU: {dm.max_cpu}m",
                f"    Memory: {to_mebibytes(dm.max_memory)}Mi",
                "  Average:",
                f"    CPU: {dm.avg_cpu}m",
                f"    Memory: {to_mebibytes(dm.avg_memory)}Mi",
            ]

        recommendations = result.recommendations.get(dm.key, [])
        missing = [r for r in recommendations if r.type == RecommendationType.MISSING_LIMITS]
        if missing:
            lines += [
                "",
                "Issues found:",
                f"1. {dm.pods_without_limits} pod(s) without resource limits defined",
                "   Recommendation: define CPU and memory limits to prevent excessive consumption",
                "   Impact: High - may cause performance problems across the cluster",
                f"   Priority: {missing[0].priority.value}",
            ]

        limits = next((r for r in recommendations if r.type == RecommendationType.SUGGESTED_LIMITS), None)
        requests = next((r for r in recommendations if r.type == RecommendationType.SUGGESTED_REQUESTS), None)
        if limits and requests:
            lines += [
                "",
                "Resource recommendations:",
                "1. Suggested limits based on maximum observed usage:",
                f"   CPU: {limits.cpu}m (observed maximum)",
                f"   Memory: {to_mebibytes(limits.memory or 0)}Mi (observed maximum)",
                "2. Suggested requests based on average usage:",
                f"   CPU: {requests.cpu}m (observed average)",
                f"   Memory: {to_mebibytes(requests.memory or 0)}Mi (observed average)",
            ]

        lines += ["", "Monitored pods:"]
        lines += [f"- {pod}" for pod in dm.pods]
        lines += ["", SEPARATOR]
        return lines

    async def export(self, result: AnalysisResult, path: str) -> str:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        async with aiofiles.open(path, "w", encoding="utf-8") as fh:
            await fh.write(self.render(result))
        return path
