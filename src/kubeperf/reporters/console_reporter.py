"""
A reporter that displays the analysis in formatted tables in the console.
"""

import logging
from typing import List

from rich.console import Console
from rich.table import Table

from ..models.deployment import AnalysisResult, Recommendation, RecommendationType
from ..utils.k8s_utils import to_mebibytes
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)


class ConsoleReporter(BaseReporter):
    """
    Renders deployment usage and recommendations using the 'rich' library.
    """

    def __init__(self):
        self.console = Console()

    def report(self, result: AnalysisResult):
        """
        Displays one row per deployment, followed by the recommendations table.
        """
        if not result.metrics_available:
            self.console.print("Usage metrics were unavailable; showing limit checks only.", style="yellow")

        if not result.deployments:
            self.console.print("No deployments to report.", style="yellow")
            return

        table = Table(
            title="Deployment Resource Usage",
            header_style="bold magenta",
            show_lines=True,
        )
        table.add_column("Namespace", style="cyan")
        table.add_column("Deployment", style="cyan")
        table.add_column("Pods", justify="right")
        table.add_column("Without Limits", style="red", justify="right")
        table.add_column("Max CPU (m)", style="blue", justify="right")
        table.add_column("Max Mem (Mi)", style="blue", justify="right")
        table.add_column("Avg CPU (m)", style="green", justify="right")
        table.add_column("Avg Mem (Mi)", style="green", justify="right")

        for dm in result.sorted_deployments():
            table.add_row(
                dm.namespace,
                dm.name,
                f"{dm.total_pods}",
                f"{dm.pods_without_limits}",
                f"{dm.max_cpu}",
                f"{to_mebibytes(dm.max_memory)}",
                f"{dm.avg_cpu}",
                f"{to_mebibytes(dm.avg_memory)}",
            )

        self.console.print(table)
        self.console.print(
            f"Deployments analyzed: {len(result.deployments)} | Nodes monitored: {result.node_count}",
            style="dim",
        )

        recommendations = [rec for key in sorted(result.recommendations) for rec in result.recommendations[key]]
        self.report_recommendations(recommendations)

    def report_recommendations(self, recommendations: List[Recommendation]):
        """
        Displays optimization recommendations in a separate table.
        """
        if not recommendations:
            self.console.print("\n✅ No recommendations to display.", style="green")
            return

        table = Table(
            title="Optimization Recommendations",
            header_style="bold magenta",
            show_lines=True,
        )
        table.add_column("Type", style="bold")
        table.add_column("Namespace", style="cyan")
        table.add_column("Deployment", style="cyan")
        table.add_column("Priority")
        table.add_column("Recommendation", style="white")

        for rec in recommendations:
            style = "white"
            type_str = rec.type.value
            if rec.type == RecommendationType.MISSING_LIMITS:
                style = "bold red"
                type_str = f"⚠️  {type_str}"
            elif rec.type == RecommendationType.SUGGESTED_LIMITS:
                style = "bold cyan"

            table.add_row(f"[{style}]{type_str}[/]", rec.namespace, rec.deployment, rec.priority.value, rec.description)

        self.console.print(table)
