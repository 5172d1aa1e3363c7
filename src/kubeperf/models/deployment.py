# src/kubeperf/models/deployment.py
"""
Data models for the per-deployment analysis: the aggregate usage record,
the optimization recommendations derived from it, and the result of a
complete analysis run.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .metrics import SamplingStats


class DeploymentAggregate(BaseModel):
    """
    Usage statistics aggregated over all pods owned by one deployment.

    ``avg_cpu`` and ``avg_memory`` are recomputed each time a pod with usage
    data is folded in, from the running sums divided by the number of
    containers observed so far for the deployment (integer division).
    """

    name: str = Field(..., description="The name of the deployment.")
    namespace: str = Field(..., description="The namespace of the deployment.")
    pods: List[str] = Field(default_factory=list, description="Member pod names, in input order.")
    total_pods: int = 0
    pods_without_limits: int = 0
    max_cpu: int = Field(0, description="Maximum container CPU usage in millicores.")
    max_memory: int = Field(0, description="Maximum container memory usage in bytes.")
    avg_cpu: int = Field(0, description="Average container CPU usage in millicores.")
    avg_memory: int = Field(0, description="Average container memory usage in bytes.")

    # Running state for the averages
    cpu_sum: int = 0
    memory_sum: int = 0
    observed_containers: int = 0

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"

    @property
    def has_usage(self) -> bool:
        return self.max_cpu > 0 or self.max_memory > 0


class RecommendationType(str, Enum):
    """Enumeration of possible recommendation types."""

    MISSING_LIMITS = "MISSING_LIMITS"
    SUGGESTED_LIMITS = "SUGGESTED_LIMITS"
    SUGGESTED_REQUESTS = "SUGGESTED_REQUESTS"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Recommendation(BaseModel):
    """Represents a single actionable optimization recommendation for a deployment."""

    deployment: str = Field(..., description="The name of the target deployment.")
    namespace: str = Field(..., description="The namespace of the target deployment.")
    type: RecommendationType = Field(..., description="The category of the recommendation.")
    description: str = Field(..., description="A human-readable description of the recommendation.")
    priority: Priority = Priority.MEDIUM
    cpu: Optional[int] = Field(None, description="Suggested CPU value in millicores.")
    memory: Optional[int] = Field(None, description="Suggested memory value in bytes.")


class AnalysisResult(BaseModel):
    """Everything a report needs about one analysis run."""

    context: str = ""
    window: timedelta
    interval: timedelta
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metrics_available: bool = True
    deployments: Dict[str, DeploymentAggregate] = Field(default_factory=dict)
    recommendations: Dict[str, List[Recommendation]] = Field(default_factory=dict)
    node_count: int = 0
    pod_count: int = 0
    stats: SamplingStats = Field(default_factory=SamplingStats)

    def sorted_deployments(self) -> List[DeploymentAggregate]:
        return [self.deployments[key] for key in sorted(self.deployments)]
