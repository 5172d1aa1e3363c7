# src/kubeperf/models/pod.py

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OwnerReference(BaseModel):
    """A back-pointer from a Kubernetes object to the object that manages it."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Kind of the owner, e.g. 'ReplicaSet'.")
    name: str = Field(..., description="Name of the owner object.")


class ContainerResources(BaseModel):
    """
    Resource requests and limits declared for a container.

    Attributes:
        name: Container name
        cpu_request: CPU request in millicores (0 when unset)
        memory_request: Memory request in bytes (0 when unset)
        cpu_limit: CPU limit in millicores (0 when unset)
        memory_limit: Memory limit in bytes (0 when unset)
    """

    name: str
    cpu_request: int = 0
    memory_request: int = 0
    cpu_limit: int = 0
    memory_limit: int = 0

    @property
    def has_limits(self) -> bool:
        return self.cpu_limit > 0 and self.memory_limit > 0


class PodRecord(BaseModel):
    """A pod as listed from the Kubernetes API, reduced to what the analysis needs."""

    name: str = Field(..., description="The name of the Kubernetes pod.")
    namespace: str = Field(..., description="The namespace the pod belongs to.")
    owner_references: List[OwnerReference] = Field(default_factory=list)
    containers: List[ContainerResources] = Field(default_factory=list)

    @property
    def has_limits(self) -> bool:
        """
        True only if every container declares both a CPU and a memory limit.

        A pod without containers is considered to have limits.
        """
        return all(container.has_limits for container in self.containers)
