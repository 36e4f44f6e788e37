"""PodDisruptionBudget models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kubedrain.constants.values import ZERO_AVAILABLE
from kubedrain.models.core.pod_info import WorkloadRef


class BudgetPodRecord(BaseModel):
    """Pod selected by a disruption budget, with its resolved owner."""

    model_config = ConfigDict(frozen=True)

    pod_name: str
    namespace: str
    node_name: str = ""
    owner: WorkloadRef = Field(default_factory=WorkloadRef)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "owner": self.owner.name,
            "owner_kind": self.owner.kind.value,
            "pod_name": self.pod_name,
            "namespace": self.namespace,
            "node_name": self.node_name,
        }


class BudgetRecord(BaseModel):
    """One PodDisruptionBudget and the pods its selector matches."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    min_available: str = ZERO_AVAILABLE
    max_unavailable: str = ZERO_AVAILABLE
    allowed_disruptions: int = 0
    pods: list[BudgetPodRecord] = Field(default_factory=list)
    drain_node_pods: int = 0
    blocks_drain: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "namespace": self.namespace,
            "min_available": self.min_available,
            "max_unavailable": self.max_unavailable,
            "allowed_disruptions": self.allowed_disruptions,
            "drain_node_pods": self.drain_node_pods,
            "blocks_drain": self.blocks_drain,
            "pods": [pod.to_dict() for pod in self.pods],
        }
