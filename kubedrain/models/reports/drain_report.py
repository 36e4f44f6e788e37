"""Drain impact report models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from kubedrain.models.core.node_info import NodeRecord
from kubedrain.models.core.pod_info import PodRecord
from kubedrain.models.pdb.pdb_info import BudgetRecord


def _buckets_to_dict(buckets: dict[str, list[PodRecord]]) -> dict[str, list[dict[str, Any]]]:
    return {owner: [pod.to_dict() for pod in pods] for owner, pods in buckets.items()}


class PodClassification(BaseModel):
    """Pods on the drain node grouped by their effective owner."""

    replica_set_pods: dict[str, list[PodRecord]] = Field(default_factory=dict)
    stateful_set_pods: dict[str, list[PodRecord]] = Field(default_factory=dict)
    daemon_set_pods: dict[str, list[PodRecord]] = Field(default_factory=dict)
    isolated_pods: list[PodRecord] = Field(default_factory=list)
    # Owned by a kind that cannot be evicted through a workload.
    unclassified_pods: list[PodRecord] = Field(default_factory=list)

    @property
    def pod_count(self) -> int:
        grouped = (self.replica_set_pods, self.stateful_set_pods, self.daemon_set_pods)
        grouped_count = sum(len(pods) for bucket in grouped for pods in bucket.values())
        return grouped_count + len(self.isolated_pods) + len(self.unclassified_pods)

    @property
    def host_path_pods(self) -> list[PodRecord]:
        """Pods that mount host-local storage, in report order."""
        pods: list[PodRecord] = []
        for bucket in (self.replica_set_pods, self.stateful_set_pods, self.daemon_set_pods):
            for owner_pods in bucket.values():
                pods.extend(pod for pod in owner_pods if pod.has_host_path)
        pods.extend(pod for pod in self.isolated_pods if pod.has_host_path)
        return pods


class DrainReport(BaseModel):
    """Everything the renderer needs to describe the blast radius of a drain."""

    drain_node: str
    classification: PodClassification = Field(default_factory=PodClassification)
    nodes: list[NodeRecord] = Field(default_factory=list)
    budgets: list[BudgetRecord] = Field(default_factory=list)

    @property
    def replica_set_pods(self) -> dict[str, list[PodRecord]]:
        return self.classification.replica_set_pods

    @property
    def stateful_set_pods(self) -> dict[str, list[PodRecord]]:
        return self.classification.stateful_set_pods

    @property
    def daemon_set_pods(self) -> dict[str, list[PodRecord]]:
        return self.classification.daemon_set_pods

    @property
    def isolated_pods(self) -> list[PodRecord]:
        return self.classification.isolated_pods

    @property
    def unclassified_pods(self) -> list[PodRecord]:
        return self.classification.unclassified_pods

    @property
    def blocking_budgets(self) -> list[BudgetRecord]:
        return [budget for budget in self.budgets if budget.blocks_drain]

    def to_dict(self, include_daemon_sets: bool = True) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: dict[str, Any] = {
            "drain_node": self.drain_node,
            "replica_set_pods": _buckets_to_dict(self.replica_set_pods),
            "stateful_set_pods": _buckets_to_dict(self.stateful_set_pods),
        }
        if include_daemon_sets:
            result["daemon_set_pods"] = _buckets_to_dict(self.daemon_set_pods)
        result["isolated_pods"] = [pod.to_dict() for pod in self.isolated_pods]
        result["unclassified_pods"] = [pod.to_dict() for pod in self.unclassified_pods]
        result["nodes"] = [node.to_dict() for node in self.nodes]
        result["pod_disruption_budgets"] = [budget.to_dict() for budget in self.budgets]
        return result
