"""Pod and workload ownership models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kubedrain.constants.enums import WorkloadKind
from kubedrain.constants.values import NONE_RESOURCE
from kubedrain.utils.resource_parser import Quantity


def render_quantity(quantity: Quantity | None) -> str:
    """Render a quantity, or the "none" sentinel when it is unknown."""
    return NONE_RESOURCE if quantity is None else str(quantity)


class WorkloadRef(BaseModel):
    """Effective owner of a pod after ReplicaSet -> Deployment resolution."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    kind: WorkloadKind = WorkloadKind.NONE

    @classmethod
    def none(cls) -> WorkloadRef:
        """Owner for pods without a usable owner reference."""
        return cls()

    @property
    def is_none(self) -> bool:
        return self.kind == WorkloadKind.NONE


class PodRecord(BaseModel):
    """One pod observed on the drain node."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    namespace: str
    node_name: str = ""
    owner: WorkloadRef = Field(default_factory=WorkloadRef)
    has_host_path: bool = False
    # None means a container carried a malformed quantity.
    cpu_request: Quantity | None = Field(default_factory=Quantity.zero)
    cpu_limit: Quantity | None = Field(default_factory=Quantity.zero)
    memory_request: Quantity | None = Field(default_factory=Quantity.zero)
    memory_limit: Quantity | None = Field(default_factory=Quantity.zero)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "owner": self.owner.name,
            "owner_kind": self.owner.kind.value,
            "pod_name": self.name,
            "namespace": self.namespace,
            "node_name": self.node_name,
            "has_host_path": self.has_host_path,
            "cpu_request": render_quantity(self.cpu_request),
            "cpu_limit": render_quantity(self.cpu_limit),
            "memory_request": render_quantity(self.memory_request),
            "memory_limit": render_quantity(self.memory_limit),
        }
