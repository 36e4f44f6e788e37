"""Node capacity models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from kubedrain.constants.values import NONE_RESOURCE
from kubedrain.models.core.pod_info import render_quantity
from kubedrain.utils.resource_parser import Quantity


class NodeRecord(BaseModel):
    """Capacity and utilization of one node.

    ``None`` marks values that could not be determined (malformed pod CIDR,
    failed pod listing). They are kept apart from real zeros and only turned
    into the legacy sentinels by ``to_dict``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    max_pods: int | None = None
    current_pods: int | None = None
    gpu: bool = False
    schedulable: bool = True
    cpu_allocatable: Quantity | None = None
    memory_allocatable: Quantity | None = None
    cpu_allocated: Quantity | None = None
    memory_allocated: Quantity | None = None
    kubelet_version: str = ""
    kube_proxy_version: str = ""
    kernel_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "node_name": self.name,
            # An unknown pod ceiling has always been reported as 0.
            "max_pods": self.max_pods if self.max_pods is not None else 0,
            "current_pods": (
                str(self.current_pods) if self.current_pods is not None else NONE_RESOURCE
            ),
            "gpu": self.gpu,
            "schedulable": self.schedulable,
            "cpu_allocatable": render_quantity(self.cpu_allocatable),
            "memory_allocatable": render_quantity(self.memory_allocatable),
            "cpu_allocated": render_quantity(self.cpu_allocated),
            "memory_allocated": render_quantity(self.memory_allocated),
            "kubelet_version": self.kubelet_version,
            "kube_proxy_version": self.kube_proxy_version,
            "kernel_version": self.kernel_version,
        }
