"""Core cluster models."""

from kubedrain.models.core.node_info import NodeRecord
from kubedrain.models.core.pod_info import PodRecord, WorkloadRef, render_quantity

__all__ = ["NodeRecord", "PodRecord", "WorkloadRef", "render_quantity"]
