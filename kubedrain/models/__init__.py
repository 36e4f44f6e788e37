"""Data models for kubedrain."""

from kubedrain.models.core import NodeRecord, PodRecord, WorkloadRef
from kubedrain.models.pdb import BudgetPodRecord, BudgetRecord
from kubedrain.models.reports import DrainReport, PodClassification

__all__ = [
    "BudgetPodRecord",
    "BudgetRecord",
    "DrainReport",
    "NodeRecord",
    "PodClassification",
    "PodRecord",
    "WorkloadRef",
]
