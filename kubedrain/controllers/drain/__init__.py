"""Drain impact resolution: ownership, capacity, classification and budgets."""

from kubedrain.controllers.drain.controller import DrainController
from kubedrain.controllers.drain.node_capacity import (
    NodeCapacityCalculator,
    max_pods_from_cidr,
    pod_cidr_capacity,
)
from kubedrain.controllers.drain.ownership import OwnershipResolver
from kubedrain.controllers.drain.pdb_evaluator import DisruptionBudgetEvaluator
from kubedrain.controllers.drain.pod_classifier import PodClassifier

__all__ = [
    "DisruptionBudgetEvaluator",
    "DrainController",
    "NodeCapacityCalculator",
    "OwnershipResolver",
    "PodClassifier",
    "max_pods_from_cidr",
    "pod_cidr_capacity",
]
