"""PodDisruptionBudget models."""

from kubedrain.models.pdb.pdb_info import BudgetPodRecord, BudgetRecord

__all__ = ["BudgetPodRecord", "BudgetRecord"]
