"""Disruption budget evaluator - pods selected by each PodDisruptionBudget."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from kubedrain.constants.values import ZERO_AVAILABLE
from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.parsers import PodParser
from kubedrain.controllers.drain.ownership import OwnershipResolver
from kubedrain.errors import DrainDetectError, SelectorError
from kubedrain.models.pdb.pdb_info import BudgetPodRecord, BudgetRecord
from kubedrain.utils.selectors import build_label_selector

logger = logging.getLogger(__name__)


def int_or_string(value: Any) -> str:
    """Render an IntOrString budget field literally; unset renders as "0"."""
    if value is None or isinstance(value, bool):
        return ZERO_AVAILABLE
    return str(value)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class DisruptionBudgetEvaluator:
    """Evaluates PodDisruptionBudgets against the pods they select."""

    def __init__(
        self,
        accessor: ClusterAccessor,
        resolver: OwnershipResolver | None = None,
    ) -> None:
        self._accessor = accessor
        self._resolver = resolver or OwnershipResolver(accessor)
        self._parser = PodParser()

    async def list_budgets(self) -> list[dict[str, Any]]:
        """List every budget in the cluster. Failures propagate."""
        return await self._accessor.list_pod_disruption_budgets()

    async def selected_pods(self, budget: dict[str, Any]) -> list[dict[str, Any]]:
        """Pods matched by a budget's selector; empty when it cannot be evaluated."""
        metadata = budget.get("metadata", {})
        name = metadata.get("name", "")
        namespace = metadata.get("namespace", "") or "default"
        spec = budget.get("spec") or {}

        try:
            selector = build_label_selector(spec.get("selector"))
        except SelectorError as exc:
            logger.warning("Skipping selector of budget %s/%s: %s", namespace, name, exc)
            return []
        if selector is None:
            return []

        try:
            return await self._accessor.list_pods(namespace=namespace, label_selector=selector)
        except DrainDetectError as exc:
            logger.warning("Failed to list pods for budget %s/%s: %s", namespace, name, exc)
            return []

    async def evaluate_budget(
        self,
        budget: dict[str, Any],
        drain_node: str | None = None,
    ) -> BudgetRecord:
        """Build the BudgetRecord for one budget.

        Args:
            budget: Raw PodDisruptionBudget dictionary from API
            drain_node: Node being drained; enables the drain impact fields

        Returns:
            BudgetRecord object.
        """
        metadata = budget.get("metadata", {})
        spec = budget.get("spec") or {}
        status = budget.get("status") or {}

        pods = await self.selected_pods(budget)
        owners = await self._resolver.resolve_many(pods)
        pod_records = [
            BudgetPodRecord(
                pod_name=self._parser.pod_name(pod),
                namespace=self._parser.pod_namespace(pod),
                node_name=self._parser.node_name(pod),
                owner=owner,
            )
            for pod, owner in zip(pods, owners)
        ]

        allowed = _as_int(status.get("disruptionsAllowed"))
        drain_node_pods = 0
        if drain_node:
            drain_node_pods = sum(1 for pod in pod_records if pod.node_name == drain_node)

        return BudgetRecord(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", "") or "default",
            min_available=int_or_string(spec.get("minAvailable")),
            max_unavailable=int_or_string(spec.get("maxUnavailable")),
            allowed_disruptions=allowed,
            pods=pod_records,
            drain_node_pods=drain_node_pods,
            blocks_drain=drain_node_pods > allowed,
        )

    async def evaluate(
        self,
        budgets: list[dict[str, Any]],
        drain_node: str | None = None,
    ) -> list[BudgetRecord]:
        """Evaluate all budgets concurrently, in input order."""
        return list(
            await asyncio.gather(
                *(self.evaluate_budget(budget, drain_node) for budget in budgets)
            )
        )
