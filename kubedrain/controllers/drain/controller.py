"""Drain controller - assembles the drain impact report for one node."""

from __future__ import annotations

import asyncio
import logging

from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.drain.node_capacity import NodeCapacityCalculator
from kubedrain.controllers.drain.ownership import OwnershipResolver
from kubedrain.controllers.drain.pdb_evaluator import DisruptionBudgetEvaluator
from kubedrain.controllers.drain.pod_classifier import PodClassifier
from kubedrain.errors import DrainDetectError
from kubedrain.models.core.node_info import NodeRecord
from kubedrain.models.pdb.pdb_info import BudgetRecord
from kubedrain.models.reports.drain_report import DrainReport

logger = logging.getLogger(__name__)


class DrainController:
    """Answers "what breaks if this node is drained" against one accessor.

    The pod classification, node capacity and disruption budget sections are
    computed concurrently. Listing the nodes, the drain node's pods or the
    budgets is mandatory: if any of them fails the other sections are
    cancelled and the error is raised, so a partial report is never returned.
    Every other lookup degrades to an unknown value instead.
    """

    def __init__(self, accessor: ClusterAccessor) -> None:
        self._accessor = accessor

    async def _evaluate_nodes(self, calculator: NodeCapacityCalculator) -> list[NodeRecord]:
        nodes = await self._accessor.list_nodes()
        logger.info("Evaluating capacity of %d nodes", len(nodes))
        return await calculator.evaluate(nodes)

    async def _evaluate_budgets(
        self,
        evaluator: DisruptionBudgetEvaluator,
        drain_node: str,
    ) -> list[BudgetRecord]:
        budgets = await evaluator.list_budgets()
        logger.info("Evaluating %d pod disruption budgets", len(budgets))
        return await evaluator.evaluate(budgets, drain_node)

    async def detect(self, drain_node: str) -> DrainReport:
        """Build the drain impact report for ``drain_node``.

        Raises:
            ClusterConnectionError: The cluster could not be reached.
            ClusterQueryError: A mandatory query failed.
        """
        resolver = OwnershipResolver(self._accessor)
        classifier = PodClassifier(self._accessor, resolver)
        calculator = NodeCapacityCalculator(self._accessor)
        evaluator = DisruptionBudgetEvaluator(self._accessor, resolver)

        tasks = [
            asyncio.create_task(classifier.classify(drain_node)),
            asyncio.create_task(self._evaluate_nodes(calculator)),
            asyncio.create_task(self._evaluate_budgets(evaluator, drain_node)),
        ]
        try:
            classification, nodes, budgets = await asyncio.gather(*tasks)
        except DrainDetectError as exc:
            logger.error("Drain detection for node %s failed: %s", drain_node, exc)
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if drain_node not in {node.name for node in nodes}:
            logger.warning("Node %s is not in the cluster node list", drain_node)

        return DrainReport(
            drain_node=drain_node,
            classification=classification,
            nodes=nodes,
            budgets=budgets,
        )
