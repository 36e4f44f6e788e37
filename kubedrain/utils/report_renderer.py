"""Report renderer - prints a DrainReport as rich tables or JSON."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich import box
from rich.console import Console, Group, RenderableType
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from kubedrain.constants.values import NONE_RESOURCE
from kubedrain.models.core.pod_info import PodRecord
from kubedrain.models.pdb.pdb_info import BudgetRecord
from kubedrain.models.reports.drain_report import DrainReport

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class DrainReportRenderer:
    """Render drain reports in the fixed section order.

    Sections: ReplicaSetPods, StatefulSetPods, DaemonSetPods (optional),
    IsolatedPods, UnclassifiedPods (only when present), Node and
    PodDisruptionBudget. An empty section prints ``none``.
    """

    OWNED_POD_COLUMNS = (
        "Owner",
        "OwnerKind",
        "PodName",
        "Namespace",
        "HasHostPath",
        "CPUReq",
        "CPULimit",
        "MemReq",
        "MemLimit",
    )
    ISOLATED_POD_COLUMNS = (
        "PodName",
        "Namespace",
        "HasHostPath",
        "CPUReq",
        "CPULimit",
        "MemReq",
        "MemLimit",
    )
    NODE_COLUMNS = (
        "NodeName",
        "MaxPods",
        "CurrentPods",
        "GPU",
        "Schedulable",
        "CPUAllocatable",
        "MemAllocatable",
        "CPUAllocated",
        "MemAllocated",
    )
    BUDGET_COLUMNS = (
        "Name",
        "Namespace",
        "MinAvailable",
        "MaxUnavailable",
        "AllowedDisruptions",
        "PodsOnDrainNode",
        "BlocksDrain",
    )
    BUDGET_POD_COLUMNS = ("Owner", "OwnerKind", "PodName", "Namespace", "NodeName")

    def __init__(self, report: DrainReport, show_daemonsets: bool = False):
        self.report = report
        self.show_daemonsets = show_daemonsets
        self.renderables: list[RenderableType] = []

    @staticmethod
    def _table(columns: tuple[str, ...]) -> Table:
        table = Table(box=box.SIMPLE, show_edge=False, pad_edge=False)
        for column in columns:
            table.add_column(column, no_wrap=True)
        return table

    def _add_heading(self, title: str, empty: bool = False) -> None:
        heading = Text(f"{title}:", style="bold")
        if empty:
            heading.append(f" {NONE_RESOURCE}", style="dim")
        self.renderables.append(heading)

    @staticmethod
    def _pod_cells(pod: PodRecord) -> list[str]:
        row = pod.to_dict()
        return [
            escape(row["pod_name"]),
            escape(row["namespace"]),
            _flag(row["has_host_path"]),
            row["cpu_request"],
            row["cpu_limit"],
            row["memory_request"],
            row["memory_limit"],
        ]

    def _add_owned_pods(self, title: str, buckets: dict[str, list[PodRecord]]) -> None:
        if not buckets:
            self._add_heading(title, empty=True)
            return
        self._add_heading(title)
        table = self._table(self.OWNED_POD_COLUMNS)
        for pods in buckets.values():
            for pod in pods:
                table.add_row(escape(pod.owner.name), pod.owner.kind.value, *self._pod_cells(pod))
        self.renderables.append(table)

    def _add_pod_list(self, title: str, pods: list[PodRecord]) -> None:
        if not pods:
            self._add_heading(title, empty=True)
            return
        self._add_heading(title)
        table = self._table(self.ISOLATED_POD_COLUMNS)
        for pod in pods:
            table.add_row(*self._pod_cells(pod))
        self.renderables.append(table)

    def _add_nodes(self) -> None:
        if not self.report.nodes:
            self._add_heading("Node", empty=True)
            return
        self._add_heading("Node")
        table = self._table(self.NODE_COLUMNS)
        for node in self.report.nodes:
            row = node.to_dict()
            name = escape(row["node_name"])
            if node.name == self.report.drain_node:
                name = f"[bold]{name}[/bold]"
            table.add_row(
                name,
                str(row["max_pods"]),
                row["current_pods"],
                _flag(row["gpu"]),
                _flag(row["schedulable"]),
                row["cpu_allocatable"],
                row["memory_allocatable"],
                row["cpu_allocated"],
                row["memory_allocated"],
            )
        self.renderables.append(table)

    def _budget_renderable(self, budget: BudgetRecord) -> RenderableType:
        table = self._table(self.BUDGET_COLUMNS)
        blocks = _flag(budget.blocks_drain)
        table.add_row(
            escape(budget.name),
            escape(budget.namespace),
            escape(budget.min_available),
            escape(budget.max_unavailable),
            str(budget.allowed_disruptions),
            str(budget.drain_node_pods),
            f"[red]{blocks}[/red]" if budget.blocks_drain else blocks,
        )
        if not budget.pods:
            return Group(table, Text(f"  Pods: {NONE_RESOURCE}", style="dim"))

        pods_table = self._table(self.BUDGET_POD_COLUMNS)
        for pod in budget.pods:
            pods_table.add_row(
                escape(pod.owner.name),
                pod.owner.kind.value,
                escape(pod.pod_name),
                escape(pod.namespace),
                escape(pod.node_name),
            )
        return Group(table, pods_table)

    def _add_budgets(self) -> None:
        if not self.report.budgets:
            self._add_heading("PodDisruptionBudget", empty=True)
            return
        self._add_heading("PodDisruptionBudget")
        for budget in self.report.budgets:
            self.renderables.append(self._budget_renderable(budget))

    def _add_summary(self) -> None:
        classification = self.report.classification
        blocking = self.report.blocking_budgets
        summary = Text()
        summary.append(f"Draining {self.report.drain_node} evicts ", style="bold")
        summary.append(f"{classification.pod_count} pods")
        if classification.host_path_pods:
            summary.append(f", {len(classification.host_path_pods)} with hostPath volumes")
        if blocking:
            names = ", ".join(f"{budget.namespace}/{budget.name}" for budget in blocking)
            summary.append(f"; blocked by {len(blocking)} budgets ({names})", style="red")
        self.renderables.append(summary)

    def build(self) -> list[RenderableType]:
        """Build the renderables for every section, in report order."""
        self.renderables = []
        self._add_owned_pods("ReplicaSetPods", self.report.replica_set_pods)
        self._add_owned_pods("StatefulSetPods", self.report.stateful_set_pods)
        if self.show_daemonsets:
            self._add_owned_pods("DaemonSetPods", self.report.daemon_set_pods)
        self._add_pod_list("IsolatedPods", self.report.isolated_pods)
        if self.report.unclassified_pods:
            self._add_pod_list("UnclassifiedPods", self.report.unclassified_pods)
        self._add_nodes()
        self._add_budgets()
        self._add_summary()
        return self.renderables

    def render_table(self, console: Console | None = None) -> None:
        """Print the report as tables."""
        target = console or Console()
        for renderable in self.build():
            target.print(renderable)

    def to_dict(self) -> dict[str, Any]:
        return self.report.to_dict(include_daemon_sets=self.show_daemonsets)

    def generate_json_report(self) -> str:
        """Generate the JSON rendering of the report."""
        return json.dumps(self.to_dict(), indent=2)
