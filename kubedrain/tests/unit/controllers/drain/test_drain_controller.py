"""End-to-end tests for the drain controller over in-memory snapshots."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from kubedrain.constants.enums import WorkloadKind
from kubedrain.controllers.cluster.snapshot import SnapshotController
from kubedrain.controllers.drain.controller import DrainController
from kubedrain.errors import ClusterConnectionError, ClusterQueryError


def _objects() -> list[dict[str, Any]]:
    return [
        {
            "kind": "Node",
            "metadata": {"name": "n1"},
            "spec": {"podCIDR": "10.0.0.0/26"},
            "status": {"allocatable": {"cpu": "2", "memory": "4Gi"}},
        },
        {
            "kind": "ReplicaSet",
            "metadata": {"name": "rs1", "namespace": "default"},
        },
        {
            "kind": "Pod",
            "metadata": {
                "name": "p1",
                "namespace": "default",
                "labels": {"app": "web"},
                "ownerReferences": [{"kind": "ReplicaSet", "name": "rs1"}],
            },
            "spec": {
                "nodeName": "n1",
                "containers": [
                    {"resources": {"requests": {"cpu": "100m", "memory": "64Mi"}}}
                ],
            },
            "status": {"phase": "Running"},
        },
        {
            "kind": "PodDisruptionBudget",
            "metadata": {"name": "idle", "namespace": "default"},
            "spec": {"selector": {"matchLabels": {"app": "nothing"}}},
        },
        {
            "kind": "PodDisruptionBudget",
            "metadata": {"name": "web-pdb", "namespace": "default"},
            "spec": {"selector": {"matchLabels": {"app": "web"}}, "minAvailable": 1},
            "status": {"disruptionsAllowed": 0},
        },
    ]


class TestDrainController:
    """Tests for DrainController.detect."""

    @pytest.mark.asyncio
    async def test_single_replica_set_pod(self) -> None:
        """Test the report for one ReplicaSet pod on a /26 node."""
        report = await DrainController(SnapshotController(_objects())).detect("n1")

        rows = report.replica_set_pods["default/rs1"]
        assert len(rows) == 1
        row = rows[0].to_dict()
        assert row["owner"] == "rs1"
        assert row["owner_kind"] == WorkloadKind.REPLICA_SET.value
        assert row["pod_name"] == "p1"
        assert row["cpu_request"] == "100m"
        assert row["memory_request"] == "64Mi"

        node = report.nodes[0]
        assert node.max_pods == 62
        assert node.current_pods == 1
        assert str(node.cpu_allocated) == "100m"
        assert str(node.memory_allocated) == "64Mi"

    @pytest.mark.asyncio
    async def test_budgets(self) -> None:
        """Test budget records and drain blocking."""
        report = await DrainController(SnapshotController(_objects())).detect("n1")

        idle, web = report.budgets
        assert idle.min_available == "0"
        assert idle.pods == []
        assert [pod.pod_name for pod in web.pods] == ["p1"]
        assert web.blocks_drain is True
        assert report.blocking_budgets == [web]

    @pytest.mark.asyncio
    async def test_idempotent(self) -> None:
        """Test two runs over an unchanged snapshot give identical reports."""
        controller = DrainController(SnapshotController(_objects()))
        first = await controller.detect("n1")
        second = await controller.detect("n1")
        assert first.to_dict() == second.to_dict()

    @pytest.mark.asyncio
    async def test_unknown_node(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test a node missing from the node list still yields a report."""
        report = await DrainController(SnapshotController(_objects())).detect("ghost")
        assert report.classification.pod_count == 0
        assert "ghost is not in the cluster node list" in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failing_method", ["list_nodes", "list_pod_disruption_budgets", "list_pods"]
    )
    async def test_mandatory_query_failure(self, failing_method: str) -> None:
        """Test failures of mandatory queries abort the run."""
        snapshot = SnapshotController(_objects())
        accessor = AsyncMock(wraps=snapshot)
        getattr(accessor, failing_method).side_effect = ClusterConnectionError(
            "Unable to connect"
        )

        with pytest.raises(ClusterConnectionError):
            await DrainController(accessor).detect("n1")

    @pytest.mark.asyncio
    async def test_failure_cancels_other_sections(self) -> None:
        """Test pending sections are cancelled when a mandatory query fails."""
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_budgets() -> list[dict[str, Any]]:
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return []

        async def failing_nodes() -> list[dict[str, Any]]:
            await started.wait()
            raise ClusterQueryError("forbidden")

        accessor = AsyncMock(wraps=SnapshotController(_objects()))
        accessor.list_pod_disruption_budgets.side_effect = slow_budgets
        accessor.list_nodes.side_effect = failing_nodes

        with pytest.raises(ClusterQueryError):
            await DrainController(accessor).detect("n1")
        assert cancelled.is_set()
