"""Tests for the in-memory snapshot controller."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.snapshot import SnapshotController
from kubedrain.errors import ClusterConnectionError, NotFoundError


def _pod(name: str, node: str, phase: str = "Running", **labels: str) -> dict[str, Any]:
    return {
        "kind": "Pod",
        "metadata": {"name": name, "namespace": "shop", "labels": labels},
        "spec": {"nodeName": node},
        "status": {"phase": phase},
    }


@pytest.fixture
def snapshot() -> SnapshotController:
    return SnapshotController(
        [
            {"kind": "Node", "metadata": {"name": "n1"}},
            {
                "kind": "PodList",
                "items": [
                    {**_pod("web-1", "n1", app="web"), "kind": None},
                    _pod("web-2", "n2", app="web"),
                    _pod("job-1", "n1", phase="Succeeded", app="job"),
                ],
            },
            {"kind": "ReplicaSet", "metadata": {"name": "rs1", "namespace": "shop"}},
            {"kind": "Deployment", "metadata": {"name": "web", "namespace": "shop"}},
            {"kind": "PodDisruptionBudget", "metadata": {"name": "pdb", "namespace": "shop"}},
            {"kind": "ConfigMap", "metadata": {"name": "ignored"}},
        ]
    )


class TestSnapshotController:
    """Tests for SnapshotController."""

    def test_satisfies_accessor_protocol(self, snapshot: SnapshotController) -> None:
        """Test the snapshot is a ClusterAccessor."""
        assert isinstance(snapshot, ClusterAccessor)

    @pytest.mark.asyncio
    async def test_list_nodes(self, snapshot: SnapshotController) -> None:
        """Test nodes are served."""
        nodes = await snapshot.list_nodes()
        assert [node["metadata"]["name"] for node in nodes] == ["n1"]

    @pytest.mark.asyncio
    async def test_list_pods_field_selector(self, snapshot: SnapshotController) -> None:
        """Test field selectors filter by node and phase."""
        pods = await snapshot.list_pods(
            field_selector="spec.nodeName=n1,status.phase!=Succeeded,status.phase!=Failed"
        )
        assert [pod["metadata"]["name"] for pod in pods] == ["web-1"]

    @pytest.mark.asyncio
    async def test_list_pods_label_selector(self, snapshot: SnapshotController) -> None:
        """Test label selectors filter within a namespace."""
        pods = await snapshot.list_pods(namespace="shop", label_selector="app=web")
        assert [pod["metadata"]["name"] for pod in pods] == ["web-1", "web-2"]
        assert await snapshot.list_pods(namespace="other", label_selector="app=web") == []

    @pytest.mark.asyncio
    async def test_list_pods_empty_selector(self, snapshot: SnapshotController) -> None:
        """Test the empty selector matches every pod in the namespace."""
        assert len(await snapshot.list_pods(namespace="shop", label_selector="")) == 3

    @pytest.mark.asyncio
    async def test_get_objects(self, snapshot: SnapshotController) -> None:
        """Test point reads by name and namespace."""
        assert (await snapshot.get_replica_set("rs1", "shop"))["metadata"]["name"] == "rs1"
        assert (await snapshot.get_deployment("web", "shop"))["metadata"]["name"] == "web"

    @pytest.mark.asyncio
    async def test_get_missing(self, snapshot: SnapshotController) -> None:
        """Test missing objects raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await snapshot.get_replica_set("rs1", "other")
        with pytest.raises(NotFoundError):
            await snapshot.get_deployment("nope", "shop")

    @pytest.mark.asyncio
    async def test_returns_copies(self, snapshot: SnapshotController) -> None:
        """Test callers cannot mutate the snapshot."""
        nodes = await snapshot.list_nodes()
        nodes[0]["metadata"]["name"] = "changed"
        assert (await snapshot.list_nodes())[0]["metadata"]["name"] == "n1"

    @pytest.mark.asyncio
    async def test_budgets(self, snapshot: SnapshotController) -> None:
        """Test budgets are served."""
        assert len(await snapshot.list_pod_disruption_budgets()) == 1

    @pytest.mark.asyncio
    async def test_check_connection(self, snapshot: SnapshotController) -> None:
        """Test a snapshot is always reachable."""
        assert await snapshot.check_connection() is True


class TestSnapshotFromFile:
    """Tests for SnapshotController.from_file."""

    @pytest.mark.asyncio
    async def test_multi_document_yaml(self, tmp_path: Path) -> None:
        """Test several YAML documents are loaded."""
        path = tmp_path / "cluster.yaml"
        path.write_text(
            yaml.safe_dump_all(
                [
                    {"kind": "Node", "metadata": {"name": "n1"}},
                    {"kind": "List", "items": [_pod("p1", "n1")]},
                ]
            ),
            encoding="utf-8",
        )
        snapshot = SnapshotController.from_file(path)
        assert len(await snapshot.list_nodes()) == 1
        assert len(await snapshot.list_pods()) == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test unreadable snapshots raise ClusterConnectionError."""
        with pytest.raises(ClusterConnectionError):
            SnapshotController.from_file(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed snapshots raise ClusterConnectionError."""
        path = tmp_path / "cluster.yaml"
        path.write_text("kind: [unclosed\n", encoding="utf-8")
        with pytest.raises(ClusterConnectionError):
            SnapshotController.from_file(path)
