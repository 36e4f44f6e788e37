"""Tests for the kubectl-backed cluster controller."""

from __future__ import annotations

import json
import subprocess
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.controller import ClusterController
from kubedrain.errors import (
    ClusterConnectionError,
    ClusterQueryError,
    NotFoundError,
)


def _completed(stdout: str = "", stderr: str = "", returncode: int = 0) -> SimpleNamespace:
    return SimpleNamespace(stdout=stdout, stderr=stderr, returncode=returncode)


class TestClusterController:
    """Tests for ClusterController class."""

    @pytest.fixture
    def controller(self) -> ClusterController:
        """Create ClusterController instance."""
        return ClusterController(context="my-cluster", kubeconfig="/tmp/kubeconfig")

    def test_controller_init(self, controller: ClusterController) -> None:
        """Test ClusterController initialization."""
        assert controller.context == "my-cluster"
        assert controller.kubeconfig == "/tmp/kubeconfig"
        assert controller.request_timeout == "10s"

    def test_satisfies_accessor_protocol(self, controller: ClusterController) -> None:
        """Test the controller can be used wherever an accessor is expected."""
        assert isinstance(controller, ClusterAccessor)

    def test_build_command(self, controller: ClusterController) -> None:
        """Test global flags and the request timeout are added."""
        assert controller._build_command(("get", "nodes", "-o", "json")) == [
            "kubectl",
            "--kubeconfig",
            "/tmp/kubeconfig",
            "--context",
            "my-cluster",
            "get",
            "nodes",
            "-o",
            "json",
            "--request-timeout=10s",
        ]

    def test_build_command_without_context(self) -> None:
        """Test no context or kubeconfig flags by default."""
        controller = ClusterController()
        assert controller._build_command(("version",)) == [
            "kubectl",
            "version",
            "--request-timeout=10s",
        ]

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("10s", 10), ("2m", 120), ("1h", 3600), ("30", 30), ("0", None), ("abc", None)],
    )
    def test_request_timeout_seconds(self, value: str, expected: int | None) -> None:
        """Test request timeout parsing."""
        assert ClusterController._request_timeout_seconds(value) == expected

    def test_process_timeout(self, controller: ClusterController) -> None:
        """Test the process timeout sits above the request timeout."""
        assert controller._process_timeout() == 15

    @pytest.mark.parametrize(
        ("stderr", "error_type"),
        [
            (
                'Error from server (NotFound): replicasets.apps "rs1" not found',
                NotFoundError,
            ),
            (
                "Unable to connect to the server: dial tcp 10.0.0.1:443: i/o timeout",
                ClusterConnectionError,
            ),
            ("error: You must be logged in to the server (Unauthorized)", ClusterConnectionError),
            ("error: context was not found for specified context: nope", ClusterConnectionError),
            ('Error from server (Forbidden): pods is forbidden', ClusterQueryError),
        ],
    )
    def test_classify_error(self, stderr: str, error_type: type[Exception]) -> None:
        """Test kubectl stderr maps to the error taxonomy."""
        error = ClusterController._classify_error(stderr)
        assert type(error) is error_type

    def test_summarize_error(self) -> None:
        """Test the error line is extracted and trimmed."""
        stderr = "W0101 warning line\nerror: the server doesn't have a resource type\n"
        assert (
            ClusterController._summarize_error(stderr)
            == "the server doesn't have a resource type"
        )
        assert ClusterController._summarize_error("") == "kubectl command failed"

    def test_run_kubectl_sync_success(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test stdout is returned on success."""
        run = MagicMock(return_value=_completed(stdout='{"items": []}'))
        monkeypatch.setattr(subprocess, "run", run)

        assert controller._run_kubectl_sync(("get", "nodes")) == '{"items": []}'
        assert run.call_args.kwargs["timeout"] == 15

    def test_run_kubectl_sync_failure(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test non-zero exits raise a classified error."""
        monkeypatch.setattr(
            subprocess,
            "run",
            MagicMock(return_value=_completed(stderr="Error from server (NotFound): x", returncode=1)),
        )
        with pytest.raises(NotFoundError):
            controller._run_kubectl_sync(("get", "rs", "x"))

    def test_run_kubectl_sync_missing_binary(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a missing kubectl binary is a connection error."""
        monkeypatch.setattr(subprocess, "run", MagicMock(side_effect=FileNotFoundError()))
        with pytest.raises(ClusterConnectionError, match="kubectl not found"):
            controller._run_kubectl_sync(("get", "nodes"))

    def test_run_kubectl_sync_timeout(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a process timeout is a connection error."""
        monkeypatch.setattr(
            subprocess,
            "run",
            MagicMock(side_effect=subprocess.TimeoutExpired(cmd="kubectl", timeout=15)),
        )
        with pytest.raises(ClusterConnectionError, match="timed out"):
            controller._run_kubectl_sync(("get", "nodes"))

    @pytest.mark.asyncio
    async def test_list_nodes(self, controller: ClusterController) -> None:
        """Test list_nodes decodes kubectl output."""
        payload = {"items": [{"metadata": {"name": "n1"}}]}
        run = AsyncMock(return_value=json.dumps(payload))
        controller._node_fetcher._run_kubectl = run

        nodes = await controller.list_nodes()

        assert nodes == payload["items"]
        run.assert_awaited_once_with(("get", "nodes", "-o", "json"))

    @pytest.mark.asyncio
    async def test_run_kubectl_uses_thread(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test the async runner delegates to the sync runner."""
        calls: list[tuple[str, ...]] = []

        def fake_sync(args: tuple[str, ...]) -> str:
            calls.append(args)
            return "ok"

        monkeypatch.setattr(controller, "_run_kubectl_sync", fake_sync)
        assert await controller._run_kubectl(("version",)) == "ok"
        assert calls == [("version",)]

    @pytest.mark.asyncio
    async def test_check_connection(
        self, controller: ClusterController, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test check_connection reports failures as False."""

        async def failing(args: tuple[str, ...]) -> Any:
            raise ClusterConnectionError("Unable to connect")

        monkeypatch.setattr(controller, "_run_kubectl", failing)
        assert await controller.check_connection() is False

        monkeypatch.setattr(controller, "_run_kubectl", AsyncMock(return_value="{}"))
        assert await controller.check_connection() is True
