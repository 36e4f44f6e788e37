"""Cluster controller for kubectl-backed data access.

This module implements the ``ClusterAccessor`` interface on top of kubectl,
delegating to specialized fetchers for node, pod, workload and PDB reads.
"""

from __future__ import annotations

import asyncio
import logging
import math
import subprocess
from contextlib import suppress
from typing import Any

from kubedrain.constants.defaults import MAX_CONCURRENT_DEFAULT
from kubedrain.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
    KUBECTL_PROCESS_TIMEOUT_SLACK,
)
from kubedrain.controllers.base import BaseController
from kubedrain.controllers.cluster.fetchers import (
    NodeFetcher,
    PDBFetcher,
    PodFetcher,
    WorkloadFetcher,
)
from kubedrain.errors import (
    ClusterConnectionError,
    ClusterQueryError,
    DrainDetectError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class ClusterController(BaseController):
    """Read-only kubectl access to nodes, pods, workloads and PDBs.

    Every kubectl call carries ``--request-timeout`` and a process timeout,
    and at most ``max_concurrent`` calls run at once.
    """

    _CONNECTION_ERROR_TOKENS = (
        "unable to connect to the server",
        "you must be logged in",
        "context deadline exceeded",
        "timed out",
        "i/o timeout",
        "certificate",
        "no such host",
        "connection refused",
        "unauthorized",
        "no configuration has been provided",
        "context was not found",
    )
    _NOT_FOUND_TOKENS = ("(notfound)",)

    def __init__(
        self,
        context: str | None = None,
        kubeconfig: str | None = None,
        request_timeout: str = CLUSTER_REQUEST_TIMEOUT,
        max_concurrent: int = MAX_CONCURRENT_DEFAULT,
    ) -> None:
        """Initialize the cluster controller.

        Args:
            context: Optional Kubernetes context name.
            kubeconfig: Optional kubeconfig path.
            request_timeout: kubectl ``--request-timeout`` value.
            max_concurrent: Maximum number of concurrent kubectl processes.
        """
        super().__init__()
        self.context = context
        self.kubeconfig = kubeconfig
        self.request_timeout = request_timeout
        self._semaphore = asyncio.Semaphore(max(1, max_concurrent))

        # Initialize fetchers
        self._node_fetcher = NodeFetcher(self._run_kubectl)
        self._pod_fetcher = PodFetcher(self._run_kubectl)
        self._workload_fetcher = WorkloadFetcher(self._run_kubectl)
        self._pdb_fetcher = PDBFetcher(self._run_kubectl)

    @staticmethod
    def _request_timeout_seconds(value: str) -> int | None:
        """Parse a kubectl --request-timeout value into seconds."""
        text = value.strip().lower()
        multiplier = 1
        if text.endswith("h"):
            multiplier, text = 3600, text[:-1]
        elif text.endswith("m"):
            multiplier, text = 60, text[:-1]
        elif text.endswith("s"):
            text = text[:-1]
        if not text:
            return None
        with suppress(ValueError):
            seconds = float(text) * multiplier
            if seconds > 0:
                return max(1, math.ceil(seconds))
        return None

    def _process_timeout(self) -> int:
        """Process timeout, kept just above the API request timeout."""
        request_seconds = self._request_timeout_seconds(self.request_timeout)
        if request_seconds is None:
            return KUBECTL_COMMAND_TIMEOUT
        return request_seconds + KUBECTL_PROCESS_TIMEOUT_SLACK

    def _build_command(self, args: tuple[str, ...]) -> list[str]:
        cmd = ["kubectl"]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(args)
        cmd.append(f"--request-timeout={self.request_timeout}")
        return cmd

    @staticmethod
    def _summarize_error(stderr: str) -> str:
        """Extract a concise, user-facing error line from kubectl output."""
        lines = [line.strip() for line in stderr.splitlines() if line.strip()]
        if not lines:
            return "kubectl command failed"
        selected_line = lines[-1]
        for line in reversed(lines):
            if line.lower().startswith("error"):
                selected_line = line
                break
        cleaned = selected_line.removeprefix("error:").strip()
        if len(cleaned) > 160:
            return f"{cleaned[:157].rstrip()}..."
        return cleaned or "kubectl command failed"

    @classmethod
    def _classify_error(cls, stderr: str) -> DrainDetectError:
        """Map kubectl stderr onto the drain detection error taxonomy."""
        lower = stderr.lower()
        message = cls._summarize_error(stderr)
        if any(token in lower for token in cls._NOT_FOUND_TOKENS):
            return NotFoundError(message)
        if any(token in lower for token in cls._CONNECTION_ERROR_TOKENS):
            return ClusterConnectionError(message)
        return ClusterQueryError(message)

    def _run_kubectl_sync(self, args: tuple[str, ...]) -> str:
        """Run a kubectl command synchronously (thread-safe wrapper target)."""
        cmd = self._build_command(args)
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self._process_timeout()
            )
        except FileNotFoundError as exc:
            raise ClusterConnectionError("kubectl not found in PATH") from exc
        except OSError as exc:
            raise ClusterConnectionError(f"Failed to run kubectl: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ClusterConnectionError(
                f"kubectl {' '.join(args[:2])} timed out after {exc.timeout}s"
            ) from exc
        if result.returncode != 0:
            raise self._classify_error(result.stderr or "")
        return result.stdout

    async def _run_kubectl(self, args: tuple[str, ...]) -> str:
        async with self._semaphore:
            logger.debug("Running kubectl %s", " ".join(args))
            return await asyncio.to_thread(self._run_kubectl_sync, args)

    async def check_connection(self) -> bool:
        """Check if the cluster answers a cheap read."""
        try:
            await self._run_kubectl(("version", "-o", "json"))
        except DrainDetectError as exc:
            logger.warning("Cluster connection check failed: %s", exc)
            return False
        return True

    async def list_nodes(self) -> list[dict[str, Any]]:
        return await self._node_fetcher.fetch_nodes_raw()

    async def list_pods(
        self,
        namespace: str | None = None,
        field_selector: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        return await self._pod_fetcher.fetch_pods(
            namespace=namespace,
            field_selector=field_selector,
            label_selector=label_selector,
        )

    async def get_replica_set(self, name: str, namespace: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_replica_set(name, namespace)

    async def get_deployment(self, name: str, namespace: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_deployment(name, namespace)

    async def list_pod_disruption_budgets(self) -> list[dict[str, Any]]:
        return await self._pdb_fetcher.fetch_pdbs()
