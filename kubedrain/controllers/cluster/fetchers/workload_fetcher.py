"""Workload fetcher for cluster controller - point reads of pod owners."""

from __future__ import annotations

from typing import Any

from kubedrain.controllers.cluster.fetchers.decode import decode_object


class WorkloadFetcher:
    """Fetches ReplicaSets and Deployments by name."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    async def _fetch_object(self, resource: str, name: str, namespace: str) -> dict[str, Any]:
        output = await self._run_kubectl(
            ("get", resource, name, "-n", namespace, "-o", "json")
        )
        return decode_object(output, f"{resource} {namespace}/{name}")

    async def fetch_replica_set(self, name: str, namespace: str) -> dict[str, Any]:
        return await self._fetch_object("replicasets.apps", name, namespace)

    async def fetch_deployment(self, name: str, namespace: str) -> dict[str, Any]:
        return await self._fetch_object("deployments.apps", name, namespace)
