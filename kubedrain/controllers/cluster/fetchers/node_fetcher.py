"""Node fetcher for cluster controller - fetches node data from Kubernetes cluster."""

from __future__ import annotations

from typing import Any

from kubedrain.controllers.cluster.fetchers.decode import decode_items


class NodeFetcher:
    """Fetches node data from Kubernetes cluster."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    async def fetch_nodes_raw(self) -> list[dict[str, Any]]:
        """Fetch raw node objects."""
        output = await self._run_kubectl(("get", "nodes", "-o", "json"))
        return decode_items(output, "nodes")
