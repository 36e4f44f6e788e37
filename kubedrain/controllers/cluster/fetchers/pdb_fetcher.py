"""PDB fetcher for cluster controller - fetches disruption budgets."""

from __future__ import annotations

from typing import Any

from kubedrain.controllers.cluster.fetchers.decode import decode_items


class PDBFetcher:
    """Fetches PodDisruptionBudgets across all namespaces."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    async def fetch_pdbs(self) -> list[dict[str, Any]]:
        """Fetch raw PodDisruptionBudget objects."""
        output = await self._run_kubectl(
            ("get", "poddisruptionbudgets", "--all-namespaces", "-o", "json")
        )
        return decode_items(output, "poddisruptionbudgets")
