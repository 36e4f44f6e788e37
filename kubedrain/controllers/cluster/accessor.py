"""Read-only cluster access interface used by the drain controllers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ClusterAccessor(Protocol):
    """Read access to nodes, pods, workloads and disruption budgets.

    Every method may raise ``ClusterConnectionError`` or
    ``ClusterQueryError``; the point reads raise ``NotFoundError`` when the
    object does not exist. Objects are returned as raw API dictionaries.
    """

    async def check_connection(self) -> bool:
        """Return whether the data source answers a cheap read."""
        ...

    async def list_nodes(self) -> list[dict[str, Any]]:
        ...

    async def list_pods(
        self,
        namespace: str | None = None,
        field_selector: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """List pods in one namespace (or all when None), optionally filtered."""
        ...

    async def get_replica_set(self, name: str, namespace: str) -> dict[str, Any]:
        ...

    async def get_deployment(self, name: str, namespace: str) -> dict[str, Any]:
        ...

    async def list_pod_disruption_budgets(self) -> list[dict[str, Any]]:
        ...
