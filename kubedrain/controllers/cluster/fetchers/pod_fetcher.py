"""Pod fetcher for cluster controller - fetches pod data from Kubernetes cluster."""

from __future__ import annotations

from typing import Any

from kubedrain.controllers.cluster.fetchers.decode import decode_items


class PodFetcher:
    """Fetches pod data from Kubernetes cluster."""

    def __init__(self, run_kubectl_func: Any) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def build_pods_args(
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
        label_selector: str | None = None,
    ) -> tuple[str, ...]:
        """Build pod list arguments for one namespace or all namespaces."""
        args: list[str] = ["get", "pods"]
        if namespace:
            args.extend(["-n", namespace])
        else:
            args.append("--all-namespaces")
        if field_selector:
            args.append(f"--field-selector={field_selector}")
        if label_selector:
            args.append(f"--selector={label_selector}")
        args.extend(["-o", "json"])
        return tuple(args)

    async def fetch_pods(
        self,
        *,
        namespace: str | None = None,
        field_selector: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch raw pods, filtered server-side by the given selectors."""
        output = await self._run_kubectl(
            self.build_pods_args(
                namespace=namespace,
                field_selector=field_selector,
                label_selector=label_selector,
            )
        )
        return decode_items(output, "pods")
