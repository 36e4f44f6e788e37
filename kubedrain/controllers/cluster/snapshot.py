"""In-memory cluster snapshot controller.

Serves a fixed set of API objects, for example the output of::

    kubectl get nodes,pods,replicasets,deployments,pdb -A -o yaml

Selectors are evaluated locally the way the API server would evaluate them.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from kubedrain.controllers.base import BaseController
from kubedrain.errors import ClusterConnectionError, NotFoundError
from kubedrain.utils.selectors import match_fields, match_labels

logger = logging.getLogger(__name__)


def _metadata(obj: dict[str, Any]) -> dict[str, Any]:
    metadata = obj.get("metadata")
    return metadata if isinstance(metadata, dict) else {}


class SnapshotController(BaseController):
    """Read-only accessor over an in-memory list of API objects."""

    _KIND_BUCKETS = {
        "Node": "nodes",
        "Pod": "pods",
        "ReplicaSet": "replica_sets",
        "Deployment": "deployments",
        "PodDisruptionBudget": "budgets",
    }

    def __init__(self, objects: Iterable[dict[str, Any]] = ()) -> None:
        super().__init__()
        self._objects: dict[str, list[dict[str, Any]]] = {
            bucket: [] for bucket in self._KIND_BUCKETS.values()
        }
        for obj in objects:
            self.add(obj)

    def add(self, obj: dict[str, Any]) -> None:
        """Add one object, or every item of a ``kind: List`` object."""
        if not isinstance(obj, dict):
            return
        kind = str(obj.get("kind") or "")
        if kind.endswith("List"):
            # Typed lists (PodList) may omit the kind on their items.
            item_kind = kind[: -len("List")]
            for item in obj.get("items") or []:
                if isinstance(item, dict) and item_kind and not item.get("kind"):
                    item = {**item, "kind": item_kind}
                self.add(item)
            return
        bucket = self._KIND_BUCKETS.get(kind)
        if bucket is None:
            logger.debug("Ignoring snapshot object of kind %r", kind)
            return
        self._objects[bucket].append(obj)

    @classmethod
    def from_file(cls, path: str | Path) -> SnapshotController:
        """Load a snapshot from a YAML or JSON file (one or more documents).

        Raises:
            ClusterConnectionError: The snapshot cannot be read or parsed.
        """
        snapshot_path = Path(path).expanduser()
        try:
            with snapshot_path.open(encoding="utf-8") as handle:
                documents = list(yaml.safe_load_all(handle))
        except (OSError, yaml.YAMLError) as exc:
            raise ClusterConnectionError(
                f"Failed to read snapshot {snapshot_path}: {exc}"
            ) from exc
        return cls(doc for doc in documents if doc)

    def _items(self, bucket: str) -> list[dict[str, Any]]:
        return [copy.deepcopy(obj) for obj in self._objects[bucket]]

    def _get(self, bucket: str, kind: str, name: str, namespace: str) -> dict[str, Any]:
        for obj in self._objects[bucket]:
            metadata = _metadata(obj)
            if metadata.get("name") == name and metadata.get("namespace", "default") == namespace:
                return copy.deepcopy(obj)
        raise NotFoundError(f"{kind} {namespace}/{name} not found")

    async def check_connection(self) -> bool:
        return True

    async def list_nodes(self) -> list[dict[str, Any]]:
        return self._items("nodes")

    async def list_pods(
        self,
        namespace: str | None = None,
        field_selector: str | None = None,
        label_selector: str | None = None,
    ) -> list[dict[str, Any]]:
        pods: list[dict[str, Any]] = []
        for pod in self._objects["pods"]:
            metadata = _metadata(pod)
            if namespace and metadata.get("namespace", "default") != namespace:
                continue
            if not match_fields(field_selector, pod):
                continue
            if not match_labels(label_selector, metadata.get("labels")):
                continue
            pods.append(copy.deepcopy(pod))
        return pods

    async def get_replica_set(self, name: str, namespace: str) -> dict[str, Any]:
        return self._get("replica_sets", "ReplicaSet", name, namespace)

    async def get_deployment(self, name: str, namespace: str) -> dict[str, Any]:
        return self._get("deployments", "Deployment", name, namespace)

    async def list_pod_disruption_budgets(self) -> list[dict[str, Any]]:
        return self._items("budgets")
