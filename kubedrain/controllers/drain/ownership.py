"""Ownership resolution - maps a pod to the workload that effectively owns it."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from kubedrain.constants.enums import WorkloadKind
from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.parsers import PodParser
from kubedrain.errors import DrainDetectError
from kubedrain.models.core.pod_info import WorkloadRef

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """Resolves a pod's first owner reference to its effective workload.

    Resolution is a bounded two-hop lookup, pod -> ReplicaSet -> Deployment.
    Lookup failures degrade the answer by one hop and are logged, never
    raised. Identical ReplicaSet lookups issued during one run share a single
    in-flight task, so create one resolver per run.
    """

    _DIRECT_KINDS = (WorkloadKind.STATEFUL_SET, WorkloadKind.DAEMON_SET)

    def __init__(self, accessor: ClusterAccessor) -> None:
        self._accessor = accessor
        self._parser = PodParser()
        self._replica_set_tasks: dict[tuple[str, str], asyncio.Task[WorkloadRef]] = {}

    async def resolve(self, pod: dict[str, Any]) -> WorkloadRef:
        """Return the effective owner of a pod."""
        owner = self._parser.first_owner_reference(pod)
        if owner is None:
            return WorkloadRef.none()

        kind = str(owner.get("kind", "") or "")
        name = str(owner.get("name", "") or "")
        namespace = self._parser.pod_namespace(pod)

        if kind == WorkloadKind.REPLICA_SET.value:
            return await self._resolve_replica_set(name, namespace)
        for direct_kind in self._DIRECT_KINDS:
            if kind == direct_kind.value:
                return WorkloadRef(name=name, kind=direct_kind)

        logger.warning(
            "Unknown workload kind %r owning pod %s/%s",
            kind,
            namespace,
            self._parser.pod_name(pod),
        )
        return WorkloadRef.none()

    async def resolve_many(self, pods: list[dict[str, Any]]) -> list[WorkloadRef]:
        """Resolve owners for many pods concurrently, preserving order."""
        return list(await asyncio.gather(*(self.resolve(pod) for pod in pods)))

    async def _resolve_replica_set(self, name: str, namespace: str) -> WorkloadRef:
        key = (namespace, name)
        task = self._replica_set_tasks.get(key)
        if task is None:
            task = asyncio.create_task(self._lookup_replica_set_owner(name, namespace))
            self._replica_set_tasks[key] = task
        return await asyncio.shield(task)

    async def _lookup_replica_set_owner(self, name: str, namespace: str) -> WorkloadRef:
        fallback = WorkloadRef(name=name, kind=WorkloadKind.REPLICA_SET)

        try:
            replica_set = await self._accessor.get_replica_set(name, namespace)
        except DrainDetectError as exc:
            logger.warning("Failed to get ReplicaSet %s/%s: %s", namespace, name, exc)
            return fallback

        owner = self._parser.first_owner_reference(replica_set)
        if owner is None or owner.get("kind") != WorkloadKind.DEPLOYMENT.value:
            return fallback
        deployment_name = str(owner.get("name", "") or "")
        if not deployment_name:
            return fallback

        try:
            deployment = await self._accessor.get_deployment(deployment_name, namespace)
        except DrainDetectError as exc:
            logger.warning(
                "Failed to get Deployment %s/%s owning ReplicaSet %s: %s",
                namespace,
                deployment_name,
                name,
                exc,
            )
            return fallback

        resolved_name = deployment.get("metadata", {}).get("name") or deployment_name
        return WorkloadRef(name=str(resolved_name), kind=WorkloadKind.DEPLOYMENT)
