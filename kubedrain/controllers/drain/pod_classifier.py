"""Pod classifier - groups the drain node's pods by effective owner."""

from __future__ import annotations

import logging
from typing import Any

from kubedrain.constants.enums import WorkloadKind
from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.parsers import PodParser
from kubedrain.controllers.drain.ownership import OwnershipResolver
from kubedrain.models.core.pod_info import WorkloadRef
from kubedrain.models.reports.drain_report import PodClassification
from kubedrain.utils.selectors import node_non_terminated_pods_selector

logger = logging.getLogger(__name__)


class PodClassifier:
    """Classifies the non-terminated pods bound to one node."""

    def __init__(
        self,
        accessor: ClusterAccessor,
        resolver: OwnershipResolver | None = None,
    ) -> None:
        self._accessor = accessor
        self._resolver = resolver or OwnershipResolver(accessor)
        self._parser = PodParser()

    async def list_node_pods(self, node_name: str) -> list[dict[str, Any]]:
        """List pods on a node outside Succeeded/Failed. Failures propagate."""
        return await self._accessor.list_pods(
            field_selector=node_non_terminated_pods_selector(node_name)
        )

    async def classify(self, node_name: str) -> PodClassification:
        """Resolve owners for every pod on the node and bucket them."""
        pods = await self.list_node_pods(node_name)
        logger.info("Classifying %d pods on node %s", len(pods), node_name)
        owners = await self._resolver.resolve_many(pods)
        return self.group(pods, owners)

    def group(
        self,
        pods: list[dict[str, Any]],
        owners: list[WorkloadRef],
    ) -> PodClassification:
        """Bucket pods by owner, keeping first-seen order within each bucket.

        Owner buckets are keyed ``namespace/name``. A ReplicaSet and a
        Deployment sharing a name in one namespace share a bucket; each row
        still carries its owner kind.
        """
        classification = PodClassification()
        for pod, owner in zip(pods, owners):
            record = self._parser.parse_pod_record(pod, owner)
            if owner.kind in (WorkloadKind.DEPLOYMENT, WorkloadKind.REPLICA_SET):
                bucket = classification.replica_set_pods
            elif owner.kind == WorkloadKind.STATEFUL_SET:
                bucket = classification.stateful_set_pods
            elif owner.kind == WorkloadKind.DAEMON_SET:
                bucket = classification.daemon_set_pods
            elif self._parser.first_owner_reference(pod) is None:
                classification.isolated_pods.append(record)
                continue
            else:
                logger.debug("Pod %s/%s has an unsupported owner", record.namespace, record.name)
                classification.unclassified_pods.append(record)
                continue
            bucket.setdefault(f"{record.namespace}/{owner.name}", []).append(record)
        return classification

