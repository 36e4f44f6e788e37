"""Pod parser for cluster controller - parses pod data into structured formats."""

from __future__ import annotations

from typing import Any

from kubedrain.constants.values import RESOURCE_CPU, RESOURCE_MEMORY
from kubedrain.models.core.pod_info import PodRecord, WorkloadRef
from kubedrain.utils.resource_parser import sum_container_resources


class PodParser:
    """Parses pod data into structured formats."""

    @staticmethod
    def pod_name(pod: dict[str, Any]) -> str:
        return str(pod.get("metadata", {}).get("name", "") or "")

    @staticmethod
    def pod_namespace(pod: dict[str, Any]) -> str:
        return str(pod.get("metadata", {}).get("namespace", "") or "default")

    @staticmethod
    def node_name(pod: dict[str, Any]) -> str:
        return str(pod.get("spec", {}).get("nodeName", "") or "")

    @staticmethod
    def first_owner_reference(obj: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first owner reference of an object, if any.

        Only index 0 is consulted; a pod has one controlling owner in practice.
        """
        owner_refs = obj.get("metadata", {}).get("ownerReferences") or []
        if not isinstance(owner_refs, list) or not owner_refs:
            return None
        first = owner_refs[0]
        return first if isinstance(first, dict) else None

    @staticmethod
    def has_host_path(pod: dict[str, Any]) -> bool:
        """Return True when any pod volume is a hostPath volume."""
        volumes = pod.get("spec", {}).get("volumes") or []
        return any(
            isinstance(volume, dict) and volume.get("hostPath") is not None
            for volume in volumes
        )

    @staticmethod
    def containers(pod: dict[str, Any]) -> list[dict[str, Any]]:
        """Regular containers of a pod; init containers are not counted."""
        containers = pod.get("spec", {}).get("containers") or []
        return [container for container in containers if isinstance(container, dict)]

    def parse_pod_record(self, pod: dict[str, Any], owner: WorkloadRef) -> PodRecord:
        """Parse a raw pod plus its resolved owner into a PodRecord."""
        containers = self.containers(pod)
        return PodRecord(
            name=self.pod_name(pod),
            namespace=self.pod_namespace(pod),
            node_name=self.node_name(pod),
            owner=owner,
            has_host_path=self.has_host_path(pod),
            cpu_request=sum_container_resources(containers, "requests", RESOURCE_CPU),
            cpu_limit=sum_container_resources(containers, "limits", RESOURCE_CPU),
            memory_request=sum_container_resources(containers, "requests", RESOURCE_MEMORY),
            memory_limit=sum_container_resources(containers, "limits", RESOURCE_MEMORY),
        )
