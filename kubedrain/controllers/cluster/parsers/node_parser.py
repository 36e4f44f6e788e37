"""Node parser for cluster controller - parses node data into structured formats."""

from __future__ import annotations

import logging
from typing import Any

from kubedrain.constants.values import GPU_RESOURCE_SUFFIX, RESOURCE_CPU, RESOURCE_MEMORY
from kubedrain.models.core.node_info import NodeRecord
from kubedrain.utils.resource_parser import Quantity, parse_quantity_or_none

logger = logging.getLogger(__name__)


class NodeParser:
    """Parses node data into structured formats."""

    def __init__(self) -> None:
        """Initialize node parser."""
        pass

    @staticmethod
    def node_name(node: dict[str, Any]) -> str:
        return str(node.get("metadata", {}).get("name", "") or "")

    @staticmethod
    def pod_cidr(node: dict[str, Any]) -> str:
        return str(node.get("spec", {}).get("podCIDR", "") or "")

    @staticmethod
    def _allocatable_quantity(allocatable: dict[str, Any], resource: str) -> Quantity | None:
        if resource not in allocatable:
            return None
        return parse_quantity_or_none(allocatable[resource])

    @staticmethod
    def has_gpu(allocatable: dict[str, Any]) -> bool:
        """Return True when any extended ``*/gpu`` resource is allocatable."""
        for resource, raw_value in allocatable.items():
            if not str(resource).endswith(GPU_RESOURCE_SUFFIX):
                continue
            quantity = parse_quantity_or_none(raw_value)
            if quantity is not None and quantity > Quantity.zero():
                return True
        return False

    def parse_node_info(
        self,
        node: dict[str, Any],
        max_pods: int | None = None,
        current_pods: int | None = None,
        cpu_allocated: Quantity | None = None,
        memory_allocated: Quantity | None = None,
    ) -> NodeRecord:
        """Parse a single node into NodeRecord.

        Args:
            node: Raw node dictionary from API
            max_pods: Pod ceiling derived from the node's pod CIDR
            current_pods: Number of non-terminated pods on this node
            cpu_allocated: Sum of CPU requests of those pods
            memory_allocated: Sum of memory requests of those pods

        Returns:
            NodeRecord object.
        """
        status = node.get("status", {})
        spec = node.get("spec", {})
        raw_allocatable = status.get("allocatable", {})
        allocatable = raw_allocatable if isinstance(raw_allocatable, dict) else {}
        node_info = status.get("nodeInfo", {})

        return NodeRecord(
            name=self.node_name(node),
            max_pods=max_pods,
            current_pods=current_pods,
            gpu=self.has_gpu(allocatable),
            schedulable=not bool(spec.get("unschedulable", False)),
            cpu_allocatable=self._allocatable_quantity(allocatable, RESOURCE_CPU),
            memory_allocatable=self._allocatable_quantity(allocatable, RESOURCE_MEMORY),
            cpu_allocated=cpu_allocated,
            memory_allocated=memory_allocated,
            kubelet_version=node_info.get("kubeletVersion", ""),
            kube_proxy_version=node_info.get("kubeProxyVersion", ""),
            kernel_version=node_info.get("kernelVersion", ""),
        )
