"""Node capacity calculation - pod ceilings and allocated requests per node."""

from __future__ import annotations

import asyncio
import ipaddress
import logging
from typing import Any

from kubedrain.constants.values import RESOURCE_CPU, RESOURCE_MEMORY
from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.parsers import NodeParser, PodParser
from kubedrain.errors import CIDRParseError, DrainDetectError
from kubedrain.models.core.node_info import NodeRecord
from kubedrain.utils.resource_parser import Quantity, sum_container_resources
from kubedrain.utils.selectors import node_non_terminated_pods_selector

logger = logging.getLogger(__name__)

_IPV4_BITS = 32


def parse_pod_cidr(cidr: str) -> ipaddress.IPv4Network:
    """Parse an IPv4 pod CIDR such as ``10.244.1.0/24``.

    Host bits may be set, as in ``10.244.1.7/24``.

    Raises:
        CIDRParseError: The text is not an IPv4 CIDR.
    """
    text = (cidr or "").strip()
    if "/" not in text:
        raise CIDRParseError(f"invalid CIDR address: {cidr!r}")
    try:
        network = ipaddress.ip_network(text, strict=False)
    except ValueError as exc:
        raise CIDRParseError(f"invalid CIDR address: {cidr!r}") from exc
    if not isinstance(network, ipaddress.IPv4Network):
        raise CIDRParseError(f"only IPv4 pod CIDRs are supported: {cidr!r}")
    return network


def pod_cidr_capacity(cidr: str) -> int | None:
    """Usable pod addresses in a CIDR block, or None when it cannot be parsed.

    Network and broadcast addresses are excluded: ``2^(32 - prefix) - 2``.
    """
    try:
        network = parse_pod_cidr(cidr)
    except CIDRParseError as exc:
        logger.warning("Failed to parse pod CIDR: %s", exc)
        return None
    host_bits = _IPV4_BITS - network.prefixlen
    return max(0, 2**host_bits - 2)


def max_pods_from_cidr(cidr: str) -> int:
    """Pod ceiling for a CIDR; 0 when the CIDR is malformed."""
    capacity = pod_cidr_capacity(cidr)
    return capacity if capacity is not None else 0


def total_requests(pods: list[dict[str, Any]]) -> tuple[Quantity | None, Quantity | None]:
    """Sum CPU and memory requests over pods.

    Pods without an explicit request contribute zero. A malformed request
    makes that resource's total unknown (None).
    """
    parser = PodParser()
    cpu_total: Quantity | None = Quantity.zero()
    memory_total: Quantity | None = Quantity.zero()
    for pod in pods:
        containers = parser.containers(pod)
        cpu = sum_container_resources(containers, "requests", RESOURCE_CPU)
        memory = sum_container_resources(containers, "requests", RESOURCE_MEMORY)
        cpu_total = None if cpu_total is None or cpu is None else cpu_total + cpu
        memory_total = None if memory_total is None or memory is None else memory_total + memory
    return cpu_total, memory_total


class NodeCapacityCalculator:
    """Builds NodeRecords from node objects and the pods bound to them."""

    def __init__(self, accessor: ClusterAccessor) -> None:
        self._accessor = accessor
        self._node_parser = NodeParser()

    async def non_terminated_pods(self, node_name: str) -> list[dict[str, Any]] | None:
        """Pods bound to a node outside Succeeded/Failed, or None if listing fails."""
        try:
            return await self._accessor.list_pods(
                field_selector=node_non_terminated_pods_selector(node_name)
            )
        except DrainDetectError as exc:
            logger.warning("Failed to list pods of node %s: %s", node_name, exc)
            return None

    async def current_pod_count(self, node_name: str) -> int | None:
        pods = await self.non_terminated_pods(node_name)
        return None if pods is None else len(pods)

    async def allocated(self, node_name: str) -> tuple[Quantity | None, Quantity | None] | None:
        """CPU and memory requested on a node, or None if the pods are unknown."""
        pods = await self.non_terminated_pods(node_name)
        return None if pods is None else total_requests(pods)

    async def evaluate_node(self, node: dict[str, Any]) -> NodeRecord:
        """Build the NodeRecord for one node from a single pod listing."""
        node_name = self._node_parser.node_name(node)
        pods = await self.non_terminated_pods(node_name)
        if pods is None:
            current_pods = None
            cpu_allocated = memory_allocated = None
        else:
            current_pods = len(pods)
            cpu_allocated, memory_allocated = total_requests(pods)

        return self._node_parser.parse_node_info(
            node,
            max_pods=pod_cidr_capacity(self._node_parser.pod_cidr(node)),
            current_pods=current_pods,
            cpu_allocated=cpu_allocated,
            memory_allocated=memory_allocated,
        )

    async def evaluate(self, nodes: list[dict[str, Any]]) -> list[NodeRecord]:
        """Build NodeRecords for all nodes concurrently, in input order."""
        return list(await asyncio.gather(*(self.evaluate_node(node) for node in nodes)))
