"""Cluster data access: kubectl-backed and in-memory snapshot controllers."""

from kubedrain.controllers.cluster.accessor import ClusterAccessor
from kubedrain.controllers.cluster.controller import ClusterController
from kubedrain.controllers.cluster.parsers import NodeParser, PodParser
from kubedrain.controllers.cluster.snapshot import SnapshotController

__all__ = [
    "ClusterAccessor",
    "ClusterController",
    "NodeParser",
    "PodParser",
    "SnapshotController",
]
