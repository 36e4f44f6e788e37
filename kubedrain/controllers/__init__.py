"""Controllers for reading cluster state and resolving drain impact."""

from __future__ import annotations

# Base classes
from kubedrain.controllers.base import BaseController

# Cluster access
from kubedrain.controllers.cluster import (
    ClusterAccessor,
    ClusterController,
    SnapshotController,
)

# Drain impact
from kubedrain.controllers.drain import DrainController

__all__ = [
    # Base
    "BaseController",
    # Cluster access
    "ClusterAccessor",
    "ClusterController",
    "SnapshotController",
    # Drain impact
    "DrainController",
]
