"""Scalar constants for kubedrain.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_NAME: Final = "kubedrain"

# ============================================================================
# Report sentinels
# ============================================================================

# Rendered when a value could not be determined. Never the rendering of zero.
NONE_RESOURCE: Final = "none"
ZERO_AVAILABLE: Final = "0"

# ============================================================================
# Resource names
# ============================================================================

RESOURCE_CPU: Final = "cpu"
RESOURCE_MEMORY: Final = "memory"
GPU_RESOURCE_SUFFIX: Final = "/gpu"

# ============================================================================
# Exit codes
# ============================================================================

EXIT_OK: Final = 0
EXIT_CLUSTER_ERROR: Final = 1
EXIT_USAGE_ERROR: Final = 2

__all__ = [
    "APP_NAME",
    "EXIT_CLUSTER_ERROR",
    "EXIT_OK",
    "EXIT_USAGE_ERROR",
    "GPU_RESOURCE_SUFFIX",
    "NONE_RESOURCE",
    "RESOURCE_CPU",
    "RESOURCE_MEMORY",
    "ZERO_AVAILABLE",
]
