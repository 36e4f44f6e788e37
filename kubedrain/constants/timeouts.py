"""Timeout constants for kubedrain.

All timeout values for API requests and subprocess calls.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "10s"

# Process-level command timeout slack on top of the request timeout
KUBECTL_PROCESS_TIMEOUT_SLACK: Final = 5
KUBECTL_COMMAND_TIMEOUT: Final = 45

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "KUBECTL_PROCESS_TIMEOUT_SLACK",
]
