"""All enum definitions for kubedrain.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Workload Enums
# =============================================================================

class WorkloadKind(Enum):
    """Effective owner kinds a pod can resolve to."""

    DEPLOYMENT = "Deployment"
    REPLICA_SET = "ReplicaSet"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    NONE = ""


class PodPhase(Enum):
    """Pod phase values from Kubernetes API."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


TERMINAL_POD_PHASES = (PodPhase.SUCCEEDED, PodPhase.FAILED)


# =============================================================================
# Quantity Enums
# =============================================================================

class QuantityFormat(Enum):
    """Textual format a resource quantity was written in."""

    DECIMAL_SI = "DecimalSI"
    BINARY_SI = "BinarySI"
    DECIMAL_EXPONENT = "DecimalExponent"


# =============================================================================
# Output Enums
# =============================================================================

class OutputFormat(Enum):
    """Report output formats supported by the CLI."""

    TABLE = "table"
    JSON = "json"


__all__ = [
    "TERMINAL_POD_PHASES",
    "OutputFormat",
    "PodPhase",
    "QuantityFormat",
    "WorkloadKind",
]
