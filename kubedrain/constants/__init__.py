"""Constants module for kubedrain.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, numbers with Final)
- timeouts.py: Timeout values
- defaults.py: Default values for settings
"""

from kubedrain.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    MAX_CONCURRENT_DEFAULT,
    OUTPUT_DEFAULT,
    REQUEST_TIMEOUT_DEFAULT,
    SHOW_DAEMONSETS_DEFAULT,
)
from kubedrain.constants.enums import (
    TERMINAL_POD_PHASES,
    OutputFormat,
    PodPhase,
    QuantityFormat,
    WorkloadKind,
)
from kubedrain.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kubedrain.constants.values import (
    APP_NAME,
    NONE_RESOURCE,
    ZERO_AVAILABLE,
)

__all__ = [
    "APP_NAME",
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "LOG_LEVEL_DEFAULT",
    "MAX_CONCURRENT_DEFAULT",
    "NONE_RESOURCE",
    "OUTPUT_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
    "SHOW_DAEMONSETS_DEFAULT",
    "TERMINAL_POD_PHASES",
    "ZERO_AVAILABLE",
    "OutputFormat",
    "PodPhase",
    "QuantityFormat",
    "WorkloadKind",
]
