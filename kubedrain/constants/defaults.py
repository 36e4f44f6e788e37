"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

from kubedrain.constants.timeouts import CLUSTER_REQUEST_TIMEOUT

# ============================================================================
# Cluster access defaults
# ============================================================================

REQUEST_TIMEOUT_DEFAULT: Final = CLUSTER_REQUEST_TIMEOUT
MAX_CONCURRENT_DEFAULT: Final = 3

# ============================================================================
# Output defaults
# ============================================================================

OUTPUT_DEFAULT: Final = "table"
SHOW_DAEMONSETS_DEFAULT: Final = False
LOG_LEVEL_DEFAULT: Final = "WARNING"

__all__ = [
    "LOG_LEVEL_DEFAULT",
    "MAX_CONCURRENT_DEFAULT",
    "OUTPUT_DEFAULT",
    "REQUEST_TIMEOUT_DEFAULT",
    "SHOW_DAEMONSETS_DEFAULT",
]
