"""Exception hierarchy for drain detection.

Only errors raised by the mandatory queries (nodes, pods on the drain node,
disruption budgets) abort a run. Everything else is caught where it happens
and turned into an unknown sentinel.
"""


class DrainDetectError(Exception):
    """Base exception for drain detection errors."""


class ClusterConnectionError(DrainDetectError):
    """Raised when the cluster cannot be reached, authenticated or timed out."""


class ClusterQueryError(DrainDetectError):
    """Raised when a cluster query fails for a reason other than connectivity."""


class NotFoundError(ClusterQueryError):
    """Raised when a referenced object no longer exists."""


class ParseError(DrainDetectError, ValueError):
    """Base exception for malformed textual input."""


class QuantityParseError(ParseError):
    """Raised when a resource quantity string is malformed."""


class CIDRParseError(ParseError):
    """Raised when a pod CIDR cannot be interpreted."""


class SelectorError(DrainDetectError, ValueError):
    """Raised for malformed or unsupported label and field selectors."""
