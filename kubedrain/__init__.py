"""kubedrain - drain impact analysis for Kubernetes nodes."""

__version__ = "0.1.0"
