"""Report models."""

from kubedrain.models.reports.drain_report import DrainReport, PodClassification

__all__ = ["DrainReport", "PodClassification"]
