"""Parsers for raw cluster objects."""

from kubedrain.controllers.cluster.parsers.node_parser import NodeParser
from kubedrain.controllers.cluster.parsers.pod_parser import PodParser

__all__ = ["NodeParser", "PodParser"]
