"""Kubectl fetchers for cluster data."""

from kubedrain.controllers.cluster.fetchers.node_fetcher import NodeFetcher
from kubedrain.controllers.cluster.fetchers.pdb_fetcher import PDBFetcher
from kubedrain.controllers.cluster.fetchers.pod_fetcher import PodFetcher
from kubedrain.controllers.cluster.fetchers.workload_fetcher import WorkloadFetcher

__all__ = ["NodeFetcher", "PDBFetcher", "PodFetcher", "WorkloadFetcher"]
