"""Command line entry point: ``kubedrain NODE``."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from rich.console import Console
from rich.logging import RichHandler

from kubedrain import __version__
from kubedrain.constants.enums import OutputFormat
from kubedrain.constants.values import (
    APP_NAME,
    EXIT_CLUSTER_ERROR,
    EXIT_OK,
    EXIT_USAGE_ERROR,
)
from kubedrain.controllers.cluster import (
    ClusterAccessor,
    ClusterController,
    SnapshotController,
)
from kubedrain.controllers.drain import DrainController
from kubedrain.errors import ClusterConnectionError, DrainDetectError
from kubedrain.models.reports.drain_report import DrainReport
from kubedrain.models.state import AppSettings, ConfigError, ConfigManager
from kubedrain.utils.report_renderer import DrainReportRenderer

logger = logging.getLogger(__name__)

# Squelch noisy third-party loggers
_NOISY_LOGGERS = ("asyncio",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Show what breaks if a Kubernetes node is drained",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Impact of draining a node in the current context
  kubedrain ip-10-0-1-23.ec2.internal

  # Use another context and include DaemonSet pods
  kubedrain worker-3 --context staging --show-daemonsets

  # Evaluate a saved snapshot and emit JSON
  kubectl get nodes,pods,rs,deploy,pdb -A -o yaml > cluster.yaml
  kubedrain worker-3 --snapshot cluster.yaml --output json

Exit codes:
  0  report printed
  1  the cluster could not be queried
  2  invalid arguments or settings
        """,
    )
    parser.add_argument("node", help="Name of the node to be drained")
    parser.add_argument("--kubeconfig", help="Path to the kubeconfig file")
    parser.add_argument("--context", help="Kubernetes context to use")
    parser.add_argument(
        "--snapshot",
        metavar="FILE",
        help="Read cluster objects from a YAML/JSON snapshot instead of kubectl",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--show-daemonsets",
        action="store_true",
        default=None,
        help="Include DaemonSet pods in the report",
    )
    parser.add_argument(
        "--request-timeout",
        metavar="DURATION",
        help="Timeout for each API request, e.g. 10s (default: 10s)",
    )
    parser.add_argument(
        "--max-concurrent",
        type=int,
        metavar="N",
        help="Maximum concurrent kubectl calls (default: 3)",
    )
    parser.add_argument("--config", metavar="FILE", help="Settings file (YAML)")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _log_level(settings: AppSettings, verbose: int) -> str:
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return settings.log_level


def build_accessor(settings: AppSettings, snapshot: str | None = None) -> ClusterAccessor:
    """Pick the snapshot or kubectl accessor.

    Raises:
        ClusterConnectionError: The snapshot cannot be read.
    """
    if snapshot:
        return SnapshotController.from_file(snapshot)
    return ClusterController(
        context=settings.context,
        kubeconfig=settings.kubeconfig,
        request_timeout=settings.request_timeout,
        max_concurrent=settings.max_concurrent,
    )


async def run(node: str, accessor: ClusterAccessor) -> DrainReport:
    """Check the accessor answers, then build the drain report for ``node``.

    Raises:
        ClusterConnectionError: The cluster does not answer.
    """
    if not await accessor.check_connection():
        raise ClusterConnectionError("cluster is not reachable")
    return await DrainController(accessor).detect(node)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ConfigManager.load(args.config)
        settings = ConfigManager.apply_overrides(
            settings,
            {
                "kubeconfig": args.kubeconfig,
                "context": args.context,
                "request_timeout": args.request_timeout,
                "max_concurrent": args.max_concurrent,
                "output": args.output,
                "show_daemonsets": args.show_daemonsets,
            },
        )
    except ConfigError as exc:
        configure_logging("ERROR")
        logger.error("%s", exc)
        return EXIT_USAGE_ERROR

    configure_logging(_log_level(settings, args.verbose))

    try:
        accessor = build_accessor(settings, args.snapshot)
        report = asyncio.run(run(args.node, accessor))
    except DrainDetectError as exc:
        logger.error("Failed to evaluate drain of node %s: %s", args.node, exc)
        return EXIT_CLUSTER_ERROR

    renderer = DrainReportRenderer(report, show_daemonsets=settings.show_daemonsets)
    if settings.output == OutputFormat.JSON:
        print(renderer.generate_json_report())
    else:
        renderer.render_table(Console())
    return EXIT_OK
