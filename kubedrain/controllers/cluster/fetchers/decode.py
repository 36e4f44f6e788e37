"""Decoding helpers for kubectl JSON output."""

from __future__ import annotations

import json
import logging
from typing import Any

from kubedrain.errors import ClusterQueryError

logger = logging.getLogger(__name__)


def decode_object(output: str, what: str) -> dict[str, Any]:
    """Decode a single object from ``kubectl get ... -o json``.

    Raises:
        ClusterQueryError: The output is not a JSON object.
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        logger.exception("Error parsing %s JSON", what)
        raise ClusterQueryError(f"kubectl returned invalid JSON for {what}") from exc
    if not isinstance(data, dict):
        raise ClusterQueryError(f"kubectl returned unexpected JSON for {what}")
    return data


def decode_items(output: str, what: str) -> list[dict[str, Any]]:
    """Decode the ``items`` of a kubectl list response."""
    if not output.strip():
        return []
    items = decode_object(output, what).get("items") or []
    return [item for item in items if isinstance(item, dict)]
