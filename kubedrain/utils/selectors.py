"""Label and field selector helpers.

Only equality-based selectors are supported: ``key=value``, ``key==value``
and ``key!=value`` joined by commas. Set-based selectors (``in``,
``notin``, ``exists``) and ``matchExpressions`` raise ``SelectorError``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, NamedTuple

from kubedrain.constants.enums import TERMINAL_POD_PHASES
from kubedrain.errors import SelectorError

_LABEL_NAME = re.compile(r"^([A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?)$")
_LABEL_PREFIX = re.compile(
    r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$"
)
_LABEL_VALUE = re.compile(r"^(([A-Za-z0-9][-A-Za-z0-9_.]*)?[A-Za-z0-9])?$")
_MAX_NAME_LENGTH = 63
_MAX_PREFIX_LENGTH = 253

_OPERATORS = ("!=", "==", "=")


class Requirement(NamedTuple):
    """Single ``key <op> value`` term of a selector."""

    key: str
    operator: str
    value: str

    def matches(self, actual: str | None) -> bool:
        if self.operator == "!=":
            return actual != self.value
        return actual == self.value


def _validate_label_key(key: str) -> None:
    prefix, _, name = key.rpartition("/")
    if prefix and (len(prefix) > _MAX_PREFIX_LENGTH or not _LABEL_PREFIX.match(prefix)):
        raise SelectorError(f"invalid label key prefix: {key!r}")
    if not name or len(name) > _MAX_NAME_LENGTH or not _LABEL_NAME.match(name):
        raise SelectorError(f"invalid label key: {key!r}")


def _validate_label_value(key: str, value: str) -> None:
    if len(value) > _MAX_NAME_LENGTH or not _LABEL_VALUE.match(value):
        raise SelectorError(f"invalid label value for {key!r}: {value!r}")


def build_label_selector(selector: Mapping[str, Any] | None) -> str | None:
    """Convert a LabelSelector object into an equality-based selector string.

    Returns None for a missing selector (matches nothing) and "" for an
    empty selector (matches everything in the namespace). Keys are sorted so
    the same selector always produces the same string.

    Raises:
        SelectorError: The selector uses matchExpressions or holds invalid
            keys or values.
    """
    if selector is None:
        return None
    if not isinstance(selector, Mapping):
        raise SelectorError(f"selector must be an object, got {selector!r}")

    if selector.get("matchExpressions"):
        raise SelectorError("set-based matchExpressions selectors are not supported")

    match_labels = selector.get("matchLabels") or {}
    if not isinstance(match_labels, Mapping):
        raise SelectorError(f"matchLabels must be an object, got {match_labels!r}")

    terms: list[str] = []
    for key in sorted(match_labels):
        value = "" if match_labels[key] is None else str(match_labels[key])
        _validate_label_key(str(key))
        _validate_label_value(str(key), value)
        terms.append(f"{key}={value}")
    return ",".join(terms)


def parse_selector(text: str | None) -> list[Requirement]:
    """Parse an equality-based selector string into requirements."""
    if not text:
        return []

    requirements: list[Requirement] = []
    for term in text.split(","):
        term = term.strip()
        if not term:
            raise SelectorError(f"empty term in selector {text!r}")
        for operator in _OPERATORS:
            key, found, value = term.partition(operator)
            if found:
                break
        else:
            raise SelectorError(f"unsupported selector term {term!r}")
        key = key.strip()
        if not key:
            raise SelectorError(f"missing key in selector term {term!r}")
        requirements.append(
            Requirement(key, "=" if operator == "==" else operator, value.strip())
        )
    return requirements


def match_labels(selector: str | None, labels: Mapping[str, Any] | None) -> bool:
    """Return True when the labels satisfy every requirement of the selector."""
    labels = labels or {}
    return all(
        requirement.matches(
            None if labels.get(requirement.key) is None else str(labels[requirement.key])
        )
        for requirement in parse_selector(selector)
    )


def _field_value(obj: Mapping[str, Any], path: str) -> str:
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return ""
        current = current.get(part)
    return "" if current is None else str(current)


def match_fields(selector: str | None, obj: Mapping[str, Any]) -> bool:
    """Return True when the object satisfies a field selector.

    Field paths are dotted (``spec.nodeName``); missing fields compare as "".
    """
    return all(
        requirement.matches(_field_value(obj, requirement.key))
        for requirement in parse_selector(selector)
    )


def node_non_terminated_pods_selector(node_name: str) -> str:
    """Field selector for pods bound to a node and not in a terminal phase."""
    terms = [f"spec.nodeName={node_name}"]
    terms.extend(f"status.phase!={phase.value}" for phase in TERMINAL_POD_PHASES)
    return ",".join(terms)
