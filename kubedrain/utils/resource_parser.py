"""Resource quantity parsing utilities for CPU and memory values.

Kubernetes writes resource amounts as quantity strings ("100m", "1.5",
"64Mi", "1e3"). ``Quantity`` keeps the exact rational value together with the
format it was written in so that sums render the way the API server would
render them:

- CPU: "100m" + "100m" -> "200m"
- Memory: "1Gi" + "512Mi" -> "1536Mi"

Floating point is never involved, so sums do not drift.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable, Mapping
from fractions import Fraction
from functools import total_ordering
from typing import Any

from kubedrain.constants.enums import QuantityFormat
from kubedrain.errors import QuantityParseError

logger = logging.getLogger(__name__)

# Module-level constants to avoid re-creating on every function call.
_QUANTITY_PATTERN = re.compile(
    r"^(?P<sign>[+-])?"
    r"(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)"
    r"(?P<suffix>[eE][+-]?[0-9]+|[KMGTPE]i|[numkMGTPE])?$"
)

_DECIMAL_EXPONENTS: dict[str, int] = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}
_DECIMAL_SUFFIXES: dict[int, str] = {
    exponent: suffix for suffix, exponent in _DECIMAL_EXPONENTS.items()
}

_BINARY_SUFFIXES: tuple[str, ...] = ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei")
_BINARY_EXPONENTS: dict[str, int] = {
    suffix: index * 10 for index, suffix in enumerate(_BINARY_SUFFIXES) if suffix
}

# Quantities carry at most nano precision; finer input is rounded up.
_NANO = 10**9


def _round_up_to_nano(value: Fraction) -> Fraction:
    scaled = value * _NANO
    if scaled.denominator == 1:
        return value
    magnitude = math.ceil(abs(scaled))
    return Fraction(magnitude if value > 0 else -magnitude, _NANO)


@total_ordering
class Quantity:
    """Exact, immutable resource amount.

    Values are rounded up to nano precision. Equality and ordering compare
    values only; ``format`` only drives the canonical rendering.
    """

    __slots__ = ("_format", "_value")

    def __init__(
        self,
        value: Fraction | int,
        format: QuantityFormat = QuantityFormat.DECIMAL_SI,
    ) -> None:
        self._value = _round_up_to_nano(Fraction(value))
        self._format = format

    @property
    def value(self) -> Fraction:
        return self._value

    @property
    def format(self) -> QuantityFormat:
        return self._format

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Quantity({format_quantity(self)!r})"

    @classmethod
    def zero(cls) -> Quantity:
        """Return the zero quantity, rendered as "0"."""
        return cls(Fraction(0))

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    def __add__(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        # A zero receiver adopts the other operand's format.
        fmt = other.format if self.is_zero else self.format
        return Quantity(self.value + other.value, fmt)

    def __str__(self) -> str:
        return format_quantity(self)


def parse_quantity(text: Any) -> Quantity:
    """Parse a Kubernetes quantity string.

    Accepts an optional sign, an integer or decimal mantissa and one optional
    suffix: binary (Ki, Mi, Gi, Ti, Pi, Ei), decimal (n, u, m, k, M, G, T, P,
    E) or an exponent (e3, E-2).

    Raises:
        QuantityParseError: The text does not follow the quantity grammar.
    """
    if isinstance(text, bool) or not isinstance(text, (str, int)):
        raise QuantityParseError(f"quantity must be a string, got {text!r}")

    raw = str(text).strip()
    match = _QUANTITY_PATTERN.match(raw)
    if match is None:
        raise QuantityParseError(f"quantities must match the regular expression: {raw!r}")

    number = Fraction(match.group("number"))
    if match.group("sign") == "-":
        number = -number

    suffix = match.group("suffix") or ""
    if suffix in _BINARY_EXPONENTS:
        value = number * 2 ** _BINARY_EXPONENTS[suffix]
        fmt = QuantityFormat.BINARY_SI
    elif suffix in _DECIMAL_EXPONENTS:
        value = number * Fraction(10) ** _DECIMAL_EXPONENTS[suffix]
        fmt = QuantityFormat.DECIMAL_SI
    else:
        value = number * Fraction(10) ** int(suffix[1:])
        fmt = QuantityFormat.DECIMAL_EXPONENT

    return Quantity(value, fmt)


def parse_quantity_or_none(text: Any) -> Quantity | None:
    """Parse a quantity, logging and returning None when it is malformed."""
    try:
        return parse_quantity(text)
    except QuantityParseError as exc:
        logger.warning("Ignoring malformed quantity %r: %s", text, exc)
        return None


def add_quantities(a: Quantity, b: Quantity) -> Quantity:
    """Add two quantities of the same resource."""
    return a + b


def sum_quantities(quantities: Iterable[Quantity]) -> Quantity:
    """Sum quantities; an empty iterable yields the zero quantity."""
    total = Quantity.zero()
    for quantity in quantities:
        total = total + quantity
    return total


def _decimal_parts(value: Fraction) -> tuple[int, int]:
    """Split a nano-precision value into (mantissa, exponent), exponent % 3 == 0."""
    mantissa = int(abs(value) * _NANO)
    exponent = -9
    if mantissa == 0:
        return 0, 0
    while mantissa % 10 == 0:
        mantissa //= 10
        exponent += 1
    remainder = exponent % 3
    if remainder:
        mantissa *= 10**remainder
        exponent -= remainder
    return mantissa, exponent


def format_quantity(quantity: Quantity) -> str:
    """Render the canonical string form of a quantity."""
    value = quantity.value
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    fmt = quantity.format

    if fmt == QuantityFormat.BINARY_SI:
        # Small or fractional binary amounts would need rounding; show as decimal.
        if abs(value) < 1024 or value.denominator != 1:
            fmt = QuantityFormat.DECIMAL_SI
        else:
            amount = abs(int(value))
            index = 0
            while amount % 1024 == 0 and index < len(_BINARY_SUFFIXES) - 1:
                amount //= 1024
                index += 1
            return f"{sign}{amount}{_BINARY_SUFFIXES[index]}"

    mantissa, exponent = _decimal_parts(value)
    if fmt == QuantityFormat.DECIMAL_EXPONENT:
        suffix = f"e{exponent}" if exponent else ""
    else:
        suffix = _DECIMAL_SUFFIXES.get(exponent, f"e{exponent}")
    return f"{sign}{mantissa}{suffix}"


def sum_container_resources(
    containers: Iterable[Mapping[str, Any]],
    section: str,
    resource: str,
) -> Quantity | None:
    """Sum one resource over container specs.

    Utility function to extract and sum values from structures like:
    [{"resources": {"requests": {"cpu": "100m"}}}, ...]

    Containers without the resource contribute zero. Returns None when any
    value is malformed, so the total is reported as unknown.

    Args:
        containers: Container dictionaries from a pod spec
        section: "requests" or "limits"
        resource: Resource key (e.g. "cpu", "memory")
    """
    total = Quantity.zero()
    for container in containers:
        if not isinstance(container, Mapping):
            continue
        resources = container.get("resources") or {}
        if not isinstance(resources, Mapping):
            continue
        values = resources.get(section) or {}
        if not isinstance(values, Mapping) or resource not in values:
            continue
        quantity = parse_quantity_or_none(values[resource])
        if quantity is None:
            return None
        total = total + quantity
    return total
