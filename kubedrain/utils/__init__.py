"""Utility functions and classes for kubedrain."""

from kubedrain.utils.resource_parser import (
    Quantity,
    format_quantity,
    parse_quantity,
    sum_quantities,
)

__all__ = [
    "Quantity",
    "format_quantity",
    "parse_quantity",
    "sum_quantities",
]
