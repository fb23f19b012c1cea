"""Exception taxonomy.

Only programming faults are raised. Degenerate numeric inputs (zero-sum
kernels, flat grids, mismatched signatures) fall back to defined values.
"""

from __future__ import annotations


class ImageToolsError(Exception):
    """Base class for every error raised by the library."""


class DimensionMismatch(ImageToolsError, ValueError):
    """Two grid operands differ in width or height."""

    def __init__(self, axis: str, left: int, right: int) -> None:
        self.axis = axis
        self.left = left
        self.right = right
        super().__init__(f"{axis.capitalize()} mismatch: {left} != {right}")


class UnknownOperator(ImageToolsError, KeyError):
    """No operator is registered under the requested id."""

    def __init__(self, operator_id: str) -> None:
        self.operator_id = operator_id
        super().__init__(operator_id)

    def __str__(self) -> str:
        return f"Unknown operator: {self.operator_id!r}"


class ImageDecodeError(ImageToolsError):
    """Image bytes or file could not be decoded."""
