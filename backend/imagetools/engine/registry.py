"""Operator registry: every named image operator is a function registered via decorator.

Usage:
    @operator(id="gaussian_blur", category=Category.FILTER, description="Gaussian blur")
    def gaussian_blur_op(image: Grid, size: int = 5, sigma: float = 8.0) -> Grid:
        return gaussian_blur(image, size, sigma)

Pipelines refer to operators by id; adding one is a single decorated function.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from imagetools.errors import UnknownOperator

if TYPE_CHECKING:
    from imagetools.grid import Grid

logger = logging.getLogger(__name__)


class Category(enum.IntEnum):
    INTENSITY = 0
    ARITHMETIC = 1
    CONVOLUTION = 2
    FILTER = 3
    MORPHOLOGY = 4


@dataclass
class OperatorSpec:
    id: str
    category: Category
    fn: Callable[..., "Grid"]
    params: dict[str, object] = field(default_factory=dict)
    description: str = ""


class OperatorRegistry:
    """Registry of named unary image operators."""

    def __init__(self) -> None:
        self._operators: dict[str, OperatorSpec] = {}

    def register(self, spec: OperatorSpec) -> None:
        if spec.id in self._operators:
            raise ValueError(f"Duplicate operator ID: {spec.id}")
        self._operators[spec.id] = spec
        logger.debug("Registered operator %s (%s)", spec.id, spec.category.name)

    def get(self, operator_id: str) -> OperatorSpec:
        try:
            return self._operators[operator_id]
        except KeyError:
            raise UnknownOperator(operator_id) from None

    def __contains__(self, operator_id: str) -> bool:
        return operator_id in self._operators

    def by_category(self, category: Category) -> list[OperatorSpec]:
        specs = [s for s in self._operators.values() if s.category == category]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[OperatorSpec]:
        return sorted(self._operators.values(), key=lambda s: (s.category, s.id))

    @property
    def count(self) -> int:
        return len(self._operators)


# Module-level singleton
_registry = OperatorRegistry()


def get_registry() -> OperatorRegistry:
    return _registry


def operator(
    *,
    id: str,
    category: Category,
    params: dict[str, object] | None = None,
    description: str = "",
):
    """Decorator to register an operator function.

    ``params`` documents the accepted keyword arguments and their defaults.
    """

    def decorator(fn: Callable[..., "Grid"]):
        spec = OperatorSpec(
            id=id,
            category=category,
            fn=fn,
            params=params or {},
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
