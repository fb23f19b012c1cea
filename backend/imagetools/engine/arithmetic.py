"""Pixel-wise arithmetic between grids, or a grid and a scalar.

Each operator allocates a fresh output, fills it one row chunk per worker and
optionally range-normalises the result. Shape checks happen before any work
is dispatched.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imagetools.engine.parallel import parallel_rows
from imagetools.grid import Grid, as_grid, check_same_shape, normalise as normalise_grid


def _apply(a: ArrayLike, b: ArrayLike | float, op: Callable[..., None], normalise: bool) -> Grid:
    left = as_grid(a)
    if np.ndim(b) == 0:
        scalar = np.float32(b)

        def _rows(lo: int, hi: int) -> None:
            op(left[lo:hi], scalar, out[lo:hi])

    else:
        right = as_grid(b)
        check_same_shape(left, right)

        def _rows(lo: int, hi: int) -> None:
            op(left[lo:hi], right[lo:hi], out[lo:hi])

    out = np.empty_like(left, dtype=np.float32)
    parallel_rows(_rows, left.shape[0], cost=left.size)
    return normalise_grid(out) if normalise else out


def _add(a, b, out) -> None:
    np.add(a, b, out=out)


def _subtract(a, b, out) -> None:
    np.subtract(a, b, out=out)


def _multiply(a, b, out) -> None:
    np.multiply(a, b, out=out)


def _divide(a, b, out) -> None:
    # Zero denominators give zero at that sample only.
    out[...] = 0.0
    np.divide(a, b, out=out, where=np.broadcast_to(b != 0, out.shape))


def add(a: ArrayLike, b: ArrayLike | float, normalise: bool = False) -> Grid:
    """a + b, where b is a grid of the same shape or a scalar."""
    return _apply(a, b, _add, normalise)


def subtract(a: ArrayLike, b: ArrayLike | float, normalise: bool = False) -> Grid:
    """a - b, where b is a grid of the same shape or a scalar."""
    return _apply(a, b, _subtract, normalise)


def multiply(a: ArrayLike, b: ArrayLike | float, normalise: bool = False) -> Grid:
    """a * b, where b is a grid of the same shape or a scalar."""
    return _apply(a, b, _multiply, normalise)


def divide(a: ArrayLike, b: ArrayLike | float, normalise: bool = False) -> Grid:
    """a / b; wherever b is zero the output sample is zero."""
    return _apply(a, b, _divide, normalise)


def _unary(image: ArrayLike, fn: Callable[[NDArray, NDArray], None], normalise: bool) -> Grid:
    src = as_grid(image)
    out = np.empty_like(src, dtype=np.float32)

    def _rows(lo: int, hi: int) -> None:
        fn(src[lo:hi], out[lo:hi])

    parallel_rows(_rows, src.shape[0], cost=src.size)
    return normalise_grid(out) if normalise else out


def sqrt(image: ArrayLike, normalise: bool = False) -> Grid:
    """Square root of each sample's magnitude; negative samples are not rejected."""

    def _sqrt(src, out) -> None:
        np.sqrt(np.abs(src), out=out)

    return _unary(image, _sqrt, normalise)


def atan(image: ArrayLike, normalise: bool = False) -> Grid:
    """Elementwise arctangent, in radians."""

    def _atan(src, out) -> None:
        np.arctan(src, out=out)

    return _unary(image, _atan, normalise)
