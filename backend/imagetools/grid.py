"""Grid contracts: shape queries, windows, statistics, normalisation, thresholds.

Every grid is a float32 ndarray of shape (height, width); row y is one scan
line and ``grid[y, x]`` is sample (x, y). Nothing here mutates its input.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imagetools.errors import DimensionMismatch

logger = logging.getLogger(__name__)

Grid = NDArray[np.float32]


def as_grid(values: ArrayLike) -> Grid:
    """Coerce to a 2D float32 grid without copying when already one."""
    grid = np.asarray(values, dtype=np.float32)
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D grid, got {grid.ndim} dimensions")
    return grid


def dimensions(grid: NDArray) -> tuple[int, int]:
    """(width, height) of a grid."""
    height, width = grid.shape
    return width, height


def check_same_shape(a: NDArray, b: NDArray) -> None:
    """Raise DimensionMismatch if the widths or heights differ (width first)."""
    a_width, a_height = dimensions(a)
    b_width, b_height = dimensions(b)
    if a_width != b_width:
        raise DimensionMismatch("width", a_width, b_width)
    if a_height != b_height:
        raise DimensionMismatch("height", a_height, b_height)


def sub_image(grid: NDArray, x: int, y: int, w: int, h: int) -> Grid:
    """Extract the w x h window whose top-left corner is (x, y).

    Samples outside the source grid are zero, so windows may hang off any
    edge (or lie entirely outside it).
    """
    out = np.zeros((max(h, 0), max(w, 0)), dtype=np.float32)
    width, height = dimensions(grid)

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, width), min(y + h, height)
    if x1 <= x0 or y1 <= y0:
        return out

    out[y0 - y : y1 - y, x0 - x : x1 - x] = grid[y0:y1, x0:x1]
    return out


def mean_std(grid: NDArray) -> tuple[float, float]:
    """Population mean and standard deviation, accumulated in float64."""
    if grid.size == 0:
        return 0.0, 0.0
    values = grid.astype(np.float64, copy=False)
    return float(values.mean()), float(values.std())


def normalise(grid: NDArray) -> Grid:
    """Affine rescale into [0, 1] preserving order.

    A flat grid has no range to stretch and maps to all zeros.
    """
    if grid.size == 0:
        return np.zeros_like(grid, dtype=np.float32)

    values = grid.astype(np.float64, copy=False)
    lo, hi = float(values.min()), float(values.max())
    span = hi - lo
    if not np.isfinite(span) or span <= 0.0:
        if not np.isfinite(span):
            logger.warning("normalise: non-finite range [%s, %s], returning zeros", lo, hi)
        return np.zeros(grid.shape, dtype=np.float32)
    return ((values - lo) / span).astype(np.float32)


def single_threshold(grid: NDArray, threshold: float) -> Grid:
    """1.0 where the sample is >= threshold, else 0.0."""
    return (grid >= threshold).astype(np.float32)


def dual_threshold(grid: NDArray, low: float, high: float) -> Grid:
    """1.0 where low <= sample <= high, else 0.0."""
    return ((grid >= low) & (grid <= high)).astype(np.float32)


def absolute_error(a: NDArray, b: NDArray) -> tuple[float, float, Grid]:
    """(max absolute error, mean absolute error, per-sample error map)."""
    check_same_shape(a, b)
    error_map = np.abs(a.astype(np.float64) - b.astype(np.float64))
    if error_map.size == 0:
        return 0.0, 0.0, error_map.astype(np.float32)
    return float(error_map.max()), float(error_map.mean()), error_map.astype(np.float32)
