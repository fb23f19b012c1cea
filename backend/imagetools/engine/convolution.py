"""Zero-padded 2D convolution, direct and separable."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike

from imagetools.engine.parallel import parallel_rows
from imagetools.grid import Grid, as_grid, normalise as normalise_grid


def half_extent(size: int) -> int:
    """Padding used on each side for a kernel dimension of ``size``."""
    return int(math.ceil(0.5 * size))


def convolve(image: ArrayLike, kernel: ArrayLike, normalise: bool = False) -> Grid:
    """Dot product of ``kernel`` with the neighbourhood centred on every sample.

    The image is padded with ``ceil(size / 2)`` zeros on every side. Kernel
    index k sits at offset ``k - size // 2`` from the sample; the kernel is not
    flipped. Sums accumulate in float64 and are stored as float32.
    """
    src = as_grid(image)
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2:
        raise ValueError(f"Kernels are 2D, got {weights.ndim} dimensions")

    height, width = src.shape
    kernel_height, kernel_width = weights.shape
    pad_y, pad_x = half_extent(kernel_height), half_extent(kernel_width)

    padded = np.zeros((height + 2 * pad_y, width + 2 * pad_x), dtype=np.float64)
    padded[pad_y : pad_y + height, pad_x : pad_x + width] = src

    taps = [
        (pad_y + kj - kernel_height // 2, pad_x + ki - kernel_width // 2, float(weights[kj, ki]))
        for kj in range(kernel_height)
        for ki in range(kernel_width)
        if weights[kj, ki] != 0.0
    ]

    out = np.empty((height, width), dtype=np.float32)

    def _rows(lo: int, hi: int) -> None:
        acc = np.zeros((hi - lo, width), dtype=np.float64)
        for row_offset, col_offset, weight in taps:
            acc += weight * padded[lo + row_offset : hi + row_offset, col_offset : col_offset + width]
        out[lo:hi] = acc

    parallel_rows(_rows, height, cost=src.size * max(len(taps), 1))
    return normalise_grid(out) if normalise else out


def separable_convolve(
    image: ArrayLike,
    kernel_a: ArrayLike,
    kernel_b: ArrayLike,
    normalise: bool = False,
) -> Grid:
    """Convolve with ``kernel_a`` then ``kernel_b``.

    Equivalent to one pass with their outer product for rank-1 kernels. The
    intermediate is never normalised.
    """
    intermediate = convolve(image, kernel_a, normalise=False)
    return convolve(intermediate, kernel_b, normalise=normalise)
