"""Blur kernels and kernel normalisation.

Kernels are built raw, normalised, then frozen; callers never see the
unnormalised intermediate.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

logger = logging.getLogger(__name__)

Kernel = NDArray[np.float32]


def freeze(kernel: ArrayLike) -> Kernel:
    """Return a read-only float32 copy of ``kernel``."""
    frozen = np.array(kernel, dtype=np.float32, copy=True)
    if frozen.ndim != 2:
        raise ValueError(f"Kernels are 2D, got {frozen.ndim} dimensions")
    frozen.flags.writeable = False
    return frozen


def normalise_kernel(kernel: ArrayLike) -> Kernel:
    """Scale coefficients so they sum to 1 (unit-gain filter).

    A kernel that sums to zero (edge detectors) or to a non-finite value has
    no unit-gain form; it comes back unchanged.
    """
    values = np.asarray(kernel, dtype=np.float64)
    total = float(values.sum())
    if total == 0.0 or not math.isfinite(total):
        logger.warning("normalise_kernel: degenerate kernel sum %r, leaving coefficients unchanged", total)
        return freeze(values)
    return freeze(values * (1.0 / total))


def gaussian(size: int, sigma: float, centred: bool = False) -> Kernel:
    """size x size Gaussian kernel, normalised to unit gain.

    By default the density is sampled at raw indices (i, j), so the peak sits
    in the top-left corner. ``centred=True`` samples at offsets from
    ``size // 2`` instead, giving the usual symmetric blur.
    """
    if size < 1:
        raise ValueError(f"Gaussian size must be >= 1, got {size}")
    if sigma <= 0:
        raise ValueError(f"Gaussian sigma must be > 0, got {sigma}")

    offsets = np.arange(size, dtype=np.float64)
    if centred:
        offsets -= size // 2
    ii, jj = np.meshgrid(offsets, offsets, indexing="ij")

    two_sigma_sq = 2.0 * float(sigma) * float(sigma)
    raw = (1.0 / (math.pi * two_sigma_sq)) * np.exp(-(ii * ii + jj * jj) / two_sigma_sq)
    return normalise_kernel(raw)


def box(size: int) -> Kernel:
    """size x size mean filter."""
    if size < 1:
        raise ValueError(f"Box size must be >= 1, got {size}")
    return normalise_kernel(np.ones((size, size), dtype=np.float64))
