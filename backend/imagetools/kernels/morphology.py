"""Structuring elements for binary morphology."""

from __future__ import annotations

import numpy as np

from imagetools.kernels.blurs import Kernel, freeze


def structuring_element(size: int) -> Kernel:
    """size x size block of ones; convolving with it counts "on" neighbours."""
    if size < 1:
        raise ValueError(f"Structuring element size must be >= 1, got {size}")
    return freeze(np.ones((size, size), dtype=np.float32))
