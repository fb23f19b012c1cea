"""Binary morphology built on convolution with an all-ones structuring element.

Inputs are expected to be binarised (0/1). Any other input is still
well-defined arithmetic, it just is not morphology.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from imagetools.engine.convolution import convolve
from imagetools.grid import Grid, single_threshold
from imagetools.kernels import structuring_element

# A pixel survives erosion when at least 3/4 of its neighbourhood is on.
EROSION_COVERAGE = 0.75


def erode(image: ArrayLike, size: int) -> Grid:
    summed = convolve(image, structuring_element(size), normalise=False)
    return single_threshold(summed, size * size * EROSION_COVERAGE)


def dilate(image: ArrayLike, size: int) -> Grid:
    """Neighbourhood count, range-normalised; any contact gives a non-zero pixel."""
    return convolve(image, structuring_element(size), normalise=True)


def open(image: ArrayLike, size: int) -> Grid:  # noqa: A001
    """Erode then dilate."""
    return dilate(erode(image, size), size)


def close(image: ArrayLike, size: int) -> Grid:
    """Dilate then erode."""
    return erode(dilate(image, size), size)
