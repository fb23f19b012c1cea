"""Derived filters: compositions of convolution and pixel-wise arithmetic."""

from __future__ import annotations

from numpy.typing import ArrayLike

from imagetools.engine.arithmetic import add, atan, divide, multiply, sqrt
from imagetools.engine.convolution import convolve, separable_convolve
from imagetools.engine.parallel import run_concurrently
from imagetools.grid import Grid, as_grid, normalise as normalise_grid
from imagetools.kernels import (
    LAPLACIAN,
    SEP_SOBEL_X_PT1,
    SEP_SOBEL_X_PT2,
    SEP_SOBEL_Y_PT1,
    SEP_SOBEL_Y_PT2,
    gaussian,
)


def sobel_responses(image: ArrayLike) -> tuple[Grid, Grid]:
    """Normalised horizontal and vertical Sobel responses, computed concurrently."""
    src = as_grid(image)
    gx, gy = run_concurrently(
        lambda: separable_convolve(src, SEP_SOBEL_X_PT1, SEP_SOBEL_X_PT2, normalise=True),
        lambda: separable_convolve(src, SEP_SOBEL_Y_PT1, SEP_SOBEL_Y_PT2, normalise=True),
    )
    return gx, gy


def gradient_magnitude(image: ArrayLike) -> Grid:
    """sqrt(gx² + gy²), normalised to [0, 1]."""
    gx, gy = sobel_responses(image)
    gx_sq, gy_sq = run_concurrently(
        lambda: multiply(gx, gx),
        lambda: multiply(gy, gy),
    )
    return normalise_grid(sqrt(add(gx_sq, gy_sq)))


def pixel_orientation(image: ArrayLike) -> Grid:
    """atan(gy / gx), normalised to [0, 1].

    The result is a monotone proxy for the angle, not radians. Samples where
    gx is zero take the division's zero fallback.
    """
    gx, gy = sobel_responses(image)
    return normalise_grid(atan(divide(gy, gx)))


def gaussian_blur(image: ArrayLike, size: int = 5, sigma: float = 8.0, normalise: bool = True) -> Grid:
    return convolve(image, gaussian(size, sigma), normalise=normalise)


def laplacian(image: ArrayLike, normalise: bool = True) -> Grid:
    return convolve(image, LAPLACIAN, normalise=normalise)
