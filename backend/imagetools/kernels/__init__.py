"""Convolution kernel generators and constant kernel tables."""

from imagetools.kernels.blurs import Kernel, box, freeze, gaussian, normalise_kernel
from imagetools.kernels.edges import (
    LAPLACIAN,
    SEP_SOBEL_X_PT1,
    SEP_SOBEL_X_PT2,
    SEP_SOBEL_Y_PT1,
    SEP_SOBEL_Y_PT2,
    SOBEL_X,
    SOBEL_Y,
)
from imagetools.kernels.morphology import structuring_element

NAMED_KERNELS: dict[str, Kernel] = {
    "sobel_x": SOBEL_X,
    "sobel_y": SOBEL_Y,
    "laplacian": LAPLACIAN,
}

SEPARABLE_KERNELS: dict[str, tuple[Kernel, Kernel]] = {
    "sobel_x": (SEP_SOBEL_X_PT1, SEP_SOBEL_X_PT2),
    "sobel_y": (SEP_SOBEL_Y_PT1, SEP_SOBEL_Y_PT2),
}

__all__ = [
    "Kernel",
    "box",
    "freeze",
    "gaussian",
    "normalise_kernel",
    "structuring_element",
    "SOBEL_X",
    "SOBEL_Y",
    "SEP_SOBEL_X_PT1",
    "SEP_SOBEL_X_PT2",
    "SEP_SOBEL_Y_PT1",
    "SEP_SOBEL_Y_PT2",
    "LAPLACIAN",
    "NAMED_KERNELS",
    "SEPARABLE_KERNELS",
]
