"""Named operators available to pipelines, the API and the CLI.

Importing this module registers everything below with the operator registry.
"""

from __future__ import annotations

from imagetools.config import settings
from imagetools.engine import arithmetic, filters, morphology
from imagetools.engine.convolution import convolve, separable_convolve
from imagetools.engine.registry import Category, operator
from imagetools.errors import UnknownOperator
from imagetools.grid import Grid, dual_threshold, mean_std, normalise, single_threshold
from imagetools.kernels import NAMED_KERNELS, SEPARABLE_KERNELS, box, gaussian


def _resolve_level(image: Grid, value: float | str, stds: float = 0.0) -> float:
    """A literal level, or "mean" for the image mean shifted by ``stds`` deviations."""
    if isinstance(value, str):
        if value != "mean":
            raise ValueError(f"Threshold must be a number or 'mean', got {value!r}")
        mean, std = mean_std(image)
        return mean + stds * std
    return float(value)


def check_kernel_size(size: int) -> int:
    """Validate a kernel or structuring element size against ``settings.max_kernel_size``."""
    if not isinstance(size, int) or isinstance(size, bool):
        raise ValueError(f"Kernel size must be an integer, got {size!r}")
    if size < 1 or size > settings.max_kernel_size:
        raise ValueError(f"Kernel size must be between 1 and {settings.max_kernel_size}, got {size}")
    return size


def _named_kernel(name: str, size: int, sigma: float):
    if name == "gaussian":
        return gaussian(check_kernel_size(size), sigma)
    if name == "box":
        return box(check_kernel_size(size))
    try:
        return NAMED_KERNELS[name]
    except KeyError:
        raise UnknownOperator(f"kernel:{name}") from None


# ── Intensity ──


@operator(id="normalise", category=Category.INTENSITY, description="Rescale into [0, 1]")
def normalise_op(image: Grid) -> Grid:
    return normalise(image)


@operator(
    id="single_threshold",
    category=Category.INTENSITY,
    params={"threshold": "mean"},
    description="Binarise at one level (number or 'mean')",
)
def single_threshold_op(image: Grid, threshold: float | str = "mean") -> Grid:
    return single_threshold(image, _resolve_level(image, threshold))


@operator(
    id="dual_threshold",
    category=Category.INTENSITY,
    params={"low": "mean", "high": "mean", "spread": 0.5},
    description="Keep samples inside [low, high]; 'mean' bounds sit 'spread' std either side",
)
def dual_threshold_op(
    image: Grid,
    low: float | str = "mean",
    high: float | str = "mean",
    spread: float = 0.5,
) -> Grid:
    return dual_threshold(
        image,
        _resolve_level(image, low, -spread),
        _resolve_level(image, high, spread),
    )


# ── Arithmetic (scalar operand) ──


@operator(id="add", category=Category.ARITHMETIC, params={"value": 0.0, "normalise": False})
def add_op(image: Grid, value: float = 0.0, normalise: bool = False) -> Grid:
    return arithmetic.add(image, value, normalise)


@operator(id="subtract", category=Category.ARITHMETIC, params={"value": 0.0, "normalise": False})
def subtract_op(image: Grid, value: float = 0.0, normalise: bool = False) -> Grid:
    return arithmetic.subtract(image, value, normalise)


@operator(id="multiply", category=Category.ARITHMETIC, params={"value": 1.0, "normalise": False})
def multiply_op(image: Grid, value: float = 1.0, normalise: bool = False) -> Grid:
    return arithmetic.multiply(image, value, normalise)


@operator(
    id="divide",
    category=Category.ARITHMETIC,
    params={"value": 1.0, "normalise": False},
    description="Divide by a scalar; dividing by zero gives zeros",
)
def divide_op(image: Grid, value: float = 1.0, normalise: bool = False) -> Grid:
    return arithmetic.divide(image, value, normalise)


@operator(id="sqrt", category=Category.ARITHMETIC, params={"normalise": False}, description="Square root of magnitude")
def sqrt_op(image: Grid, normalise: bool = False) -> Grid:
    return arithmetic.sqrt(image, normalise)


@operator(id="atan", category=Category.ARITHMETIC, params={"normalise": False}, description="Arctangent")
def atan_op(image: Grid, normalise: bool = False) -> Grid:
    return arithmetic.atan(image, normalise)


# ── Convolution ──


@operator(
    id="convolve",
    category=Category.CONVOLUTION,
    params={"kernel": "laplacian", "size": 5, "sigma": 8.0, "normalise": True},
    description="Direct convolution with a named kernel (sobel_x, sobel_y, laplacian, gaussian, box)",
)
def convolve_op(
    image: Grid,
    kernel: str = "laplacian",
    size: int = 5,
    sigma: float = 8.0,
    normalise: bool = True,
) -> Grid:
    return convolve(image, _named_kernel(kernel, size, sigma), normalise)


@operator(
    id="separable_convolve",
    category=Category.CONVOLUTION,
    params={"kernel": "sobel_x", "normalise": True},
    description="Two-pass convolution with a named separable kernel (sobel_x, sobel_y)",
)
def separable_convolve_op(image: Grid, kernel: str = "sobel_x", normalise: bool = True) -> Grid:
    try:
        first, second = SEPARABLE_KERNELS[kernel]
    except KeyError:
        raise UnknownOperator(f"kernel:{kernel}") from None
    return separable_convolve(image, first, second, normalise)


# ── Filters ──


@operator(
    id="gaussian_blur",
    category=Category.FILTER,
    params={"size": 5, "sigma": 8.0},
    description="Gaussian blur, normalised",
)
def gaussian_blur_op(image: Grid, size: int = 5, sigma: float = 8.0) -> Grid:
    return filters.gaussian_blur(image, check_kernel_size(size), sigma)


@operator(id="laplacian", category=Category.FILTER, description="Laplacian, normalised")
def laplacian_op(image: Grid) -> Grid:
    return filters.laplacian(image)


@operator(id="gradient_magnitude", category=Category.FILTER, description="Sobel gradient magnitude")
def gradient_magnitude_op(image: Grid) -> Grid:
    return filters.gradient_magnitude(image)


@operator(id="pixel_orientation", category=Category.FILTER, description="Normalised atan(gy / gx)")
def pixel_orientation_op(image: Grid) -> Grid:
    return filters.pixel_orientation(image)


# ── Morphology ──


@operator(id="erode", category=Category.MORPHOLOGY, params={"size": 3}, description="Binary erosion")
def erode_op(image: Grid, size: int = 3) -> Grid:
    return morphology.erode(image, check_kernel_size(size))


@operator(id="dilate", category=Category.MORPHOLOGY, params={"size": 3}, description="Binary dilation")
def dilate_op(image: Grid, size: int = 3) -> Grid:
    return morphology.dilate(image, check_kernel_size(size))


@operator(id="open", category=Category.MORPHOLOGY, params={"size": 3}, description="Erosion then dilation")
def open_op(image: Grid, size: int = 3) -> Grid:
    return morphology.open(image, check_kernel_size(size))


@operator(id="close", category=Category.MORPHOLOGY, params={"size": 3}, description="Dilation then erosion")
def close_op(image: Grid, size: int = 3) -> Grid:
    return morphology.close(image, check_kernel_size(size))
