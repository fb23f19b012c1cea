"""ImageTools: parallel float-grid image processing and region signatures."""

from imagetools.engine import (
    add,
    atan,
    binary_close,
    binary_open,
    compare_images,
    convolve,
    dilate,
    divide,
    erode,
    gaussian_blur,
    gradient_magnitude,
    l2_norm,
    laplacian,
    multiply,
    pixel_orientation,
    separable_convolve,
    signature_difference,
    signature_vector,
    sqrt,
    subtract,
)
from imagetools.errors import DimensionMismatch, ImageDecodeError, ImageToolsError, UnknownOperator
from imagetools.grid import (
    absolute_error,
    dimensions,
    dual_threshold,
    mean_std,
    normalise,
    single_threshold,
    sub_image,
)
from imagetools.image_io import load_image, save_image

__version__ = "0.1.0"

__all__ = [
    "add",
    "subtract",
    "multiply",
    "divide",
    "sqrt",
    "atan",
    "convolve",
    "separable_convolve",
    "gaussian_blur",
    "laplacian",
    "gradient_magnitude",
    "pixel_orientation",
    "erode",
    "dilate",
    "binary_open",
    "binary_close",
    "signature_vector",
    "signature_difference",
    "l2_norm",
    "compare_images",
    "absolute_error",
    "dimensions",
    "dual_threshold",
    "mean_std",
    "normalise",
    "single_threshold",
    "sub_image",
    "load_image",
    "save_image",
    "DimensionMismatch",
    "ImageDecodeError",
    "ImageToolsError",
    "UnknownOperator",
]
