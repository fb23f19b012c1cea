"""Numeric core: arithmetic, convolution, morphology, filters and signatures."""

from imagetools.engine.arithmetic import add, atan, divide, multiply, sqrt, subtract
from imagetools.engine.convolution import convolve, separable_convolve
from imagetools.engine.filters import gaussian_blur, gradient_magnitude, laplacian, pixel_orientation
from imagetools.engine.morphology import close as binary_close, dilate, erode, open as binary_open
from imagetools.engine.pipeline import Pipeline, PipelineConfig, PipelineContext, Step, create_pipeline
from imagetools.engine.registry import Category, get_registry, operator
from imagetools.engine.signatures import (
    compare_images,
    l2_norm,
    signature_difference,
    signature_vector,
)

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
    "Pipeline",
    "PipelineConfig",
    "PipelineContext",
    "Step",
    "create_pipeline",
    "Category",
    "get_registry",
    "operator",
]
