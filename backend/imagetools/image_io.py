"""File and base64 boundary: decoding to greyscale float grids and back."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike
from PIL import Image, UnidentifiedImageError

from imagetools.errors import ImageDecodeError
from imagetools.grid import Grid, as_grid

logger = logging.getLogger(__name__)


def image_to_grid(image: Image.Image) -> Grid:
    """Greyscale float32 grid in [0, 255]."""
    return np.asarray(image.convert("L"), dtype=np.float32)


def grid_to_image(grid: ArrayLike) -> Image.Image:
    """8-bit greyscale image.

    Grids whose values all fit in [0, 1] are treated as normalised and scaled
    to [0, 255]; anything else is clipped.
    """
    values = as_grid(grid).astype(np.float64)
    if values.size and float(values.min()) >= 0.0 and float(values.max()) <= 1.0:
        values = values * 255.0
    pixels = np.clip(np.rint(values), 0, 255).astype(np.uint8)
    return Image.fromarray(pixels)


def load_image(path: str | Path) -> Grid:
    try:
        with Image.open(path) as img:
            grid = image_to_grid(img)
    except (OSError, UnidentifiedImageError) as e:
        raise ImageDecodeError(f"Cannot read image {path}: {e}") from e
    logger.debug("Loaded %s (%dx%d)", path, grid.shape[1], grid.shape[0])
    return grid


def save_image(path: str | Path, grid: ArrayLike) -> None:
    """Write ``grid`` as greyscale; the format follows the file extension."""
    grid_to_image(grid).save(path)
    logger.debug("Saved %s", path)


def decode_image_base64(data: str) -> Grid:
    """Decode a base64 string (optionally a data: URL) holding any Pillow format."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            return image_to_grid(img)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 image data: {e}") from e
    except (OSError, UnidentifiedImageError) as e:
        raise ImageDecodeError(f"Cannot decode image: {e}") from e


def encode_png_base64(grid: ArrayLike) -> str:
    buffer = io.BytesIO()
    grid_to_image(grid).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")
