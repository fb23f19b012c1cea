"""Shared request-image decoding with HTTP error mapping."""

from __future__ import annotations

from fastapi import HTTPException

from imagetools.config import settings
from imagetools.errors import ImageDecodeError
from imagetools.grid import Grid
from imagetools.image_io import decode_image_base64


def decode_or_422(data: str) -> Grid:
    try:
        grid = decode_image_base64(data)
    except ImageDecodeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    if grid.size > settings.max_image_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"Image has {grid.size} pixels, limit is {settings.max_image_pixels}",
        )
    return grid
