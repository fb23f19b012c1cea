"""Shared test fixtures: synthetic greyscale grids."""

from __future__ import annotations

import numpy as np
import pytest

from imagetools.config import Settings
from imagetools.engine import parallel


def horizontal_ramp(width: int = 110, height: int = 110, offset: float = 50.0) -> np.ndarray:
    """Brightness grows by one per column; values are exact small integers."""
    row = np.arange(width, dtype=np.float32) + np.float32(offset)
    return np.tile(row, (height, 1))


def square_mask(size: int = 15, lo: int = 4, hi: int = 11) -> np.ndarray:
    """Binary grid with a filled square covering rows/cols [lo, hi)."""
    grid = np.zeros((size, size), dtype=np.float32)
    grid[lo:hi, lo:hi] = 1.0
    return grid


@pytest.fixture
def ramp() -> np.ndarray:
    return horizontal_ramp()


@pytest.fixture
def noise() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return (rng.random((64, 48)) * 255.0).astype(np.float32)


@pytest.fixture
def square() -> np.ndarray:
    return square_mask()


@pytest.fixture
def force_parallel(monkeypatch):
    """Make every row job fan out across four workers, however small."""
    config = Settings(imagetools_max_workers=4, imagetools_parallel_min_pixels=0)
    monkeypatch.setattr(parallel, "settings", config)
    return config
