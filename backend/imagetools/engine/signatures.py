"""Region signatures for approximate image matching.

Implements the ICIP-2002 region signature (doi:10.1109/ICIP.2002.1038047):
the image is sampled at a 9x9 lattice of regions, each region is reduced to
the mean of a small window, and every region is compared with its 8
neighbours. Each comparison is bucketed into one of five symbols, giving a
648-element descriptor.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imagetools.engine.parallel import parallel_rows, run_concurrently
from imagetools.grid import as_grid, dimensions, mean_std, sub_image

logger = logging.getLogger(__name__)

# 9x9 real regions plus a one-region zero border on each side, so every
# real region has a full 8-neighbourhood.
REGIONS = 9
LATTICE = REGIONS + 2

# Sampling window around each region centre.
WINDOW = 5
WINDOW_OFFSET = WINDOW // 2

# |difference| above this is "much" darker/lighter.
MUCH_THRESHOLD = 2.0

NEIGHBOUR_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dj, di) for dj in (-1, 0, 1) for di in (-1, 0, 1) if (dj, di) != (0, 0)
)

SIGNATURE_LENGTH = REGIONS * REGIONS * len(NEIGHBOUR_OFFSETS)  # 648

# Returned for signatures that cannot be compared.
MAX_DISTANCE = float(np.finfo(np.float32).max)

Signature = NDArray[np.int8]


def region_averages(image: ArrayLike) -> NDArray[np.float32]:
    """LATTICE x LATTICE table of window means, indexed [row j, column i].

    Border cells stay zero. Each region row is one unit of parallel work.
    """
    src = as_grid(image)
    width, height = dimensions(src)
    x_distance = width // LATTICE
    y_distance = height // LATTICE

    averages = np.zeros((LATTICE, LATTICE), dtype=np.float32)

    def _rows(lo: int, hi: int) -> None:
        for j in range(lo + 1, hi + 1):
            for i in range(1, REGIONS + 1):
                window = sub_image(
                    src,
                    x_distance * i - WINDOW_OFFSET,
                    y_distance * j - WINDOW_OFFSET,
                    WINDOW,
                    WINDOW,
                )
                averages[j, i], _ = mean_std(window)

    parallel_rows(_rows, REGIONS)
    return averages


def classify_differences(differences: NDArray) -> Signature:
    """Bucket signed differences into {-2, -1, 0, 1, 2}."""
    return np.select(
        [
            differences < -MUCH_THRESHOLD,
            differences < 0,
            differences > MUCH_THRESHOLD,
            differences > 0,
        ],
        [-2, -1, 2, 1],
        default=0,
    ).astype(np.int8)


def signature_vector(image: ArrayLike) -> Signature:
    """648-element relational descriptor of ``image``.

    Order: region row, region column, then neighbour row offset and
    neighbour column offset (each -1..1, skipping the region itself).
    """
    averages = region_averages(image)
    centre = averages[1:-1, 1:-1]

    # shape (REGIONS, REGIONS, 8): last axis walks the neighbours in order
    differences = np.stack(
        [
            centre - averages[1 + dj : LATTICE - 1 + dj, 1 + di : LATTICE - 1 + di]
            for dj, di in NEIGHBOUR_OFFSETS
        ],
        axis=-1,
    )
    return classify_differences(differences).reshape(-1)


def l2_norm(signature: ArrayLike) -> float:
    """Euclidean norm of an integer signature."""
    values = np.asarray(signature, dtype=np.float64)
    return float(math.sqrt(float(np.dot(values, values))))


def directed_difference(sig_a: ArrayLike, sig_b: ArrayLike) -> float:
    """||a - b|| / (||a|| + ||b||), one direction only.

    Mismatched lengths are maximally distant; a zero or non-finite ratio
    collapses to 0.
    """
    a = np.asarray(sig_a, dtype=np.int64)
    b = np.asarray(sig_b, dtype=np.int64)
    if a.shape != b.shape:
        logger.warning("Signature length mismatch: %d vs %d", a.size, b.size)
        return MAX_DISTANCE

    difference_l2, a_l2, b_l2 = run_concurrently(
        lambda: l2_norm(a - b),
        lambda: l2_norm(a),
        lambda: l2_norm(b),
    )

    denominator = a_l2 + b_l2
    if denominator == 0.0:
        return 0.0
    delta = difference_l2 / denominator
    if not math.isfinite(delta):
        logger.debug("Non-finite signature distance, using 0")
        return 0.0
    return delta


def signature_difference(sig_a: ArrayLike, sig_b: ArrayLike) -> float:
    """Symmetric distance: the mean of both directed distances."""
    ab, ba = run_concurrently(
        lambda: directed_difference(sig_a, sig_b),
        lambda: directed_difference(sig_b, sig_a),
    )
    if MAX_DISTANCE in (ab, ba):
        return MAX_DISTANCE
    return float(np.float32((ab + ba) / 2))


def compare_images(image_a: ArrayLike, image_b: ArrayLike) -> float:
    """Signature distance between two images."""
    sig_a, sig_b = run_concurrently(
        lambda: signature_vector(image_a),
        lambda: signature_vector(image_b),
    )
    return signature_difference(sig_a, sig_b)
