"""Edge-detection kernel tables.

Kernels are (height, width) arrays, so SOBEL_X responds to horizontal change.
Separable halves: PT1 is the row pass, PT2 the column pass, and
``PT2 @ PT1`` (an outer product) gives the full kernel.
"""

from __future__ import annotations

from imagetools.kernels.blurs import freeze

SEP_SOBEL_X_PT1 = freeze([[-1.0, 0.0, 1.0]])
SEP_SOBEL_X_PT2 = freeze([[1.0], [2.0], [1.0]])

SEP_SOBEL_Y_PT1 = freeze([[1.0, 2.0, 1.0]])
SEP_SOBEL_Y_PT2 = freeze([[-1.0], [0.0], [1.0]])

SOBEL_X = freeze(SEP_SOBEL_X_PT2 @ SEP_SOBEL_X_PT1)
SOBEL_Y = freeze(SEP_SOBEL_Y_PT2 @ SEP_SOBEL_Y_PT1)

LAPLACIAN = freeze([
    [0.0, 1.0, 0.0],
    [1.0, -4.0, 1.0],
    [0.0, 1.0, 0.0],
])
