"""
Row-band bilateral kernel vectorised across columns.
"""

from __future__ import annotations

import numpy as np

from pybilateral.weights.tables import SpatialOffsets


def apply_rows(
    padded: np.ndarray,
    output: np.ndarray,
    radius: int,
    row_start: int,
    row_stop: int,
    intensity: np.ndarray,
    offsets: SpatialOffsets,
) -> None:
    """
    Fill ``output[row_start:row_stop]`` from the padded image.

    For every pixel the neighbours are visited in offset-list order and the
    weighted sums are accumulated in float64, exactly as
    :func:`pybilateral.kernel.pixel.apply_pixel` does, so both produce
    identical bytes. Rows outside the band are neither read from ``output``
    nor written.
    """

    if row_stop <= row_start:
        return

    cols = output.shape[1]
    top = row_start + radius
    bottom = row_stop + radius

    center = padded[top:bottom, radius : radius + cols].astype(np.int16)
    total = np.zeros(center.shape, dtype=np.float64)
    wsum = np.zeros(center.shape, dtype=np.float64)

    for dr, dc, spatial in zip(offsets.drow.tolist(), offsets.dcol.tolist(), offsets.weight.tolist()):
        neighbour = padded[top + dr : bottom + dr, radius + dc : radius + dc + cols]
        diff = np.abs(neighbour.astype(np.int16) - center)
        w = spatial * intensity[diff]
        total += neighbour * w
        wsum += w

    output[row_start:row_stop] = np.floor(total / wsum + 0.5).astype(np.uint8)
