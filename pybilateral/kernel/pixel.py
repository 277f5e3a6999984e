"""
Single-pixel bilateral kernel.

This is the reference formulation: it addresses the padded image through a
flat row-major view and the precomputed linear offsets, one neighbour at a
time. The row kernel in :mod:`pybilateral.kernel.rows` performs the same
arithmetic in the same order for whole rows at once.
"""

from __future__ import annotations

import math

import numpy as np

from pybilateral.weights.tables import SpatialOffsets


def address(row: int, col: int, stride: int) -> int:
    """Linear index of ``(row, col)`` in a row-major buffer."""

    return row * stride + col


def round_half_up(value: float) -> int:
    # Kernel results are non-negative, so this is round-half-away-from-zero.
    return int(math.floor(value + 0.5))


def apply_pixel(
    padded: np.ndarray,
    output: np.ndarray,
    radius: int,
    row: int,
    col: int,
    intensity: np.ndarray,
    offsets: SpatialOffsets,
) -> None:
    """
    Compute ``output[row, col]`` from the padded neighbourhood.

    Only that single output cell is written, so calls for distinct pixels
    may run concurrently.
    """

    stride = padded.shape[1]
    flat = padded.reshape(-1)
    center_idx = address(row + radius, col + radius, stride)
    center = int(flat[center_idx])

    total = 0.0
    wsum = 0.0
    for offset, spatial in zip(offsets.flat(stride).tolist(), offsets.weight.tolist()):
        val = int(flat[center_idx + offset])
        w = spatial * float(intensity[abs(val - center)])
        total += val * w
        wsum += w

    output[row, col] = round_half_up(total / wsum)
