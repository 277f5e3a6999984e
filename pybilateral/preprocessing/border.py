"""
Reflect-101 border extension for neighbourhood filtering.
"""

from __future__ import annotations

import numpy as np


def reflect101_index(index, length: int):
    """
    Map (possibly out-of-range) indices onto ``[0, length)`` by reflect-101.

    Virtual index ``-k`` maps to ``k`` and ``length - 1 + k`` maps to
    ``length - 1 - k``; the edge sample is never duplicated. Indices further
    out keep reflecting with period ``2 * length - 2``. A single-sample axis
    maps every index to 0.
    """

    if length < 1:
        raise ValueError(f"Cannot reflect into an empty axis (length {length})")

    index = np.asarray(index)
    if length == 1:
        return np.zeros_like(index)

    period = 2 * length - 2
    folded = np.abs(index) % period
    return np.where(folded >= length, period - folded, folded)


def pad_reflect101(img: np.ndarray, radius: int) -> np.ndarray:
    """
    Surround ``img`` with a ``radius``-wide reflect-101 border.

    Matches OpenCV ``BORDER_REFLECT_101``, ``numpy.pad(mode="reflect")`` and
    ``scipy.ndimage`` ``mode="mirror"``. The source is never modified; the
    result is a new C-contiguous uint8 array of shape
    ``(rows + 2 * radius, cols + 2 * radius)``.
    """

    if radius < 0:
        raise ValueError(f"Border radius {radius} must be >= 0")

    rows, cols = img.shape
    if radius == 0 or rows == 0 or cols == 0:
        return np.ascontiguousarray(img, dtype=np.uint8).copy()

    row_idx = reflect101_index(np.arange(-radius, rows + radius), rows)
    col_idx = reflect101_index(np.arange(-radius, cols + radius), cols)

    padded = img[np.ix_(row_idx, col_idx)]
    return np.ascontiguousarray(padded, dtype=np.uint8)
