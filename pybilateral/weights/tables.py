"""
Gaussian weight tables shared by every bilateral kernel backend.

The intensity table maps an absolute grey-level difference to its range
weight; the spatial offset list enumerates the disk-shaped neighbourhood
together with each position's spatial weight. Both are built once per filter
call and are read-only afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)

INTENSITY_LEVELS = 256


def gaussian_weights(dist_sq: np.ndarray, sigma: float) -> np.ndarray:
    """
    Evaluate ``exp(-dist_sq / (2 sigma^2))``.

    When ``2 sigma^2`` underflows to zero the limit is returned instead:
    1 at distance zero and 0 elsewhere.
    """

    dist_sq = np.asarray(dist_sq, dtype=np.float64)
    denom = 2.0 * sigma * sigma
    if denom == 0.0:
        return np.where(dist_sq == 0.0, 1.0, 0.0)
    with np.errstate(over="ignore", under="ignore"):
        return np.exp(-dist_sq / denom)


def build_intensity_table(sigma_intensity: float) -> np.ndarray:
    """
    Range weights indexed by ``|center - neighbour|`` in ``[0, 255]``.
    """

    diffs = np.arange(INTENSITY_LEVELS, dtype=np.float64)
    table = gaussian_weights(diffs * diffs, sigma_intensity)
    table.flags.writeable = False
    return table


@dataclass(frozen=True)
class SpatialOffsets:
    """
    Disk neighbourhood as parallel ``(drow, dcol, weight)`` arrays.

    Entries are ordered row-major over ``drow`` then ``dcol``. Every CPU
    kernel accumulates in this order, which is what makes their outputs
    byte-identical.
    """

    drow: np.ndarray
    dcol: np.ndarray
    weight: np.ndarray

    def __len__(self) -> int:
        return int(self.weight.shape[0])

    def flat(self, stride: int) -> np.ndarray:
        """
        Linear offsets into a row-major buffer with ``stride`` samples per row.
        """

        return self.drow * stride + self.dcol

    def mask(self, radius: int) -> np.ndarray:
        """
        Boolean ``(2r+1, 2r+1)`` window marking which positions are in the disk.
        """

        size = 2 * radius + 1
        window = np.zeros((size, size), dtype=bool)
        window[self.drow + radius, self.dcol + radius] = True
        return window


def build_spatial_offsets(radius: int, sigma_spatial: float) -> SpatialOffsets:
    """
    Enumerate lattice points within Euclidean distance ``radius`` of the origin.
    """

    if radius < 0:
        raise ValueError(f"Neighbourhood radius {radius} must be >= 0")

    coords = np.arange(-radius, radius + 1, dtype=np.int64)
    di, dj = np.meshgrid(coords, coords, indexing="ij")
    dist_sq = di * di + dj * dj
    inside = dist_sq <= radius * radius  # same as sqrt(dist_sq) <= radius on integers

    drow = di[inside]
    dcol = dj[inside]
    weight = gaussian_weights(dist_sq[inside], sigma_spatial)

    for arr in (drow, dcol, weight):
        arr.flags.writeable = False

    return SpatialOffsets(drow=drow, dcol=dcol, weight=weight)


@dataclass(frozen=True)
class WeightTables:
    """Everything the kernel needs besides the padded image."""

    radius: int
    intensity: np.ndarray
    offsets: SpatialOffsets


def build_tables(diameter: int, sigma_intensity: float, sigma_spatial: float) -> WeightTables:
    """
    Build the intensity table and spatial offset list for one filter call.
    """

    radius = diameter // 2
    intensity = build_intensity_table(sigma_intensity)
    offsets = build_spatial_offsets(radius, sigma_spatial)

    logger.debug(
        "Built weight tables: radius=%d, %d spatial offsets, intensity[255]=%0.3e",
        radius,
        len(offsets),
        float(intensity[-1]),
    )

    return WeightTables(radius=radius, intensity=intensity, offsets=offsets)
