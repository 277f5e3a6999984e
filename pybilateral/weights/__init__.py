"""Gaussian weight tables."""

from pybilateral.weights.tables import (
    SpatialOffsets,
    WeightTables,
    build_intensity_table,
    build_spatial_offsets,
    build_tables,
)

__all__ = [
    "SpatialOffsets",
    "WeightTables",
    "build_intensity_table",
    "build_spatial_offsets",
    "build_tables",
]
