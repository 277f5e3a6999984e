"""Per-pixel bilateral kernel and its execution strategies."""

from pybilateral.kernel.parallel import partition_rows, run_sequential, run_threaded
from pybilateral.kernel.pixel import address, apply_pixel
from pybilateral.kernel.rows import apply_rows

__all__ = [
    "address",
    "apply_pixel",
    "apply_rows",
    "partition_rows",
    "run_sequential",
    "run_threaded",
]
