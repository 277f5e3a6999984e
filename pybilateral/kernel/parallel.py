"""
Sequential and thread-pool execution of the row kernel.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from pybilateral.kernel.rows import apply_rows
from pybilateral.weights.tables import WeightTables

logger = logging.getLogger(__name__)


def partition_rows(rows: int, workers: int) -> List[Tuple[int, int]]:
    """
    Split ``[0, rows)`` into at most ``workers`` contiguous, disjoint bands.

    Band sizes differ by at most one row and empty bands are dropped.
    """

    if workers < 1:
        raise ValueError(f"Worker count {workers} must be >= 1")

    workers = min(workers, rows)
    if workers == 0:
        return []

    base, extra = divmod(rows, workers)
    bands = []
    start = 0
    for i in range(workers):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def resolve_workers(num_workers: Optional[int]) -> int:
    if num_workers is not None:
        return num_workers
    return os.cpu_count() or 1


def run_sequential(padded: np.ndarray, output: np.ndarray, tables: WeightTables) -> np.ndarray:
    """
    Filter every row in a single control flow.
    """

    apply_rows(padded, output, tables.radius, 0, output.shape[0], tables.intensity, tables.offsets)
    return output


def run_threaded(
    padded: np.ndarray,
    output: np.ndarray,
    tables: WeightTables,
    num_workers: Optional[int] = None,
) -> np.ndarray:
    """
    Filter row bands concurrently on a thread pool and join before returning.

    Each band owns its output rows exclusively while the padded image and
    tables are shared read-only, so no locking is needed. numpy releases the
    GIL inside the per-offset array arithmetic.
    """

    workers = resolve_workers(num_workers)
    bands = partition_rows(output.shape[0], workers)
    logger.debug("Dispatching %d row bands to %d workers", len(bands), workers)

    if len(bands) <= 1:
        return run_sequential(padded, output, tables)

    with ThreadPoolExecutor(max_workers=len(bands)) as executor:
        futures = [
            executor.submit(
                apply_rows,
                padded,
                output,
                tables.radius,
                start,
                stop,
                tables.intensity,
                tables.offsets,
            )
            for start, stop in bands
        ]

        for future in futures:
            future.result()

    return output
