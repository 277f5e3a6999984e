"""
Configuration primitives for pybilateral.

Defines enums for execution backends and accelerator fallback behaviour,
and a dataclass collecting the filter parameters.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ExecutionMode(Enum):
    """Where the per-pixel kernel runs."""

    SEQUENTIAL = "sequential"    # Single control flow, row-major
    THREADED = "threaded"        # Row bands on a worker-thread pool
    ACCELERATOR = "accelerator"  # PyTorch backend (CUDA when available)


class AcceleratorFallback(Enum):
    """Behaviour when the accelerated backend cannot be loaded."""

    PASSTHROUGH = "passthrough"  # Return the input unchanged, tagged degraded
    RAISE = "raise"              # Raise AcceleratorUnavailableError
    CPU = "cpu"                  # Run the threaded CPU path, tagged degraded


@dataclass
class BilateralConfig:
    """
    Complete configuration for one bilateral filter invocation.

    Defaults match the parameters the filter was originally benchmarked with.
    """

    # Filter parameters
    diameter: int = 9  # pixels, odd
    sigma_intensity: float = 70.0  # grey levels
    sigma_spatial: float = 70.0  # pixels

    # Execution
    mode: ExecutionMode = ExecutionMode.SEQUENTIAL
    num_workers: Optional[int] = None  # None -> os.cpu_count()

    # Accelerator options
    accelerator_fallback: AcceleratorFallback = AcceleratorFallback.PASSTHROUGH
    device: Optional[str] = None  # e.g. "cuda", "cuda:1", "cpu"
    band_rows: int = 64  # output rows per accelerator batch

    @property
    def radius(self) -> int:
        return self.diameter // 2

    def validate(self) -> None:
        """Validate configuration parameters."""

        if isinstance(self.diameter, bool) or not isinstance(self.diameter, int):
            raise ValueError(f"Diameter must be an integer, got {self.diameter!r}")

        if self.diameter < 1:
            raise ValueError(f"Diameter {self.diameter} must be >= 1")

        if self.diameter % 2 == 0:
            raise ValueError(f"Diameter {self.diameter} must be odd")

        if not (math.isfinite(self.sigma_intensity) and self.sigma_intensity > 0):
            raise ValueError(f"Intensity sigma {self.sigma_intensity} must be finite and > 0")

        if not (math.isfinite(self.sigma_spatial) and self.sigma_spatial > 0):
            raise ValueError(f"Spatial sigma {self.sigma_spatial} must be finite and > 0")

        if not isinstance(self.mode, ExecutionMode):
            raise ValueError(f"Unknown execution mode: {self.mode!r}")

        if not isinstance(self.accelerator_fallback, AcceleratorFallback):
            raise ValueError(f"Unknown accelerator fallback: {self.accelerator_fallback!r}")

        if self.num_workers is not None and (isinstance(self.num_workers, bool) or not isinstance(self.num_workers, int)):
            raise ValueError(f"Worker count must be an integer or None, got {self.num_workers!r}")

        if self.num_workers is not None and self.num_workers < 1:
            raise ValueError(f"Worker count {self.num_workers} must be >= 1")

        if isinstance(self.band_rows, bool) or not isinstance(self.band_rows, int):
            raise ValueError(f"Band rows must be an integer, got {self.band_rows!r}")

        if self.band_rows < 1:
            raise ValueError(f"Band rows {self.band_rows} must be >= 1")
