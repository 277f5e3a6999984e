"""pybilateral: edge-preserving bilateral filtering for 8-bit grayscale images.

Precomputed Gaussian weight tables, reflect-101 borders and a disk-shaped
neighbourhood, with sequential, thread-parallel and PyTorch backends.
"""

from pybilateral.core.config import AcceleratorFallback, BilateralConfig, ExecutionMode
from pybilateral.core.filter import (
    AcceleratorUnavailableError,
    BilateralFilter,
    FilterResult,
    bilateral_filter,
)
from pybilateral.core.image import GrayImage

__all__ = [
    "AcceleratorFallback",
    "AcceleratorUnavailableError",
    "BilateralConfig",
    "BilateralFilter",
    "ExecutionMode",
    "FilterResult",
    "GrayImage",
    "bilateral_filter",
]

try:  # Optional PyTorch acceleration
    from pybilateral.torch import TorchBilateralFilter, bilateral_filter_torch  # type: ignore

    __all__.extend(["TorchBilateralFilter", "bilateral_filter_torch"])
except Exception:  # pragma: no cover - torch not installed
    TorchBilateralFilter = None  # type: ignore
    bilateral_filter_torch = None  # type: ignore

__version__ = "1.0.0"
