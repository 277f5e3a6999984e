"""
GPU-accelerated bilateral filtering backed by PyTorch.
"""

from pybilateral.torch.bilateral import TorchBilateralFilter, bilateral_filter_torch

__all__ = ["TorchBilateralFilter", "bilateral_filter_torch"]
