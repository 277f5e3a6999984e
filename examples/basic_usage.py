"""
Basic usage examples for pybilateral.
"""

from __future__ import annotations

import numpy as np

from pybilateral import (
    AcceleratorFallback,
    BilateralConfig,
    BilateralFilter,
    ExecutionMode,
    GrayImage,
    bilateral_filter,
)


def _noisy_step(rows: int = 512, cols: int = 512) -> np.ndarray:
    img = np.full((rows, cols), 40.0)
    img[:, cols // 2 :] = 200.0
    img += np.random.normal(0.0, 12.0, img.shape)
    return np.clip(img, 0, 255).astype(np.uint8)


def example_simple() -> np.ndarray:
    """Filter with the default parameters."""

    img = _noisy_step()
    out = bilateral_filter(img)
    print(f"Simple example: std {img.std():0.2f} -> {out.std():0.2f}")
    return out


def example_threaded() -> np.ndarray:
    """Spread rows over a worker pool."""

    img = _noisy_step()
    config = BilateralConfig(diameter=7, sigma_intensity=30.0, sigma_spatial=3.0, mode=ExecutionMode.THREADED)
    out = BilateralFilter(config).filter(img)
    print(f"Threaded example output range: [{out.min()}, {out.max()}]")
    return out


def example_accelerator() -> np.ndarray:
    """Use the torch backend, running on the CPU pool if torch is missing."""

    img = _noisy_step()
    config = BilateralConfig(mode=ExecutionMode.ACCELERATOR, accelerator_fallback=AcceleratorFallback.CPU)
    result = BilateralFilter(config).run(img)
    print(f"Accelerator example ran on {result.backend} (degraded={result.degraded}) in {result.elapsed_ms:0.1f} ms")
    return result.image


def example_strided_buffer() -> GrayImage:
    """Filter a raw buffer whose rows are padded to a 128-byte stride."""

    img = _noisy_step(100, 90)
    gray = GrayImage.from_array(img, stride=128)
    out = bilateral_filter(gray, diameter=5)
    print(f"Strided example: {out.rows}x{out.cols}, stride {out.stride}")
    return out


if __name__ == "__main__":
    print("Running pybilateral basic examples...")
    example_simple()
    example_threaded()
    example_accelerator()
    example_strided_buffer()
