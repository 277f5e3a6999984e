"""
Tests for the torch backend. Skipped automatically when torch is unavailable.
"""

from __future__ import annotations

import numpy as np
import pytest

torch = pytest.importorskip("torch")

from pybilateral import BilateralConfig, BilateralFilter, ExecutionMode, bilateral_filter  # noqa: E402
from pybilateral.torch import TorchBilateralFilter, bilateral_filter_torch  # noqa: E402


def test_torch_constant_image() -> None:
    img = np.full((5, 5), 100, dtype=np.uint8)
    result = bilateral_filter_torch(img, diameter=3, sigma_intensity=70.0, sigma_spatial=70.0, device="cpu")
    assert result.dtype == np.uint8
    assert np.all(result == 100)


def test_torch_matches_cpu_kernel() -> None:
    rng = np.random.default_rng(0)
    img = rng.integers(0, 256, size=(45, 38), dtype=np.uint8)
    expected = bilateral_filter(img, diameter=9, sigma_intensity=30.0, sigma_spatial=5.0)

    bf = TorchBilateralFilter(diameter=9, sigma_intensity=30.0, sigma_spatial=5.0, device="cpu", band_rows=7)
    result = bf.filter(img)

    assert result.shape == img.shape
    assert np.abs(result.astype(int) - expected.astype(int)).max() <= 1


def test_torch_single_pixel_and_diameter_one() -> None:
    img = np.array([[77]], dtype=np.uint8)
    assert bilateral_filter_torch(img, diameter=5, device="cpu").tolist() == [[77]]

    rng = np.random.default_rng(1)
    noisy = rng.integers(0, 256, size=(6, 9), dtype=np.uint8)
    np.testing.assert_array_equal(bilateral_filter_torch(noisy, diameter=1, device="cpu"), noisy)


def test_accelerator_mode_uses_torch() -> None:
    rng = np.random.default_rng(2)
    img = rng.integers(0, 256, size=(16, 16), dtype=np.uint8)
    config = BilateralConfig(diameter=5, mode=ExecutionMode.ACCELERATOR, device="cpu")

    result = BilateralFilter(config).run(img)

    assert result.backend == "torch"
    assert not result.degraded
    assert result.image.shape == img.shape
