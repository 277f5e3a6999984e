"""Tests for configuration validation and image containers."""

from __future__ import annotations

import numpy as np
import pytest

from pybilateral import AcceleratorFallback, BilateralConfig, ExecutionMode, GrayImage


def test_default_config() -> None:
    config = BilateralConfig()
    config.validate()
    assert config.diameter == 9
    assert config.radius == 4
    assert config.sigma_intensity == 70.0
    assert config.sigma_spatial == 70.0
    assert config.mode == ExecutionMode.SEQUENTIAL
    assert config.accelerator_fallback == AcceleratorFallback.PASSTHROUGH


def test_valid_config() -> None:
    config = BilateralConfig(diameter=1, sigma_intensity=0.5, sigma_spatial=1e-3, num_workers=3)
    config.validate()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"diameter": 2},
        {"diameter": 0},
        {"diameter": 3.0},
        {"diameter": True},
        {"sigma_spatial": float("inf")},
        {"num_workers": 0},
        {"band_rows": 0},
        {"num_workers": 2.0},
        {"num_workers": True},
        {"band_rows": 8.0},
        {"band_rows": False},
        {"mode": "threaded"},
        {"accelerator_fallback": "raise"},
    ],
)
def test_invalid_config(kwargs) -> None:
    config = BilateralConfig(**kwargs)
    with pytest.raises(ValueError):
        config.validate()


def test_gray_image_view_respects_stride() -> None:
    data = bytes(range(12))
    gray = GrayImage(rows=3, cols=2, stride=4, data=data)
    view = gray.as_array()
    assert view.tolist() == [[0, 1], [4, 5], [8, 9]]
    assert not view.flags.writeable


def test_gray_image_from_array_pads_rows() -> None:
    img = np.arange(6, dtype=np.uint8).reshape(2, 3)
    gray = GrayImage.from_array(img, stride=8)
    assert gray.stride == 8
    assert len(gray.data) == 16
    np.testing.assert_array_equal(gray.as_array(), img)


def test_gray_image_rejects_bad_geometry() -> None:
    with pytest.raises(ValueError):
        GrayImage(rows=2, cols=4, stride=3, data=bytes(12))
    with pytest.raises(ValueError):
        GrayImage(rows=4, cols=4, stride=4, data=bytes(10))
    with pytest.raises(ValueError):
        GrayImage.from_array(np.zeros((2, 4), dtype=np.uint8), stride=2)


def test_gray_image_rejects_non_contiguous_buffer() -> None:
    strided = np.zeros((4, 16), dtype=np.uint8)[:, ::2]
    with pytest.raises(ValueError):
        GrayImage(rows=4, cols=8, stride=8, data=strided)
