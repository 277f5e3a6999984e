"""Tests for reflect-101 border padding."""

from __future__ import annotations

import numpy as np
import pytest

from pybilateral.preprocessing.border import pad_reflect101, reflect101_index


def test_matches_numpy_reflect() -> None:
    rng = np.random.default_rng(0)
    img = rng.integers(0, 256, size=(7, 5), dtype=np.uint8)
    for radius in range(0, 5):
        padded = pad_reflect101(img, radius)
        np.testing.assert_array_equal(padded, np.pad(img, radius, mode="reflect"))


def test_edge_sample_is_not_repeated() -> None:
    img = np.array([[1, 2, 3]], dtype=np.uint8)
    padded = pad_reflect101(img, 2)
    assert padded.shape == (5, 7)
    assert padded[2].tolist() == [3, 2, 1, 2, 3, 2, 1]


def test_reflect_index_is_periodic() -> None:
    idx = reflect101_index(np.arange(-5, 8), 3)
    assert idx.tolist() == [1, 0, 1, 2, 1, 0, 1, 2, 1, 0, 1, 2, 1]


def test_single_pixel_replicates() -> None:
    img = np.array([[42]], dtype=np.uint8)
    padded = pad_reflect101(img, 3)
    assert padded.shape == (7, 7)
    assert np.all(padded == 42)


def test_source_untouched_and_contiguous() -> None:
    rng = np.random.default_rng(1)
    img = rng.integers(0, 256, size=(6, 8), dtype=np.uint8)[:, ::2]
    before = img.copy()
    padded = pad_reflect101(img, 2)
    np.testing.assert_array_equal(img, before)
    assert padded.flags.c_contiguous
    assert padded.dtype == np.uint8
    np.testing.assert_array_equal(padded[2:-2, 2:-2], img)


def test_negative_radius_raises() -> None:
    with pytest.raises(ValueError):
        pad_reflect101(np.zeros((3, 3), dtype=np.uint8), -1)
