"""
Single-channel 8-bit image containers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True)
class GrayImage:
    """
    Row-major 8-bit grayscale buffer with an explicit row stride.

    ``stride`` is the number of bytes between the starts of consecutive rows
    and may exceed ``cols`` when rows are padded for alignment.
    """

    rows: int
    cols: int
    stride: int
    data: Union[bytes, bytearray, memoryview, np.ndarray]

    def __post_init__(self) -> None:
        if self.rows < 0 or self.cols < 0:
            raise ValueError(f"Invalid image size {self.rows}x{self.cols}")
        if self.stride < self.cols:
            raise ValueError(f"Stride {self.stride} is smaller than the row width {self.cols}")

        view = memoryview(self.data)
        if not view.c_contiguous:
            raise ValueError("Image buffer must be C-contiguous")

        needed = self.rows * self.stride if self.rows else 0
        available = view.nbytes
        if available < needed:
            raise ValueError(
                f"Buffer holds {available} bytes, {self.rows} rows of stride {self.stride} need {needed}"
            )

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def as_array(self) -> np.ndarray:
        """
        Return a read-only ``rows x cols`` uint8 view of the buffer (no copy).
        """

        flat = np.frombuffer(self.data, dtype=np.uint8)
        if self.rows == 0 or self.cols == 0:
            return np.zeros((self.rows, self.cols), dtype=np.uint8)

        view = flat[: self.rows * self.stride].reshape(self.rows, self.stride)[:, : self.cols]
        view.flags.writeable = False
        return view

    @classmethod
    def from_array(cls, img: np.ndarray, stride: int | None = None) -> "GrayImage":
        """
        Pack a 2-D uint8 array into a new buffer, optionally with padded rows.
        """

        img = as_gray_array(img)
        rows, cols = img.shape
        stride = cols if stride is None else stride
        if stride < cols:
            raise ValueError(f"Stride {stride} is smaller than the row width {cols}")

        buffer = np.zeros((rows, stride), dtype=np.uint8)
        buffer[:, :cols] = img
        return cls(rows=rows, cols=cols, stride=stride, data=buffer.tobytes())


ImageLike = Union[np.ndarray, GrayImage]


def as_gray_array(img: ImageLike) -> np.ndarray:
    """
    Return ``img`` as a 2-D uint8 array, validating its layout.
    """

    if isinstance(img, GrayImage):
        return img.as_array()

    if not isinstance(img, np.ndarray):
        raise ValueError(f"Expected numpy array or GrayImage, got {type(img).__name__}")

    if img.ndim != 2:
        raise ValueError(f"Expected single-channel HxW image, got shape {img.shape}")

    if img.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got dtype {img.dtype}")

    return img
