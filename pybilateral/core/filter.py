"""
Bilateral filter orchestration.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from pybilateral.core.config import AcceleratorFallback, BilateralConfig, ExecutionMode
from pybilateral.core.image import GrayImage, ImageLike, as_gray_array
from pybilateral.kernel.parallel import run_sequential, run_threaded
from pybilateral.preprocessing.border import pad_reflect101
from pybilateral.weights.tables import build_tables

logger = logging.getLogger(__name__)


class AcceleratorUnavailableError(RuntimeError):
    """Raised when the accelerator is requested but cannot be loaded."""


@dataclass(frozen=True)
class FilterResult:
    """
    Filtered image together with how it was produced.

    ``degraded`` is set whenever the requested mode could not be honoured,
    in which case ``backend`` names what actually ran.
    """

    image: ImageLike
    mode: ExecutionMode
    backend: str
    degraded: bool
    elapsed_ms: float


def _load_accelerator():
    try:
        from pybilateral.torch.bilateral import bilateral_filter_torch
    except Exception as exc:  # torch missing or failing to load
        logger.debug("Torch backend unavailable: %s", exc)
        return None
    return bilateral_filter_torch


class BilateralFilter:
    """
    Edge-preserving bilateral filter for single-channel 8-bit images.

    Pipeline per call:
        1. Parameter and image validation
        2. Reflect-101 border padding
        3. Intensity and spatial weight tables
        4. Kernel over every output pixel (sequential, threaded or accelerator)

    Padded buffers and tables live only for the duration of one call, so a
    single instance may be used from several threads at once.
    """

    def __init__(self, config: Optional[BilateralConfig] = None) -> None:
        self.config = config or BilateralConfig()
        self.config.validate()

        logger.info("Initializing BilateralFilter")
        logger.info("  Diameter: %d", self.config.diameter)
        logger.info("  Sigmas: intensity=%g spatial=%g", self.config.sigma_intensity, self.config.sigma_spatial)
        logger.info("  Mode: %s", self.config.mode.value)

    def filter(self, source: ImageLike) -> ImageLike:
        """
        Filter ``source`` and return a new image of the same shape and type.
        """

        return self.run(source).image

    def run(self, source: ImageLike) -> FilterResult:
        """
        Filter ``source`` and report which backend produced the result.
        """

        self.config.validate()
        img = as_gray_array(source)
        mode = self.config.mode

        logger.info("Filtering image: shape=%s, mode=%s", img.shape, mode.value)
        start = time.perf_counter()

        if mode == ExecutionMode.ACCELERATOR:
            output, backend, degraded = self._run_accelerator(img)
        else:
            output = self._run_cpu(img, mode)
            backend, degraded = mode.value, False

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info("Filtering complete via %s in %0.2f ms", backend, elapsed_ms)

        if isinstance(source, GrayImage):
            output = GrayImage.from_array(output)

        return FilterResult(
            image=output,
            mode=mode,
            backend=backend,
            degraded=degraded,
            elapsed_ms=elapsed_ms,
        )

    def _run_cpu(self, img: np.ndarray, mode: ExecutionMode) -> np.ndarray:
        output = np.zeros(img.shape, dtype=np.uint8)
        if output.size == 0:
            return output

        padded = pad_reflect101(img, self.config.radius)
        tables = build_tables(self.config.diameter, self.config.sigma_intensity, self.config.sigma_spatial)

        if mode == ExecutionMode.THREADED:
            return run_threaded(padded, output, tables, self.config.num_workers)
        return run_sequential(padded, output, tables)

    def _run_accelerator(self, img: np.ndarray):
        accelerated = _load_accelerator()
        if accelerated is not None:
            output = accelerated(
                img,
                diameter=self.config.diameter,
                sigma_intensity=self.config.sigma_intensity,
                sigma_spatial=self.config.sigma_spatial,
                device=self.config.device,
                band_rows=self.config.band_rows,
            )
            return output, "torch", False

        fallback = self.config.accelerator_fallback
        if fallback == AcceleratorFallback.RAISE:
            raise AcceleratorUnavailableError(
                "Accelerator mode requested but the torch backend is not installed"
            )

        if fallback == AcceleratorFallback.CPU:
            logger.warning("Accelerator unavailable: falling back to threaded CPU filtering.")
            return self._run_cpu(img, ExecutionMode.THREADED), ExecutionMode.THREADED.value, True

        logger.warning("Accelerator unavailable: returning the input unfiltered.")
        return img.copy(), "passthrough", True


def bilateral_filter(
    source: ImageLike,
    diameter: int = 9,
    sigma_intensity: float = 70.0,
    sigma_spatial: float = 70.0,
    mode: Union[ExecutionMode, str] = ExecutionMode.SEQUENTIAL,
    **kwargs,
) -> ImageLike:
    """
    Convenience wrapper around :class:`BilateralFilter`.
    """

    config = BilateralConfig(
        diameter=diameter,
        sigma_intensity=sigma_intensity,
        sigma_spatial=sigma_spatial,
        mode=ExecutionMode(mode),
        **kwargs,
    )
    bf = BilateralFilter(config)
    return bf.filter(source)
