"""
Time every execution mode on synthetic images and report speedups.

The accelerator mode is skipped when the torch backend cannot be loaded, so
no timing ever comes from an unfiltered pass-through.
"""

from __future__ import annotations

import logging

import numpy as np

from pybilateral import (
    AcceleratorFallback,
    AcceleratorUnavailableError,
    BilateralConfig,
    BilateralFilter,
    ExecutionMode,
)


def run_benchmark(sizes=((256, 256), (512, 512), (1024, 768)), diameter: int = 9) -> dict:
    """Return mean elapsed milliseconds per mode that actually ran."""

    rng = np.random.default_rng(42)
    times = {mode: [] for mode in ExecutionMode}

    for rows, cols in sizes:
        img = rng.integers(0, 256, size=(rows, cols), dtype=np.uint8)
        print(f"-- Image processed: {rows}x{cols}")

        outputs = {}
        for mode in ExecutionMode:
            config = BilateralConfig(
                diameter=diameter,
                mode=mode,
                accelerator_fallback=AcceleratorFallback.RAISE,
            )
            try:
                result = BilateralFilter(config).run(img)
            except AcceleratorUnavailableError:
                print(f"  {mode.value:<12} skipped (torch backend unavailable)")
                continue
            times[mode].append(result.elapsed_ms)
            outputs[mode] = result.image
            print(f"  {mode.value:<12} {result.elapsed_ms:10.2f} ms  ({result.backend})")

        equal = np.array_equal(outputs[ExecutionMode.SEQUENTIAL], outputs[ExecutionMode.THREADED])
        print("  CHECK: OK" if equal else "  CHECK: FAILED")

    means = {mode: float(np.mean(values)) for mode, values in times.items() if values}

    print("\n-- Average analysis:")
    for mode, mean in means.items():
        print(f"  {mode.value:<12} mean elapsed time: {mean:0.2f} ms")

    print("\n-- Speedup analysis:")
    sequential = means[ExecutionMode.SEQUENTIAL]
    for mode in (ExecutionMode.THREADED, ExecutionMode.ACCELERATOR):
        if mode in means:
            print(f"  sequential / {mode.value:<12} speedup: {sequential / means[mode]:0.2f}x")

    return means


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    run_benchmark()
