"""
Shared helpers for the torch-based backend.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
import torch


def resolve_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """
    Return the requested device, defaulting to CUDA when it is available.
    """

    if device is None:
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    return torch.device(device)


def ensure_tensor(
    data,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float64,
) -> torch.Tensor:
    """
    Convert input data to a torch tensor on the requested device.
    """

    if isinstance(data, torch.Tensor):
        tensor = data.to(dtype=dtype)
        if device is not None:
            tensor = tensor.to(device)
        return tensor

    if isinstance(data, np.ndarray) and not data.flags.writeable:
        # torch.from_numpy refuses read-only buffers.
        data = data.copy()

    return torch.as_tensor(data, dtype=dtype, device=device)
