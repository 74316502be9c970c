"""
Energy function for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal or duplication.

We use the dual-gradient energy:
E(x, y) = sqrt(Gx(x, y) + Gy(x, y))
where Gx and Gy are the summed squared RGB differences between the
horizontal and vertical neighbour pairs.
"""

import torch

from .errors import InvalidDimensionsError
from .grid import PixelGrid

# Neighbour pairs span two pixels, so each axis needs at least three.
MIN_SIDE = 3


def neighbor_indices(size: int, device='cpu'):
    """
    Clamped 2-wide neighbour window along one axis.

    Interior positions i use (i - 1, i + 1). The first position uses (0, 2)
    and the last uses (size - 3, size - 1), so every pair is two apart.

    Args:
        size: Number of positions along the axis (>= 3)
        device: torch device

    Returns:
        (low, high) index tensors of shape (size,)
    """
    if size < MIN_SIDE:
        raise InvalidDimensionsError(
            f"Energy needs at least {MIN_SIDE} pixels per axis, got {size}")

    positions = torch.arange(size, device=device)
    low = positions - 1
    high = positions + 1
    low[0], high[0] = 0, 2
    low[-1], high[-1] = size - 3, size - 1
    return low, high


def dual_gradient_energy(grid: PixelGrid) -> torch.Tensor:
    """
    Compute dual-gradient energy for every pixel.

    Args:
        grid: PixelGrid at least 3x3

    Returns:
        Energy map (H, W), float64, non-negative
    """
    pixels = grid.pixels
    H, W = grid.height(), grid.width()

    left, right = neighbor_indices(W, device=pixels.device)
    up, down = neighbor_indices(H, device=pixels.device)

    # Sum over channels of squared differences, exact in int64
    grad_x = ((pixels[:, :, left] - pixels[:, :, right]) ** 2).sum(dim=0)
    grad_y = ((pixels[:, up, :] - pixels[:, down, :]) ** 2).sum(dim=0)

    return torch.sqrt((grad_x + grad_y).to(torch.float64))
