"""
Seam computation and application.

1. cumulative_cost: top-to-bottom dynamic program over the energy map
2. find_seam: backtrack the cheapest connected path from the bottom row
3. apply_seam: shift columns around the seam to shrink or grow by one
"""

import torch

from .errors import InvalidDimensionsError
from .grid import PixelGrid


def cumulative_cost(energy: torch.Tensor) -> torch.Tensor:
    """
    Minimum total energy of any connected path from row 0 to each pixel.

    M[0] = E[0]
    M[i, j] = E[i, j] + min(M[i-1, j-1], M[i-1, j], M[i-1, j+1])
    with out-of-range parents ignored at the first and last columns.

    Args:
        energy: Energy map (H, W)

    Returns:
        Cost matrix (H, W), same dtype as energy
    """
    H, W = energy.shape
    M = torch.empty_like(energy)
    M[0] = energy[0]

    for i in range(1, H):
        M_prev = M[i - 1]
        # Missing parents at the borders never win the min
        M_left = torch.full((W,), float('inf'), device=energy.device, dtype=energy.dtype)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), float('inf'), device=energy.device, dtype=energy.dtype)
        M_right[:-1] = M_prev[1:]

        M[i] = energy[i] + torch.min(torch.min(M_left, M_prev), M_right)

    return M


def find_seam(cost: torch.Tensor) -> torch.Tensor:
    """
    Backtrack the minimum-cost vertical seam from a cost matrix.

    The bottom row picks the left-most minimum. Moving up, the seam goes
    straight unless the upper-left parent is strictly cheaper, and then
    switches to the upper-right parent only if that is strictly cheaper
    than the current pick. Equal costs therefore resolve as
    straight > left > right.

    Args:
        cost: Cost matrix (H, W) from cumulative_cost

    Returns:
        Seam indices (H,) with column index per row
    """
    rows = cost.tolist()
    H, W = len(rows), len(rows[0])
    seam = [0] * H

    last = rows[-1]
    # min() keeps the first of equal keys
    seam[-1] = min(range(W), key=last.__getitem__)

    for i in range(H - 2, -1, -1):
        prev = seam[i + 1]
        row = rows[i]
        choice = prev
        if prev > 0 and row[prev - 1] < row[choice]:
            choice = prev - 1
        if prev < W - 1 and row[prev + 1] < row[choice]:
            choice = prev + 1
        seam[i] = choice

    return torch.tensor(seam, dtype=torch.long, device=cost.device)


def validate_seam(seam: torch.Tensor, height: int, width: int):
    """Raise InvalidDimensionsError unless seam is a connected path through an H x W grid."""
    if seam.dim() != 1 or seam.shape[0] != height:
        raise InvalidDimensionsError(
            f"Seam of shape {tuple(seam.shape)} does not match grid height {height}")
    if seam.numel() == 0:
        return
    if seam.min().item() < 0 or seam.max().item() > width - 1:
        raise InvalidDimensionsError(f"Seam leaves the columns [0, {width - 1}]")
    if seam.numel() > 1 and (seam[1:] - seam[:-1]).abs().max().item() > 1:
        raise InvalidDimensionsError("Seam jumps more than one column between rows")


def apply_seam(grid: PixelGrid, seam: torch.Tensor, grow: bool) -> PixelGrid:
    """
    Shrink or grow a grid by one column around a seam.

    Output column x reads source column x while x <= seam[y], otherwise
    x + 1 when shrinking and x - 1 when growing. Shrinking therefore drops
    the column right after the seam (the seam column itself is kept), and
    growing writes the seam column twice.

    Args:
        grid: Source grid
        seam: Column index per row (H,)
        grow: True to insert a column, False to remove one

    Returns:
        New PixelGrid of width W + 1 (grow) or W - 1 (shrink)
    """
    H, W = grid.height(), grid.width()
    validate_seam(seam, H, W)

    if grow:
        new_W, shift = W + 1, -1
    else:
        if W < 2:
            raise InvalidDimensionsError("Cannot remove a seam from a 1-pixel-wide grid")
        new_W, shift = W - 1, 1

    device = grid.device
    cols = torch.arange(new_W, device=device).unsqueeze(0).expand(H, new_W)
    seam_cols = seam.to(device).view(H, 1)
    source = torch.where(cols <= seam_cols, cols, cols + shift)

    pixels = grid.pixels.gather(2, source.unsqueeze(0).expand(3, H, new_W))
    return PixelGrid(pixels)


def remove_seam(grid: PixelGrid, seam: torch.Tensor) -> PixelGrid:
    """Shrink the grid by one column (see apply_seam)."""
    return apply_seam(grid, seam, grow=False)


def insert_seam(grid: PixelGrid, seam: torch.Tensor) -> PixelGrid:
    """Grow the grid by one column (see apply_seam)."""
    return apply_seam(grid, seam, grow=True)
