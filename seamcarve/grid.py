"""
Pixel grid container.

A PixelGrid owns a (3, H, W) integer tensor of RGB values. Width is the
number of columns (x), height the number of rows (y). Only width is ever
carved directly; height is handled by transposing.
"""

import numpy as np
import torch
from typing import Sequence, Tuple

from .errors import InvalidDimensionsError, PixelOutOfBoundsError


class PixelGrid:
    """
    Rectangular grid of RGB triples.

    Channels are stored as int64 so that channel differences in the energy
    function never wrap around.
    """

    def __init__(self, pixels: torch.Tensor):
        """
        Args:
            pixels: Tensor of shape (3, H, W) with values in [0, 255]
        """
        if pixels.dim() != 3 or pixels.shape[0] != 3:
            raise InvalidDimensionsError(
                f"Expected pixel tensor of shape (3, H, W), got {tuple(pixels.shape)}")
        if pixels.shape[1] < 1 or pixels.shape[2] < 1:
            raise InvalidDimensionsError(
                f"Grid must be at least 1x1, got {pixels.shape[2]}x{pixels.shape[1]}")
        self.pixels = pixels.to(torch.int64)

    @classmethod
    def from_array(cls, array: np.ndarray, device='cpu'):
        """Build a grid from an (H, W, 3) uint8 array (Pillow layout)."""
        if array.ndim != 3 or array.shape[2] != 3:
            raise InvalidDimensionsError(
                f"Expected array of shape (H, W, 3), got {array.shape}")
        tensor = torch.from_numpy(np.ascontiguousarray(array)).permute(2, 0, 1)
        return cls(tensor.to(device))

    @classmethod
    def uniform(cls, width: int, height: int, rgb: Sequence[int], device='cpu'):
        """Grid of a single colour."""
        color = torch.tensor(list(rgb), dtype=torch.int64, device=device)
        return cls(color.view(3, 1, 1).expand(3, height, width).clone())

    def to_array(self) -> np.ndarray:
        """Return an (H, W, 3) uint8 array."""
        return self.pixels.permute(1, 2, 0).clamp(0, 255).to(torch.uint8).cpu().numpy()

    def width(self) -> int:
        return self.pixels.shape[2]

    def height(self) -> int:
        return self.pixels.shape[1]

    @property
    def device(self) -> torch.device:
        return self.pixels.device

    def _check_bounds(self, x: int, y: int):
        # Negative indices would silently wrap in torch
        if not (0 <= x < self.width() and 0 <= y < self.height()):
            raise PixelOutOfBoundsError(
                f"Pixel ({x}, {y}) outside {self.width()}x{self.height()} grid")

    def get(self, x: int, y: int) -> Tuple[int, int, int]:
        self._check_bounds(x, y)
        r, g, b = self.pixels[:, y, x].tolist()
        return r, g, b

    def set(self, x: int, y: int, rgb: Sequence[int]):
        self._check_bounds(x, y)
        self.pixels[:, y, x] = torch.tensor(list(rgb), dtype=torch.int64,
                                            device=self.pixels.device)

    def transpose(self) -> 'PixelGrid':
        """New grid with width and height swapped: transposed[x][y] = original[y][x]."""
        return PixelGrid(self.pixels.transpose(1, 2).contiguous())

    def clone(self) -> 'PixelGrid':
        return PixelGrid(self.pixels.clone())

    def to(self, device) -> 'PixelGrid':
        return PixelGrid(self.pixels.to(device))

    def equals(self, other: 'PixelGrid') -> bool:
        """Pixel-for-pixel equality."""
        return (self.pixels.shape == other.pixels.shape
                and torch.equal(self.pixels.cpu(), other.pixels.cpu()))

    def __repr__(self):
        return f"PixelGrid(width={self.width()}, height={self.height()})"
