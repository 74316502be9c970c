"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.grid import PixelGrid


@pytest.fixture
def random_grid():
    """Seeded 8x6 grid of random colours."""
    return make_random_grid(8, 6, seed=42)


def make_random_grid(W, H, seed=0):
    generator = torch.Generator().manual_seed(seed)
    return PixelGrid(torch.randint(0, 256, (3, H, W), generator=generator))


def make_indexed_grid(W, H):
    """Red encodes the column, green the row: pixel (x, y) = (x, y, 0)."""
    cols = torch.arange(W).unsqueeze(0).expand(H, W)
    rows = torch.arange(H).unsqueeze(1).expand(H, W)
    return PixelGrid(torch.stack([cols, rows, torch.zeros(H, W, dtype=torch.long)]))


def make_split_grid(W, H, split, left_rgb=(0, 0, 0), right_rgb=(255, 255, 255)):
    """Columns [0, split) in one colour, the rest in another."""
    grid = PixelGrid.uniform(W, H, right_rgb)
    grid.pixels[:, :, :split] = torch.tensor(left_rgb).view(3, 1, 1)
    return grid


def column_sources(grid, row):
    """Red channel of a row - the source column for make_indexed_grid pixels."""
    return grid.pixels[0, row].tolist()
