"""Image loading and saving."""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .grid import PixelGrid

logger = logging.getLogger(__name__)

# Output must round-trip pixel-for-pixel
LOSSLESS_FORMATS = ('png', 'bmp', 'tiff')


def load_grid(path: Union[str, Path], device='cpu') -> PixelGrid:
    """Load an image file as a PixelGrid. Any alpha channel is dropped."""
    img = Image.open(path).convert('RGB')
    img_array = np.array(img, dtype=np.uint8)
    logger.debug("Loaded %s (%dx%d)", path, img.width, img.height)
    return PixelGrid.from_array(img_array, device=device)


def save_grid(grid: PixelGrid, path: Union[str, Path], fmt: str = 'png'):
    """Save a PixelGrid losslessly, creating parent directories.

    Raises:
        ValueError: fmt is not one of LOSSLESS_FORMATS
    """
    if fmt.lower() not in LOSSLESS_FORMATS:
        raise ValueError(
            f"Output format must be lossless ({', '.join(LOSSLESS_FORMATS)}), got {fmt!r}")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.fromarray(grid.to_array())
    img.save(path, format=fmt.upper())
    logger.debug("Saved %s (%dx%d)", path, grid.width(), grid.height())
