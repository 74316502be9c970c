"""
Content-aware image resizing by seam carving.

Repeatedly removes or duplicates the lowest-energy connected path of
pixels until an image reaches the requested width and height.
"""

__version__ = "0.1.0"

from .grid import PixelGrid
from .energy import dual_gradient_energy
from .seam import cumulative_cost, find_seam, apply_seam, remove_seam, insert_seam
from .carving import ResizePhase, check_dimensions, resize, resize_width, seam_step
from .config import CarveConfig
from .errors import (SeamCarvingError, InvalidDimensionsError, DegenerateResizeError,
                     PixelOutOfBoundsError)

__all__ = [
    'PixelGrid',
    'dual_gradient_energy',
    'cumulative_cost',
    'find_seam',
    'apply_seam',
    'remove_seam',
    'insert_seam',
    'ResizePhase',
    'check_dimensions',
    'resize',
    'resize_width',
    'seam_step',
    'CarveConfig',
    'SeamCarvingError',
    'InvalidDimensionsError',
    'DegenerateResizeError',
    'PixelOutOfBoundsError',
]
