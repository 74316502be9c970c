"""Exceptions raised by the seam carving core."""


class SeamCarvingError(Exception):
    """Base class for all seam carving failures."""


class InvalidDimensionsError(SeamCarvingError, ValueError):
    """Target size is non-positive, or a grid or seam has an unusable shape."""


class DegenerateResizeError(SeamCarvingError, ValueError):
    """Target size cannot be reached one seam at a time."""


class PixelOutOfBoundsError(SeamCarvingError, IndexError):
    """Pixel access outside the grid. Indicates a programming error."""
