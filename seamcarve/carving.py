"""
High-level resize functions that orchestrate the seam carving workflow.

Width is the only axis carved directly. Height is resized by transposing,
carving the width of the transposed grid, and transposing back.
"""

import enum
import logging
from typing import Callable, Optional, Tuple

import torch

from .config import CarveConfig
from .energy import MIN_SIDE, dual_gradient_energy
from .errors import DegenerateResizeError, InvalidDimensionsError
from .grid import PixelGrid
from .seam import apply_seam, cumulative_cost, find_seam

logger = logging.getLogger(__name__)


class ResizePhase(enum.Enum):
    RESIZING_WIDTH = 'resizing_width'
    TRANSPOSED_FOR_HEIGHT = 'transposed_for_height'
    DONE = 'done'


ProgressCallback = Callable[[ResizePhase, int, int], None]


def check_dimensions(width: int, height: int, target_width: int, target_height: int):
    """
    Reject resizes that cannot run to completion, before any work is done.

    Every seam step computes energy on the grid it shrinks or grows, and
    energy needs at least MIN_SIDE pixels on both axes. Shrinking stops one
    step after the last 3-wide grid, so targets of 2 are still reachable.

    Raises:
        InvalidDimensionsError: non-positive target or input smaller than 3x3
        DegenerateResizeError: positive target that single seams cannot reach
    """
    if target_width <= 0 or target_height <= 0:
        raise InvalidDimensionsError(
            f"Target size must be positive, got {target_width}x{target_height}")
    if width < MIN_SIDE or height < MIN_SIDE:
        raise InvalidDimensionsError(
            f"Input must be at least {MIN_SIDE}x{MIN_SIDE}, got {width}x{height}")

    if target_width < width and target_width < MIN_SIDE - 1:
        raise DegenerateResizeError(
            f"Cannot shrink width from {width} to {target_width}")
    if target_height < height and target_height < MIN_SIDE - 1:
        raise DegenerateResizeError(
            f"Cannot shrink height from {height} to {target_height}")
    # The transposed grid is target_width rows tall during the height pass
    if target_height != height and target_width < MIN_SIDE:
        raise DegenerateResizeError(
            f"Cannot change height with a target width of {target_width}; "
            f"need at least {MIN_SIDE}")


def seam_step(grid: PixelGrid, grow: bool) -> Tuple[PixelGrid, torch.Tensor, float]:
    """
    One full iteration: energy -> cost -> seam -> shift.

    Everything is recomputed from the current grid.

    Returns:
        (new grid, seam, total cost of the seam)
    """
    energy = dual_gradient_energy(grid)
    cost = cumulative_cost(energy)
    seam = find_seam(cost)
    seam_cost = cost[-1, seam[-1]].item()
    return apply_seam(grid, seam, grow), seam, seam_cost


def resize_width(grid: PixelGrid, target_width: int,
                 phase: ResizePhase = ResizePhase.RESIZING_WIDTH,
                 progress: Optional[ProgressCallback] = None,
                 log_every: int = 0) -> PixelGrid:
    """
    Add or remove vertical seams until the grid is target_width wide.

    The direction is decided once from the starting width.

    Args:
        grid: Grid to resize (not modified)
        target_width: Desired width
        phase: Phase reported to the progress callback
        progress: Optional callback progress(phase, done, total)
        log_every: Emit an INFO line every n seams (0 or less = never)

    Returns:
        Grid with width == target_width
    """
    start_width = grid.width()
    if start_width == target_width:
        return grid

    grow = target_width > start_width
    total = abs(target_width - start_width)
    done = 0

    while grid.width() != target_width:
        grid, seam, seam_cost = seam_step(grid, grow)
        done += 1
        logger.debug("%s seam %d/%d: width=%d bottom column=%d cost=%.3f",
                     'inserted' if grow else 'removed', done, total,
                     grid.width(), seam[-1].item(), seam_cost)
        if log_every > 0 and done % log_every == 0:
            logger.info("%d/%d seams", done, total)
        if progress is not None:
            progress(phase, done, total)

    return grid


def resize(grid: PixelGrid, target_width: int, target_height: int,
           progress: Optional[ProgressCallback] = None,
           config: Optional[CarveConfig] = None) -> PixelGrid:
    """
    Content-aware resize to target_width x target_height.

    Width first, then height via transpose. Each axis is independently
    grown or shrunk; an axis already at its target is left untouched.

    Args:
        grid: Input grid, at least 3x3 (not modified)
        target_width: Desired width
        target_height: Desired height
        progress: Optional callback progress(phase, done, total)
        config: Run configuration (device, log cadence)

    Returns:
        New PixelGrid of size target_width x target_height
    """
    if config is None:
        config = CarveConfig()

    check_dimensions(grid.width(), grid.height(), target_width, target_height)
    grid = grid.to(config.device)

    phase = ResizePhase.RESIZING_WIDTH
    logger.info("Working on new width: %d -> %d", grid.width(), target_width)
    grid = resize_width(grid, target_width, phase, progress, config.log_every)

    phase = ResizePhase.TRANSPOSED_FOR_HEIGHT
    logger.info("Working on new height: %d -> %d", grid.height(), target_height)
    transposed = resize_width(grid.transpose(), target_height, phase, progress,
                              config.log_every)
    result = transposed.transpose()

    phase = ResizePhase.DONE
    if progress is not None:
        progress(phase, 0, 0)
    logger.info("Done: %dx%d", result.width(), result.height())
    return result
