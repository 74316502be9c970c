"""
Command-line entry point.

    seamcarve -in photo.jpg -out small.png --width 400 --height 300

Anything not given on the command line is asked for interactively.
"""

import argparse
import logging
import sys
import time
from typing import Callable, Optional

import torch
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from .carving import ResizePhase, resize
from .config import CarveConfig
from .errors import SeamCarvingError
from .image_io import LOSSLESS_FORMATS, load_grid, save_grid

logger = logging.getLogger('seamcarve')
console = Console()

# Defaults come from CarveConfig - single source of truth
_DEFAULTS = CarveConfig()

_PHASE_LABELS = {
    ResizePhase.RESIZING_WIDTH: 'width',
    ResizePhase.TRANSPOSED_FOR_HEIGHT: 'height',
}


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',
        datefmt='[%X]',
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def _check_device(name: str) -> torch.device:
    """Parse a torch device name, failing early if it cannot be used here."""
    device = torch.device(name)
    if device.type == 'cuda' and not torch.cuda.is_available():
        raise RuntimeError(f"Device {name!r} requested but CUDA is not available")
    return device


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description='Content-aware image resizing by seam carving.',
    )
    parser.add_argument('-in', '--input', dest='input', help='Source image')
    parser.add_argument('-out', '--output', dest='output', help='Destination image')
    parser.add_argument('--width', type=int, help='Target width in pixels')
    parser.add_argument('--height', type=int, help='Target height in pixels')
    parser.add_argument('--device', default=_DEFAULTS.device, help='torch device')
    parser.add_argument('--format', dest='output_format', default=_DEFAULTS.output_format,
                        choices=LOSSLESS_FORMATS, help='Output image format (lossless)')
    parser.add_argument('--log-every', type=_non_negative_int, default=_DEFAULTS.log_every,
                        help='Log progress every n seams (0 = never)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def _ask(message: str) -> str:
    return input(f"{message}\n").strip()


def _ask_int(parser: argparse.ArgumentParser, message: str) -> int:
    answer = _ask(message)
    try:
        return int(answer)
    except ValueError:
        parser.error(f"expected an integer, got {answer!r}")


def _make_progress_callback(progress: Progress) -> Callable[[ResizePhase, int, int], None]:
    tasks = {}

    def update(phase: ResizePhase, done: int, total: int):
        if phase not in _PHASE_LABELS:
            return
        if phase not in tasks:
            tasks[phase] = progress.add_task(f"Carving {_PHASE_LABELS[phase]}", total=total)
        progress.update(tasks[phase], completed=done)

    return update


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    input_path = args.input or _ask("Enter file path:")
    output_path = args.output or _ask("Enter output file path:")

    cfg = CarveConfig(
        device=args.device,
        output_format=args.output_format,
        log_every=args.log_every,
    )

    try:
        _check_device(cfg.device)
    except RuntimeError as exc:
        logger.error("Invalid device %s: %s", cfg.device, exc)
        return 1

    try:
        grid = load_grid(input_path, device=cfg.device)
    except OSError as exc:
        logger.error("Cannot read %s: %s", input_path, exc)
        return 1
    except RuntimeError as exc:
        logger.error("Cannot move %s to %s: %s", input_path, cfg.device, exc)
        return 1

    console.print(f"Your image is {grid.width()} width and {grid.height()} height.")
    width = args.width if args.width is not None else _ask_int(
        parser, "Enter desired width (digits only!):")
    height = args.height if args.height is not None else _ask_int(
        parser, "Enter desired height (digits only!):")

    t_start = time.perf_counter()
    try:
        if console.is_terminal:
            with Progress(TextColumn('{task.description}'), BarColumn(),
                          MofNCompleteColumn(), console=console) as progress:
                result = resize(grid, width, height,
                                progress=_make_progress_callback(progress), config=cfg)
        else:
            result = resize(grid, width, height, config=cfg)
    except SeamCarvingError as exc:
        logger.error("%s", exc)
        return 1

    try:
        save_grid(result, output_path, fmt=cfg.output_format)
    except (OSError, ValueError) as exc:
        logger.error("Cannot write %s: %s", output_path, exc)
        return 1

    elapsed = time.perf_counter() - t_start
    console.print(
        f"[green]✓[/green] Saved to {output_path}  "
        f"[dim]{result.width()}x{result.height()}  time={elapsed:.1f}s[/dim]"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
