"""Centralised configuration via a frozen dataclass."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CarveConfig:
    """Tuneable parameters for a resize run.

    Attributes:
        device:         torch device the grid lives on during carving.
        output_format:  Image format for saved files (must be lossless).
        log_every:      Emit an INFO progress line every n seams (0 = never).
    """

    device: str = 'cpu'
    output_format: str = 'png'
    log_every: int = 50

