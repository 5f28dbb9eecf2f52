"""Horizontal flipping of square sprites and 4-direction RSI sprite sheets.

Modules:
    - mapping: DirectionMode, output → source coordinate mappers, error types
    - transform: transform_image() driver (validation + optional row-band threads)
    - pipeline: flip_file() decode → transform → encode with output naming

Workflow:
    1. Decode sprite to an (H, W, 4) RGBA grid (utils.fs)
    2. Validate shape for the direction mode (square; even side for 4 dirs)
    3. Gather every output pixel from its mapped source pixel
    4. Atomically write "<stem>-flipped.png"
"""

from .mapping import (
    DirectionMode,
    FlipError,
    InvalidModeError,
    Quadrant,
    ShapeError,
    get_mapper,
    map_quadrant4,
    map_single,
    quadrant_of,
)
from .pipeline import FlipResult, build_output_path, flip_file
from .transform import transform_image

__all__ = [
    'DirectionMode',
    'FlipError',
    'FlipResult',
    'InvalidModeError',
    'Quadrant',
    'ShapeError',
    'build_output_path',
    'flip_file',
    'get_mapper',
    'map_quadrant4',
    'map_single',
    'quadrant_of',
    'transform_image',
]
