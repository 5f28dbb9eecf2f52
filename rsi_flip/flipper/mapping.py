"""Output → source coordinate mapping for horizontal sprite flips.

Two mappers, both pure functions of (width, height, x, y):
    - map_single: mirror the whole image across its vertical center axis
    - map_quadrant4: treat the image as a 2×2 RSI sprite sheet

Quadrant layout (hw = width // 2, hh = height // 2):

    +-------+-------+
    | North | South |   y < hh
    +-------+-------+
    | East  | West  |   y >= hh
    +-------+-------+
     x < hw  x >= hw

North and South are mirrored inside their own half-width band. East and West
are mirrored across the full width, which also swaps the two facings: the
left-facing sprite becomes the right-facing one and vice versa.

y is never changed by either mapper.

All coordinates are pixels, origin at the top-left, +y down.
"""

import numbers
from enum import Enum
from typing import Callable, Tuple

Coord = Tuple[int, int]
Mapper = Callable[[int, int, int, int], Coord]


class FlipError(ValueError):
    """Base class for invalid flip inputs (bad shape or direction mode)."""


class ShapeError(FlipError):
    """Raised when image dimensions don't fit the direction mode."""


class InvalidModeError(FlipError):
    """Raised when a direction mode is not SINGLE (1) or QUADRANT4 (4)."""


class DirectionMode(Enum):
    """Direction count of an RSI state."""
    SINGLE = 1
    QUADRANT4 = 4

    @classmethod
    def coerce(cls, value) -> "DirectionMode":
        """Accept a DirectionMode or its direction count (1 or 4)."""
        if isinstance(value, cls):
            return value
        # bool is Integral too
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidModeError(f"Directions must be 1 or 4, got {value!r}")


class Quadrant(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


def quadrant_of(width: int, height: int, x: int, y: int) -> Quadrant:
    """Name the sprite-sheet quadrant containing (x, y)."""
    hw = width // 2
    hh = height // 2
    if y < hh:
        return Quadrant.NORTH if x < hw else Quadrant.SOUTH
    return Quadrant.EAST if x < hw else Quadrant.WEST


def map_single(width: int, height: int, x: int, y: int) -> Coord:
    """Mirror across the vertical center axis. Self-inverse."""
    return width - x - 1, y


def map_quadrant4(width: int, height: int, x: int, y: int) -> Coord:
    """Flip a four-direction sprite sheet.

    Parameters
    ----------
    width, height : int
        Image size; must be square with an even side
    x, y : int
        Output pixel coordinate

    Returns
    -------
    Coord
        Source pixel coordinate (x', y) with 0 <= x' < width

    Notes
    -----
    East and West share one formula. Because their output columns are
    disjoint (x < hw vs x >= hw), mirroring across the full width reads East
    output pixels from the West source quadrant and the other way round.
    """
    hw = width // 2
    hh = height // 2

    if x < hw and y < hh:
        # North
        src_x = hw - (x + 1)
    elif x >= hw and y < hh:
        # South
        src_x = width - ((x - hw) + 1)
    elif x < hw and y >= hh:
        # East
        src_x = width - (x + 1)
    else:
        # West
        src_x = width - (x + 1)

    return src_x, y


_MAPPERS = {
    DirectionMode.SINGLE: map_single,
    DirectionMode.QUADRANT4: map_quadrant4,
}


def get_mapper(mode) -> Mapper:
    """Resolve the mapper for a direction mode (DirectionMode, 1 or 4).

    Raises
    ------
    InvalidModeError
        If mode is not a recognised direction mode
    """
    return _MAPPERS[DirectionMode.coerce(mode)]
