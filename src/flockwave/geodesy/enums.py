from __future__ import annotations

from enum import Enum

__all__ = ("Direction",)


_opposites: dict[Direction, Direction] = {}


class Direction(Enum):
    """Enum representing the four directions in which a UTM grid may have a
    neighbor.
    """

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def is_horizontal(self) -> bool:
        """Whether the direction points along a parallel."""
        return self is Direction.EAST or self is Direction.WEST

    @property
    def opposite(self) -> Direction:
        return _opposites[self]


_opposites[Direction.NORTH] = Direction.SOUTH
_opposites[Direction.SOUTH] = Direction.NORTH
_opposites[Direction.EAST] = Direction.WEST
_opposites[Direction.WEST] = Direction.EAST
