"""Exceptions that are thrown from the geodesy module."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .enums import Direction
    from .utm.grid import UtmGrid

__all__ = ("Error", "NoNeighborError", "AmbiguousNeighborError")


class Error(RuntimeError):
    """Base class for all exceptions that are thrown from the geodesy module."""

    pass


class NoNeighborError(Error):
    """Error thrown when a UTM grid has no neighbor in the requested
    direction.
    """

    grid: Optional[UtmGrid]
    """The grid whose neighbor was requested."""

    direction: Optional[Direction]
    """The direction in which the neighbor was requested."""

    def __init__(
        self,
        message: Optional[str] = None,
        grid: Optional[UtmGrid] = None,
        direction: Optional[Direction] = None,
    ):
        if message is None:
            if grid is not None and direction is not None:
                message = "grid {0} has no {1} neighbor".format(
                    grid, direction.value
                )
            else:
                message = "no such neighbor"
        super().__init__(message)
        self.grid = grid
        self.direction = direction


class AmbiguousNeighborError(NoNeighborError):
    """Error thrown when a UTM grid has more than one neighbor in the
    requested direction and hence there is no unique answer.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        grid: Optional[UtmGrid] = None,
        direction: Optional[Direction] = None,
    ):
        if message is None and grid is not None and direction is not None:
            message = "grid {0} has no unique {1} neighbor".format(
                grid, direction.value
            )
        super().__init__(message, grid=grid, direction=direction)
