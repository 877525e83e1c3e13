"""Coordinates on the flat map of a UTM grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.formatting import format_utm_coordinate
from flockwave.geodesy.vectors import EuclidianCoordinate

if TYPE_CHECKING:
    from .grid import UtmGrid
    from .projection import UtmProjection

__all__ = ("UtmCoordinate",)

#: Default precision of equality checks between UTM coordinates
UTM_PRECISION = 0.01


class UtmCoordinate(EuclidianCoordinate):
    """Easting and northing of a point, measured in the frame of a given UTM
    grid.

    The scale factor and the meridian convergence at the point are
    calculated when they are first needed and cached afterwards.
    """

    _grid: UtmGrid
    _factors: Optional[tuple[float, float]]

    def __init__(
        self,
        grid: UtmGrid,
        x: float,
        y: float,
        *,
        factors: Optional[tuple[float, float]] = None,
    ):
        """Constructor.

        Parameters:
            grid: the grid that the coordinate belongs to
            x: the easting of the point, in meters
            y: the northing of the point, in meters
            factors: the scale factor and the meridian convergence (in
                radians) at the point if they are known already
        """
        super().__init__(grid.projection, x, y)
        self._grid = grid
        self._factors = factors

    @property
    def projection(self) -> UtmProjection:
        return self._projection  # type: ignore

    @property
    def grid(self) -> UtmGrid:
        """The grid that the coordinate belongs to."""
        return self._grid

    @property
    def frame(self) -> UtmGrid:
        return self._grid

    @property
    def easting(self) -> float:
        """The easting of the point; same as the X coordinate."""
        return self._x

    @property
    def northing(self) -> float:
        """The northing of the point; same as the Y coordinate."""
        return self._y

    def _get_factors(self) -> tuple[float, float]:
        factors = self._factors
        if factors is None:
            _, scale_factor, convergence = self._grid.projection._unproject(self)
            factors = self._factors = (scale_factor, convergence)
        return factors

    @property
    def scale_factor(self) -> float:
        """The scale factor of the projection at the point."""
        return self._get_factors()[0]

    @property
    def meridian_convergence(self) -> Angle:
        """The angle between grid north and true north at the point."""
        return Angle.from_radians(self._get_factors()[1])

    def is_approximately_equal(
        self, other: EuclidianCoordinate, precision: float = UTM_PRECISION
    ) -> bool:
        return super().is_approximately_equal(other, precision)

    def __hash__(self) -> int:
        return hash((self._grid, self._x, self._y))

    def __repr__(self) -> str:
        return "{0.__class__.__name__}(grid={1!r}, x={0._x!r}, y={0._y!r})".format(
            self, str(self._grid)
        )

    def __str__(self) -> str:
        return format_utm_coordinate(self)
