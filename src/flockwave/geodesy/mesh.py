"""Global mesh of equally sized square cells laid over the UTM grids.

Each UTM grid is subdivided into a raster of square cells of a fixed size
(measured on the flat map of the grid), starting from the origin of the
grid. Every cell gets a globally unique integer identifier that can be
decomposed into the ordinal of the grid and the column and row of the cell
within the grid.
"""

from __future__ import annotations

import logging

from math import ceil, floor
from typing import Optional, Union

from .angle import Angle
from .constants import UTM
from .enums import Direction
from .utm import UtmCoordinate, UtmGrid, UtmProjection
from .vectors import GlobalCoordinates

__all__ = ("GlobalMesh",)

log = logging.getLogger(__name__)

#: Smallest cell size that is rejected by the mesh, in meters
MIN_CELL_SIZE = 1

#: Largest supported ring distance in neighborhood queries
MAX_RING_DISTANCE = 3

#: Distance in meters that a point may lie outside the map of its grid
EDGE_TOLERANCE = 1e-3


def _false_northing(grid: UtmGrid) -> float:
    return 0.0 if grid.is_northern else UTM.SOUTHERN_FALSE_NORTHING


class GlobalMesh:
    """Global mesh of square cells with a fixed size.

    The raster of each grid has the same number of columns and rows; this
    number (the modulus of the mesh) is the smallest power of two that is
    large enough to cover the widest and tallest grid on the globe. The
    identifier of a cell is then::

        ordinal * modulus ** 2 + column * modulus + row

    where ``ordinal`` is the ordinal number of the UTM grid containing the
    cell.
    """

    _cell_size: int
    _projection: UtmProjection
    _grids: dict[int, UtmGrid]
    _modulus: int
    _cell_count_per_grid: int

    def __init__(
        self, cell_size: int = 1000, projection: Optional[UtmProjection] = None
    ):
        """Constructor.

        Parameters:
            cell_size: the size of the cells, in meters
            projection: the UTM projection to lay the mesh over; ``None``
                means a UTM projection on the WGS84 ellipsoid

        Raises:
            ValueError: if the cell size is too small, or it is so large that
                a grid could not be divided into at least two columns and rows
        """
        if cell_size <= MIN_CELL_SIZE:
            raise ValueError(
                "cell size must be larger than {0} meter".format(MIN_CELL_SIZE)
            )

        self._cell_size = int(cell_size)
        self._projection = projection if projection is not None else UtmProjection()
        self._grids = {}

        max_width = max_height = 0.0
        for grid in UtmGrid.all_grids(self._projection):
            self._grids[grid.ordinal] = grid
            max_width = max(max_width, grid.map_width)
            max_height = max(max_height, grid.map_height)

        columns = ceil(max_width / self._cell_size)
        rows = ceil(max_height / self._cell_size)
        if columns < 2 or rows < 2:
            raise ValueError(
                "cell size {0} is too large for the UTM grids".format(cell_size)
            )

        self._modulus = 1 << (max(columns, rows) - 1).bit_length()
        self._cell_count_per_grid = self._modulus * self._modulus

        log.debug(
            "Global mesh with %d m cells: largest grid is %.0f x %.0f m, "
            "modulus is %d",
            self._cell_size,
            max_width,
            max_height,
            self._modulus,
        )

    @property
    def cell_size(self) -> int:
        """The size of the cells, in meters."""
        return self._cell_size

    @property
    def projection(self) -> UtmProjection:
        """The UTM projection that the mesh is laid over."""
        return self._projection

    @property
    def modulus(self) -> int:
        """The number of columns and rows in the raster of each grid."""
        return self._modulus

    @property
    def cell_count_per_grid(self) -> int:
        """The number of cell identifiers reserved for each grid."""
        return self._cell_count_per_grid

    @property
    def global_cell_count(self) -> int:
        """The size of the identifier space of the mesh; valid identifiers
        are non-negative integers smaller than this number.
        """
        return self._cell_count_per_grid * UTM.NUMBER_OF_GRIDS

    ####################################################################
    # Mapping points to cells

    def mesh_number(self, coord: Union[GlobalCoordinates, UtmCoordinate]) -> int:
        """Returns the identifier of the cell containing the given point.

        Parameters:
            coord: the point, either as global coordinates or as a coordinate
                in the frame of a UTM grid of the projection of the mesh

        Raises:
            ValueError: if the point is outside the UTM domain, the UTM
                coordinate belongs to another projection or it is outside the
                map of its grid
        """
        if isinstance(coord, UtmCoordinate):
            if coord.projection != self._projection:
                raise ValueError(
                    "coordinate {0!r} belongs to another projection".format(coord)
                )
            utm = coord
        elif isinstance(coord, GlobalCoordinates):
            utm = self._projection.to_utm(coord)
        else:
            raise TypeError(
                "expected GlobalCoordinates or UtmCoordinate, got {0!r}".format(
                    type(coord)
                )
            )

        grid = self._grids[utm.grid.ordinal]
        column, row = self._cell_of(grid, utm.x, utm.y)
        return self._compose(grid, column, row)

    def mesh_number_from_lat_lon(self, latitude: Angle, longitude: Angle) -> int:
        """Returns the identifier of the cell containing the point with the
        given latitude and longitude.
        """
        return self.mesh_number(GlobalCoordinates(latitude, longitude))

    def _cell_of(self, grid: UtmGrid, x: float, y: float) -> tuple[int, int]:
        """Returns the column and row of the cell of the given grid that
        contains the point with the given map coordinates.

        Points that are less than a millimeter outside the map of the grid
        are assigned to the nearest edge cell.

        Raises:
            ValueError: if the point is outside the map of the grid
        """
        origin = grid.origin
        dx, dy = x - origin.x, y - origin.y
        if (
            dx < -EDGE_TOLERANCE
            or dy < -EDGE_TOLERANCE
            or dx > grid.map_width + EDGE_TOLERANCE
            or dy > grid.map_height + EDGE_TOLERANCE
        ):
            raise ValueError(
                "point ({0!r}, {1!r}) is outside the map of grid {2}".format(
                    x, y, grid
                )
            )

        column = floor(dx / self._cell_size)
        row = floor(dy / self._cell_size)
        return (
            min(max(column, 0), self._column_count(grid) - 1),
            min(max(row, 0), self._row_count(grid) - 1),
        )

    def _compose(self, grid: UtmGrid, column: int, row: int) -> int:
        return grid.ordinal * self._cell_count_per_grid + column * self._modulus + row

    def _decompose(self, mesh_number: int) -> tuple[UtmGrid, int, int]:
        if mesh_number < 0 or mesh_number >= self.global_cell_count:
            raise ValueError("invalid mesh number: {0!r}".format(mesh_number))

        ordinal, local = divmod(mesh_number, self._cell_count_per_grid)
        grid = self._grids.get(ordinal)
        if grid is None:
            raise ValueError(
                "mesh number {0!r} belongs to a non-existent UTM grid".format(
                    mesh_number
                )
            )

        column, row = divmod(local, self._modulus)
        return grid, column, row

    ####################################################################
    # Mapping cells to points

    def grid(self, mesh_number: int) -> UtmGrid:
        """Returns the UTM grid containing the cell with the given
        identifier.

        Raises:
            ValueError: if the identifier is invalid
        """
        grid, _, _ = self._decompose(mesh_number)
        return grid

    def _point_of(self, mesh_number: int, dx: float, dy: float) -> UtmCoordinate:
        grid, column, row = self._decompose(mesh_number)
        origin = grid.origin
        return UtmCoordinate(
            grid,
            origin.x + (column + dx) * self._cell_size,
            origin.y + (row + dy) * self._cell_size,
        )

    def center_of(self, mesh_number: int) -> UtmCoordinate:
        """Returns the center of the cell with the given identifier."""
        return self._point_of(mesh_number, 0.5, 0.5)

    def lower_left(self, mesh_number: int) -> UtmCoordinate:
        """Returns the lower left corner of the cell with the given
        identifier.
        """
        return self._point_of(mesh_number, 0, 0)

    def lower_right(self, mesh_number: int) -> UtmCoordinate:
        """Returns the lower right corner of the cell with the given
        identifier.
        """
        return self._point_of(mesh_number, 1, 0)

    def upper_left(self, mesh_number: int) -> UtmCoordinate:
        """Returns the upper left corner of the cell with the given
        identifier.
        """
        return self._point_of(mesh_number, 0, 1)

    def upper_right(self, mesh_number: int) -> UtmCoordinate:
        """Returns the upper right corner of the cell with the given
        identifier.
        """
        return self._point_of(mesh_number, 1, 1)

    ####################################################################
    # Neighborhoods

    def neighborhood(self, mesh_number: int, distance: int) -> list[int]:
        """Returns the identifiers of the cells forming the square ring at
        the given Chebyshev distance around a cell.

        The ring crosses grid boundaries where needed. Ring positions that
        would fall into a non-existent or ambiguous neighbor grid (at the
        poles or around the zone exceptions) are omitted, so the ring may
        contain fewer than ``8 * distance`` cells.

        Parameters:
            mesh_number: the identifier of the center cell
            distance: the distance of the ring from the center cell, between
                0 and 3; zero returns the center cell only

        Raises:
            ValueError: if the identifier or the distance is invalid
        """
        if distance < 0 or distance > MAX_RING_DISTANCE:
            raise ValueError(
                "ring distance must be between 0 and {0}".format(MAX_RING_DISTANCE)
            )

        grid, column, row = self._decompose(mesh_number)
        if distance == 0:
            return [mesh_number]

        result: list[int] = []
        seen = {mesh_number}
        for dy in range(-distance, distance + 1):
            for dx in range(-distance, distance + 1):
                if max(abs(dx), abs(dy)) != distance:
                    continue

                neighbor = self._offset(grid, column, row, dx, dy)
                if neighbor is not None and neighbor not in seen:
                    seen.add(neighbor)
                    result.append(neighbor)

        return result

    def _column_count(self, grid: UtmGrid) -> int:
        return min(max(ceil(grid.map_width / self._cell_size), 1), self._modulus)

    def _row_count(self, grid: UtmGrid) -> int:
        return min(max(ceil(grid.map_height / self._cell_size), 1), self._modulus)

    def _wrap(self, grid: UtmGrid, column: int, row: int) -> tuple[UtmGrid, int, int]:
        """Moves a column that is outside the raster of the given grid into
        the raster of the west or east neighbor of the grid.

        The row is carried over to the neighbor through the northing of the
        cell center.
        """
        size = self._cell_size
        while column < 0 or column >= self._column_count(grid):
            northing = grid.origin.y + (row + 0.5) * size
            if column < 0:
                neighbor = grid.west
                column += self._column_count(neighbor)
            else:
                column -= self._column_count(grid)
                neighbor = grid.east
            grid = self._grids[neighbor.ordinal]
            row = floor((northing - grid.origin.y) / size)
        return grid, column, row

    def _offset(
        self, grid: UtmGrid, column: int, row: int, dx: int, dy: int
    ) -> Optional[int]:
        """Returns the identifier of the cell that is ``dx`` columns and
        ``dy`` rows away from the given cell, or ``None`` if there is no
        such cell.
        """
        size = self._cell_size

        grid, column, row = self._wrap(grid, column + dx, row)

        # Vertical step; the column is carried over to the north or south
        # neighbor through the easting of the cell center, which is valid as
        # the zone does not change
        row += dy
        if 0 <= row < self._row_count(grid):
            return self._compose(grid, column, row)

        neighbor = grid.get_neighbor(Direction.SOUTH if row < 0 else Direction.NORTH)
        if neighbor is None:
            return None

        target = self._grids[neighbor.ordinal]
        origin, target_origin = grid.origin, target.origin
        easting = origin.x + (column + 0.5) * size
        northing = (
            origin.y
            + (row + 0.5) * size
            - _false_northing(grid)
            + _false_northing(target)
        )
        column = floor((easting - target_origin.x) / size)
        row = floor((northing - target_origin.y) / size)

        # The target grid may be narrower than the source grid, so the cell
        # may lie in the west or east neighbor of the target grid
        target, column, row = self._wrap(target, column, row)
        if 0 <= row < self._row_count(target):
            return self._compose(target, column, row)
        else:
            return None

    def __repr__(self) -> str:
        return "{0.__class__.__name__}(cell_size={0._cell_size!r})".format(self)
