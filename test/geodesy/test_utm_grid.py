"""Unit tests for ``flockwave.geodesy.utm.grid``."""

from pytest import fixture, mark, raises

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.enums import Direction
from flockwave.geodesy.errors import AmbiguousNeighborError, Error, NoNeighborError
from flockwave.geodesy.utm import UtmGrid, UtmProjection
from flockwave.geodesy.vectors import GlobalCoordinates

import unittest


class UtmGridTest(unittest.TestCase):
    """Unit tests for the UtmGrid_ class."""

    def setUp(self):
        self.utm = UtmProjection()

    def grid_at(self, coords: GlobalCoordinates) -> UtmGrid:
        return UtmGrid.from_coordinates(self.utm, coords)

    def name_at(self, lat: float, lon: float) -> str:
        return str(self.grid_at(GlobalCoordinates.from_degrees(lat, lon)))

    def assert_corners_inside(self, grid: UtmGrid) -> None:
        """Asserts that all the corners of the given grid are mapped back to
        the grid itself.
        """
        for corner in (
            grid.lower_left_corner,
            grid.lower_right_corner,
            grid.upper_left_corner,
            grid.upper_right_corner,
        ):
            self.assertEqual(str(grid), str(self.grid_at(corner)))
            self.assertTrue(grid.is_inside(corner))

    def test_first_grid(self):
        grid = UtmGrid(self.utm, 1, "C")
        self.assertEqual(Angle(-180), grid.lower_left_corner.longitude)
        self.assertEqual(self.utm.min_latitude, grid.lower_left_corner.latitude)
        self.assertEqual(Angle(6), grid.width)
        self.assertEqual(Angle(8), grid.height)
        self.assertEqual(0, grid.ordinal)
        self.assertFalse(grid.is_northern)
        self.assert_corners_inside(grid)

    def test_northernmost_grid(self):
        grid = UtmGrid(self.utm, 1, "X")
        self.assertEqual(Angle(-180), grid.lower_left_corner.longitude)
        self.assertEqual(
            self.utm.max_latitude - grid.height, grid.lower_left_corner.latitude
        )
        self.assertEqual(Angle(12), grid.height)
        self.assertEqual(Angle(6), grid.width)
        self.assertTrue(grid.is_northern)
        self.assert_corners_inside(grid)

    def test_latitude_limits(self):
        with self.assertRaises(ValueError):
            self.grid_at(GlobalCoordinates.from_degrees(85, 0))
        with self.assertRaises(ValueError):
            self.grid_at(GlobalCoordinates.from_degrees(-81, 0))

        grid = self.grid_at(GlobalCoordinates(self.utm.max_latitude, Angle.ZERO))
        self.assertEqual("31X", str(grid))
        self.assert_corners_inside(grid)

        grid = self.grid_at(GlobalCoordinates(self.utm.min_latitude, Angle.ZERO))
        self.assertEqual("31C", str(grid))

    def test_invalid_zone_band_and_ordinal(self):
        with self.assertRaises(ValueError):
            UtmGrid(self.utm, 0, "C")
        with self.assertRaises(ValueError):
            UtmGrid(self.utm, 61, "C")
        with self.assertRaises(ValueError):
            UtmGrid(self.utm, 1, "A")
        with self.assertRaises(ValueError):
            UtmGrid(self.utm, 1, "I")
        with self.assertRaises(ValueError):
            UtmGrid(self.utm, 1, 20)
        with self.assertRaises(ValueError):
            UtmGrid.from_ordinal(self.utm, 1201)
        with self.assertRaises(ValueError):
            UtmGrid.from_ordinal(self.utm, -1)

    def test_band_as_letter_or_index(self):
        self.assertEqual(UtmGrid(self.utm, 32, "U"), UtmGrid(self.utm, 32, 16))
        self.assertEqual(UtmGrid(self.utm, 32, "U"), UtmGrid(self.utm, 32, "u"))
        self.assertEqual("U", UtmGrid(self.utm, 32, 16).band)
        self.assertEqual(16, UtmGrid(self.utm, 32, "U").band_number)

    def test_missing_grids(self):
        for zone in (32, 34, 36):
            with self.assertRaises(ValueError):
                UtmGrid(self.utm, zone, "X")
            self.assertFalse(UtmGrid.is_valid_ordinal((zone - 1) * 20 + 19))

    def test_32v(self):
        grid = UtmGrid(self.utm, 32, "V")
        self.assertEqual(Angle(9), grid.width)
        self.assertEqual(Angle(3), grid.lower_left_corner.longitude)
        self.assertEqual(Angle(9), grid.central_meridian)
        self.assert_corners_inside(grid)

    def test_31v(self):
        grid = UtmGrid(self.utm, 31, "V")
        self.assertEqual(Angle(3), grid.width)
        self.assertEqual(Angle(3), grid.central_meridian)

        # Four degrees east of the lower left corner is normally still in the
        # same grid, but not in 31V
        corner = grid.lower_left_corner
        other = self.grid_at(corner.with_longitude(corner.longitude + Angle(4)))
        self.assertEqual("32V", str(other))

        self.assert_corners_inside(grid)
        self.assert_corners_inside(other)

    def test_31x(self):
        grid = UtmGrid(self.utm, 31, "X")
        self.assertEqual(Angle(9), grid.width)

        # A little more than the width of the grid is in zone 32 but there
        # is no 32X
        corner = grid.lower_left_corner
        other = self.grid_at(
            corner.with_longitude(corner.longitude + grid.width + Angle(1))
        )
        self.assertEqual("33X", str(other))

        self.assert_corners_inside(grid)
        self.assert_corners_inside(other)

    def test_37x(self):
        grid = UtmGrid(self.utm, 37, "X")
        self.assertEqual(Angle(9), grid.width)
        self.assertEqual(Angle(33), grid.lower_left_corner.longitude)
        self.assert_corners_inside(grid)

    def test_33x_and_35x(self):
        for zone, next_zone in ((33, "35X"), (35, "37X")):
            grid = UtmGrid(self.utm, zone, "X")
            self.assertEqual(Angle(12), grid.width)

            corner = grid.lower_right_corner
            other = self.grid_at(corner.with_longitude(corner.longitude + Angle(1)))
            self.assertEqual(next_zone, str(other))

            self.assert_corners_inside(grid)
            self.assert_corners_inside(other)

    def test_points_in_missing_grids(self):
        """Tests that points in the missing grids are assigned to the grid
        on the same side of the central meridian of the missing zone.
        """
        self.assertEqual("31X", self.name_at(75, 8.9))
        self.assertEqual("33X", self.name_at(75, 9.1))
        self.assertEqual("33X", self.name_at(75, 20.9))
        self.assertEqual("35X", self.name_at(75, 21.1))
        self.assertEqual("35X", self.name_at(75, 32.9))
        self.assertEqual("37X", self.name_at(75, 33.1))

    def test_antimeridian(self):
        self.assertEqual("60N", self.name_at(1, 180))
        self.assertEqual("1N", self.name_at(1, -179.9))

    def test_corners_of_32u(self):
        grid = UtmGrid(self.utm, 32, "U")
        self.assertEqual("32U", str(self.grid_at(grid.lower_right_corner)))
        self.assertEqual("32U", str(self.grid_at(grid.upper_left_corner)))
        self.assertEqual("32U", str(self.grid_at(grid.upper_right_corner)))
        self.assertFalse(grid.is_inside(GlobalCoordinates.from_degrees(56.5, 9)))

    def test_ordinal(self):
        grid = UtmGrid(self.utm, 32, "U")
        self.assertEqual(31 * 20 + 16, grid.ordinal)
        self.assertEqual(grid, UtmGrid.from_ordinal(self.utm, grid.ordinal))

        for ordinal in range(1200):
            if UtmGrid.is_valid_ordinal(ordinal):
                grid = UtmGrid.from_ordinal(self.utm, ordinal)
                self.assertEqual(ordinal, grid.ordinal)

        self.assertFalse(UtmGrid.is_valid_ordinal(1200))
        self.assertFalse(UtmGrid.is_valid_ordinal(-1))

    def test_all_grids(self):
        """Tests the extents of all the grids on the flat map."""
        grids = list(UtmGrid.all_grids(self.utm))
        self.assertEqual(1197, len(grids))
        self.assertEqual(
            sorted(grid.ordinal for grid in grids), [grid.ordinal for grid in grids]
        )

        for grid in grids:
            self.assert_corners_inside(grid)
            self.assertTrue(grid.map_width > 0)
            self.assertTrue(grid.map_height > 0)

    def test_origin(self):
        grid = UtmGrid(self.utm, 32, "U")
        origin = grid.origin
        self.assertEqual(self.utm, origin.projection)
        self.assertEqual("32U", str(origin.grid))
        self.assertTrue(abs(origin.scale_factor - 1.0) < 0.001)

        # The southern edge is lowest on the central meridian, the western
        # edge is westernmost at the southern edge
        south = self.utm.to_utm(GlobalCoordinates.from_degrees(48, 9))
        west = self.utm.to_utm(grid.lower_left_corner)
        self.assertAlmostEqual(south.y, origin.y, places=6)
        self.assertAlmostEqual(west.x, origin.x, places=6)
        self.assertTrue(origin.y <= self.utm.to_utm(grid.lower_left_corner).y)

        # Northern band on the southern hemisphere is mirrored
        grid = UtmGrid(self.utm, 32, "F")
        north_edge = self.utm.to_utm(grid.upper_left_corner)
        self.assertTrue(grid.origin.y < north_edge.y)
        self.assertTrue(grid.origin.y + grid.map_height >= north_edge.y - 1e-6)

    def test_equality(self):
        first = UtmGrid(self.utm, 1, "C")
        self.assertEqual(first, UtmGrid(UtmProjection(), 1, "C"))
        self.assertEqual(hash(first), hash(UtmGrid(self.utm, 1, "C")))
        self.assertNotEqual(first, UtmGrid(self.utm, 1, "D"))
        self.assertNotEqual(first, UtmGrid(self.utm, 2, "C"))
        self.assertFalse(first == "1C")

    def test_str_and_repr(self):
        grid = UtmGrid(self.utm, 32, "U")
        self.assertEqual("32U", str(grid))
        self.assertEqual("UtmGrid(zone=32, band='U')", repr(grid))


@fixture
def utm() -> UtmProjection:
    return UtmProjection()


@mark.parametrize(
    ("name", "west", "east"),
    [
        ("32U", "31U", "33U"),
        ("1C", "60C", "2C"),
        ("60C", "59C", "1C"),
        ("31V", "30V", "32V"),
        ("32V", "31V", "33V"),
        ("31X", "30X", "33X"),
        ("33X", "31X", "35X"),
        ("37X", "35X", "38X"),
    ],
)
def test_horizontal_neighbors(utm, name: str, west: str, east: str):
    grid = UtmGrid(utm, int(name[:-1]), name[-1])
    assert str(grid.west) == west
    assert str(grid.east) == east
    assert str(grid.get_neighbor(Direction.WEST)) == west
    assert str(grid.get_neighbor(Direction.EAST)) == east


@mark.parametrize(
    ("name", "direction", "neighbor"),
    [
        ("32U", Direction.NORTH, "32V"),
        ("31V", Direction.NORTH, "31W"),
        ("31W", Direction.NORTH, "31X"),
        ("33W", Direction.NORTH, "33X"),
        ("35W", Direction.NORTH, "35X"),
        ("37W", Direction.NORTH, "37X"),
        ("32W", Direction.SOUTH, "32V"),
        ("31V", Direction.SOUTH, "31U"),
        ("32U", Direction.SOUTH, "32T"),
        ("1M", Direction.NORTH, "1N"),
        ("1N", Direction.SOUTH, "1M"),
    ],
)
def test_unique_vertical_neighbors(utm, name: str, direction: Direction, neighbor: str):
    grid = UtmGrid(utm, int(name[:-1]), name[-1])
    assert str(grid.get_neighbor(direction)) == neighbor
    if direction is Direction.NORTH:
        assert str(grid.north) == neighbor
    else:
        assert str(grid.south) == neighbor


@mark.parametrize(
    ("name", "direction"),
    [
        ("31U", Direction.NORTH),
        ("32V", Direction.NORTH),
        ("32W", Direction.NORTH),
        ("34W", Direction.NORTH),
        ("36W", Direction.NORTH),
        ("31X", Direction.SOUTH),
        ("33X", Direction.SOUTH),
        ("35X", Direction.SOUTH),
        ("37X", Direction.SOUTH),
        ("31W", Direction.SOUTH),
        ("32V", Direction.SOUTH),
    ],
)
def test_ambiguous_vertical_neighbors(utm, name: str, direction: Direction):
    grid = UtmGrid(utm, int(name[:-1]), name[-1])
    assert grid.get_neighbor(direction) is None

    with raises(AmbiguousNeighborError) as info:
        grid.north if direction is Direction.NORTH else grid.south

    assert info.value.grid == grid
    assert info.value.direction is direction
    assert str(info.value) == "grid {0} has no unique {1} neighbor".format(
        name, direction.value
    )


@mark.parametrize(
    ("name", "direction"), [("1X", Direction.NORTH), ("1C", Direction.SOUTH)]
)
def test_no_vertical_neighbor_at_the_edges(utm, name: str, direction: Direction):
    grid = UtmGrid(utm, int(name[:-1]), name[-1])
    assert grid.get_neighbor(direction) is None

    with raises(NoNeighborError) as info:
        grid.north if direction is Direction.NORTH else grid.south

    assert not isinstance(info.value, AmbiguousNeighborError)
    assert isinstance(info.value, Error)
    assert str(info.value) == "grid {0} has no {1} neighbor".format(
        name, direction.value
    )


def test_directions():
    assert Direction.NORTH.opposite is Direction.SOUTH
    assert Direction.WEST.opposite is Direction.EAST
    assert Direction.EAST.is_horizontal
    assert not Direction.SOUTH.is_horizontal


@mark.parametrize(
    ("zone", "band", "meridian"),
    [(32, "V", 9), (31, "X", 3), (33, "X", 15), (37, "X", 39)],
)
def test_widened_and_narrowed_grids_use_standard_zone_meridian(
    utm, zone: int, band: str, meridian: float
):
    """Tests that the grids around the zone exceptions are projected around the
    standard central meridian of their zone, not around the center of the
    grid.
    """
    grid = UtmGrid(utm, zone, band)
    assert grid.central_meridian == Angle(meridian)

    latitude = grid.lower_left_corner.latitude + grid.height / 2
    point = GlobalCoordinates(latitude, Angle(meridian))
    coord = utm.to_utm(point)
    assert coord.grid == grid
    assert abs(coord.x - 500000.0) < 1e-6
