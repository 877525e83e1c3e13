"""Zone-band grid cells of the Universal Transverse Mercator system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Optional, Union

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.constants import UTM
from flockwave.geodesy.enums import Direction
from flockwave.geodesy.errors import AmbiguousNeighborError, NoNeighborError
from flockwave.geodesy.vectors import GlobalCoordinates

from .coordinate import UtmCoordinate

if TYPE_CHECKING:
    from .projection import UtmProjection

__all__ = ("UtmGrid",)

#: Amount in degrees by which the corners of a grid are moved inwards so they
#: are guaranteed to belong to the grid itself
DELTA = 1e-12

MIN_ZONE = 1
MAX_ZONE = UTM.NUMBER_OF_ZONES
MIN_BAND = 0
MAX_BAND = UTM.NUMBER_OF_BANDS - 1

BAND_V = UTM.BAND_LETTERS.index("V")
BAND_X = MAX_BAND


def _is_missing(zone: int, band: int) -> bool:
    return band == BAND_X and zone in UTM.MISSING_X_ZONES


def _parse_band(band: Union[int, str]) -> int:
    if isinstance(band, str):
        index = UTM.BAND_LETTERS.find(band.upper()) if len(band) == 1 else -1
        if index < 0:
            raise ValueError("invalid UTM band letter: {0!r}".format(band))
        return index
    return int(band)


class UtmGrid:
    """A single zone-band cell of the UTM system.

    There are 60 zones of 6 degrees width and 20 latitude bands of 8 degrees
    height, with the following exceptions. Band X is 12 degrees tall. Grid
    31V is narrowed to 3 degrees while 32V is widened to 9 degrees. Grids
    32X, 34X and 36X do not exist; 31X and 37X are 9 degrees wide and 33X and
    35X are 12 degrees wide instead.

    Grids are immutable. The extents of the grid on the flat map are
    calculated when they are first needed and cached afterwards.
    """

    _projection: UtmProjection
    _zone: int
    _band: int
    _ll_lat: float
    _ll_lon: float
    _width: float
    _height: float
    _extents: Optional[tuple[float, float, float, float]]

    @staticmethod
    def is_valid_ordinal(ordinal: int) -> bool:
        """Returns whether the given ordinal belongs to an existing grid."""
        if ordinal < 0 or ordinal >= UTM.NUMBER_OF_GRIDS:
            return False
        zone, band = divmod(ordinal, UTM.NUMBER_OF_BANDS)
        return not _is_missing(zone + 1, band)

    @classmethod
    def all_grids(cls, projection: UtmProjection) -> Iterator[UtmGrid]:
        """Iterates over all the existing grids in ordinal order."""
        for ordinal in range(UTM.NUMBER_OF_GRIDS):
            if cls.is_valid_ordinal(ordinal):
                yield cls.from_ordinal(projection, ordinal)

    @classmethod
    def from_ordinal(cls, projection: UtmProjection, ordinal: int) -> UtmGrid:
        """Creates a grid from its ordinal number.

        Raises:
            ValueError: if the ordinal is out of range or it belongs to one of
                the non-existent grids
        """
        if ordinal < 0 or ordinal >= UTM.NUMBER_OF_GRIDS:
            raise ValueError("invalid UTM grid ordinal: {0!r}".format(ordinal))
        zone, band = divmod(ordinal, UTM.NUMBER_OF_BANDS)
        return cls(projection, zone + 1, band)

    @classmethod
    def from_coordinates(
        cls, projection: UtmProjection, coordinates: GlobalCoordinates
    ) -> UtmGrid:
        """Returns the grid that contains the given coordinates.

        Coordinates that would geometrically fall into one of the missing
        grids in band X are assigned to the neighboring grid on the same side
        of the central meridian of the missing zone.

        Raises:
            ValueError: if the latitude is outside the range covered by the
                projection
        """
        latitude = coordinates.latitude
        if latitude < projection.min_latitude or latitude > projection.max_latitude:
            raise ValueError(
                "latitude {0} is outside the UTM domain".format(latitude)
            )

        lat = projection.normalize_latitude(latitude).degrees
        lon = projection.normalize_longitude(coordinates.longitude).degrees

        band = int((lat - UTM.MIN_LATITUDE) / UTM.BAND_HEIGHT)
        if band > MAX_BAND:
            band = MAX_BAND

        zone = int((lon + 180.0) / UTM.ZONE_WIDTH) + 1
        if zone > MAX_ZONE:
            zone = MAX_ZONE

        if zone == 31 and band == BAND_V:
            _, ll_lon, width, _ = cls._cell_bounds(zone, band)
            if lon >= ll_lon + width:
                zone += 1
        elif _is_missing(zone, band):
            if lon < cls._central_meridian_of(zone):
                zone -= 1
            else:
                zone += 1

        return cls(projection, zone, band)

    @staticmethod
    def _central_meridian_of(zone: int) -> float:
        return -183.0 + UTM.ZONE_WIDTH * zone

    @staticmethod
    def _cell_bounds(zone: int, band: int) -> tuple[float, float, float, float]:
        """Returns the latitude and longitude of the lower left corner of
        the given grid, followed by its width and height, in degrees.
        """
        ll_lat = UTM.MIN_LATITUDE + band * UTM.BAND_HEIGHT
        ll_lon = -180.0 + (zone - 1) * UTM.ZONE_WIDTH
        width = UTM.ZONE_WIDTH
        height = UTM.BAND_HEIGHT

        if band == BAND_X:
            height += 4.0

        if band == BAND_V and zone == 32:
            width += 3.0
            ll_lon -= 3.0
        elif band == BAND_V and zone == 31:
            width -= 3.0
        elif band == BAND_X:
            if zone == 31 or zone == 37:
                width += 3.0
                if zone == 37:
                    ll_lon -= 3.0
            elif zone == 33 or zone == 35:
                width += 6.0
                ll_lon -= 3.0

        return ll_lat, ll_lon, width, height

    def __init__(
        self, projection: UtmProjection, zone: int, band: Union[int, str]
    ):
        """Constructor.

        Parameters:
            projection: the UTM projection that the grid belongs to
            zone: the zone of the grid, between 1 and 60
            band: the latitude band of the grid, either as a letter or as an
                index between 0 and 19

        Raises:
            ValueError: if the zone or the band is out of range or the grid
                does not exist
        """
        band = _parse_band(band)

        if zone < MIN_ZONE or zone > MAX_ZONE:
            raise ValueError("invalid UTM zone: {0!r}".format(zone))
        if band < MIN_BAND or band > MAX_BAND:
            raise ValueError("invalid UTM band: {0!r}".format(band))
        if _is_missing(zone, band):
            raise ValueError(
                "UTM grid {0}{1} does not exist".format(zone, UTM.BAND_LETTERS[band])
            )

        self._projection = projection
        self._zone = int(zone)
        self._band = band
        self._ll_lat, self._ll_lon, self._width, self._height = self._cell_bounds(
            self._zone, band
        )
        self._extents = None

    @property
    def projection(self) -> UtmProjection:
        """The UTM projection that the grid belongs to."""
        return self._projection

    @property
    def zone(self) -> int:
        """The zone of the grid, between 1 and 60."""
        return self._zone

    @property
    def band(self) -> str:
        """The letter of the latitude band of the grid."""
        return UTM.BAND_LETTERS[self._band]

    @property
    def band_number(self) -> int:
        """The index of the latitude band of the grid, between 0 and 19."""
        return self._band

    @property
    def ordinal(self) -> int:
        """Dense integer identifier of the grid, between 0 and 1199."""
        return (self._zone - 1) * UTM.NUMBER_OF_BANDS + self._band

    @property
    def is_northern(self) -> bool:
        """Whether the grid is on the northern hemisphere."""
        return self._band >= UTM.NUMBER_OF_BANDS // 2

    @property
    def width(self) -> Angle:
        return Angle(self._width)

    @property
    def height(self) -> Angle:
        return Angle(self._height)

    @property
    def central_meridian(self) -> Angle:
        """The central meridian of the zone of the grid.

        This is the standard meridian of the zone even for the widened and
        narrowed grids around Norway and Svalbard, so the meridian of 32V is
        at 9 degrees and the meridian of 31V is on the eastern edge of the
        grid.
        """
        return Angle(self._central_meridian_of(self._zone))

    @property
    def lower_left_corner(self) -> GlobalCoordinates:
        return GlobalCoordinates.from_degrees(self._ll_lat, self._ll_lon + DELTA)

    @property
    def lower_right_corner(self) -> GlobalCoordinates:
        return GlobalCoordinates.from_degrees(
            self._ll_lat, self._ll_lon + self._width - DELTA
        )

    @property
    def upper_left_corner(self) -> GlobalCoordinates:
        return GlobalCoordinates.from_degrees(
            self._ll_lat + self._height - DELTA, self._ll_lon + DELTA
        )

    @property
    def upper_right_corner(self) -> GlobalCoordinates:
        return GlobalCoordinates.from_degrees(
            self._ll_lat + self._height - DELTA, self._ll_lon + self._width - DELTA
        )

    def is_inside(self, point: GlobalCoordinates) -> bool:
        """Returns whether the given point lies within the grid."""
        ll, ur = self.lower_left_corner, self.upper_right_corner
        return (
            ll.longitude <= point.longitude <= ur.longitude
            and ll.latitude <= point.latitude <= ur.latitude
        )

    ####################################################################
    # Extents on the flat map

    def _get_extents(self) -> tuple[float, float, float, float]:
        extents = self._extents
        if extents is None:
            extents = self._extents = self._compute_extents()
        return extents

    def _compute_extents(self) -> tuple[float, float, float, float]:
        """Calculates the bounding box of the grid on the flat map.

        The bounding box is spanned by the projections of the four corners
        and the points where the southern and northern edges cross the
        central meridian; parallels are curved on the map and reach their
        extreme northing there.
        """
        south = self._ll_lat
        north = self._ll_lat + self._height - DELTA
        west = self._ll_lon + DELTA
        east = self._ll_lon + self._width - DELTA
        center = min(max(self._central_meridian_of(self._zone), west), east)

        project = self._projection._project
        points = [
            project(self, lat, lon)
            for lat in (south, north)
            for lon in (west, center, east)
        ]

        xs = [x for x, _ in points]
        ys = [y for _, y in points]
        min_x, min_y = min(xs), min(ys)
        return min_x, min_y, max(xs) - min_x, max(ys) - min_y

    @property
    def origin(self) -> UtmCoordinate:
        """The lower left corner of the bounding box of the grid on the flat
        map; used as the origin of the local coordinate system of the grid.
        """
        x, y, _, _ = self._get_extents()
        return UtmCoordinate(self, x, y)

    @property
    def map_width(self) -> float:
        """The width of the bounding box of the grid on the flat map, in
        meters.
        """
        return self._get_extents()[2]

    @property
    def map_height(self) -> float:
        """The height of the bounding box of the grid on the flat map, in
        meters.
        """
        return self._get_extents()[3]

    ####################################################################
    # Neighbors

    def get_neighbor(self, direction: Direction) -> Optional[UtmGrid]:
        """Returns the neighbor of the grid in the given direction, or
        ``None`` if there is no unique neighbor in that direction.
        """
        if direction is Direction.WEST:
            return self._horizontal_neighbor(-1)
        elif direction is Direction.EAST:
            return self._horizontal_neighbor(1)
        elif direction is Direction.NORTH:
            return self._vertical_neighbor(1)
        elif direction is Direction.SOUTH:
            return self._vertical_neighbor(-1)
        else:
            raise ValueError("unknown direction: {0!r}".format(direction))

    def _horizontal_neighbor(self, step: int) -> UtmGrid:
        zone = self._zone + step
        if zone < MIN_ZONE:
            zone = MAX_ZONE
        elif zone > MAX_ZONE:
            zone = MIN_ZONE
        if _is_missing(zone, self._band):
            zone += step
        return UtmGrid(self._projection, zone, self._band)

    def _vertical_neighbor(self, step: int) -> Optional[UtmGrid]:
        band = self._band + step
        if band < MIN_BAND or band > MAX_BAND or _is_missing(self._zone, band):
            return None

        candidate = UtmGrid(self._projection, self._zone, band)
        if (
            candidate._ll_lon > self._ll_lon
            or candidate._ll_lon + candidate._width < self._ll_lon + self._width
        ):
            # The candidate does not cover the entire width of this grid so
            # there are multiple neighbors
            return None

        return candidate

    def _require_neighbor(self, direction: Direction) -> UtmGrid:
        neighbor = self.get_neighbor(direction)
        if neighbor is None:
            step = 1 if direction is Direction.NORTH else -1
            if MIN_BAND <= self._band + step <= MAX_BAND:
                raise AmbiguousNeighborError(grid=self, direction=direction)
            else:
                raise NoNeighborError(grid=self, direction=direction)
        return neighbor

    @property
    def west(self) -> UtmGrid:
        """The western neighbor of the grid, wrapping around at the
        antimeridian.
        """
        return self._horizontal_neighbor(-1)

    @property
    def east(self) -> UtmGrid:
        """The eastern neighbor of the grid, wrapping around at the
        antimeridian.
        """
        return self._horizontal_neighbor(1)

    @property
    def north(self) -> UtmGrid:
        """The northern neighbor of the grid.

        Raises:
            NoNeighborError: if the grid is in the northernmost band
            AmbiguousNeighborError: if the grid borders more than one grid
                in the north
        """
        return self._require_neighbor(Direction.NORTH)

    @property
    def south(self) -> UtmGrid:
        """The southern neighbor of the grid.

        Raises:
            NoNeighborError: if the grid is in the southernmost band
            AmbiguousNeighborError: if the grid borders more than one grid
                in the south
        """
        return self._require_neighbor(Direction.SOUTH)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, UtmGrid):
            return (
                self._zone == other._zone
                and self._band == other._band
                and self._projection == other._projection
            )
        return NotImplemented

    def __hash__(self) -> int:
        return self.ordinal

    def __repr__(self) -> str:
        return "{0.__class__.__name__}(zone={0._zone!r}, band={1!r})".format(
            self, self.band
        )

    def __str__(self) -> str:
        return "{0}{1}".format(self._zone, self.band)
