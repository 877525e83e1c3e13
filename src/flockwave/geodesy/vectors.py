"""Classes representing coordinates in various coordinate systems."""

from __future__ import annotations

from math import hypot
from typing import TYPE_CHECKING, Any, Sequence, TypeVar

from .angle import Angle
from .constants import DEFAULT_PRECISION
from .formatting import format_global_coordinates, format_global_position
from .utils import is_approximately_equal, is_smaller

if TYPE_CHECKING:
    from .mercator import MercatorProjection


__all__ = (
    "GlobalCoordinates",
    "GlobalPosition",
    "EuclidianCoordinate",
)

C = TypeVar("C", bound="EuclidianCoordinate")


def _canonicalize(latitude: float, longitude: float) -> tuple[float, float]:
    """Brings a latitude-longitude pair into canonical form, where the
    latitude is in [-90, 90] and the longitude is in (-180, 180].

    Latitudes that wrap over one of the poles are reflected back and the
    longitude is moved to the other side of the globe.
    """
    if not -90.0 <= latitude <= 90.0:
        latitude = (latitude + 180.0) % 360.0 - 180.0
        if latitude > 90.0:
            latitude = 180.0 - latitude
            longitude += 180.0
        elif latitude < -90.0:
            latitude = -180.0 - latitude
            longitude += 180.0

    if not -180.0 < longitude <= 180.0:
        longitude = 180.0 - (180.0 - longitude) % 360.0

    return latitude, longitude


class GlobalCoordinates:
    """Immutable pair of latitude and longitude on the surface of a reference
    ellipsoid.

    Coordinates are always kept in canonical form: the latitude is in the
    range [-90, 90] and the longitude is in the range (-180, 180]. Ordering
    compares the longitudes first and the latitudes second.
    """

    _latitude: Angle
    _longitude: Angle

    @classmethod
    def from_degrees(cls, latitude: float, longitude: float) -> GlobalCoordinates:
        """Creates a coordinate pair from a latitude and a longitude given in
        degrees.
        """
        return cls(Angle(latitude), Angle(longitude))

    def __init__(self, latitude: Angle = Angle.ZERO, longitude: Angle = Angle.ZERO):
        """Constructor.

        Parameters:
            latitude: the latitude
            longitude: the longitude
        """
        if not isinstance(latitude, Angle) or not isinstance(longitude, Angle):
            raise TypeError(
                "expected Angle, got {0!r} and {1!r}".format(
                    type(latitude), type(longitude)
                )
            )

        lat, lon = _canonicalize(latitude.degrees, longitude.degrees)
        self._latitude = latitude if lat == latitude.degrees else Angle(lat)
        self._longitude = longitude if lon == longitude.degrees else Angle(lon)

    @property
    def latitude(self) -> Angle:
        """The latitude of the coordinate pair."""
        return self._latitude

    @property
    def longitude(self) -> Angle:
        """The longitude of the coordinate pair."""
        return self._longitude

    @property
    def antipode(self) -> GlobalCoordinates:
        """The point on the exact opposite side of the globe."""
        return GlobalCoordinates(-self._latitude, self._longitude + Angle.ANGLE_180)

    def with_latitude(self, latitude: Angle) -> GlobalCoordinates:
        """Returns a copy of these coordinates with a different latitude."""
        return self.__class__(latitude, self._longitude)

    def with_longitude(self, longitude: Angle) -> GlobalCoordinates:
        """Returns a copy of these coordinates with a different longitude."""
        return self.__class__(self._latitude, longitude)

    def is_approximately_equal(
        self, other: GlobalCoordinates, precision: float = DEFAULT_PRECISION
    ) -> bool:
        """Returns whether this coordinate pair is equal to another one
        within the given relative precision.
        """
        return is_approximately_equal(
            self._longitude.degrees, other._longitude.degrees, precision
        ) and is_approximately_equal(
            self._latitude.degrees, other._latitude.degrees, precision
        )

    def _compare(self, other: GlobalCoordinates) -> int:
        if self._longitude < other._longitude:
            return -1
        elif self._longitude > other._longitude:
            return 1
        elif self._latitude < other._latitude:
            return -1
        elif self._latitude > other._latitude:
            return 1
        else:
            return 0

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GlobalCoordinates):
            return self._compare(other) == 0
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, GlobalCoordinates):
            return self._compare(other) < 0
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, GlobalCoordinates):
            return self._compare(other) <= 0
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, GlobalCoordinates):
            return self._compare(other) > 0
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, GlobalCoordinates):
            return self._compare(other) >= 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._latitude, self._longitude))

    def __repr__(self) -> str:
        return "{0.__class__.__name__}.from_degrees({1!r}, {2!r})".format(
            self, self._latitude.degrees, self._longitude.degrees
        )

    def __str__(self) -> str:
        return format_global_coordinates(self)


class GlobalPosition:
    """Immutable pair of global coordinates and an elevation above the
    reference ellipsoid.
    """

    _coordinates: GlobalCoordinates
    _elevation: float

    def __init__(self, coordinates: GlobalCoordinates, elevation: float = 0.0):
        """Constructor.

        Parameters:
            coordinates: the coordinates of the position
            elevation: the elevation above the reference ellipsoid, in meters
        """
        self._coordinates = coordinates
        self._elevation = float(elevation)

    @property
    def coordinates(self) -> GlobalCoordinates:
        """The coordinates of the position."""
        return self._coordinates

    @property
    def latitude(self) -> Angle:
        """The latitude of the position."""
        return self._coordinates.latitude

    @property
    def longitude(self) -> Angle:
        """The longitude of the position."""
        return self._coordinates.longitude

    @property
    def elevation(self) -> float:
        """The elevation of the position above the reference ellipsoid, in
        meters.
        """
        return self._elevation

    def _compare(self, other: GlobalPosition) -> int:
        result = self._coordinates._compare(other._coordinates)
        if result != 0:
            return result
        if is_approximately_equal(self._elevation, other._elevation):
            return 0
        return -1 if is_smaller(self._elevation, other._elevation) else 1

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GlobalPosition):
            return self._compare(other) == 0
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, GlobalPosition):
            return self._compare(other) < 0
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, GlobalPosition):
            return self._compare(other) <= 0
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, GlobalPosition):
            return self._compare(other) > 0
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, GlobalPosition):
            return self._compare(other) >= 0
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._coordinates, self._elevation))

    def __repr__(self) -> str:
        return (
            "{0.__class__.__name__}({0._coordinates!r}, "
            "elevation={0._elevation!r})"
        ).format(self)

    def __str__(self) -> str:
        return format_global_position(self)


class EuclidianCoordinate:
    """Point on the flat map of a projection.

    Two Euclidian coordinates can only be compared or measured against each
    other if they live in the same frame. For most projections the frame is
    the projection itself; UTM coordinates use their grid as the frame.
    """

    _projection: MercatorProjection
    _x: float
    _y: float

    @classmethod
    def from_xy(cls, projection: MercatorProjection, xy: Sequence[float]):
        """Creates a coordinate from a sequence holding an X and a Y
        coordinate.

        Raises:
            ValueError: if the sequence does not have exactly two items
        """
        if len(xy) != 2:
            raise ValueError(
                "coordinate sequence must have exactly two items, got {0}".format(
                    len(xy)
                )
            )
        return cls(projection, xy[0], xy[1])

    def __init__(self, projection: MercatorProjection, x: float = 0.0, y: float = 0.0):
        """Constructor.

        Parameters:
            projection: the projection that the coordinate belongs to
            x: the X coordinate
            y: the Y coordinate
        """
        self._projection = projection
        self._x = float(x)
        self._y = float(y)

    @property
    def projection(self) -> MercatorProjection:
        """The projection that the coordinate belongs to."""
        return self._projection

    @property
    def frame(self) -> Any:
        """The object identifying the flat coordinate system that this
        coordinate is expressed in.
        """
        return self._projection

    @property
    def x(self) -> float:
        """The X coordinate."""
        return self._x

    @property
    def y(self) -> float:
        """The Y coordinate."""
        return self._y

    @property
    def xy(self) -> tuple[float, float]:
        """The X and Y coordinates as a tuple."""
        return self._x, self._y

    def is_same_projection(self, other: EuclidianCoordinate) -> bool:
        """Returns whether this coordinate and another one live in the same
        frame and hence can be compared to each other.
        """
        return isinstance(other, EuclidianCoordinate) and bool(
            self.frame == other.frame
        )

    def distance_to(self, other: EuclidianCoordinate) -> float:
        """Returns the Euclidian distance of this coordinate from another
        one in the same frame.

        Raises:
            TypeError: if the other coordinate lives in a different frame
        """
        if not self.is_same_projection(other):
            raise TypeError(
                "cannot measure distance between {0!r} and {1!r}".format(self, other)
            )
        return hypot(self._x - other._x, self._y - other._y)

    def is_approximately_equal(
        self, other: EuclidianCoordinate, precision: float = DEFAULT_PRECISION
    ) -> bool:
        """Returns whether this coordinate is equal to another one within the
        given relative precision. Coordinates in different frames are never
        equal.
        """
        return (
            self.is_same_projection(other)
            and is_approximately_equal(self._x, other._x, precision)
            and is_approximately_equal(self._y, other._y, precision)
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, EuclidianCoordinate):
            return self.is_approximately_equal(other)
        return NotImplemented

    def __hash__(self) -> int:
        ellipsoid = self._projection.ellipsoid
        return hash(
            (self._x, self._y, ellipsoid.semi_major_axis, ellipsoid.flattening)
        )

    def __repr__(self) -> str:
        return "{0.__class__.__name__}(x={0._x!r}, y={0._y!r})".format(self)
