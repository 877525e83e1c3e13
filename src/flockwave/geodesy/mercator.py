"""Mercator projections mapping the surface of an ellipsoid to a flat map."""

from __future__ import annotations

import logging

from abc import ABCMeta, abstractmethod
from math import atan, atan2, cos, exp, log as ln, pi, sin, sqrt, tan
from typing import Any, Generic, NamedTuple, Sequence, TypeVar, Union

from .angle import Angle
from .constants import MERCATOR_MAX_LATITUDE
from .distances import GeodeticCalculator
from .ellipsoid import Ellipsoid
from .utils import is_negative
from .vectors import EuclidianCoordinate, GlobalCoordinates

__all__ = (
    "MercatorProjection",
    "GlobalMercatorProjection",
    "SphericalMercatorProjection",
    "EllipticalMercatorProjection",
    "RhumbPath",
)

log = logging.getLogger(__name__)

C = TypeVar("C", bound=EuclidianCoordinate)

GREENWICH_MERIDIAN = Angle(0.0)
MIN_LONGITUDE = Angle(-180.0)
MAX_LONGITUDE = Angle(180.0)

#: Maximum number of iterations when inverting the elliptical Mercator
#: latitude formula
MAX_LATITUDE_ITERATIONS = 15

#: Convergence threshold of the iterative latitude inversion, in radians
LATITUDE_TOLERANCE = 1e-9

PointLike = Union[EuclidianCoordinate, GlobalCoordinates, Sequence[float]]


class RhumbPath(NamedTuple):
    """Result of a rhumb line calculation on a Mercator map."""

    points: list[GlobalCoordinates]
    """Equally spaced points of the path, including its endpoints"""

    distance: float
    """Length of the rhumb line along the surface of the ellipsoid, in meters"""

    bearing: Angle
    """Constant bearing of the rhumb line"""


class MercatorProjection(Generic[C], metaclass=ABCMeta):
    """Abstract base class for projections of the Mercator family.

    A projection converts global coordinates on its reference ellipsoid to
    Euclidian coordinates of type ``C`` on a flat map and back.
    """

    _ellipsoid: Ellipsoid
    _reference_meridian: Angle

    def __init__(
        self,
        ellipsoid: Ellipsoid = Ellipsoid.WGS84,
        reference_meridian: Angle = GREENWICH_MERIDIAN,
    ):
        """Constructor.

        Parameters:
            ellipsoid: the reference ellipsoid of the projection
            reference_meridian: the meridian that is mapped to X = 0
        """
        self._ellipsoid = ellipsoid
        self._reference_meridian = self.normalize_longitude(reference_meridian)

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The reference ellipsoid of the projection."""
        return self._ellipsoid

    @property
    def reference_meridian(self) -> Angle:
        """The meridian that is mapped to X = 0."""
        return self._reference_meridian

    @property
    def max_latitude(self) -> Angle:
        """The northernmost latitude covered by the projection."""
        return Angle(MERCATOR_MAX_LATITUDE)

    @property
    def min_latitude(self) -> Angle:
        """The southernmost latitude covered by the projection."""
        return -self.max_latitude

    @property
    def max_longitude(self) -> Angle:
        return MAX_LONGITUDE

    @property
    def min_longitude(self) -> Angle:
        return MIN_LONGITUDE

    def normalize_latitude(self, latitude: Angle) -> Angle:
        """Clamps the given latitude into the range covered by the
        projection.
        """
        return Angle(
            min(
                self.max_latitude.degrees,
                max(latitude.degrees, self.min_latitude.degrees),
            )
        )

    @staticmethod
    def normalize_longitude(longitude: Angle) -> Angle:
        """Clamps the given longitude into the range [-180, 180]."""
        return Angle(
            min(MAX_LONGITUDE.degrees, max(longitude.degrees, MIN_LONGITUDE.degrees))
        )

    @abstractmethod
    def scale_factor(self, point: GlobalCoordinates) -> float:
        """Returns the scale factor of the projection at the given point."""
        raise NotImplementedError

    @abstractmethod
    def to_euclidian(self, coordinates: GlobalCoordinates) -> C:
        """Projects the given global coordinates to the flat map."""
        raise NotImplementedError

    @abstractmethod
    def from_euclidian(self, xy: C) -> GlobalCoordinates:
        """Projects the given point of the flat map back to the reference
        ellipsoid.
        """
        raise NotImplementedError

    def _to_owned_coordinate(self, point: PointLike) -> EuclidianCoordinate:
        if isinstance(point, EuclidianCoordinate):
            if point.projection != self:
                raise TypeError(
                    "coordinate {0!r} does not belong to this projection".format(point)
                )
            return point
        elif isinstance(point, GlobalCoordinates):
            return self.to_euclidian(point)
        else:
            return EuclidianCoordinate.from_xy(self, point)

    def euclidian_distance(self, first: PointLike, second: PointLike) -> float:
        """Returns the distance of two points on the flat map of the
        projection.

        Parameters:
            first: the first point; a Euclidian coordinate of this projection,
                a global coordinate pair to project, or an X-Y pair
            second: the second point, in the same form as the first one

        Raises:
            TypeError: if one of the points belongs to another projection or
                the two points live in different frames
        """
        return self._to_owned_coordinate(first).distance_to(
            self._to_owned_coordinate(second)
        )

    def geodesic_distance(
        self, start: GlobalCoordinates, end: GlobalCoordinates
    ) -> float:
        """Returns the length of the geodesic between two points on the
        reference ellipsoid of the projection, in meters.
        """
        calculator = GeodeticCalculator(self._ellipsoid)
        return calculator.calculate_geodetic_curve(start, end).ellipsoidal_distance

    def geodesic_distance_from_degrees(
        self,
        latitude_start: float,
        longitude_start: float,
        latitude_end: float,
        longitude_end: float,
    ) -> float:
        """Returns the length of the geodesic between two points given with
        their latitudes and longitudes in degrees.
        """
        return self.geodesic_distance(
            GlobalCoordinates.from_degrees(latitude_start, longitude_start),
            GlobalCoordinates.from_degrees(latitude_end, longitude_end),
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, MercatorProjection):
            return type(self) is type(other) and self._ellipsoid == other._ellipsoid
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._ellipsoid))

    def __repr__(self) -> str:
        return "{0.__class__.__name__}({0._ellipsoid!r})".format(self)


class GlobalMercatorProjection(MercatorProjection[EuclidianCoordinate]):
    """Abstract base class for Mercator projections that map the whole globe
    onto a single flat map.
    """

    def scale_factor_at(self, latitude: Angle) -> float:
        """Returns the scale factor of the projection along the given
        parallel.
        """
        phi = latitude.radians
        return sqrt(1.0 - (sin(phi) * self._ellipsoid.eccentricity) ** 2) / cos(phi)

    def scale_factor(self, point: GlobalCoordinates) -> float:
        return self.scale_factor_at(point.latitude)

    def to_euclidian(self, coordinates: GlobalCoordinates) -> EuclidianCoordinate:
        return EuclidianCoordinate(
            self,
            self.longitude_to_x(coordinates.longitude),
            self.latitude_to_y(coordinates.latitude),
        )

    def from_euclidian(self, xy: EuclidianCoordinate) -> GlobalCoordinates:
        return GlobalCoordinates(self.y_to_latitude(xy.y), self.x_to_longitude(xy.x))

    def to_xy(self, coordinates: GlobalCoordinates) -> tuple[float, float]:
        """Projects the given coordinates and returns the result as an X-Y
        pair.
        """
        return self.to_euclidian(coordinates).xy

    def from_xy(self, xy: Sequence[float]) -> GlobalCoordinates:
        """Projects the given X-Y pair back to the reference ellipsoid."""
        return self.from_euclidian(EuclidianCoordinate.from_xy(self, xy))

    def longitude_to_x(self, longitude: Angle) -> float:
        delta = longitude - self._reference_meridian
        return self._ellipsoid.semi_major_axis * delta.radians

    def x_to_longitude(self, x: float) -> Angle:
        longitude = self._reference_meridian + Angle.from_radians(
            x / self._ellipsoid.semi_major_axis
        )
        return self.normalize_longitude(longitude)

    @abstractmethod
    def latitude_to_y(self, latitude: Angle) -> float:
        raise NotImplementedError

    @abstractmethod
    def y_to_latitude(self, y: float) -> Angle:
        raise NotImplementedError

    def calculate_path(
        self,
        start: GlobalCoordinates,
        end: GlobalCoordinates,
        number_of_points: int = 10,
    ) -> RhumbPath:
        """Calculates the rhumb line (loxodrome) between two points, i.e. the
        straight line connecting them on the flat map.

        The length of the rhumb line is calculated with the formula of
        M. Petrović, "Differential Equation of a Loxodrome on the Spheroid",
        Naše more, 2007.

        Parameters:
            start: the starting point
            end: the end point
            number_of_points: the number of equally spaced points to return,
                including the two endpoints

        Returns:
            the points along the rhumb line, its length and its bearing

        Raises:
            ValueError: if the number of points is less than 2
        """
        if number_of_points < 2:
            raise ValueError("a path needs at least two points")

        if start == end:
            return RhumbPath([start, end], 0.0, Angle.ZERO)

        c_start = self.to_euclidian(start)
        c_end = self.to_euclidian(end)
        dist = self.euclidian_distance(c_start, c_end)
        step = dist / (number_of_points - 1)
        dx = (c_end.x - c_start.x) / dist
        dy = (c_end.y - c_start.y) / dist

        bearing = Angle.from_radians(atan2(dx, dy))
        if is_negative(bearing.degrees):
            bearing = bearing + Angle(360.0)

        if bearing == Angle(90.0) or bearing == Angle(270.0):
            distance = dist / self.scale_factor_at(start.latitude)
        else:
            e2 = self._ellipsoid.eccentricity**2
            distance = (
                self._ellipsoid.semi_major_axis
                / cos(bearing.radians)
                * (
                    (1 - e2 / 4.0) * (end.latitude - start.latitude).radians
                    - e2
                    * (sin(2 * end.latitude.radians) - sin(2 * start.latitude.radians))
                    * 3.0
                    / 8.0
                )
            )

        points = [start]
        for i in range(1, number_of_points - 1):
            point = EuclidianCoordinate(
                self, c_start.x + i * dx * step, c_start.y + i * dy * step
            )
            points.append(self.from_euclidian(point))
        points.append(end)

        return RhumbPath(points, distance, bearing)


class SphericalMercatorProjection(GlobalMercatorProjection):
    """Mercator projection of a perfect sphere, as used by most web mapping
    services.
    """

    def __init__(self, reference_meridian: Angle = GREENWICH_MERIDIAN):
        super().__init__(Ellipsoid.SPHERE, reference_meridian)

    def latitude_to_y(self, latitude: Angle) -> float:
        a = self._ellipsoid.semi_major_axis
        return a * ln(tan(pi / 4.0 + latitude.radians / 2.0))

    def y_to_latitude(self, y: float) -> Angle:
        latitude = Angle.from_radians(
            2.0 * atan(exp(y / self._ellipsoid.semi_major_axis)) - 0.5 * pi
        )
        return self.normalize_latitude(latitude)


class EllipticalMercatorProjection(GlobalMercatorProjection):
    """Mercator projection of an ellipsoid.

    The formulas follow the recommendations of the OpenStreetMap project;
    see https://wiki.openstreetmap.org/wiki/Mercator .
    """

    def latitude_to_y(self, latitude: Angle) -> float:
        phi = self.normalize_latitude(latitude).radians
        e = self._ellipsoid.eccentricity
        con = e * sin(phi)
        con = ((1.0 - con) / (1.0 + con)) ** (0.5 * e)
        ts = tan(0.5 * (0.5 * pi - phi)) / con
        return -self._ellipsoid.semi_major_axis * ln(ts)

    def y_to_latitude(self, y: float) -> Angle:
        e = self._ellipsoid.eccentricity
        ts = exp(-y / self._ellipsoid.semi_major_axis)
        phi = 0.5 * pi - 2.0 * atan(ts)

        for _ in range(MAX_LATITUDE_ITERATIONS):
            con = e * sin(phi)
            dphi = (
                0.5 * pi
                - 2.0 * atan(ts * ((1.0 - con) / (1.0 + con)) ** (0.5 * e))
                - phi
            )
            phi += dphi
            if abs(dphi) <= LATITUDE_TOLERANCE:
                break
        else:
            log.warning(
                "Latitude inversion did not converge in %d iterations for y=%r",
                MAX_LATITUDE_ITERATIONS,
                y,
            )

        return self.normalize_latitude(Angle.from_radians(phi))
