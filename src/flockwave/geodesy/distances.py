"""Distance calculation routines.

The geodetic calculations in this module implement Vincenty's formulae for
the direct and the inverse geodetic problem on an ellipsoid; see
T. Vincenty, "Direct and Inverse Solutions of Geodesics on the Ellipsoid
with Application of Nested Equations", Survey Review, 1975. Equation numbers
in the comments refer to this paper.
"""

from __future__ import annotations

import logging

from math import asin, atan, atan2, cos, hypot, isnan, nan, pi, sin, sqrt, tan
from typing import Any

from .angle import Angle
from .ellipsoid import Ellipsoid
from .formatting import format_geodetic_curve, format_geodetic_measurement
from .utils import is_approximately_equal, is_negative, is_zero
from .vectors import GlobalCoordinates, GlobalPosition

__all__ = (
    "GeodeticCalculator",
    "GeodeticCurve",
    "GeodeticMeasurement",
    "haversine",
    "vincenty",
)

log = logging.getLogger(__name__)

#: Precision used to decide whether the iterations have converged
PRECISION = 1e-13

#: Maximum number of iterations of the inverse solver
MAX_INVERSE_ITERATIONS = 20

#: Maximum number of iterations of the direct solver; it normally converges
#: in a handful of steps
MAX_DIRECT_ITERATIONS = 100

TWO_PI = 2.0 * pi


class GeodeticCurve:
    """Geodesic between two points on an ellipsoid, described by its length
    and the azimuth at its starting point.
    """

    _calculator: GeodeticCalculator
    _ellipsoidal_distance: float
    _azimuth: Angle

    def __init__(
        self,
        calculator: GeodeticCalculator,
        ellipsoidal_distance: float,
        azimuth: Angle,
    ):
        """Constructor.

        Parameters:
            calculator: the calculator that created the curve
            ellipsoidal_distance: the length of the curve, in meters
            azimuth: the azimuth at the start of the curve
        """
        self._calculator = calculator
        self._ellipsoidal_distance = float(ellipsoidal_distance)
        self._azimuth = azimuth

    @property
    def calculator(self) -> GeodeticCalculator:
        """The calculator that created the curve."""
        return self._calculator

    @property
    def ellipsoidal_distance(self) -> float:
        """The length of the curve along the surface of the ellipsoid, in
        meters.
        """
        return self._ellipsoidal_distance

    @property
    def azimuth(self) -> Angle:
        """The azimuth at the start of the curve, measured clockwise from
        north. NaN if the azimuth cannot be determined.
        """
        return self._azimuth

    @property
    def reverse_azimuth(self) -> Angle:
        """The azimuth pointing back from the end of the curve towards its
        start, assuming a straight course.
        """
        degrees = self._azimuth.degrees
        if isnan(degrees):
            return Angle(nan)
        elif degrees < 180.0:
            return self._azimuth + Angle.ANGLE_180
        else:
            return self._azimuth - Angle.ANGLE_180

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GeodeticCurve):
            return (
                is_approximately_equal(
                    self._ellipsoidal_distance, other._ellipsoidal_distance
                )
                and self._azimuth == other._azimuth
                and self._calculator == other._calculator
            )
        return NotImplemented

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        return (
            "{0.__class__.__name__}(ellipsoidal_distance={0._ellipsoidal_distance!r}, "
            "azimuth={0._azimuth!r})"
        ).format(self)

    def __str__(self) -> str:
        return format_geodetic_curve(self)


class GeodeticMeasurement:
    """Geodetic curve between two points at different elevations."""

    _average_curve: GeodeticCurve
    _elevation_change: float
    _point_to_point_distance: float

    def __init__(self, average_curve: GeodeticCurve, elevation_change: float):
        """Constructor.

        Parameters:
            average_curve: the geodetic curve at the average elevation of the
                two endpoints
            elevation_change: the change in elevation from the start point to
                the end point, in meters
        """
        self._average_curve = average_curve
        self._elevation_change = float(elevation_change)
        self._point_to_point_distance = hypot(
            average_curve.ellipsoidal_distance, self._elevation_change
        )

    @property
    def average_curve(self) -> GeodeticCurve:
        """The geodetic curve at the average elevation of the endpoints."""
        return self._average_curve

    @property
    def calculator(self) -> GeodeticCalculator:
        return self._average_curve.calculator

    @property
    def ellipsoidal_distance(self) -> float:
        return self._average_curve.ellipsoidal_distance

    @property
    def azimuth(self) -> Angle:
        return self._average_curve.azimuth

    @property
    def reverse_azimuth(self) -> Angle:
        return self._average_curve.reverse_azimuth

    @property
    def elevation_change(self) -> float:
        """The change in elevation from the start point to the end point, in
        meters.
        """
        return self._elevation_change

    @property
    def point_to_point_distance(self) -> float:
        """The distance between the two endpoints, taking into account the
        elevation change.
        """
        return self._point_to_point_distance

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GeodeticMeasurement):
            return (
                is_approximately_equal(self._elevation_change, other._elevation_change)
                and self._average_curve == other._average_curve
            )
        return NotImplemented

    __hash__ = None  # type: ignore

    def __str__(self) -> str:
        return format_geodetic_measurement(self)


class GeodeticCalculator:
    """Solver for the direct and the inverse geodetic problem on a given
    reference ellipsoid.
    """

    _ellipsoid: Ellipsoid

    def __init__(self, ellipsoid: Ellipsoid = Ellipsoid.WGS84):
        """Constructor.

        Parameters:
            ellipsoid: the reference ellipsoid to perform the calculations on
        """
        self._ellipsoid = ellipsoid

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The reference ellipsoid of the calculator."""
        return self._ellipsoid

    def calculate_ending_coordinates(
        self, start: GlobalCoordinates, start_bearing: Angle, distance: float
    ) -> tuple[GlobalCoordinates, Angle]:
        """Solves the direct geodetic problem: calculates the end point of a
        geodesic of the given length, starting from the given point with the
        given bearing.

        Parameters:
            start: the starting point
            start_bearing: the azimuth at the starting point
            distance: the length of the geodesic, in meters

        Returns:
            the end point and the azimuth of the geodesic at the end point

        Raises:
            ValueError: if the distance is negative
        """
        if is_negative(distance):
            raise ValueError("distance must be non-negative")

        a = self._ellipsoid.semi_major_axis
        b = self._ellipsoid.semi_minor_axis
        f = self._ellipsoid.flattening
        a_squared = a * a
        b_squared = b * b

        phi1 = start.latitude.radians
        alpha1 = start_bearing.radians
        cos_alpha1 = cos(alpha1)
        sin_alpha1 = sin(alpha1)
        tan_u1 = (1.0 - f) * tan(phi1)
        cos_u1 = 1.0 / sqrt(1.0 + tan_u1 * tan_u1)
        sin_u1 = tan_u1 * cos_u1

        # eq. 1
        sigma1 = atan2(tan_u1, cos_alpha1)

        # eq. 2
        sin_alpha = cos_u1 * sin_alpha1

        sin2_alpha = sin_alpha * sin_alpha
        cos2_alpha = 1 - sin2_alpha
        u_squared = cos2_alpha * (a_squared - b_squared) / b_squared

        # eq. 3
        big_a = 1 + (u_squared / 16384) * (
            4096 + u_squared * (-768 + u_squared * (320 - 175 * u_squared))
        )

        # eq. 4
        big_b = (u_squared / 1024) * (
            256 + u_squared * (-128 + u_squared * (74 - 47 * u_squared))
        )

        s_over_b_a = distance / (b * big_a)
        sigma = prev_sigma = s_over_b_a

        for _ in range(MAX_DIRECT_ITERATIONS):
            # eq. 5
            cos_sigma_m2 = cos(2.0 * sigma1 + sigma)
            cos2_sigma_m2 = cos_sigma_m2 * cos_sigma_m2
            sin_sigma = sin(sigma)
            cos_sigma = cos(sigma)

            # eq. 6
            delta_sigma = (
                big_b
                * sin_sigma
                * (
                    cos_sigma_m2
                    + (big_b / 4.0)
                    * (
                        cos_sigma * (-1 + 2 * cos2_sigma_m2)
                        - (big_b / 6.0)
                        * cos_sigma_m2
                        * (-3 + 4 * sin_sigma * sin_sigma)
                        * (-3 + 4 * cos2_sigma_m2)
                    )
                )
            )

            # eq. 7
            sigma = s_over_b_a + delta_sigma
            if is_approximately_equal(sigma, prev_sigma, PRECISION):
                break

            prev_sigma = sigma
        else:
            log.warning(
                "Direct geodetic solver did not converge in %d iterations",
                MAX_DIRECT_ITERATIONS,
            )

        cos_sigma_m2 = cos(2.0 * sigma1 + sigma)
        cos2_sigma_m2 = cos_sigma_m2 * cos_sigma_m2
        cos_sigma = cos(sigma)
        sin_sigma = sin(sigma)

        # eq. 8
        phi2 = atan2(
            sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
            (1.0 - f)
            * sqrt(
                sin2_alpha
                + (sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1) ** 2
            ),
        )

        # eq. 9; atan2() is needed to handle paths crossing a pole
        lam = atan2(
            sin_sigma * sin_alpha1, cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1
        )

        # eq. 10
        c = (f / 16) * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))

        # eq. 11
        big_l = lam - (1 - c) * f * sin_alpha * (
            sigma
            + c * sin_sigma * (cos_sigma_m2 + c * cos_sigma * (-1 + 2 * cos2_sigma_m2))
        )

        # eq. 12
        alpha2 = atan2(sin_alpha, -sin_u1 * sin_sigma + cos_u1 * cos_sigma * cos_alpha1)

        end = GlobalCoordinates(
            Angle.from_radians(phi2),
            Angle.from_radians(start.longitude.radians + big_l),
        )
        return end, Angle.from_radians(alpha2)

    def calculate_geodetic_curve(
        self, start: GlobalCoordinates, end: GlobalCoordinates
    ) -> GeodeticCurve:
        """Solves the inverse geodetic problem: calculates the length and the
        initial azimuth of the geodesic between two points.

        When the iteration does not converge (which happens for nearly
        antipodal points), the azimuth falls back to 180 degrees if the start
        point is north of the end point, zero degrees if it is south of the
        end point, and NaN if the two latitudes are equal.

        Parameters:
            start: the starting point
            end: the end point

        Returns:
            the geodetic curve between the two points
        """
        a = self._ellipsoid.semi_major_axis
        b = self._ellipsoid.semi_minor_axis
        f = self._ellipsoid.flattening

        phi1 = start.latitude.radians
        lambda1 = start.longitude.radians
        phi2 = end.latitude.radians
        lambda2 = end.longitude.radians

        a2 = a * a
        b2 = b * b
        squared_ratio = (a2 - b2) / b2

        omega = lambda2 - lambda1

        u1 = atan((1.0 - f) * tan(phi1))
        sin_u1 = sin(u1)
        cos_u1 = cos(u1)

        u2 = atan((1.0 - f) * tan(phi2))
        sin_u2 = sin(u2)
        cos_u2 = cos(u2)

        sin_u1_sin_u2 = sin_u1 * sin_u2
        cos_u1_sin_u2 = cos_u1 * sin_u2
        sin_u1_cos_u2 = sin_u1 * cos_u2
        cos_u1_cos_u2 = cos_u1 * cos_u2

        # eq. 13
        lam = omega

        big_a = 0.0
        sigma = 0.0
        delta_sigma = 0.0
        converged = False

        for i in range(MAX_INVERSE_ITERATIONS):
            lam0 = lam

            sin_lambda = sin(lam)
            cos_lambda = cos(lam)

            # eq. 14
            sin2_sigma = (cos_u2 * sin_lambda) ** 2 + (
                cos_u1_sin_u2 - sin_u1_cos_u2 * cos_lambda
            ) ** 2
            sin_sigma = sqrt(sin2_sigma)

            # eq. 15
            cos_sigma = sin_u1_sin_u2 + cos_u1_cos_u2 * cos_lambda

            # eq. 16
            sigma = atan2(sin_sigma, cos_sigma)

            # eq. 17; sin2_sigma may be zero
            if is_zero(sin2_sigma):
                sin_alpha = 0.0
            else:
                sin_alpha = max(-1.0, min(1.0, cos_u1_cos_u2 * sin_lambda / sin_sigma))
            cos_alpha = cos(asin(sin_alpha))
            cos2_alpha = cos_alpha * cos_alpha

            # eq. 18; cos2_alpha may be zero
            if is_zero(cos2_alpha):
                cos2_sigma_m = 0.0
            else:
                cos2_sigma_m = cos_sigma - 2 * sin_u1_sin_u2 / cos2_alpha
            u_squared = cos2_alpha * squared_ratio
            cos2_sigma_m_sq = cos2_sigma_m * cos2_sigma_m

            # eq. 3
            big_a = 1.0 + u_squared / 16384 * (
                4096 + u_squared * (-768 + u_squared * (320 - 175 * u_squared))
            )

            # eq. 4
            big_b = u_squared / 1024 * (
                256 + u_squared * (-128 + u_squared * (74 - 47 * u_squared))
            )

            # eq. 6
            delta_sigma = (
                big_b
                * sin_sigma
                * (
                    cos2_sigma_m
                    + big_b
                    / 4
                    * (
                        cos_sigma * (-1 + 2 * cos2_sigma_m_sq)
                        - big_b
                        / 6
                        * cos2_sigma_m
                        * (-3 + 4 * sin2_sigma)
                        * (-3 + 4 * cos2_sigma_m_sq)
                    )
                )
            )

            # eq. 10
            c = f / 16 * cos2_alpha * (4 + f * (4 - 3 * cos2_alpha))

            # eq. 11 (modified)
            lam = omega + (1 - c) * f * sin_alpha * (
                sigma
                + c
                * sin_sigma
                * (cos2_sigma_m + c * cos_sigma * (-1 + 2 * cos2_sigma_m_sq))
            )

            # The first two iterations may satisfy the convergence test
            # spuriously. A zero lambda never counts as converged.
            change = abs((lam - lam0) / lam) if lam != 0.0 else nan
            if i > 1 and change < PRECISION:
                converged = True
                break

        # eq. 19
        s = b * big_a * (sigma - delta_sigma)

        if not converged:
            if phi1 > phi2:
                azimuth = Angle.ANGLE_180
            elif phi1 < phi2:
                azimuth = Angle.ZERO
            else:
                azimuth = Angle(nan)
            log.debug(
                "Inverse geodetic solver did not converge, using azimuth %s", azimuth
            )
        else:
            # eq. 20
            radians = atan2(cos_u2 * sin(lam), cos_u1_sin_u2 - sin_u1_cos_u2 * cos(lam))
            if is_negative(radians):
                radians += TWO_PI
            azimuth = Angle.from_radians(radians)

        if azimuth.degrees >= 360.0:
            azimuth = azimuth - Angle(360.0)

        return GeodeticCurve(self, s, azimuth)

    def calculate_geodetic_measurement(
        self, start: GlobalPosition, end: GlobalPosition
    ) -> GeodeticMeasurement:
        """Calculates the geodetic curve between two positions that may be at
        different elevations.

        The curve is calculated on an ellipsoid whose semi-major axis is
        extended by the mean elevation of the two positions.

        Parameters:
            start: the starting position
            end: the end position

        Returns:
            the geodetic measurement between the two positions
        """
        start_coords = start.coordinates
        end_coords = end.coordinates

        mean_elevation = (start.elevation + end.elevation) / 2.0
        mean_phi = (start_coords.latitude.radians + end_coords.latitude.radians) / 2.0

        f = self._ellipsoid.flattening
        a = self._ellipsoid.semi_major_axis + mean_elevation * (1.0 + f * sin(mean_phi))
        calculator = GeodeticCalculator(Ellipsoid.from_a_and_f(a, f))

        average_curve = calculator.calculate_geodetic_curve(start_coords, end_coords)
        return GeodeticMeasurement(average_curve, end.elevation - start.elevation)

    def calculate_geodetic_path(
        self,
        start: GlobalCoordinates,
        end: GlobalCoordinates,
        number_of_points: int = 10,
    ) -> list[GlobalCoordinates]:
        """Calculates equally spaced points along the geodesic between two
        points, following the initial azimuth of the geodesic.

        Parameters:
            start: the starting point
            end: the end point
            number_of_points: the number of points to return, including the
                two endpoints

        Returns:
            the list of points, starting with ``start`` and ending with ``end``

        Raises:
            ValueError: if the number of points is less than 2
        """
        if number_of_points < 2:
            raise ValueError("a geodetic path needs at least two points")

        if start == end or number_of_points == 2:
            return [start, end]

        curve = self.calculate_geodetic_curve(start, end)
        step = curve.ellipsoidal_distance / (number_of_points - 1)

        result = [start]
        for _ in range(number_of_points - 2):
            point, _ = self.calculate_ending_coordinates(
                result[-1], curve.azimuth, step
            )
            result.append(point)
        result.append(end)

        return result

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GeodeticCalculator):
            return self._ellipsoid == other._ellipsoid
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._ellipsoid)

    def __repr__(self) -> str:
        return "{0.__class__.__name__}({0._ellipsoid!r})".format(self)


def haversine(
    first: GlobalCoordinates,
    second: GlobalCoordinates,
    ellipsoid: Ellipsoid = Ellipsoid.WGS84,
) -> float:
    """Returns the distance of two points given in spherical coordinates
    (latitude and longitude) using the Haversine formula.

    Parameters:
        first: the first point
        second: the second point
        ellipsoid: the ellipsoid whose IUGG mean radius is used as the radius
            of the sphere

    Returns:
        the distance of the two points, in metres
    """
    first_lat = first.latitude.radians
    second_lat = second.latitude.radians
    lat_diff = first_lat - second_lat
    lon_diff = first.longitude.radians - second.longitude.radians
    d = (
        sin(lat_diff * 0.5) ** 2
        + cos(first_lat) * cos(second_lat) * sin(lon_diff * 0.5) ** 2
    )
    mean_radius = (2 * ellipsoid.semi_major_axis + ellipsoid.semi_minor_axis) / 3
    return 2 * mean_radius * asin(sqrt(d))


def vincenty(
    first: GlobalCoordinates,
    second: GlobalCoordinates,
    ellipsoid: Ellipsoid = Ellipsoid.WGS84,
) -> float:
    """Returns the length of the geodesic between two points on the given
    ellipsoid, using Vincenty's inverse formula.

    Parameters:
        first: the first point
        second: the second point
        ellipsoid: the reference ellipsoid

    Returns:
        the distance of the two points, in metres
    """
    curve = GeodeticCalculator(ellipsoid).calculate_geodetic_curve(first, second)
    return curve.ellipsoidal_distance
