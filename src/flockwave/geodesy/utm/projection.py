"""Universal Transverse Mercator projection.

The implementation uses the third-order Krüger series of the transverse
Mercator projection, as described in
https://en.wikipedia.org/wiki/Universal_Transverse_Mercator_coordinate_system .
"""

from __future__ import annotations

from math import asin, atan, atanh, cos, cosh, sin, sinh, sqrt, tan, tanh
from typing import Optional

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.constants import UTM
from flockwave.geodesy.ellipsoid import Ellipsoid
from flockwave.geodesy.mercator import MercatorProjection
from flockwave.geodesy.vectors import GlobalCoordinates

from .coordinate import UtmCoordinate
from .grid import UtmGrid

__all__ = ("UtmProjection",)

K0 = UTM.SCALE_FACTOR
E0 = UTM.FALSE_EASTING


class UtmProjection(MercatorProjection[UtmCoordinate]):
    """Universal Transverse Mercator projection on a given reference
    ellipsoid.

    Each point is projected into the frame of the UTM grid that contains it;
    the resulting coordinates carry their grid with them.
    """

    _n: float
    _a: float
    _alpha: tuple[float, float, float]
    _beta: tuple[float, float, float]
    _delta: tuple[float, float, float]

    def __init__(self, ellipsoid: Ellipsoid = Ellipsoid.WGS84):
        """Constructor.

        Parameters:
            ellipsoid: the reference ellipsoid of the projection
        """
        super().__init__(ellipsoid)
        self._recalculate()

    def _recalculate(self) -> None:
        """Recalculates the coefficients of the series expansions that are
        re-used across different transformations.
        """
        f = self._ellipsoid.flattening
        n = f / (2.0 - f)
        n2 = n * n
        n3 = n2 * n
        n4 = n3 * n

        self._n = n
        self._a = (self._ellipsoid.semi_major_axis / (1.0 + n)) * (
            1.0 + n2 / 4.0 + n4 / 64.0
        )
        self._alpha = (
            n * 0.5 - 2.0 * n2 / 3.0 + 5.0 * n3 / 16.0,
            13.0 * n2 / 48.0 - 0.6 * n3,
            61.0 * n3 / 240.0,
        )
        self._beta = (
            n * 0.5 - 2.0 * n2 / 3.0 + 37.0 * n3 / 96.0,
            n2 / 48.0 + n3 / 15.0,
            17.0 * n3 / 480.0,
        )
        self._delta = (
            2.0 * n - 2.0 * n2 / 3.0 - 2.0 * n3,
            7.0 * n2 / 3.0 - 1.6 * n3,
            56.0 * n3 / 15.0,
        )

    @property
    def min_latitude(self) -> Angle:
        return Angle(UTM.MIN_LATITUDE)

    @property
    def max_latitude(self) -> Angle:
        return Angle(UTM.MAX_LATITUDE)

    def _forward(
        self, grid: UtmGrid, latitude: float, longitude: float
    ) -> tuple[float, float, float, float]:
        """Projects a point given in degrees into the frame of the given grid.

        Returns:
            the easting, the northing, the scale factor and the meridian
            convergence (in radians) at the point
        """
        n = self._n
        northing_offset = 0.0 if grid.is_northern else UTM.SOUTHERN_FALSE_NORTHING

        phi = Angle.deg_to_rad(latitude)
        dlambda = Angle.deg_to_rad(longitude) - grid.central_meridian.radians
        sin_phi = sin(phi)
        cos_dlambda = cos(dlambda)

        x = 2.0 * sqrt(n) / (1.0 + n)
        t = sinh(atanh(sin_phi) - atanh(x * sin_phi) * x)
        xi = atan(t / cos_dlambda)
        eta = atanh(sin(dlambda) / sqrt(1.0 + t * t))

        sigma = 1.0
        tau = 0.0
        easting_sum = 0.0
        northing_sum = 0.0
        for j, alpha in enumerate(self._alpha, 1):
            two_j = 2.0 * j
            cos_xi, sin_xi = cos(two_j * xi), sin(two_j * xi)
            cosh_eta, sinh_eta = cosh(two_j * eta), sinh(two_j * eta)
            sigma += two_j * alpha * cos_xi * cosh_eta
            tau += two_j * alpha * sin_xi * sinh_eta
            easting_sum += alpha * cos_xi * sinh_eta
            northing_sum += alpha * sin_xi * cosh_eta

        easting = E0 + K0 * self._a * (eta + easting_sum)
        northing = northing_offset + K0 * self._a * (xi + northing_sum)

        sqrt_one_plus_t2 = sqrt(1.0 + t * t)
        tan_dlambda = tan(dlambda)
        scale_factor = (K0 * self._a / self._ellipsoid.semi_major_axis) * sqrt(
            ((sigma * sigma + tau * tau) / (t * t + cos_dlambda * cos_dlambda))
            * (1.0 + (tan(phi) * (1.0 - n) / (1.0 + n)) ** 2)
        )
        convergence = atan(
            (tau * sqrt_one_plus_t2 + sigma * t * tan_dlambda)
            / (sigma * sqrt_one_plus_t2 - tau * t * tan_dlambda)
        )

        return easting, northing, scale_factor, convergence

    def _project(
        self, grid: UtmGrid, latitude: float, longitude: float
    ) -> tuple[float, float]:
        """Projects a point given in degrees into the frame of the given grid
        and returns its easting and northing.
        """
        easting, northing, _, _ = self._forward(grid, latitude, longitude)
        return easting, northing

    def _unproject(
        self, point: UtmCoordinate
    ) -> tuple[GlobalCoordinates, float, float]:
        """Projects a UTM coordinate back to the reference ellipsoid.

        Returns:
            the global coordinates of the point, the scale factor and the
            meridian convergence (in radians) at the point
        """
        n = self._n
        grid = point.grid
        northing_offset = 0.0 if grid.is_northern else UTM.SOUTHERN_FALSE_NORTHING

        xi = (point.y - northing_offset) / (K0 * self._a)
        eta = (point.x - E0) / (K0 * self._a)

        xi_prime = xi
        eta_prime = eta
        sigma_prime = 1.0
        tau_prime = 0.0
        for j, beta in enumerate(self._beta, 1):
            two_j = 2.0 * j
            cos_xi, sin_xi = cos(two_j * xi), sin(two_j * xi)
            cosh_eta, sinh_eta = cosh(two_j * eta), sinh(two_j * eta)
            xi_prime -= beta * sin_xi * cosh_eta
            eta_prime -= beta * cos_xi * sinh_eta
            sigma_prime -= two_j * beta * cos_xi * cosh_eta
            tau_prime += two_j * beta * sin_xi * sinh_eta

        chi = asin(sin(xi_prime) / cosh(eta_prime))

        phi = chi
        for j, delta in enumerate(self._delta, 1):
            phi += delta * sin(2.0 * j * chi)

        lam = grid.central_meridian.radians + atan(sinh(eta_prime) / cos(xi_prime))

        tan_xi_tanh_eta = tan(xi_prime) * tanh(eta_prime)
        scale_factor = (K0 * self._a / self._ellipsoid.semi_major_axis) * sqrt(
            (
                (cos(xi_prime) ** 2 + sinh(eta_prime) ** 2)
                / (sigma_prime**2 + tau_prime**2)
            )
            * (1.0 + ((1.0 - n) / (1.0 + n) * tan(phi)) ** 2)
        )
        convergence = atan(
            (tau_prime + sigma_prime * tan_xi_tanh_eta)
            / (sigma_prime - tau_prime * tan_xi_tanh_eta)
        )

        coordinates = GlobalCoordinates(
            Angle.from_radians(phi), Angle.from_radians(lam)
        )
        return coordinates, scale_factor, convergence

    def to_utm(
        self, coordinates: GlobalCoordinates, grid: Optional[UtmGrid] = None
    ) -> UtmCoordinate:
        """Projects the given coordinates into the frame of a UTM grid.

        Parameters:
            coordinates: the coordinates to project
            grid: the grid whose frame the coordinates should be projected
                into; ``None`` means the grid that contains the coordinates

        Returns:
            the projected coordinate

        Raises:
            ValueError: if the latitude is outside the UTM domain or the
                grid belongs to another projection
        """
        if grid is None:
            grid = UtmGrid.from_coordinates(self, coordinates)
        elif grid.projection != self:
            raise ValueError("grid {0} belongs to another projection".format(grid))

        easting, northing, scale_factor, convergence = self._forward(
            grid, coordinates.latitude.degrees, coordinates.longitude.degrees
        )
        return UtmCoordinate(
            grid, easting, northing, factors=(scale_factor, convergence)
        )

    def to_euclidian(self, coordinates: GlobalCoordinates) -> UtmCoordinate:
        return self.to_utm(coordinates)

    def from_euclidian(self, xy: UtmCoordinate) -> GlobalCoordinates:
        """Projects the given UTM coordinate back to the reference ellipsoid.

        Raises:
            TypeError: if the coordinate is not a UTM coordinate
        """
        if not isinstance(xy, UtmCoordinate):
            raise TypeError("expected UtmCoordinate, got {0!r}".format(type(xy)))
        coordinates, _, _ = self._unproject(xy)
        return coordinates

    def scale_factor(self, point: GlobalCoordinates) -> float:
        """Returns the scale factor of the projection at the given point."""
        return self.to_utm(point).scale_factor

    def meridian_convergence(self, point: GlobalCoordinates) -> Angle:
        """Returns the angle between grid north and true north at the given
        point.
        """
        return self.to_utm(point).meridian_convergence
