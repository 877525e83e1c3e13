"""Reference ellipsoids modelling the shape of Earth."""

from __future__ import annotations

from math import inf, sqrt
from typing import Any

from . import constants
from .utils import is_approximately_equal, is_positive

__all__ = ("Ellipsoid",)


class Ellipsoid:
    """Oblate ellipsoid of revolution, defined by its semi-major axis and its
    flattening.

    Ellipsoids are immutable. Two ellipsoids are considered equal if their
    semi-major axes and flattenings are approximately equal.
    """

    __slots__ = ("_a", "_f")

    _a: float
    _f: float

    WGS84: Ellipsoid
    GRS80: Ellipsoid
    GRS67: Ellipsoid
    ANS: Ellipsoid
    WGS72: Ellipsoid
    CLARKE_1858: Ellipsoid
    CLARKE_1880: Ellipsoid
    SPHERE: Ellipsoid

    @classmethod
    def from_a_and_inverse_f(
        cls, semi_major_axis: float, inverse_flattening: float
    ) -> Ellipsoid:
        """Creates an ellipsoid from its semi-major axis and its inverse
        flattening.

        Parameters:
            semi_major_axis: the semi-major axis, in meters
            inverse_flattening: the reciprocal of the flattening

        Returns:
            the new ellipsoid
        """
        return cls(semi_major_axis, 1.0 / inverse_flattening)

    @classmethod
    def from_a_and_f(cls, semi_major_axis: float, flattening: float) -> Ellipsoid:
        """Creates an ellipsoid from its semi-major axis and its flattening.

        Parameters:
            semi_major_axis: the semi-major axis, in meters
            flattening: the flattening, in the range [0, 1)

        Returns:
            the new ellipsoid
        """
        return cls(semi_major_axis, flattening)

    def __init__(self, semi_major_axis: float, flattening: float):
        """Constructor.

        Parameters:
            semi_major_axis: the semi-major axis, in meters
            flattening: the flattening, in the range [0, 1)
        """
        semi_major_axis = float(semi_major_axis)
        flattening = float(flattening)

        if not is_positive(semi_major_axis):
            raise ValueError("semi-major axis must be positive")
        if flattening < 0 or flattening >= 1:
            raise ValueError("flattening must be in the range [0, 1)")

        object.__setattr__(self, "_a", semi_major_axis)
        object.__setattr__(self, "_f", flattening)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Ellipsoid objects are immutable")

    @property
    def semi_major_axis(self) -> float:
        """The semi-major (equatorial) axis of the ellipsoid, in meters."""
        return self._a

    @property
    def semi_minor_axis(self) -> float:
        """The semi-minor (polar) axis of the ellipsoid, in meters."""
        return (1.0 - self._f) * self._a

    @property
    def flattening(self) -> float:
        """The flattening of the ellipsoid."""
        return self._f

    @property
    def inverse_flattening(self) -> float:
        """The reciprocal of the flattening; infinite for a sphere."""
        return 1.0 / self._f if self._f else inf

    @property
    def ratio(self) -> float:
        """The ratio of the semi-minor and the semi-major axis."""
        return 1.0 - self._f

    @property
    def eccentricity(self) -> float:
        """The first eccentricity of the ellipsoid."""
        return sqrt(1.0 - self.ratio**2)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Ellipsoid):
            return is_approximately_equal(self._a, other._a) and is_approximately_equal(
                self._f, other._f
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash(round(self._a))

    def __reduce__(self):
        return (self.__class__, (self._a, self._f))

    def __repr__(self) -> str:
        return (
            "{0.__class__.__name__}(semi_major_axis={0._a!r}, "
            "flattening={0._f!r})"
        ).format(self)


def _from_constants(params) -> Ellipsoid:
    if hasattr(params, "INVERSE_FLATTENING"):
        return Ellipsoid.from_a_and_inverse_f(
            params.EQUATORIAL_RADIUS_IN_METERS, params.INVERSE_FLATTENING
        )
    else:
        return Ellipsoid.from_a_and_f(
            params.EQUATORIAL_RADIUS_IN_METERS, params.FLATTENING
        )


Ellipsoid.WGS84 = _from_constants(constants.WGS84)
Ellipsoid.GRS80 = _from_constants(constants.GRS80)
Ellipsoid.GRS67 = _from_constants(constants.GRS67)
Ellipsoid.ANS = _from_constants(constants.ANS)
Ellipsoid.WGS72 = _from_constants(constants.WGS72)
Ellipsoid.CLARKE_1858 = _from_constants(constants.CLARKE_1858)
Ellipsoid.CLARKE_1880 = _from_constants(constants.CLARKE_1880)
Ellipsoid.SPHERE = _from_constants(constants.SPHERE)
