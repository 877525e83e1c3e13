"""Immutable angle type used for latitudes, longitudes and bearings."""

from __future__ import annotations

from math import isnan, pi
from typing import Any

from .formatting import format_angle
from .utils import is_approximately_equal, is_smaller

__all__ = ("Angle",)

#: Relative precision used when comparing angles
ANGLE_PRECISION = 1e-11

#: Number of decimal places that the degree value is rounded to when hashing
HASH_DECIMALS = 9

_PI_OVER_180 = pi / 180.0


def _validate_minutes_or_seconds(value: float) -> None:
    if value < 0.0 or value >= 60.0:
        raise ValueError(
            "minutes and seconds must be in the range [0, 60), got {0!r}".format(value)
        )


class Angle:
    """Angle measured in degrees.

    Angles are immutable values. Comparisons are approximate, using a relative
    precision of 1e-11, and are performed on the raw degree values without
    any modular wrapping; an angle of 360 degrees is not equal to an angle of
    zero degrees.

    Hashing rounds the degree value to nine decimal places so angles that
    differ only by floating point rounding errors hash equally. Approximate
    equality is not transitive, so two equal angles close to a rounding
    boundary may still hash differently.

    Plain numbers are never converted to angles implicitly; use the
    constructor for degrees and `Angle.from_radians()` for radians.
    """

    __slots__ = ("_degrees",)

    _degrees: float

    ZERO: Angle
    """Angle of zero degrees."""

    ANGLE_180: Angle
    """Angle of 180 degrees."""

    @staticmethod
    def deg_to_rad(value: float) -> float:
        """Converts a value in degrees to radians."""
        return value * _PI_OVER_180

    @staticmethod
    def rad_to_deg(value: float) -> float:
        """Converts a value in radians to degrees."""
        return value / _PI_OVER_180

    @classmethod
    def from_radians(cls, value: float) -> Angle:
        """Creates an angle from its value in radians."""
        return cls(value / _PI_OVER_180)

    @classmethod
    def from_dm(cls, degrees: int, minutes: float) -> Angle:
        """Creates an angle from degrees and minutes.

        The sign of the angle is taken from the degrees; the minutes must be
        non-negative.

        Parameters:
            degrees: the integral degrees of the angle
            minutes: the minutes of the angle, in the range [0, 60)

        Raises:
            ValueError: if the minutes are out of range
        """
        _validate_minutes_or_seconds(minutes)
        fraction = minutes / 60.0
        return cls(degrees - fraction if degrees < 0 else degrees + fraction)

    @classmethod
    def from_dms(cls, degrees: int, minutes: int, seconds: float) -> Angle:
        """Creates an angle from degrees, minutes and seconds.

        The sign of the angle is taken from the degrees; the minutes and the
        seconds must be non-negative.

        Parameters:
            degrees: the integral degrees of the angle
            minutes: the integral minutes of the angle, in the range [0, 60)
            seconds: the seconds of the angle, in the range [0, 60)

        Raises:
            ValueError: if the minutes or the seconds are out of range
        """
        _validate_minutes_or_seconds(minutes)
        _validate_minutes_or_seconds(seconds)
        fraction = seconds / 3600.0 + minutes / 60.0
        return cls(degrees - fraction if degrees < 0 else degrees + fraction)

    def __init__(self, degrees: float = 0.0):
        """Constructor.

        Parameters:
            degrees: the value of the angle, in degrees
        """
        object.__setattr__(self, "_degrees", float(degrees))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Angle objects are immutable")

    @property
    def degrees(self) -> float:
        """The value of the angle in degrees."""
        return self._degrees

    @property
    def radians(self) -> float:
        """The value of the angle in radians."""
        return self._degrees * _PI_OVER_180

    def abs(self) -> Angle:
        """Returns the absolute value of this angle."""
        return Angle(abs(self._degrees))

    def __abs__(self) -> Angle:
        return self.abs()

    def __add__(self, other: Any) -> Angle:
        if isinstance(other, Angle):
            return Angle(self._degrees + other._degrees)
        return NotImplemented

    def __sub__(self, other: Any) -> Angle:
        if isinstance(other, Angle):
            return Angle(self._degrees - other._degrees)
        return NotImplemented

    def __mul__(self, other: Any) -> Angle:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return Angle(self._degrees * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Angle:
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return Angle(self._degrees / other)
        return NotImplemented

    def __neg__(self) -> Angle:
        return Angle(-self._degrees)

    def __pos__(self) -> Angle:
        return self

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Angle):
            return is_approximately_equal(
                self._degrees, other._degrees, ANGLE_PRECISION
            )
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Angle):
            return is_smaller(self._degrees, other._degrees, ANGLE_PRECISION)
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, Angle):
            return self == other or self < other
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, Angle):
            return is_smaller(other._degrees, self._degrees, ANGLE_PRECISION)
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, Angle):
            return self == other or self > other
        return NotImplemented

    def __hash__(self) -> int:
        degrees = self._degrees
        if isnan(degrees):
            return hash("nan")
        return hash(round(degrees, HASH_DECIMALS))

    def __reduce__(self):
        return (self.__class__, (self._degrees,))

    def __repr__(self) -> str:
        return "{0.__class__.__name__}({0._degrees!r})".format(self)

    def __str__(self) -> str:
        return format_angle(self)


Angle.ZERO = Angle(0.0)
Angle.ANGLE_180 = Angle(180.0)
