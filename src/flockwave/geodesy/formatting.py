from __future__ import annotations

from math import floor, isinf, isnan
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .angle import Angle
    from .distances import GeodeticCurve, GeodeticMeasurement
    from .utm.coordinate import UtmCoordinate
    from .vectors import GlobalCoordinates, GlobalPosition


__all__ = (
    "format_number",
    "format_angle",
    "format_global_coordinates",
    "format_global_position",
    "format_geodetic_curve",
    "format_geodetic_measurement",
    "format_utm_coordinate",
)


def format_number(value: float) -> str:
    """Formats a floating point number in a culture-invariant way, using the
    shortest representation that round-trips to the same value. Integral
    values are formatted without a decimal point.
    """
    value = float(value)
    if isnan(value):
        return "NaN"
    if isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_angle(angle: Angle) -> str:
    """Formats an angle as its value in degrees."""
    return format_number(angle.degrees)


def format_global_coordinates(coords: GlobalCoordinates) -> str:
    """Formats a pair of global coordinates in a human-readable way, using
    hemisphere letters instead of signs; e.g., ``45N;9E;``.
    """
    lat, lon = coords.latitude, coords.longitude
    return "{0}{1};{2}{3};".format(
        format_angle(lat.abs()),
        "N" if lat.degrees >= 0 else "S",
        format_angle(lon.abs()),
        "E" if lon.degrees >= 0 else "W",
    )


def format_global_position(position: GlobalPosition) -> str:
    """Formats a global position as its coordinates followed by the elevation
    in meters.
    """
    return "{0}{1}m".format(
        format_global_coordinates(position.coordinates),
        format_number(position.elevation),
    )


def format_geodetic_curve(curve: GeodeticCurve) -> str:
    return "s={0};a12={1};a21={2};".format(
        format_number(curve.ellipsoidal_distance),
        format_angle(curve.azimuth),
        format_angle(curve.reverse_azimuth),
    )


def format_geodetic_measurement(measurement: GeodeticMeasurement) -> str:
    return "{0}elev12={1};p2p={2}".format(
        format_geodetic_curve(measurement.average_curve),
        format_number(measurement.elevation_change),
        format_number(measurement.point_to_point_distance),
    )


def format_utm_coordinate(coord: UtmCoordinate) -> str:
    """Formats a UTM coordinate as its grid designator followed by the
    easting and northing truncated to whole meters; e.g.,
    ``32U 485577 5521521``.
    """
    return "{0} {1} {2}".format(coord.grid, floor(coord.x), floor(coord.y))
