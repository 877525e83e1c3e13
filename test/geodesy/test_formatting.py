from math import inf, nan
from pytest import mark

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.distances import (
    GeodeticCalculator,
    GeodeticCurve,
    GeodeticMeasurement,
)
from flockwave.geodesy.formatting import (
    format_angle,
    format_geodetic_curve,
    format_geodetic_measurement,
    format_global_coordinates,
    format_global_position,
    format_number,
    format_utm_coordinate,
)
from flockwave.geodesy.utm import UtmCoordinate, UtmGrid, UtmProjection
from flockwave.geodesy.vectors import GlobalCoordinates, GlobalPosition


@mark.parametrize(
    ("input", "output"),
    [
        (1.0, "1"),
        (-2, "-2"),
        (0.0, "0"),
        (-45.5, "-45.5"),
        (0.1, "0.1"),
        (43232.317, "43232.317"),
        (1e20, "1e+20"),
        (nan, "NaN"),
        (inf, "Infinity"),
        (-inf, "-Infinity"),
    ],
)
def test_format_number(input: float, output: str):
    assert format_number(input) == output


def test_format_angle():
    assert format_angle(Angle(342.5)) == "342.5"
    assert format_angle(Angle(nan)) == "NaN"


@mark.parametrize(
    ("lat", "lon", "output"),
    [
        (45, 9, "45N;9E;"),
        (-33.5, -70.25, "33.5S;70.25W;"),
        (0, 0, "0N;0E;"),
        (0, 180, "0N;180E;"),
    ],
)
def test_format_global_coordinates(lat: float, lon: float, output: str):
    coords = GlobalCoordinates.from_degrees(lat, lon)
    assert format_global_coordinates(coords) == output


def test_format_global_position():
    position = GlobalPosition(GlobalCoordinates.from_degrees(45, 9), -12.5)
    assert format_global_position(position) == "45N;9E;-12.5m"


def test_format_geodetic_curve_and_measurement():
    curve = GeodeticCurve(GeodeticCalculator(), 30.0, Angle(90))
    assert format_geodetic_curve(curve) == "s=30;a12=90;a21=270;"

    measurement = GeodeticMeasurement(curve, 40.0)
    assert (
        format_geodetic_measurement(measurement)
        == "s=30;a12=90;a21=270;elev12=40;p2p=50"
    )


def test_format_geodetic_curve_with_unknown_azimuth():
    curve = GeodeticCurve(GeodeticCalculator(), 20003931.5, Angle(nan))
    assert format_geodetic_curve(curve) == "s=20003931.5;a12=NaN;a21=NaN;"


def test_format_utm_coordinate():
    grid = UtmGrid(UtmProjection(), 32, "U")
    coord = UtmCoordinate(grid, 485577.9, 5521521.2)
    assert format_utm_coordinate(coord) == "32U 485577 5521521"
    assert str(coord) == "32U 485577 5521521"
