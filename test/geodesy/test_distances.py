"""Unit tests for ``flockwave.geodesy.distances``."""

from math import isnan
from pytest import mark, raises

from flockwave.geodesy.angle import Angle
from flockwave.geodesy.distances import (
    GeodeticCalculator,
    GeodeticCurve,
    GeodeticMeasurement,
    haversine,
    vincenty,
)
from flockwave.geodesy.ellipsoid import Ellipsoid
from flockwave.geodesy.vectors import GlobalCoordinates, GlobalPosition

import unittest

MY_HOME = GlobalCoordinates.from_degrees(49.8459444, 8.7993944)
MY_OFFICE = GlobalCoordinates.from_degrees(50.2160806, 8.6152611)


class GeodeticCurveTest(unittest.TestCase):
    """Unit tests for the inverse geodetic problem."""

    def setUp(self):
        self.calc = GeodeticCalculator(Ellipsoid.WGS84)

    def test_home_to_office(self):
        """Tests the geodesic between two points near Darmstadt against
        reference values of an online geodesic calculator.
        """
        curve = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        self.assertAlmostEqual(43232.317, curve.ellipsoidal_distance, places=3)
        self.assertAlmostEqual(342.302315, curve.azimuth.degrees, places=6)
        self.assertEqual(self.calc, curve.calculator)

    def test_along_parallel(self):
        """Tests a geodesic towards a point one degree to the west."""
        target = MY_HOME.with_longitude(MY_HOME.longitude - Angle(1.0))
        curve = self.calc.calculate_geodetic_curve(MY_HOME, target)
        self.assertAlmostEqual(270.38216, curve.azimuth.degrees, places=5)

    def test_reverse_azimuth(self):
        curve = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        self.assertEqual(
            curve.azimuth - Angle.ANGLE_180, curve.reverse_azimuth
        )

        curve = self.calc.calculate_geodetic_curve(MY_OFFICE, MY_HOME)
        self.assertTrue(curve.azimuth.degrees < 180)
        self.assertEqual(curve.azimuth + Angle.ANGLE_180, curve.reverse_azimuth)

    def test_identical_points(self):
        curve = self.calc.calculate_geodetic_curve(MY_HOME, MY_HOME)
        self.assertEqual(0.0, curve.ellipsoidal_distance)

    def test_along_equator(self):
        """Tests a geodesic that runs along the equator, where the geodesic
        is an arc of the equator itself.
        """
        start = GlobalCoordinates.from_degrees(0, 0)
        end = GlobalCoordinates.from_degrees(0, 1)
        curve = self.calc.calculate_geodetic_curve(start, end)
        self.assertAlmostEqual(111319.4908, curve.ellipsoidal_distance, delta=1e-3)
        self.assertAlmostEqual(90.0, curve.azimuth.degrees, places=9)

    def test_nearly_antipodal_points_on_equator(self):
        """Tests that the azimuth is undefined between antipodal points on
        the equator, where the iteration does not converge.
        """
        loc = GlobalCoordinates.from_degrees(0, 10)
        antipode = loc.antipode
        antipode = antipode.with_latitude(antipode.latitude * 0.99999998)
        curve = self.calc.calculate_geodetic_curve(loc, antipode)
        self.assertTrue(isnan(curve.azimuth.degrees))
        self.assertTrue(isnan(curve.reverse_azimuth.degrees))
        self.assertEqual(self.calc, curve.calculator)

    def test_symmetry(self):
        forward = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        backward = self.calc.calculate_geodetic_curve(MY_OFFICE, MY_HOME)
        self.assertAlmostEqual(
            forward.ellipsoidal_distance, backward.ellipsoidal_distance, places=6
        )

    def test_equality(self):
        first = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        second = GeodeticCalculator().calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        self.assertEqual(first, second)

        other = GeodeticCalculator(Ellipsoid.GRS67).calculate_geodetic_curve(
            MY_HOME, MY_OFFICE
        )
        self.assertNotEqual(first, other)


class EndingCoordinatesTest(unittest.TestCase):
    """Unit tests for the direct geodetic problem."""

    def setUp(self):
        self.calc = GeodeticCalculator()

    def test_round_trip(self):
        """Tests that the direct solution inverts the inverse solution."""
        curve = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        end, end_bearing = self.calc.calculate_ending_coordinates(
            MY_HOME, curve.azimuth, curve.ellipsoidal_distance
        )
        self.assertTrue(end.is_approximately_equal(MY_OFFICE, 1e-9))

        backward = self.calc.calculate_geodetic_curve(MY_OFFICE, MY_HOME)
        self.assertAlmostEqual(
            backward.azimuth.degrees, (end_bearing.degrees + 180) % 360, places=6
        )

    def test_zero_distance(self):
        end, bearing = self.calc.calculate_ending_coordinates(MY_HOME, Angle(45), 0)
        self.assertTrue(end.is_approximately_equal(MY_HOME))
        self.assertAlmostEqual(45, bearing.degrees, places=9)

    def test_due_north_along_meridian(self):
        start = GlobalCoordinates.from_degrees(0, 0)
        end, bearing = self.calc.calculate_ending_coordinates(
            start, Angle.ZERO, 10001965.729
        )
        self.assertAlmostEqual(90, end.latitude.degrees, places=4)

    def test_crossing_the_antimeridian(self):
        start = GlobalCoordinates.from_degrees(0, 179.5)
        end, _ = self.calc.calculate_ending_coordinates(start, Angle(90), 111319.49)
        self.assertAlmostEqual(-179.5, end.longitude.degrees, places=4)
        self.assertAlmostEqual(0, end.latitude.degrees, places=9)

    def test_negative_distance(self):
        with self.assertRaises(ValueError):
            self.calc.calculate_ending_coordinates(MY_HOME, Angle(10), -1)


class GeodeticPathTest(unittest.TestCase):
    """Unit tests for the sampling of geodesics."""

    def setUp(self):
        self.calc = GeodeticCalculator()

    def test_two_points(self):
        path = self.calc.calculate_geodetic_path(MY_HOME, MY_OFFICE, 2)
        self.assertEqual([MY_HOME, MY_OFFICE], path)
        self.assertEqual(Ellipsoid.WGS84, self.calc.ellipsoid)

    def test_default_number_of_points(self):
        path = self.calc.calculate_geodetic_path(MY_HOME, MY_OFFICE)
        self.assertEqual(10, len(path))
        self.assertEqual(MY_HOME, path[0])
        self.assertEqual(MY_OFFICE, path[-1])

        # Points are roughly equally spaced
        step = self.calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)
        step = step.ellipsoidal_distance / 9
        for first, second in zip(path[:-1], path[1:]):
            self.assertAlmostEqual(step, vincenty(first, second), delta=1)

    def test_too_few_points(self):
        with self.assertRaises(ValueError):
            self.calc.calculate_geodetic_path(MY_HOME, MY_OFFICE, 1)

    def test_identical_endpoints(self):
        path = self.calc.calculate_geodetic_path(MY_HOME, MY_HOME, 10)
        self.assertEqual([MY_HOME, MY_HOME], path)


class GeodeticMeasurementTest(unittest.TestCase):
    """Unit tests for measurements between points at different elevations."""

    def test_measurement(self):
        calc = GeodeticCalculator()
        start = GlobalPosition(MY_HOME, 200)
        end = GlobalPosition(MY_OFFICE, 240)

        measurement = calc.calculate_geodetic_measurement(start, end)
        curve = calc.calculate_geodetic_curve(MY_HOME, MY_OFFICE)

        self.assertTrue(measurement.ellipsoidal_distance > curve.ellipsoidal_distance)
        self.assertEqual(40.0, measurement.elevation_change)
        self.assertTrue(
            measurement.point_to_point_distance > measurement.ellipsoidal_distance
        )
        self.assertAlmostEqual(
            curve.azimuth.degrees, measurement.azimuth.degrees, places=6
        )

    def test_point_to_point_distance(self):
        curve = GeodeticCurve(GeodeticCalculator(), 3.0, Angle(0))
        measurement = GeodeticMeasurement(curve, -4.0)
        self.assertEqual(5.0, measurement.point_to_point_distance)
        self.assertEqual(3.0, measurement.ellipsoidal_distance)
        self.assertEqual(Angle(180), measurement.reverse_azimuth)


class CalculatorTest(unittest.TestCase):
    def test_equality(self):
        self.assertEqual(GeodeticCalculator(), GeodeticCalculator(Ellipsoid.WGS84))
        self.assertNotEqual(GeodeticCalculator(), GeodeticCalculator(Ellipsoid.SPHERE))
        self.assertEqual(
            hash(GeodeticCalculator()), hash(GeodeticCalculator(Ellipsoid.WGS84))
        )


class HaversineTest(unittest.TestCase):
    """Unit tests for the Haversine formula."""

    def test_lyon_paris(self):
        """Tests the Haversine formula for Lyon and Paris on a sphere."""
        lyon = GlobalCoordinates.from_degrees(45.7597, 4.8422)
        paris = GlobalCoordinates.from_degrees(48.8567, 2.3508)
        self.assertAlmostEqual(
            392216.71780659, haversine(lyon, paris, Ellipsoid.SPHERE), places=6
        )

    def test_close_to_vincenty(self):
        distance = haversine(MY_HOME, MY_OFFICE)
        self.assertAlmostEqual(vincenty(MY_HOME, MY_OFFICE), distance, delta=150)


@mark.parametrize(
    ("start", "end"),
    [
        ((0, 0), (0, 1)),
        ((10, 20), (-30, 40)),
        ((-45, 170), (-40, -170)),
        ((60, -30), (-20, 100)),
    ],
)
def test_vincenty_round_trip(start, end):
    calc = GeodeticCalculator()
    start = GlobalCoordinates.from_degrees(*start)
    end = GlobalCoordinates.from_degrees(*end)

    curve = calc.calculate_geodetic_curve(start, end)
    reached, _ = calc.calculate_ending_coordinates(
        start, curve.azimuth, curve.ellipsoidal_distance
    )
    assert reached.is_approximately_equal(end, 1e-8)
    assert vincenty(start, end) == curve.ellipsoidal_distance


def test_negative_distance():
    with raises(ValueError):
        GeodeticCalculator().calculate_ending_coordinates(MY_HOME, Angle(0), -10)
