"""Unit tests for ``flockwave.geodesy.ellipsoid``."""

from math import inf, nan
from pickle import dumps, loads
from pytest import mark, raises

from flockwave.geodesy.constants import WGS84
from flockwave.geodesy.ellipsoid import Ellipsoid

import unittest


class EllipsoidTest(unittest.TestCase):
    """Unit tests for the Ellipsoid_ class."""

    def test_wgs84(self):
        """Tests the parameters of the WGS84 ellipsoid."""
        ellipsoid = Ellipsoid.WGS84
        self.assertEqual(6378137.0, ellipsoid.semi_major_axis)
        self.assertAlmostEqual(298.257223563, ellipsoid.inverse_flattening, places=9)
        self.assertAlmostEqual(6356752.314245, ellipsoid.semi_minor_axis, places=5)
        self.assertAlmostEqual(0.081819190842621, ellipsoid.eccentricity, places=12)
        self.assertAlmostEqual(WGS84.ECCENTRICITY, ellipsoid.eccentricity, places=14)
        self.assertAlmostEqual(
            ellipsoid.semi_minor_axis / ellipsoid.semi_major_axis,
            ellipsoid.ratio,
            places=14,
        )

    def test_sphere(self):
        ellipsoid = Ellipsoid.SPHERE
        self.assertEqual(6371000.0, ellipsoid.semi_major_axis)
        self.assertEqual(ellipsoid.semi_major_axis, ellipsoid.semi_minor_axis)
        self.assertEqual(0.0, ellipsoid.flattening)
        self.assertEqual(inf, ellipsoid.inverse_flattening)
        self.assertEqual(0.0, ellipsoid.eccentricity)

    def test_factories(self):
        """Tests that the two factory methods create equal ellipsoids."""
        first = Ellipsoid.from_a_and_inverse_f(6378137.0, 298.257223563)
        second = Ellipsoid.from_a_and_f(6378137.0, 1 / 298.257223563)
        self.assertEqual(first, second)
        self.assertEqual(Ellipsoid.WGS84, first)
        self.assertEqual(hash(first), hash(second))

    def test_equality(self):
        self.assertNotEqual(Ellipsoid.WGS84, Ellipsoid.GRS80)
        self.assertNotEqual(Ellipsoid.WGS84, Ellipsoid.SPHERE)
        self.assertEqual(Ellipsoid.GRS67, Ellipsoid.ANS)
        self.assertFalse(Ellipsoid.WGS84 == "WGS84")

    def test_immutability(self):
        with self.assertRaises(AttributeError):
            Ellipsoid.WGS84._a = 1.0  # type: ignore

    def test_pickle(self):
        self.assertEqual(Ellipsoid.CLARKE_1880, loads(dumps(Ellipsoid.CLARKE_1880)))


@mark.parametrize(
    ("a", "f"),
    [
        (0.0, 0.003),
        (-1.0, 0.003),
        (nan, 0.003),
        (6378137.0, -0.1),
        (6378137.0, 1.0),
    ],
)
def test_invalid_parameters(a: float, f: float):
    with raises(ValueError):
        Ellipsoid.from_a_and_f(a, f)
