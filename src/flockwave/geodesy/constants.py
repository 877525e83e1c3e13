"""Constants used in several places throughout the geodesy package."""

from math import atan, degrees, pi, sinh

__all__ = (
    "WGS84",
    "GRS80",
    "GRS67",
    "ANS",
    "WGS72",
    "CLARKE_1858",
    "CLARKE_1880",
    "SPHERE",
    "UTM",
    "MERCATOR_MAX_LATITUDE",
    "DEFAULT_PRECISION",
)


class WGS84:
    """WGS84 ellipsoid model parameters for Earth."""

    ####################################################################
    # Defining parameters of WGS84 come first

    EQUATORIAL_RADIUS_IN_METERS: float = 6378137.0
    """Equatorial radius of Earth in the WGS ellipsoid model"""

    INVERSE_FLATTENING: float = 298.257223563
    """Inverse flattening of Earth in the WGS ellipsoid model"""

    ####################################################################
    # Non-defining parameters of WGS84 are below

    FLATTENING = 1.0 / INVERSE_FLATTENING
    """Flattening of Earth in the WGS ellipsoid model"""

    ECCENTRICITY = (FLATTENING * (2 - FLATTENING)) ** 0.5
    """Eccentricity of Earth in the WGS ellipsoid model"""

    POLAR_RADIUS_IN_METERS = EQUATORIAL_RADIUS_IN_METERS * (1 - FLATTENING)
    """Polar radius of Earth in the WGS ellipsoid model"""


class GRS80:
    """GRS80 ellipsoid model parameters, used by the ETRS89 and NAD83 datums."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378137.0
    INVERSE_FLATTENING: float = 298.257222101


class GRS67:
    """GRS67 ellipsoid model parameters."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378160.0
    INVERSE_FLATTENING: float = 298.25


class ANS:
    """Australian National Spheroid parameters."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378160.0
    INVERSE_FLATTENING: float = 298.25


class WGS72:
    """WGS72 ellipsoid model parameters."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378135.0
    INVERSE_FLATTENING: float = 298.26


class CLARKE_1858:
    """Clarke 1858 ellipsoid model parameters."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378293.645
    INVERSE_FLATTENING: float = 294.26


class CLARKE_1880:
    """Clarke 1880 ellipsoid model parameters."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6378249.145
    INVERSE_FLATTENING: float = 293.465


class SPHERE:
    """Parameters of a perfect sphere with the mean radius of Earth."""

    EQUATORIAL_RADIUS_IN_METERS: float = 6371000.0
    FLATTENING: float = 0.0


class UTM:
    """Constants of the Universal Transverse Mercator system."""

    SCALE_FACTOR: float = 0.9996
    """Scale factor along the central meridian of each zone"""

    FALSE_EASTING: float = 500000.0
    """Easting of the central meridian of each zone, in meters"""

    SOUTHERN_FALSE_NORTHING: float = 10000000.0
    """Northing of the equator for grids on the southern hemisphere, in
    meters
    """

    MIN_LATITUDE: float = -80.0
    """Southernmost latitude covered by the UTM system"""

    MAX_LATITUDE: float = 84.0
    """Northernmost latitude covered by the UTM system"""

    ZONE_WIDTH: float = 6.0
    """Width of a regular zone, in degrees"""

    BAND_HEIGHT: float = 8.0
    """Height of a regular latitude band, in degrees"""

    BAND_LETTERS: str = "CDEFGHJKLMNPQRSTUVWX"
    """Letters designating the latitude bands from south to north"""

    NUMBER_OF_ZONES: int = 60
    NUMBER_OF_BANDS: int = len(BAND_LETTERS)
    NUMBER_OF_GRIDS: int = NUMBER_OF_ZONES * NUMBER_OF_BANDS

    MISSING_X_ZONES: frozenset[int] = frozenset((32, 34, 36))
    """Zones that have no grid in band X"""


MERCATOR_MAX_LATITUDE = degrees(atan(sinh(pi)))
"""Northernmost latitude of a square world map in the Mercator projection."""

DEFAULT_PRECISION = 1e-12
"""Default relative precision of approximate floating point comparisons."""
