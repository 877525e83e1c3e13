"""Classes and functions related to the Universal Transverse Mercator
projection and its grid of zones and latitude bands.
"""

from .coordinate import UtmCoordinate
from .grid import UtmGrid
from .projection import UtmProjection

__all__ = ("UtmCoordinate", "UtmGrid", "UtmProjection")
