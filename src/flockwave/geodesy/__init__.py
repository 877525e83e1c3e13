"""Main package for the Flockwave geodesy module."""

from .errors import Error
from .version import __version__, __version_info__

__all__ = ("__version__", "__version_info__", "Error")
