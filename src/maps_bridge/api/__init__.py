"""
Network layer for map link resolution.

Provides the shared HTTP client, URL metadata helpers and address geocoding.
"""

from .client import HttpClient
from .geocoding import NominatimGeocoder
from . import helpers

__all__ = [
    "HttpClient",
    "NominatimGeocoder",
    "helpers",
]
