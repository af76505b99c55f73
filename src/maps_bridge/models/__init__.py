"""
Data models for map link conversion.

Contains value types for coordinates, extraction results, providers and conversions.
"""

from .location import Coordinate, LocationResult, format_degrees
from .provider import ProviderId, ProviderPatternSet
from .conversion import ConversionResult

__all__ = [
    "Coordinate",
    "LocationResult",
    "format_degrees",
    "ProviderId",
    "ProviderPatternSet",
    "ConversionResult",
]
