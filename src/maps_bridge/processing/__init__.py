"""
Coordinate extraction for provider URLs.

Contains the generic pattern matcher, per-provider pattern tables and the
optional network fallbacks.
"""

from .extractors import (
    Extractor,
    ExtractorChain,
    ExtractorStep,
    match_coordinates,
    parse_coordinate_pair,
)
from .patterns import extractor_steps, get_pattern_sets
from .content import (
    AddressGeocodingExtractor,
    ApplePageContentExtractor,
    GooglePageContentExtractor,
    PlaceIdExtractor,
)

__all__ = [
    "Extractor",
    "ExtractorChain",
    "ExtractorStep",
    "match_coordinates",
    "parse_coordinate_pair",
    "extractor_steps",
    "get_pattern_sets",
    "AddressGeocodingExtractor",
    "ApplePageContentExtractor",
    "GooglePageContentExtractor",
    "PlaceIdExtractor",
]
