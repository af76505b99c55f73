"""
Exception types for map link conversion.

Extraction misses are not exceptions: they are represented by the empty
LocationResult. These errors cover caller-controlled input only.
"""


class MapsBridgeError(Exception):
    """Base class for all conversion errors."""


class InvalidCoordinateError(MapsBridgeError, ValueError):
    """Coordinate is missing, malformed or outside the valid range."""


class InvalidInputError(MapsBridgeError, ValueError):
    """Input is neither a coordinate literal nor a URL."""


class CoordinateExtractionError(MapsBridgeError):
    """No location could be extracted from a URL."""


class UnsupportedProviderError(MapsBridgeError):
    """Provider cannot generate links (input-only provider)."""
