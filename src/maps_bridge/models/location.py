"""
Location data models.

Contains the coordinate value type and the extraction result wrapper.
"""

from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING

from ..core import constants
from ..core.exceptions import InvalidCoordinateError

if TYPE_CHECKING:
    from .provider import ProviderId


def format_degrees(value: float) -> str:
    """
    Render a coordinate component for embedding in a URL.

    Uses the shortest round-tripping representation, switching to plain
    fixed-point notation where Python would produce exponent form (1e-05).
    """
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{value:.{constants.PLAIN_DECIMAL_PLACES}f}".rstrip("0")
        if text.endswith("."):
            text += "0"
    return text


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate in decimal degrees."""

    lat: float
    lon: float

    @classmethod
    def from_string(cls, text: str) -> "Coordinate":
        """
        Parse a "lat,lon" or "lat lon" literal.

        Args:
            text: Coordinate literal, e.g. "40.6892,-74.0445"

        Returns:
            Parsed coordinate (range is not checked here)

        Raises:
            InvalidCoordinateError: If the text is blank or malformed
        """
        if text is None or not text.strip():
            raise InvalidCoordinateError("Coordinate string cannot be null or empty")

        if "," in text:
            parts = text.split(",")
        else:
            parts = text.strip().split()

        if len(parts) != 2:
            raise InvalidCoordinateError(
                "Coordinate string must be in format 'lat,lon' or 'lat lon'"
            )

        try:
            return cls(float(parts[0].strip()), float(parts[1].strip()))
        except ValueError as e:
            raise InvalidCoordinateError(f"Invalid coordinate format: {text}") from e

    def is_valid(self) -> bool:
        """Check that latitude and longitude lie within their ranges."""
        try:
            return (
                constants.MIN_LATITUDE <= self.lat <= constants.MAX_LATITUDE
                and constants.MIN_LONGITUDE <= self.lon <= constants.MAX_LONGITUDE
            )
        except TypeError:
            return False

    @property
    def lat_text(self) -> str:
        return format_degrees(self.lat)

    @property
    def lon_text(self) -> str:
        return format_degrees(self.lon)

    def __str__(self) -> str:
        return f"{self.lat_text},{self.lon_text}"


@dataclass(frozen=True)
class LocationResult:
    """
    Outcome of a location extraction.

    The empty instance (no coordinates) is the "nothing found" value; extraction
    code returns it instead of None or raising.
    """

    coordinates: Optional[Coordinate] = None
    name: Optional[str] = None
    address: Optional[str] = None
    source: Optional["ProviderId"] = None

    @classmethod
    def empty(cls) -> "LocationResult":
        return cls()

    @classmethod
    def from_coordinates(cls, coordinates: Coordinate) -> "LocationResult":
        return cls(coordinates=coordinates)

    def has_valid_coordinates(self) -> bool:
        return self.coordinates is not None and self.coordinates.is_valid()

    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())

    def has_address(self) -> bool:
        return bool(self.address and self.address.strip())

    def with_source(self, source: "ProviderId") -> "LocationResult":
        """Return a copy tagged with the provider that supplied it."""
        return replace(self, source=source)
