"""
Conversion service.

Classifies the input (coordinate literal or provider URL), finds the location
and builds the link of every generating provider.
"""

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Union, TYPE_CHECKING

from ..core import constants
from ..core.exceptions import (
    CoordinateExtractionError,
    InvalidCoordinateError,
    InvalidInputError,
    MapsBridgeError,
)
from ..models import ConversionResult, Coordinate, LocationResult
from ..providers import MapProvider

if TYPE_CHECKING:
    from ..api.geocoding import NominatimGeocoder

COORDINATE_INPUT = re.compile(constants.COORDINATE_INPUT_PATTERN)
URL_INPUT = re.compile(constants.URL_INPUT_PATTERN)
URL_IN_TEXT = re.compile(constants.URL_IN_TEXT_PATTERN)


def extract_url(text: str) -> str:
    """
    Pull a URL out of shared text ("Check this out https://maps.app.goo.gl/x").

    Returns:
        The first http(s) token, or the stripped text when there is none
    """
    text = text.strip()
    if URL_INPUT.match(text):
        return text

    match = URL_IN_TEXT.search(text)
    if match:
        return match.group(0)
    return text


class MapConverter:
    """Converts coordinates or provider links into links for every provider."""

    def __init__(
        self,
        providers: Iterable[MapProvider],
        reverse_geocoder: Optional["NominatimGeocoder"] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize converter.

        Args:
            providers: Providers in dispatch order
            reverse_geocoder: Fills in the address of locations found without one
            logger: Logger instance
        """
        self.providers: List[MapProvider] = list(providers)
        self.reverse_geocoder = reverse_geocoder
        self.logger = logger or logging.getLogger(__name__)

    def convert(self, value: Union[Coordinate, str, None]) -> ConversionResult:
        """
        Convert a coordinate, coordinate literal or provider URL.

        Args:
            value: Coordinate, "lat,lon" text or a map link (optionally inside text)

        Returns:
            ConversionResult with the location and the link map

        Raises:
            InvalidCoordinateError: If the coordinate is out of range
            InvalidInputError: If the input is neither a literal nor a URL
            CoordinateExtractionError: If no location is found for a URL
        """
        if isinstance(value, Coordinate):
            location = self._from_coordinate(value)
        else:
            location = self.resolve(value)
        location = self.describe(location)

        self.logger.info(f"Resolved location {location.coordinates} (source: {location.source})")
        return self.build_result(location)

    def resolve(self, text: Optional[str]) -> LocationResult:
        """
        Find the location described by user input.

        Args:
            text: User input

        Returns:
            LocationResult with valid coordinates
        """
        if text is None or not text.strip():
            raise InvalidInputError("Input cannot be empty")

        text = extract_url(text)

        if COORDINATE_INPUT.match(text):
            self.logger.debug(f"Input is a coordinate literal: {text}")
            return self._from_coordinate(Coordinate.from_string(text))

        if URL_INPUT.match(text):
            return self._from_url(text)

        raise InvalidInputError(
            "Input must be a valid URL or coordinates in format 'lat,lon' or 'lat lon'"
        )

    def describe(self, location: LocationResult) -> LocationResult:
        """
        Fill in the address of a location that has none.

        Coordinates and source are kept; a name already present wins over the
        reverse geocoded one. Without a reverse geocoder, or when the lookup
        finds nothing, the location is returned unchanged.
        """
        if self.reverse_geocoder is None or location.has_address():
            return location

        found = self.reverse_geocoder.reverse_geocode(location.coordinates)
        if not found.has_address():
            return location

        self.logger.debug(f"Reverse geocoded address for {location.coordinates}: {found.address}")
        return replace(
            location,
            name=location.name if location.has_name() else found.name,
            address=found.address,
        )

    def build_result(self, location: LocationResult) -> ConversionResult:
        """Generate every provider link for a resolved location."""
        result = ConversionResult(
            coordinates=location.coordinates,
            name=location.name,
            address=location.address,
            source=location.source,
        )

        for provider in self.providers:
            if not provider.supports_generation:
                continue
            try:
                result.add_link(provider.provider_id, provider.generate_location_url(location))
            except (MapsBridgeError, ValueError) as e:
                self.logger.error(f"Error generating URL for provider {provider.provider_id}: {e}")

        return result

    def _from_coordinate(self, coordinate: Coordinate) -> LocationResult:
        if not coordinate.is_valid():
            raise InvalidCoordinateError(
                f"Coordinates out of range: {coordinate.lat},{coordinate.lon}"
            )
        return LocationResult.from_coordinates(coordinate)

    def _from_url(self, url: str) -> LocationResult:
        for provider in self.providers:
            if not provider.is_provider_url(url):
                continue

            location = provider.extract_location(url)
            if not location.has_valid_coordinates():
                raise CoordinateExtractionError(f"Could not extract coordinates from URL: {url}")
            return location

        raise CoordinateExtractionError(f"Unsupported map provider URL: {url}")
