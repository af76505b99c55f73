"""
Address geocoding using OpenStreetMap Nominatim.

Forward lookups back the fallback for links that carry a free-text query
(e.g. https://maps.google.com/?q=Statue+of+Liberty) instead of coordinates;
reverse lookups fill in the address of a location found without one.
"""

import logging
from typing import Optional, TYPE_CHECKING

from ..core import constants
from ..models import Coordinate, LocationResult

if TYPE_CHECKING:
    from .client import HttpClient


class NominatimGeocoder:
    """Forward geocoder over the shared HTTP client."""

    def __init__(
        self,
        http_client: "HttpClient",
        base_url: str = constants.DEFAULT_GEOCODING_BASE_URL,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize geocoder.

        Args:
            http_client: Shared HTTP client
            base_url: Nominatim base URL (with or without a trailing /search)
            logger: Logger instance
        """
        base = base_url.rstrip("/")
        if base.endswith("/search"):
            base = base.rsplit("/", 1)[0]
        self.base_url = base
        self.http_client = http_client
        self.logger = logger or logging.getLogger(__name__)

    def geocode_query(self, query: str) -> LocationResult:
        """
        Resolve a free-text query to a location.

        Args:
            query: Address or place text

        Returns:
            LocationResult whose address is the query, or the empty result
        """
        if not query or not query.strip():
            return LocationResult.empty()

        params = {
            "q": query,
            "format": "jsonv2",
            "limit": "1",
        }
        data = self.http_client.get_json(f"{self.base_url}/search", params=params)
        if not data or not isinstance(data, list):
            self.logger.debug(f"No geocoding result for query: {query}")
            return LocationResult.empty()

        item = data[0]
        if not isinstance(item, dict):
            self.logger.warning(f"Unexpected geocoding result for query: {query}")
            return LocationResult.empty()

        try:
            coordinate = Coordinate(float(item.get("lat")), float(item.get("lon")))
        except (TypeError, ValueError):
            self.logger.warning(f"Geocoding result without usable coordinates for query: {query}")
            return LocationResult.empty()

        if not coordinate.is_valid():
            return LocationResult.empty()

        self.logger.debug(f"Geocoded '{query}' to {coordinate}")
        return LocationResult(
            coordinates=coordinate,
            name=item.get("name") or None,
            address=query,
        )

    def reverse_geocode(self, coordinate: Coordinate) -> LocationResult:
        """
        Look up the address of a coordinate.

        Args:
            coordinate: Coordinate to describe

        Returns:
            LocationResult at the given coordinate with the display address and
            place name, or the empty result
        """
        if coordinate is None or not coordinate.is_valid():
            return LocationResult.empty()

        params = {
            "lat": coordinate.lat_text,
            "lon": coordinate.lon_text,
            "format": "jsonv2",
        }
        data = self.http_client.get_json(f"{self.base_url}/reverse", params=params)
        if not isinstance(data, dict) or not data.get("display_name"):
            self.logger.debug(f"No reverse geocoding result for {coordinate}")
            return LocationResult.empty()

        self.logger.debug(f"Reverse geocoded {coordinate} to '{data['display_name']}'")
        return LocationResult(
            coordinates=coordinate,
            name=data.get("name") or None,
            address=data["display_name"],
        )
