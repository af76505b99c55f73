"""
Apple Maps provider.

Builds the place-specific link when an extracted location carries a name or
an address.
"""

from ..api.helpers import encode_url_parameter
from ..core import constants
from ..core.exceptions import InvalidCoordinateError
from ..models import LocationResult
from .base import MapProvider


class AppleMapProvider(MapProvider):
    """Apple Maps with rich place links."""

    def generate_location_url(self, location: LocationResult) -> str:
        """
        Generate an Apple Maps link for a location.

        Args:
            location: Extracted location

        Returns:
            https://maps.apple.com/place?ll=<lat>,<lon>[&address=..][&q=..] when a
            name or address is known, otherwise the plain template link

        Raises:
            InvalidCoordinateError: If the location has no valid coordinates
        """
        if location is None or not location.has_valid_coordinates():
            raise InvalidCoordinateError("Invalid coordinates")

        if not location.has_address() and not location.has_name():
            return self.generate_url(location.coordinates)

        url = f"{constants.APPLE_PLACE_BASE_URL}ll={location.coordinates}"
        if location.has_address():
            url += f"&address={encode_url_parameter(location.address)}"
        if location.has_name():
            url += f"&q={encode_url_parameter(location.name)}"

        self.logger.debug(f"Generated Apple Maps URL: {url}")
        return url
