"""
Network fallbacks for links that carry no coordinates in the URL itself.

Page-content extractors fetch the provider page and read its metadata, and the
place-id extractor does the same for the page a place id addresses. The
geocoding extractor resolves a free-text q= query. All are opt-in and, like
every extractor, return the empty LocationResult instead of raising.
"""

import logging
import re
from typing import Optional, Pattern, Tuple, TYPE_CHECKING

from ..api.helpers import decode_html_entities, find_address_query, find_place_id
from ..core import constants
from ..models import Coordinate, LocationResult
from .extractors import parse_coordinate_pair

if TYPE_CHECKING:
    from ..api.client import HttpClient
    from ..api.geocoding import NominatimGeocoder


def _search(pattern: Pattern, text: str) -> Optional[str]:
    """First non-blank capture of pattern in text, HTML entities decoded."""
    match = pattern.search(text)
    if not match:
        return None
    for group in match.groups():
        if group and group.strip():
            return decode_html_entities(group)
    return None


class GooglePageContentExtractor:
    """Reads the place title and coordinates from a Google Maps page."""

    META_TITLE_PATTERNS: Tuple[Pattern, ...] = (
        re.compile(
            r"<meta[^>]+content=[\"']([^\"']+)[\"'][^>]*"
            r"(?:property=[\"']og:title[\"']|itemprop=[\"']name[\"'])",
            re.IGNORECASE,
        ),
        re.compile(
            r"<meta[^>]+(?:property=[\"']og:title[\"']|itemprop=[\"']name[\"'])"
            r"[^>]*content=[\"']([^\"']+)[\"']",
            re.IGNORECASE,
        ),
    )
    COORDINATE_PATTERN = re.compile(r"@([\-+]?\d+(?:\.\d+)?),([\-+]?\d+(?:\.\d+)?)")
    PLACE_ADDRESS_SEPARATOR = re.compile(r"\s*[·•]\s*")

    def __init__(self, http_client: "HttpClient", logger: Optional[logging.Logger] = None):
        self.http_client = http_client
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, url: str) -> LocationResult:
        """
        Fetch the page and read its location metadata.

        Coordinates come from an @lat,lon in the page, else in the URL. The
        title is split on a middle dot into place name and address.

        Args:
            url: Google Maps URL

        Returns:
            LocationResult, or the empty result
        """
        if not url or not url.strip():
            return LocationResult.empty()

        content = self.http_client.fetch_content(url)
        if content is None:
            return LocationResult.empty()

        name, address = self._parse_title(self._meta_title(content))
        coordinates = self._find_coordinates(content) or self._find_coordinates(url)

        self.logger.info(
            f"Page content result: coordinates={coordinates}, address='{address}', name='{name}'"
        )
        return LocationResult(coordinates=coordinates, name=name, address=address)

    def _meta_title(self, content: str) -> Optional[str]:
        for pattern in self.META_TITLE_PATTERNS:
            title = _search(pattern, content)
            if title:
                return title
        return None

    def _parse_title(self, title: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        if not title:
            return None, None

        parts = self.PLACE_ADDRESS_SEPARATOR.split(title, maxsplit=1)
        if len(parts) == 2:
            self.logger.debug(f"Split title - Place: '{parts[0]}', Address: '{parts[1]}'")
            return parts[0].strip(), parts[1].strip()
        return title.strip(), None

    def _find_coordinates(self, text: str) -> Optional[Coordinate]:
        match = self.COORDINATE_PATTERN.search(text)
        if not match:
            return None
        coordinate = parse_coordinate_pair(match.group(1), match.group(2))
        if coordinate is None or not coordinate.is_valid():
            return None
        return coordinate


class ApplePageContentExtractor:
    """Reads place metadata from an Apple Maps page."""

    PLACE_NAME_PATTERN = re.compile(
        r"<meta[^>]+property=[\"']og:title[\"'][^>]*content=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )
    LATITUDE_PATTERN = re.compile(
        r"<meta[^>]+property=[\"']place:location:latitude[\"'][^>]*content=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )
    LONGITUDE_PATTERN = re.compile(
        r"<meta[^>]+property=[\"']place:location:longitude[\"'][^>]*content=[\"']([^\"']+)[\"']",
        re.IGNORECASE,
    )
    TITLE_PATTERN = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
    SHORT_ADDRESS_PATTERN = re.compile(r"\"shortAddress\":\s*\"([^\"]+)\"", re.IGNORECASE)

    def __init__(self, http_client: "HttpClient", logger: Optional[logging.Logger] = None):
        self.http_client = http_client
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, url: str) -> LocationResult:
        """
        Fetch the page and read its location metadata.

        Args:
            url: Apple Maps URL

        Returns:
            LocationResult, or the empty result
        """
        if not url or not url.strip():
            return LocationResult.empty()

        content = self.http_client.fetch_content(url)
        if content is None:
            return LocationResult.empty()

        name = _search(self.PLACE_NAME_PATTERN, content)
        if name == constants.APPLE_MARKED_LOCATION:
            name = None
        address = _search(self.SHORT_ADDRESS_PATTERN, content) or self._address_from_title(content)
        coordinates = parse_coordinate_pair(
            _search(self.LATITUDE_PATTERN, content),
            _search(self.LONGITUDE_PATTERN, content),
        )
        if coordinates is not None and not coordinates.is_valid():
            coordinates = None

        self.logger.info(
            f"Page content result: coordinates={coordinates}, address='{address}', name='{name}'"
        )
        return LocationResult(coordinates=coordinates, name=name, address=address)

    def _address_from_title(self, content: str) -> Optional[str]:
        # "<name> in <address> - Apple Maps"
        title = _search(self.TITLE_PATTERN, content)
        if not title:
            return None

        in_index = title.find(" in ")
        dash_index = title.rfind(" - ")
        if in_index > 0 and dash_index > in_index:
            return title[in_index + 4:dash_index]
        return None


class AddressGeocodingExtractor:
    """Geocodes the free-text q= query of a URL."""

    def __init__(self, geocoder: "NominatimGeocoder", logger: Optional[logging.Logger] = None):
        self.geocoder = geocoder
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, url: str) -> LocationResult:
        query = find_address_query(url)
        if not query:
            return LocationResult.empty()

        self.logger.debug(f"Geocoding address query: {query}")
        return self.geocoder.geocode_query(query)


class PlaceIdExtractor:
    """
    Resolves the place id embedded in a Google URL.

    The id is looked up through the Google place page it addresses, read by
    the page-content extractor. Only a result with coordinates is returned.
    """

    def __init__(
        self,
        page_extractor: GooglePageContentExtractor,
        logger: Optional[logging.Logger] = None
    ):
        self.page_extractor = page_extractor
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, url: str) -> LocationResult:
        place_id = find_place_id(url)
        if not place_id:
            return LocationResult.empty()

        self.logger.debug(f"Looking up place id: {place_id}")
        result = self.page_extractor.extract(f"{constants.GOOGLE_PLACE_ID_URL}{place_id}")
        if not result.has_valid_coordinates():
            self.logger.debug(f"Place id lookup found no coordinates: {place_id}")
            return LocationResult.empty()
        return result
