"""
Map provider abstraction.

A provider generates its own links, recognizes its own URLs and extracts a
location from them. Extraction runs the provider's extractor chain on the input
URL, follows redirects once and retries when the URL changed, then runs any
enabled network fallbacks.
"""

import logging
from typing import Iterable, List, Optional, TYPE_CHECKING

from ..core import constants
from ..core.exceptions import InvalidCoordinateError, UnsupportedProviderError
from ..models import Coordinate, LocationResult, ProviderId, ProviderPatternSet
from ..processing.extractors import Extractor, ExtractorChain

if TYPE_CHECKING:
    from ..api.client import HttpClient


class MapProvider:
    """Link generation, URL recognition and location extraction for one provider."""

    def __init__(
        self,
        patterns: ProviderPatternSet,
        chain: ExtractorChain,
        http_client: "HttpClient",
        fallbacks: Iterable[Extractor] = (),
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize map provider.

        Args:
            patterns: Template, recognition pattern and coordinate patterns
            chain: Extractor chain run on the input and the redirected URL
            http_client: Shared HTTP client used for redirect resolution
            fallbacks: Network extractors tried, in order, after the chain misses
            logger: Logger instance
        """
        self.patterns = patterns
        self.chain = chain
        self.http_client = http_client
        self.fallbacks: List[Extractor] = list(fallbacks)
        self.logger = logger or logging.getLogger(__name__)

    @property
    def provider_id(self) -> ProviderId:
        return self.patterns.provider_id

    def get_type(self) -> ProviderId:
        return self.provider_id

    @property
    def supports_generation(self) -> bool:
        """False for providers that are only accepted as input."""
        return self.patterns.url_template is not None

    def generate_url(self, coordinate: Optional[Coordinate]) -> str:
        """
        Generate a link to the coordinate.

        Args:
            coordinate: Target coordinate

        Returns:
            Provider URL with the coordinate substituted into the template

        Raises:
            InvalidCoordinateError: If the coordinate is missing or out of range
            UnsupportedProviderError: If the provider has no URL template
        """
        if coordinate is None or not coordinate.is_valid():
            raise InvalidCoordinateError("Invalid coordinates")

        if not self.supports_generation:
            raise UnsupportedProviderError(f"Provider {self.provider_id} does not generate links")

        return (
            self.patterns.url_template
            .replace(constants.LAT_PLACEHOLDER, coordinate.lat_text)
            .replace(constants.LON_PLACEHOLDER, coordinate.lon_text)
        )

    def generate_location_url(self, location: LocationResult) -> str:
        """Generate a link for an extracted location (coordinates only by default)."""
        return self.generate_url(location.coordinates)

    def is_provider_url(self, url: Optional[str]) -> bool:
        """
        Check whether the whole URL has this provider's shape.

        Args:
            url: Candidate URL

        Returns:
            True if the provider recognizes the URL
        """
        if url is None or not url.strip():
            return False

        matches = self.patterns.matches_url(url)
        if matches:
            self.logger.info(f"URL provider is {self.provider_id}")
        return matches

    def extract_location(self, url: Optional[str]) -> LocationResult:
        """
        Extract a location from a provider URL.

        Args:
            url: Provider URL, possibly shortened

        Returns:
            LocationResult tagged with this provider, or the empty result
        """
        if url is None or not url.strip():
            return LocationResult.empty()

        result = self.chain.extract(url)
        if result.has_valid_coordinates():
            return result.with_source(self.provider_id)

        final_url = self.http_client.follow_redirects(url)
        if final_url != url:
            self.logger.debug(f"Retrying extraction on redirected URL: {final_url}")
            result = self.chain.extract(final_url)
            if result.has_valid_coordinates():
                return result.with_source(self.provider_id)

        for fallback in self.fallbacks:
            result = fallback(final_url)
            if result.has_valid_coordinates():
                self.logger.debug(f"Fallback extractor resolved {final_url}")
                return result.with_source(self.provider_id)

        self.logger.info(f"No coordinates found for URL: {url}")
        return LocationResult.empty()

    def extract_coordinates(self, url: Optional[str]) -> Optional[Coordinate]:
        """Extract only the coordinate from a provider URL (None when not found)."""
        return self.extract_location(url).coordinates

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider_id={self.provider_id.value!r})"
