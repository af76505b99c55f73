"""
Provider registry.

Builds the providers in registry order; URL dispatch offers a URL to each of
them in this order.
"""

import logging
from typing import List, Mapping, Optional, TYPE_CHECKING

from ..models import ProviderId
from ..processing import (
    AddressGeocodingExtractor,
    ApplePageContentExtractor,
    ExtractorChain,
    GooglePageContentExtractor,
    PlaceIdExtractor,
    extractor_steps,
    get_pattern_sets,
)
from ..processing.extractors import Extractor
from .apple import AppleMapProvider
from .base import MapProvider

if TYPE_CHECKING:
    from ..api.client import HttpClient
    from ..api.geocoding import NominatimGeocoder

REGISTRY_ORDER = (
    ProviderId.GOOGLE,
    ProviderId.APPLE,
    ProviderId.BING,
    ProviderId.OPENSTREETMAP,
    ProviderId.WAZE,
    ProviderId.KOMOOT,
)


def _fallbacks(
    provider_id: ProviderId,
    http_client: "HttpClient",
    geocoder: Optional["NominatimGeocoder"],
    page_content: bool,
    logger: Optional[logging.Logger]
) -> List[Extractor]:
    fallbacks: List[Extractor] = []
    if provider_id is ProviderId.GOOGLE:
        if page_content:
            page_extractor = GooglePageContentExtractor(http_client, logger)
            fallbacks.append(page_extractor.extract)
            fallbacks.append(PlaceIdExtractor(page_extractor, logger).extract)
        if geocoder is not None:
            fallbacks.append(AddressGeocodingExtractor(geocoder, logger).extract)
    elif provider_id is ProviderId.APPLE and page_content:
        fallbacks.append(ApplePageContentExtractor(http_client, logger).extract)
    return fallbacks


def build_providers(
    http_client: "HttpClient",
    templates: Optional[Mapping[str, str]] = None,
    geocoder: Optional["NominatimGeocoder"] = None,
    page_content: bool = False,
    logger: Optional[logging.Logger] = None
) -> List[MapProvider]:
    """
    Build every provider around a shared HTTP client.

    Args:
        http_client: Shared HTTP client
        templates: URL template overrides keyed by wire id
        geocoder: Enables the address geocoding fallback for Google links
        page_content: Enables the page-content fallbacks for Google and Apple links,
            including the place-id lookup for Google links
        logger: Logger instance

    Returns:
        Providers in registry order
    """
    pattern_sets = get_pattern_sets(templates)
    providers: List[MapProvider] = []

    for provider_id in REGISTRY_ORDER:
        patterns = pattern_sets[provider_id]
        provider_class = AppleMapProvider if provider_id is ProviderId.APPLE else MapProvider
        providers.append(provider_class(
            patterns=patterns,
            chain=ExtractorChain(extractor_steps(patterns), logger=logger),
            http_client=http_client,
            fallbacks=_fallbacks(provider_id, http_client, geocoder, page_content, logger),
            logger=logger,
        ))

    return providers
