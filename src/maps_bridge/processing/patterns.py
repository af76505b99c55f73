"""
Per-provider URL dialects.

Recognition patterns (whole-string), coordinate capture patterns and the
default extractor chain of every provider. Coordinate patterns name their
groups lat/lon; a second dialect in the same pattern uses lat2/lon2.
"""

import re
from typing import Dict, List, Mapping, Optional

from ..core import constants
from ..models import ProviderId, ProviderPatternSet
from .extractors import (
    ExtractorStep,
    on_decoded_url,
    pattern_extractor,
    with_place_name,
)

# URL recognition
GOOGLE_URL_PATTERN = (
    r"https?://(www\.)?google\.com/maps.*"
    r"|https?://maps\.google\.com.*"
    r"|https?://maps\.app\.goo\.gl/.*"
    r"|https?://goo\.gl/maps/.*"
)
APPLE_URL_PATTERN = r"https?://(www\.)?maps\.apple\.com/.*"
BING_URL_PATTERN = r"https?://(www\.)?bing\.com/maps.*"
OSM_URL_PATTERN = r"https?://(www\.)?openstreetmap\.org/.*"
WAZE_URL_PATTERN = r"https?://(www\.|ul\.)?waze\.com/.*"
KOMOOT_URL_PATTERN = r"https?://(www\.)?komoot\.com/.*"

# Google: data blob !3d<lat>!4d<lon>, @<lat>,<lon>, q=<lat>,<lon>, /search/<lat>,<lon>
GOOGLE_3D4D_PATTERN = re.compile(r"!3d(?P<lat>[\-\d.]+)!4d(?P<lon>[\-\d.]+)")
GOOGLE_AT_PATTERN = re.compile(r"@(?P<lat>[\-\d.]+),(?P<lon>[\-\d.]+)")
GOOGLE_Q_PATTERN = re.compile(r"q=(?P<lat>-?\d+[.,]?\d*),(?P<lon>-?\d+[.,]?\d*)")
GOOGLE_SEARCH_PATTERN = re.compile(r"/search/(?P<lat>[-+]?\d+\.\d+),(?P<lon>[-+]?\d+\.\d+)")

# Apple: ?ll=, ul?ll=, @ and &coordinate= forms
APPLE_COORDINATE_PATTERN = re.compile(
    r"(?:ul\?ll=|@?|&coordinate=)(?P<lat>-?\d+\.\d+),(?P<lon>-?\d+\.\d+)"
)

# Bing: q=<lat>,<lon> or cp=<lat>~<lon>, both with either decimal separator
BING_COORDINATE_PATTERN = re.compile(
    r"q=(?P<lat>-?\d{1,3}[.,]\d+),(?P<lon>-?\d{1,3}[.,]\d+)"
    r"|cp=(?P<lat2>-?\d{1,3}[.,]\d+)~(?P<lon2>-?\d{1,3}[.,]\d+)"
)

# OpenStreetMap: marker parameters or #map=<zoom>/<lat>/<lon>
OSM_COORDINATE_PATTERN = re.compile(
    r"mlat=(?P<lat>-?\d+(?:\.\d+)?)&mlon=(?P<lon>-?\d+(?:\.\d+)?)"
    r"|#map=\d+/(?P<lat2>-?\d+(?:\.\d+)?)/(?P<lon2>-?\d+(?:\.\d+)?)"
)

# Waze: ll=<lat>,<lon>, live-map ll.<lat>,<lon>, and %2C-encoded commas
WAZE_COORDINATE_PATTERN = re.compile(
    r"ll[=.](?P<lat>-?\d+\.?\d*)(?:,|%2C)(?P<lon>-?\d+\.?\d*)"
)

KOMOOT_COORDINATE_PATTERN = re.compile(r"@(?P<lat>-?\d+\.?\d*),(?P<lon>-?\d+\.?\d*)")


def _pattern_sets(templates: Mapping[str, str]) -> Dict[ProviderId, ProviderPatternSet]:
    return {
        ProviderId.GOOGLE: ProviderPatternSet(
            provider_id=ProviderId.GOOGLE,
            url_match_pattern=re.compile(GOOGLE_URL_PATTERN),
            coordinate_patterns=(
                GOOGLE_3D4D_PATTERN,
                GOOGLE_AT_PATTERN,
                GOOGLE_Q_PATTERN,
                GOOGLE_SEARCH_PATTERN,
            ),
            url_template=templates.get(ProviderId.GOOGLE.value),
        ),
        ProviderId.APPLE: ProviderPatternSet(
            provider_id=ProviderId.APPLE,
            url_match_pattern=re.compile(APPLE_URL_PATTERN),
            coordinate_patterns=(APPLE_COORDINATE_PATTERN,),
            url_template=templates.get(ProviderId.APPLE.value),
        ),
        ProviderId.BING: ProviderPatternSet(
            provider_id=ProviderId.BING,
            url_match_pattern=re.compile(BING_URL_PATTERN),
            coordinate_patterns=(BING_COORDINATE_PATTERN,),
            url_template=templates.get(ProviderId.BING.value),
        ),
        ProviderId.OPENSTREETMAP: ProviderPatternSet(
            provider_id=ProviderId.OPENSTREETMAP,
            url_match_pattern=re.compile(OSM_URL_PATTERN),
            coordinate_patterns=(OSM_COORDINATE_PATTERN,),
            url_template=templates.get(ProviderId.OPENSTREETMAP.value),
        ),
        ProviderId.WAZE: ProviderPatternSet(
            provider_id=ProviderId.WAZE,
            url_match_pattern=re.compile(WAZE_URL_PATTERN),
            coordinate_patterns=(WAZE_COORDINATE_PATTERN,),
            url_template=templates.get(ProviderId.WAZE.value),
        ),
        ProviderId.KOMOOT: ProviderPatternSet(
            provider_id=ProviderId.KOMOOT,
            url_match_pattern=re.compile(KOMOOT_URL_PATTERN),
            coordinate_patterns=(KOMOOT_COORDINATE_PATTERN,),
        ),
    }


def get_pattern_sets(
    templates: Optional[Mapping[str, str]] = None
) -> Dict[ProviderId, ProviderPatternSet]:
    """
    Build the pattern set of every provider.

    Args:
        templates: URL templates keyed by wire id; missing entries fall back to
                   the canonical templates

    Returns:
        Pattern sets keyed by provider id, in registry order
    """
    merged = dict(constants.DEFAULT_URL_TEMPLATES)
    if templates:
        merged.update(templates)
    return _pattern_sets(merged)


def google_steps() -> List[ExtractorStep]:
    return [
        ExtractorStep(
            2, "latLon3d4d",
            with_place_name(pattern_extractor(GOOGLE_3D4D_PATTERN, last_occurrence=True)),
        ),
        ExtractorStep(3, "atSymbol", with_place_name(pattern_extractor(GOOGLE_AT_PATTERN))),
        ExtractorStep(4, "qParameter", on_decoded_url(pattern_extractor(GOOGLE_Q_PATTERN))),
        ExtractorStep(5, "searchPattern", pattern_extractor(GOOGLE_SEARCH_PATTERN)),
    ]


def default_steps(pattern_set: ProviderPatternSet) -> List[ExtractorStep]:
    """One generic step per coordinate pattern, in declared order."""
    return [
        ExtractorStep(100 + index, f"{pattern_set.provider_id.value}Default", pattern_extractor(pattern))
        for index, pattern in enumerate(pattern_set.coordinate_patterns)
    ]


def extractor_steps(pattern_set: ProviderPatternSet) -> List[ExtractorStep]:
    """Default extractor chain for a provider."""
    if pattern_set.provider_id is ProviderId.GOOGLE:
        return google_steps()
    return default_steps(pattern_set)
