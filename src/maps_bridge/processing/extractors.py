"""
Coordinate extraction module.

One generic matching algorithm driven by regex tables, plus the ordered chain
that runs a provider's extractors until one yields a valid coordinate.

Every extractor is a plain callable ``(text) -> LocationResult``; a miss is the
empty LocationResult, never an exception.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

from ..api.helpers import decode_url, extract_place_name
from ..models import Coordinate, LocationResult

logger = logging.getLogger(__name__)

Extractor = Callable[[str], LocationResult]


def parse_coordinate_pair(lat_text: Optional[str], lon_text: Optional[str]) -> Optional[Coordinate]:
    """
    Parse captured latitude/longitude tokens.

    Decimal commas are normalized to dots first. Unparseable tokens yield None.
    """
    if lat_text is None or lon_text is None:
        return None

    try:
        return Coordinate(
            float(lat_text.replace(",", ".")),
            float(lon_text.replace(",", ".")),
        )
    except ValueError:
        logger.debug(f"Invalid coordinate tokens: {lat_text!r}, {lon_text!r}")
        return None


def _groups(match) -> Tuple[Optional[str], Optional[str]]:
    """Return whichever named pair (lat/lon or lat2/lon2) the match populated."""
    groups = match.groupdict()
    lat = groups.get("lat")
    lon = groups.get("lon")
    if lat is None or lon is None:
        lat = groups.get("lat2")
        lon = groups.get("lon2")
    return lat, lon


def match_coordinates(pattern: Pattern, text: str) -> LocationResult:
    """
    Find the first occurrence of pattern anywhere in text.

    Args:
        pattern: Compiled regex with named groups lat/lon and optionally lat2/lon2
        text: URL or other text to search

    Returns:
        LocationResult with the parsed coordinate, or the empty result
    """
    if not text:
        return LocationResult.empty()

    match = pattern.search(text)
    if not match:
        return LocationResult.empty()

    coordinate = parse_coordinate_pair(*_groups(match))
    if coordinate is None:
        return LocationResult.empty()
    return LocationResult.from_coordinates(coordinate)


def match_last_coordinates(pattern: Pattern, text: str) -> LocationResult:
    """Like match_coordinates, but the last parseable occurrence wins."""
    if not text:
        return LocationResult.empty()

    last = None
    for match in pattern.finditer(text):
        coordinate = parse_coordinate_pair(*_groups(match))
        if coordinate is not None:
            last = coordinate

    if last is None:
        return LocationResult.empty()
    return LocationResult.from_coordinates(last)


def pattern_extractor(pattern: Pattern, last_occurrence: bool = False) -> Extractor:
    """Build an extractor for one coordinate pattern."""
    matcher = match_last_coordinates if last_occurrence else match_coordinates

    def extract(text: str) -> LocationResult:
        return matcher(pattern, text)

    return extract


def with_place_name(extractor: Extractor) -> Extractor:
    """Attach the decoded /place/<name> segment to a successful result."""

    def extract(text: str) -> LocationResult:
        result = extractor(text)
        if not result.has_valid_coordinates():
            return result
        return LocationResult(
            coordinates=result.coordinates,
            name=extract_place_name(text),
            address=result.address,
        )

    return extract


def on_decoded_url(extractor: Extractor) -> Extractor:
    """Run an extractor on the percent-decoded text."""

    def extract(text: str) -> LocationResult:
        return extractor(decode_url(text))

    return extract


@dataclass(frozen=True)
class ExtractorStep:
    """An extractor with its position in the chain (lower runs first)."""

    priority: int
    name: str
    extract: Extractor


class ExtractorChain:
    """Ordered extractors evaluated until the first valid coordinate."""

    def __init__(
        self,
        steps: Iterable[ExtractorStep],
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize extractor chain.

        Args:
            steps: Extractor steps in any order; they are sorted by priority
            logger: Logger instance
        """
        self.steps: List[ExtractorStep] = sorted(steps, key=lambda step: step.priority)
        self.logger = logger or logging.getLogger(__name__)

    def __len__(self) -> int:
        return len(self.steps)

    def extract(self, text: Optional[str]) -> LocationResult:
        """
        Run each extractor in priority order.

        Args:
            text: URL or other text

        Returns:
            First result with valid coordinates, or the empty result
        """
        if text is None or not text.strip():
            return LocationResult.empty()

        for step in self.steps:
            result = step.extract(text)
            if result.has_valid_coordinates():
                self.logger.debug(f"Extractor '{step.name}' matched {result.coordinates}")
                return result

        self.logger.debug(f"No coordinates found for URL: {text}")
        return LocationResult.empty()
