"""
Provider data models.

Contains the provider identifier enumeration and per-provider pattern sets.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern, Tuple


class ProviderId(Enum):
    """Supported map providers, valued by their stable lowercase wire id."""

    GOOGLE = "google"
    APPLE = "apple"
    BING = "bing"
    OPENSTREETMAP = "osm"
    WAZE = "waze"
    # Accepted as input only; no URL template
    KOMOOT = "komoot"

    @classmethod
    def from_string(cls, provider_name: Optional[str]) -> Optional["ProviderId"]:
        """
        Find a provider by its wire id (case-insensitive).

        Returns:
            The matching ProviderId, or None if not found
        """
        if provider_name is None:
            return None

        wanted = provider_name.strip().lower()
        for provider_id in cls:
            if provider_id.value == wanted:
                return provider_id
        return None

    @classmethod
    def generating(cls) -> Tuple["ProviderId", ...]:
        """Providers that take part in link generation."""
        return tuple(p for p in cls if p is not cls.KOMOOT)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProviderPatternSet:
    """URL template, recognition pattern and coordinate patterns of one provider."""

    provider_id: ProviderId
    url_match_pattern: Pattern
    coordinate_patterns: Tuple[Pattern, ...] = field(default_factory=tuple)
    url_template: Optional[str] = None

    def matches_url(self, url: str) -> bool:
        """Whole-string match against the provider's canonical URL shape."""
        return self.url_match_pattern.fullmatch(url) is not None
