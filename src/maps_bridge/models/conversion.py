"""
Conversion data models.

Contains the DTO returned by the converter.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .location import Coordinate
from .provider import ProviderId


@dataclass
class ConversionResult:
    """Location found for an input plus its link for every provider."""

    coordinates: Coordinate
    name: Optional[str] = None
    address: Optional[str] = None
    source: Optional[ProviderId] = None
    links: Dict[ProviderId, str] = field(default_factory=dict)

    def add_link(self, provider_id: ProviderId, url: str) -> "ConversionResult":
        self.links[provider_id] = url
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with provider wire ids as link keys."""
        return {
            "coordinates": {
                "lat": self.coordinates.lat,
                "lon": self.coordinates.lon,
            },
            "name": self.name,
            "address": self.address,
            "source": self.source.value if self.source else None,
            "links": {provider_id.value: url for provider_id, url in self.links.items()},
        }
