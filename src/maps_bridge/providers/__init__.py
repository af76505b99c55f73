"""
Map providers.

Each provider generates, recognizes and parses links of one mapping service.
"""

from .base import MapProvider
from .apple import AppleMapProvider
from .registry import REGISTRY_ORDER, build_providers

__all__ = [
    "MapProvider",
    "AppleMapProvider",
    "REGISTRY_ORDER",
    "build_providers",
]
