"""
Maps Bridge

This package converts a location reference (raw coordinates or a link from
one mapping provider) into equivalent links for every supported provider.
"""

__version__ = "0.1.0"
__description__ = "Map link conversion between mapping providers"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "MapsBridgeApp":
        from .main import MapsBridgeApp
        return MapsBridgeApp
    if name == "MapConverter":
        from .services import MapConverter
        return MapConverter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MapsBridgeApp",
    "MapConverter",
]
