"""
Services for map link conversion.
"""

from .converter import MapConverter, extract_url

__all__ = [
    "MapConverter",
    "extract_url",
]
