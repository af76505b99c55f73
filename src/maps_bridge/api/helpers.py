"""
Helper functions for URL metadata.

Provides place-id, address-query and place-name decoding for provider URLs,
plus the small encoding helpers used when building links.
"""

import html
import logging
import re
from typing import Optional
from urllib.parse import quote_plus, unquote, unquote_plus

logger = logging.getLogger(__name__)

# Tried in order: query parameter, then two internal encodings of the data blob
PLACE_ID_PATTERNS = (
    re.compile(r"place_id=([\w\-]+)"),
    re.compile(r"!1s([\w\-:]+)"),
    re.compile(r"!3m\d+!1s([\w\-:]+)"),
)
QUERY_PATTERN = re.compile(r"q=([^&]+)")
PLACE_NAME_PATTERN = re.compile(r"/place/([^/@]+)")

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _check_escapes(text: str) -> None:
    if _MALFORMED_ESCAPE.search(text):
        raise ValueError(f"Malformed percent escape in {text!r}")


def url_decode(text: str, plus_as_space: bool = True) -> str:
    """
    Percent-decode text as strict UTF-8.

    Raises:
        ValueError: On a malformed escape or an invalid UTF-8 sequence
            (UnicodeDecodeError is a ValueError)
    """
    _check_escapes(text)
    if plus_as_space:
        return unquote_plus(text, encoding="utf-8", errors="strict")
    return unquote(text, encoding="utf-8", errors="strict")


def decode_url(url: str) -> str:
    """Percent-decode a whole URL, returning it unchanged if decoding fails."""
    try:
        return url_decode(url)
    except ValueError as e:
        logger.debug(f"Error decoding URL {url}: {e}")
        return url


def find_place_id(url: str) -> Optional[str]:
    """
    Find a place ID in the given URL.

    Args:
        url: URL to search

    Returns:
        The first place ID captured, or None if no pattern matches
    """
    if not url:
        return None

    for pattern in PLACE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            place_id = match.group(1)
            logger.debug(f"Extracted place_id with pattern {pattern.pattern}: {place_id}")
            return place_id
    return None


def find_address_query(url: str) -> Optional[str]:
    """
    Find the address query (q= parameter) in the given URL.

    Args:
        url: URL to search

    Returns:
        Decoded query text, or None if the URL has no q= parameter
    """
    if not url:
        return None

    match = QUERY_PATTERN.search(url)
    if not match:
        return None

    query = match.group(1)
    try:
        decoded = url_decode(query)
        logger.debug(f"Extracted query: {decoded}")
        return decoded
    except ValueError as e:
        logger.warning(f"Error decoding query {query}: {e}")
        return query.replace("+", " ")


def extract_place_name(url: str) -> Optional[str]:
    """
    Extract the place name from a /place/<name> path segment.

    The segment ends at the next '/' or '@'.

    Args:
        url: URL to search

    Returns:
        Decoded place name, or None if the URL has no /place/ segment
    """
    if not url:
        return None

    match = PLACE_NAME_PATTERN.search(url)
    if not match:
        return None

    encoded = match.group(1)
    try:
        decoded = url_decode(encoded.replace("+", " "), plus_as_space=False)
        logger.debug(f"Decoded place name: {encoded} -> {decoded}")
        return decoded
    except ValueError as e:
        logger.warning(f"Failed to decode place name {encoded}: {e}")
        return encoded.replace("+", " ")


def decode_html_entities(content: Optional[str]) -> Optional[str]:
    """Decode named and numeric HTML character references in meta tag values."""
    if content is None:
        return None
    return html.unescape(content).replace("\xa0", " ")


def encode_url_parameter(value: Optional[str]) -> str:
    """
    URL-encode a query parameter value using UTF-8.

    Returns:
        Encoded value, or an empty string for blank input
    """
    if value is None or not value.strip():
        return ""
    return quote_plus(value, encoding="utf-8")
