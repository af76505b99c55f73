"""
Application-wide constants for map link conversion.

This module defines default values and constants used throughout the application.
Coordinate capture patterns live with the extractor tables in processing.patterns.
"""

# Coordinate ranges (degrees)
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Tokens substituted into provider URL templates
LAT_PLACEHOLDER = "{lat}"
LON_PLACEHOLDER = "{lon}"

# Decimal places used when a coordinate would otherwise render in exponent form
PLAIN_DECIMAL_PLACES = 8

# Canonical provider URL templates, keyed by wire id
DEFAULT_URL_TEMPLATES = {
    "google": "https://www.google.com/maps?q={lat},{lon}",
    "apple": "https://maps.apple.com/?ll={lat},{lon}",
    "bing": "https://www.bing.com/maps?q={lat},{lon}",
    "osm": "https://www.openstreetmap.org/?mlat={lat}&mlon={lon}",
    "waze": "https://waze.com/ul?ll={lat},{lon}&navigate=yes",
}

# Apple place-specific URL (used when a name or address is known)
APPLE_PLACE_BASE_URL = "https://maps.apple.com/place?"

# Google place page addressed by place id
GOOGLE_PLACE_ID_URL = "https://www.google.com/maps/place/?q=place_id:"

# Input classification
# "lat,lon" with optional spaces around the comma, or "lat lon"
COORDINATE_INPUT_PATTERN = r"^-?\d+\.?\d*(?:\s*,\s*|\s+)-?\d+\.?\d*$"
URL_INPUT_PATTERN = r"^https?://.*"
URL_IN_TEXT_PATTERN = r"https?://\S+"

# HTTP defaults
DEFAULT_TIMEOUT = 10  # seconds (read)
DEFAULT_CONNECT_TIMEOUT = 5  # seconds
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_POOL_SIZE = 20
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; MapsBot/1.0)"

# Nominatim (address geocoding fallback)
DEFAULT_GEOCODING_BASE_URL = "https://nominatim.openstreetmap.org"

# Apple pages use this title for dropped pins; it is not a place name
APPLE_MARKED_LOCATION = "Marked Location"
