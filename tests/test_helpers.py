"""
Tests for URL metadata helpers.
"""

import pytest  # type: ignore

from src.maps_bridge.api.helpers import (
    decode_html_entities,
    decode_url,
    encode_url_parameter,
    extract_place_name,
    find_address_query,
    find_place_id,
    url_decode,
)


class TestFindPlaceId:
    """Test cases for place id extraction."""

    def test_query_parameter(self):
        """Test the place_id query parameter."""
        url = "https://www.google.com/maps/place/?q=place_id:x&place_id=ChIJLU7jZClu5kcR4PcOOO6p3I0"
        assert find_place_id(url) == "ChIJLU7jZClu5kcR4PcOOO6p3I0"

    def test_data_blob(self):
        """Test the !1s data blob encoding."""
        url = (
            "https://www.google.com/maps/place/Eiffel+Tower/@48.8583701,2.2922926,17z/"
            "data=!3m1!4b1!4m6!3m5!1s0x47e66e2964e34e2d:0x8ddca9ee380ef7e0!8m2"
        )
        assert find_place_id(url) == "0x47e66e2964e34e2d:0x8ddca9ee380ef7e0"

    def test_query_parameter_takes_precedence(self):
        """Test that place_id= wins even when a data blob appears first."""
        url = "https://www.google.com/maps/data=!1sblob123?place_id=ChIJabc"
        assert find_place_id(url) == "ChIJabc"

    @pytest.mark.parametrize("url", [None, "", "https://www.google.com/maps?q=1,2"])
    def test_not_found(self, url):
        """Test URLs without a place id."""
        assert find_place_id(url) is None


class TestFindAddressQuery:
    """Test cases for q= address extraction."""

    def test_plus_as_space(self):
        """Test form-encoded spaces."""
        assert find_address_query("https://maps.google.com/?q=Statue+of+Liberty&z=15") == "Statue of Liberty"

    def test_utf8(self):
        """Test UTF-8 percent escapes."""
        assert find_address_query("https://maps.google.com/?q=Caf%C3%A9+de+Flore") == "Café de Flore"

    def test_malformed_escape_falls_back(self):
        """Test that a malformed escape only replaces plus signs."""
        assert find_address_query("https://maps.google.com/?q=100%+Pure") == "100% Pure"

    def test_invalid_utf8_falls_back(self):
        """Test that an invalid UTF-8 sequence only replaces plus signs."""
        assert find_address_query("https://maps.google.com/?q=Caf%E9+de+Flore") == "Caf%E9 de Flore"

    def test_not_found(self):
        """Test URLs without a query."""
        assert find_address_query("https://maps.google.com/maps/@1.0,2.0") is None
        assert find_address_query(None) is None


class TestExtractPlaceName:
    """Test cases for /place/ name decoding."""

    def test_decodes_name(self):
        """Test plus signs and UTF-8 escapes."""
        url = "https://www.google.com/maps/place/Caf%C3%A9+de+Flore/@48.854,2.3326,17z"
        assert extract_place_name(url) == "Café de Flore"

    def test_segment_ends_at_at_sign(self):
        """Test a name directly followed by @coordinates."""
        assert extract_place_name("https://www.google.com/maps/place/Louvre@48.86,2.33") == "Louvre"

    def test_invalid_utf8_falls_back(self):
        """Test the fallback on invalid sequences."""
        url = "https://www.google.com/maps/place/Caf%E9+de+Flore/"
        assert extract_place_name(url) == "Caf%E9 de Flore"

    def test_not_found(self):
        """Test URLs without a place segment."""
        assert extract_place_name("https://www.google.com/maps?q=1,2") is None


class TestDecoding:
    """Test cases for low-level decoding helpers."""

    def test_url_decode_strict(self):
        """Test that malformed input raises ValueError."""
        with pytest.raises(ValueError):
            url_decode("50%")
        with pytest.raises(ValueError):
            url_decode("%FF")

    def test_decode_url_returns_raw_on_failure(self):
        """Test that whole-URL decoding never raises."""
        url = "https://www.google.com/maps?q=50%"
        assert decode_url(url) == url
        assert decode_url("q=40.7128%2C-74.0060") == "q=40.7128,-74.0060"

    def test_decode_html_entities(self):
        """Test the entities found in meta tags."""
        assert decode_html_entities("Tom &amp; Jerry&#39;s &lt;b&gt;&quot;x&quot;&nbsp;") == "Tom & Jerry's <b>\"x\" "
        assert decode_html_entities(None) is None

    def test_decode_numeric_html_entities(self):
        """Test numeric references and named entities outside the common few."""
        assert decode_html_entities("Caf&#233; &#x27;X&#x27;") == "Café 'X'"
        assert decode_html_entities("Z&uuml;rich &middot; Schweiz") == "Zürich · Schweiz"

    def test_encode_url_parameter(self):
        """Test UTF-8 form encoding."""
        assert encode_url_parameter("Café de Flore") == "Caf%C3%A9+de+Flore"
        assert encode_url_parameter("Museumstraat 1, Amsterdam") == "Museumstraat+1%2C+Amsterdam"
        assert encode_url_parameter("  ") == ""
        assert encode_url_parameter(None) == ""
