"""
Tests for the network fallbacks: page-content metadata, place-id lookup and
address geocoding.
"""

import pytest  # type: ignore
from unittest.mock import Mock

from src.maps_bridge.api.geocoding import NominatimGeocoder
from src.maps_bridge.models import Coordinate, LocationResult
from src.maps_bridge.processing import (
    AddressGeocodingExtractor,
    ApplePageContentExtractor,
    GooglePageContentExtractor,
    PlaceIdExtractor,
)


class TestGooglePageContentExtractor:
    """Test cases for Google page metadata."""

    @pytest.fixture
    def extractor(self, http_client):
        return GooglePageContentExtractor(http_client, logger=Mock())

    def test_title_and_coordinates(self, extractor, http_client, load_fixture):
        """Test that the og:title splits into name and address."""
        http_client.fetch_content.return_value = load_fixture("google_place.html")

        result = extractor.extract("https://maps.app.goo.gl/abc123")

        assert result.coordinates == Coordinate(40.6892494, -74.0445004)
        assert result.name == "Statue of Liberty"
        assert result.address == "Liberty Island, New York, NY 10004, United States"
        http_client.fetch_content.assert_called_once_with("https://maps.app.goo.gl/abc123")

    def test_title_without_separator(self, extractor, http_client):
        """Test that an unsplittable title is the place name."""
        http_client.fetch_content.return_value = (
            '<meta property="og:title" content="Central Park">'
            "<a href='/maps/@40.7829,-73.9654,15z'>"
        )

        result = extractor.extract("https://maps.app.goo.gl/park")

        assert result.name == "Central Park"
        assert result.address is None
        assert result.coordinates == Coordinate(40.7829, -73.9654)

    def test_coordinates_from_url(self, extractor, http_client):
        """Test that the URL is searched when the page has no coordinates."""
        http_client.fetch_content.return_value = '<meta itemprop="name" content="Louvre &amp; Gardens">'

        result = extractor.extract("https://www.google.com/maps/place/Louvre/@48.8606,2.3376,17z")

        assert result.name == "Louvre & Gardens"
        assert result.coordinates == Coordinate(48.8606, 2.3376)

    def test_fetch_failure(self, extractor, http_client):
        """Test that a failed fetch is a miss."""
        assert extractor.extract("https://maps.app.goo.gl/abc123") == LocationResult.empty()

    def test_blank_url(self, extractor, http_client):
        """Test that blank input is not fetched."""
        assert extractor.extract("  ") == LocationResult.empty()
        http_client.fetch_content.assert_not_called()


class TestApplePageContentExtractor:
    """Test cases for Apple page metadata."""

    @pytest.fixture
    def extractor(self, http_client):
        return ApplePageContentExtractor(http_client, logger=Mock())

    def test_place_page(self, extractor, http_client, load_fixture):
        """Test meta coordinates, og:title and the shortAddress field."""
        http_client.fetch_content.return_value = load_fixture("apple_place.html")

        result = extractor.extract("https://maps.apple.com/place?auid=123")

        assert result.coordinates == Coordinate(52.3599976, 4.8852188)
        assert result.name == "Rijksmuseum"
        assert result.address == "Museumstraat 1, 1071 XX Amsterdam"

    def test_marked_location(self, extractor, http_client, load_fixture):
        """Test that a dropped pin has no name and takes its address from the title."""
        http_client.fetch_content.return_value = load_fixture("apple_marked_location.html")

        result = extractor.extract("https://maps.apple.com/place?auid=456")

        assert result.coordinates == Coordinate(51.98312, 5.905344)
        assert result.name is None
        assert result.address == "Arnhem & Surroundings"

    def test_page_without_coordinates(self, extractor, http_client):
        """Test that a page without location meta has no coordinates."""
        http_client.fetch_content.return_value = "<title>Apple Maps</title>"

        result = extractor.extract("https://maps.apple.com/place?auid=789")

        assert not result.has_valid_coordinates()
        assert result.address is None


class TestAddressGeocodingExtractor:
    """Test cases for q= address geocoding."""

    def test_geocodes_query(self):
        """Test that the decoded query is geocoded."""
        geocoder = Mock(spec=NominatimGeocoder)
        expected = LocationResult(Coordinate(40.6892, -74.0445), address="Statue of Liberty")
        geocoder.geocode_query.return_value = expected
        extractor = AddressGeocodingExtractor(geocoder, logger=Mock())

        result = extractor.extract("https://maps.google.com/?q=Statue+of+Liberty")

        assert result == expected
        geocoder.geocode_query.assert_called_once_with("Statue of Liberty")

    def test_no_query(self):
        """Test that URLs without a query are not geocoded."""
        geocoder = Mock(spec=NominatimGeocoder)
        extractor = AddressGeocodingExtractor(geocoder, logger=Mock())

        assert extractor.extract("https://maps.app.goo.gl/abc") == LocationResult.empty()
        geocoder.geocode_query.assert_not_called()


class TestNominatimGeocoder:
    """Test cases for the Nominatim client."""

    @pytest.fixture
    def geocoder(self, http_client):
        return NominatimGeocoder(http_client, base_url="https://nominatim.example.org/search/", logger=Mock())

    def test_geocode_query(self, geocoder, http_client):
        """Test a successful lookup."""
        http_client.get_json.return_value = [
            {"lat": "40.6892494", "lon": "-74.0445004", "name": "Statue of Liberty"}
        ]

        result = geocoder.geocode_query("Statue of Liberty, New York")

        assert result.coordinates == Coordinate(40.6892494, -74.0445004)
        assert result.name == "Statue of Liberty"
        assert result.address == "Statue of Liberty, New York"
        http_client.get_json.assert_called_once_with(
            "https://nominatim.example.org/search",
            params={"q": "Statue of Liberty, New York", "format": "jsonv2", "limit": "1"}
        )

    @pytest.mark.parametrize("response", [
        None,
        [],
        {"error": "Unable to geocode"},
        [{"lat": "north", "lon": "-74.0"}],
        [{"name": "No coordinates"}],
        [{"lat": "120.0", "lon": "10.0"}],
        ["oops"],
        [None],
        [["40.6892", "-74.0445"]],
    ])
    def test_unusable_responses(self, geocoder, http_client, response):
        """Test that failures and unusable results are a miss."""
        http_client.get_json.return_value = response
        assert geocoder.geocode_query("Somewhere") == LocationResult.empty()

    def test_blank_query(self, geocoder, http_client):
        """Test that blank queries are not sent."""
        assert geocoder.geocode_query(" ") == LocationResult.empty()
        http_client.get_json.assert_not_called()

    def test_reverse_geocode(self, geocoder, http_client):
        """Test that a coordinate is described by its display address."""
        http_client.get_json.return_value = {
            "lat": "52.3600",
            "lon": "4.8852",
            "name": "Rijksmuseum",
            "display_name": "Rijksmuseum, Museumstraat 1, Amsterdam, Nederland",
        }

        result = geocoder.reverse_geocode(Coordinate(52.36, 4.8852))

        assert result.coordinates == Coordinate(52.36, 4.8852)
        assert result.name == "Rijksmuseum"
        assert result.address == "Rijksmuseum, Museumstraat 1, Amsterdam, Nederland"
        http_client.get_json.assert_called_once_with(
            "https://nominatim.example.org/reverse",
            params={"lat": "52.36", "lon": "4.8852", "format": "jsonv2"}
        )

    def test_reverse_geocode_without_name(self, geocoder, http_client):
        http_client.get_json.return_value = {"display_name": "A12, Arnhem", "name": ""}

        result = geocoder.reverse_geocode(Coordinate(51.98312, 5.905344))

        assert result.name is None
        assert result.address == "A12, Arnhem"

    @pytest.mark.parametrize("response", [
        None,
        [],
        ["oops"],
        {"error": "Unable to geocode"},
        {"display_name": ""},
    ])
    def test_reverse_geocode_unusable_responses(self, geocoder, http_client, response):
        """Test that failures and results without an address are a miss."""
        http_client.get_json.return_value = response
        assert geocoder.reverse_geocode(Coordinate(1.5, 2.5)) == LocationResult.empty()

    @pytest.mark.parametrize("coordinate", [None, Coordinate(91.0, 0.0)])
    def test_reverse_geocode_invalid_coordinate(self, geocoder, http_client, coordinate):
        """Test that invalid coordinates are not sent."""
        assert geocoder.reverse_geocode(coordinate) == LocationResult.empty()
        http_client.get_json.assert_not_called()


class TestPlaceIdExtractor:
    """Test cases for place id lookup through the place page."""

    PLACE_ID = "ChIJPTacEpBQwokRKwIlDXelxkA"

    @pytest.fixture
    def extractor(self, http_client):
        return PlaceIdExtractor(GooglePageContentExtractor(http_client, logger=Mock()), logger=Mock())

    def test_place_id_parameter(self, extractor, http_client, load_fixture):
        """Test that the place page of a place_id= parameter is read."""
        http_client.fetch_content.return_value = load_fixture("google_place.html")

        result = extractor.extract(f"https://www.google.com/maps/search/?api=1&place_id={self.PLACE_ID}")

        assert result.coordinates == Coordinate(40.6892494, -74.0445004)
        assert result.name == "Statue of Liberty"
        http_client.fetch_content.assert_called_once_with(
            f"https://www.google.com/maps/place/?q=place_id:{self.PLACE_ID}"
        )

    def test_data_blob_place_id(self, extractor, http_client, load_fixture):
        """Test the !1s encoding of the place id."""
        http_client.fetch_content.return_value = load_fixture("google_place.html")

        extractor.extract("https://www.google.com/maps/place/data=!4m2!3m1!1s0x89c25090129c363d:0x40c6a5770d25022b")

        http_client.fetch_content.assert_called_once_with(
            "https://www.google.com/maps/place/?q=place_id:0x89c25090129c363d:0x40c6a5770d25022b"
        )

    def test_no_place_id(self, extractor, http_client):
        """Test that URLs without a place id fetch nothing."""
        assert extractor.extract("https://maps.app.goo.gl/abc") == LocationResult.empty()
        http_client.fetch_content.assert_not_called()

    def test_place_page_without_coordinates(self, extractor, http_client):
        """Test that a name alone is not a result."""
        http_client.fetch_content.return_value = (
            '<meta property="og:title" content="Somewhere · Main Street 1">'
        )

        result = extractor.extract(f"https://www.google.com/maps?place_id={self.PLACE_ID}")

        assert result == LocationResult.empty()
