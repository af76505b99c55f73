"""
Pytest configuration and shared fixtures for all tests.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.maps_bridge.api.client import HttpClient  # noqa: E402
from src.maps_bridge.providers import build_providers  # noqa: E402
from src.maps_bridge.services import MapConverter  # noqa: E402


@pytest.fixture(scope="session")
def fixtures_dir():
    """Get the fixtures directory path."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir):
    """Read a fixture file as text."""
    def _load(name):
        return (fixtures_dir / name).read_text(encoding="utf-8")
    return _load


@pytest.fixture
def http_client():
    """HTTP client mock: redirects resolve to the same URL, fetches fail."""
    client = Mock(spec=HttpClient)
    client.follow_redirects.side_effect = lambda url: url
    client.fetch_content.return_value = None
    client.get_json.return_value = None
    return client


@pytest.fixture
def providers(http_client):
    """All providers around the mocked HTTP client, no network fallbacks."""
    return build_providers(http_client, logger=Mock())


@pytest.fixture
def provider_map(providers):
    """Providers keyed by ProviderId."""
    return {provider.provider_id: provider for provider in providers}


@pytest.fixture
def converter(providers):
    """Converter over the mocked providers."""
    return MapConverter(providers, logger=Mock())


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (wires several components)"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
