"""
Main entry point for the map link converter.

Wires configuration, logging, the shared HTTP client and the providers into a
converter, and exposes it on the command line.
"""

import json
import sys
from typing import Optional

from .core import Config, setup_logger, LoggerContext, MapsBridgeError
from .api import HttpClient, NominatimGeocoder
from .models import ConversionResult
from .providers import build_providers
from .services import MapConverter


class MapsBridgeApp:
    """Main application for map link conversion."""

    def __init__(self, config_file: Optional[str] = None, log_level: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            log_level: Overrides the configured logging level
        """
        # Load configuration
        self.config = Config(config_file)

        # Setup logger
        self.logger = setup_logger(log_level=log_level or self.config.log_level)
        self.logger.debug(f"Configuration: {self.config}")

        self.http_client = HttpClient(
            timeout=self.config.http_timeout,
            connect_timeout=self.config.http_connect_timeout,
            max_redirects=self.config.http_max_redirects,
            pool_size=self.config.http_pool_size,
            user_agent=self.config.http_user_agent,
            logger=self.logger
        )

        geocoder = None
        if self.config.geocoding_enabled or self.config.reverse_geocoding_enabled:
            geocoder = NominatimGeocoder(
                http_client=self.http_client,
                base_url=self.config.geocoding_base_url,
                logger=self.logger
            )

        providers = build_providers(
            http_client=self.http_client,
            templates=self.config.provider_templates,
            geocoder=geocoder if self.config.geocoding_enabled else None,
            page_content=self.config.page_content_enabled,
            logger=self.logger
        )
        self.converter = MapConverter(
            providers,
            reverse_geocoder=geocoder if self.config.reverse_geocoding_enabled else None,
            logger=self.logger
        )

    def convert(self, text: str) -> ConversionResult:
        """
        Convert user input into links for every provider.

        Args:
            text: Coordinate literal or map link

        Returns:
            ConversionResult
        """
        with LoggerContext(self.logger, f"conversion of {text!r}"):
            return self.converter.convert(text)

    def close(self) -> None:
        """Release the HTTP connection pool."""
        self.http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def format_result(result: ConversionResult) -> str:
    """Plain-text rendering of a conversion result."""
    lines = [f"Coordinates: {result.coordinates}"]
    if result.name:
        lines.append(f"Name: {result.name}")
    if result.address:
        lines.append(f"Address: {result.address}")
    for provider_id, url in result.links.items():
        lines.append(f"{provider_id.value}: {url}")
    return "\n".join(lines)


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Convert a map link or coordinates into links for every map provider"
    )
    parser.add_argument(
        "input",
        type=str,
        help="Coordinates ('lat,lon' or 'lat lon') or a map link"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    args = parser.parse_args(argv)

    try:
        with MapsBridgeApp(config_file=args.config, log_level=args.log_level) as app:
            result = app.convert(args.input)
    except MapsBridgeError as e:
        print(f"Conversion failed: {e}")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        # Missing or invalid configuration file
        print(f"Configuration error: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_result(result))


if __name__ == "__main__":
    main()
