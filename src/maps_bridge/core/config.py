"""
Configuration module for map link conversion.

Loads configuration from JSON file and environment variables.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


DEFAULT_CONFIG: Dict[str, Any] = {
    "environment": "development",
    "http": {
        "timeout": constants.DEFAULT_TIMEOUT,
        "connect_timeout": constants.DEFAULT_CONNECT_TIMEOUT,
        "max_redirects": constants.DEFAULT_MAX_REDIRECTS,
        "pool_size": constants.DEFAULT_POOL_SIZE,
        "user_agent": constants.DEFAULT_USER_AGENT,
    },
    "providers": {
        "templates": dict(constants.DEFAULT_URL_TEMPLATES),
    },
    "fallbacks": {
        "page_content": {
            "enabled": False,
        },
        "geocoding": {
            "enabled": False,
            "base_url": constants.DEFAULT_GEOCODING_BASE_URL,
        },
        "reverse_geocoding": {
            "enabled": False,
        },
    },
    "logging": {
        "level": "INFO",
    },
}


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base recursively, returning base."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. A missing default file is not an
                        error; built-in defaults are used instead.
        """
        self._explicit_file = config_file is not None or bool(os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit_file:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            _deep_merge(self.config, json.load(f))

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # HTTP client
        if os.getenv("HTTP_TIMEOUT"):
            self.config["http"]["timeout"] = float(os.getenv("HTTP_TIMEOUT"))

        if os.getenv("HTTP_MAX_REDIRECTS"):
            self.config["http"]["max_redirects"] = int(os.getenv("HTTP_MAX_REDIRECTS"))

        if os.getenv("HTTP_USER_AGENT"):
            self.config["http"]["user_agent"] = os.getenv("HTTP_USER_AGENT")

        # Network fallbacks
        if os.getenv("PAGE_CONTENT_ENABLED"):
            self.config["fallbacks"]["page_content"]["enabled"] = _as_bool(
                os.getenv("PAGE_CONTENT_ENABLED")
            )

        if os.getenv("GEOCODING_ENABLED"):
            self.config["fallbacks"]["geocoding"]["enabled"] = _as_bool(
                os.getenv("GEOCODING_ENABLED")
            )

        if os.getenv("GEOCODING_BASE_URL"):
            self.config["fallbacks"]["geocoding"]["base_url"] = os.getenv("GEOCODING_BASE_URL")

        if os.getenv("REVERSE_GEOCODING_ENABLED"):
            self.config["fallbacks"]["reverse_geocoding"]["enabled"] = _as_bool(
                os.getenv("REVERSE_GEOCODING_ENABLED")
            )

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "http": ["timeout", "max_redirects"],
            "providers": ["templates"],
        }

        missing_keys = []
        for section, keys in required_config.items():
            if not isinstance(self.config.get(section), dict):
                missing_keys.append(section)
                continue
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        if self.http_timeout <= 0:
            raise ValueError(f"http.timeout must be positive, got {self.http_timeout}")

        if self.http_max_redirects < 0:
            raise ValueError(
                f"http.max_redirects cannot be negative, got {self.http_max_redirects}"
            )

        for provider_id, template in self.provider_templates.items():
            if constants.LAT_PLACEHOLDER not in template or constants.LON_PLACEHOLDER not in template:
                raise ValueError(
                    f"Template for provider '{provider_id}' must contain "
                    f"{constants.LAT_PLACEHOLDER} and {constants.LON_PLACEHOLDER}"
                )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'http.timeout')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def environment(self) -> str:
        """Get deployment environment name."""
        return self.get("environment", "development")

    @property
    def http_timeout(self) -> float:
        """Get HTTP read timeout in seconds."""
        return self.get("http.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def http_connect_timeout(self) -> float:
        """Get HTTP connect timeout in seconds."""
        return self.get("http.connect_timeout", constants.DEFAULT_CONNECT_TIMEOUT)

    @property
    def http_max_redirects(self) -> int:
        """Get maximum number of redirects followed per call."""
        return self.get("http.max_redirects", constants.DEFAULT_MAX_REDIRECTS)

    @property
    def http_pool_size(self) -> int:
        """Get HTTP connection pool size."""
        return self.get("http.pool_size", constants.DEFAULT_POOL_SIZE)

    @property
    def http_user_agent(self) -> str:
        """Get User-Agent header sent with outgoing requests."""
        return self.get("http.user_agent", constants.DEFAULT_USER_AGENT)

    @property
    def provider_templates(self) -> Dict[str, str]:
        """Get URL templates keyed by provider wire id."""
        return self.get("providers.templates", {})

    @property
    def page_content_enabled(self) -> bool:
        """Check if page content fallback is enabled."""
        return self.get("fallbacks.page_content.enabled", False)

    @property
    def geocoding_enabled(self) -> bool:
        """Check if address geocoding fallback is enabled."""
        return self.get("fallbacks.geocoding.enabled", False)

    @property
    def geocoding_base_url(self) -> str:
        """Get geocoding service base URL."""
        return self.get("fallbacks.geocoding.base_url", constants.DEFAULT_GEOCODING_BASE_URL)

    @property
    def reverse_geocoding_enabled(self) -> bool:
        """Check if addresses are looked up for locations found without one."""
        return self.get("fallbacks.reverse_geocoding.enabled", False)

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self.get("logging.level", "INFO")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
