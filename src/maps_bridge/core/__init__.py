"""
Core utilities for map link conversion.

Provides configuration management, constants and error types.
"""

from .config import Config
from ..logger import setup_logger, LoggerContext
from . import constants
from .exceptions import (
    MapsBridgeError,
    InvalidCoordinateError,
    InvalidInputError,
    CoordinateExtractionError,
    UnsupportedProviderError,
)

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "MapsBridgeError",
    "InvalidCoordinateError",
    "InvalidInputError",
    "CoordinateExtractionError",
    "UnsupportedProviderError",
]
