"""
Core Module - Foundation components for SMS Utils
=================================================

This module provides the foundational components including:
- Configuration management
- Logging setup
- Exception handling
"""

from .config import Config, load_config
from .exceptions import (
    SMSUtilsError,
    InvalidArgumentError,
    EnvelopeIOError,
    ConfigError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "Config",
    "load_config",
    "SMSUtilsError",
    "InvalidArgumentError",
    "EnvelopeIOError",
    "ConfigError",
    "setup_logging",
    "get_logger",
]
