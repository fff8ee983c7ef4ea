"""
Configuration Management - YAML-based configuration with environment overrides
=============================================================================

This module handles all configuration aspects including:
- Loading from YAML files
- Environment variable overrides
- Default values
- Configuration validation
"""

import codecs
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

from .exceptions import ConfigError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EnvelopeConfig:
    """
    Message file settings.

    Controls how message envelopes are read from and written to disk.
    """
    encoding: str = "utf-8"

    def validate(self) -> None:
        """Validate envelope configuration."""
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError):
            raise ConfigError(f"Unknown text encoding: {self.encoding}")


@dataclass
class ValidityConfig:
    """
    Validity period settings.

    In mock mode the seconds until expiry are treated as minutes, which
    lets a test run exercise the whole validity range in minutes.
    """
    mock: bool = False

    def validate(self) -> None:
        if not isinstance(self.mock, bool):
            raise ConfigError(f"validity.mock must be true or false, got {self.mock!r}")


@dataclass
class LoggingConfig:
    """Logging output settings."""
    level: str = "INFO"
    json_format: bool = False
    log_dir: str = ""
    console_output: bool = True

    def validate(self) -> None:
        """Validate logging configuration."""
        if str(self.level).upper() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.level}")


@dataclass
class Config:
    """
    Main configuration container.

    Aggregates all configuration sections into a single object
    and provides methods for validating and exporting them.
    """
    app_name: str = "SMS Utils"
    version: str = "1.0.0"
    debug: bool = False

    envelope: EnvelopeConfig = field(default_factory=EnvelopeConfig)
    validity: ValidityConfig = field(default_factory=ValidityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Set at runtime
    config_dir: str = ""

    def validate(self) -> None:
        """
        Validate all configuration sections.

        Raises:
            ConfigError: If any configuration section is invalid
        """
        self.envelope.validate()
        self.validity.validate()
        self.logging.validate()

    @property
    def log_level(self) -> str:
        """Effective log level, DEBUG when debug mode is on."""
        return "DEBUG" if self.debug else str(self.logging.level).upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "app_name": self.app_name,
            "version": self.version,
            "debug": self.debug,
            "envelope": asdict(self.envelope),
            "validity": asdict(self.validity),
            "logging": asdict(self.logging),
        }


_SECTIONS = ("envelope", "validity", "logging")


def get_default_config_dir() -> Path:
    """
    Get the default configuration directory path.

    Returns:
        Path to the configuration directory
    """
    if "SMS_UTILS_CONFIG_DIR" in os.environ:
        return Path(os.environ["SMS_UTILS_CONFIG_DIR"])

    if "XDG_CONFIG_HOME" in os.environ:
        return Path(os.environ["XDG_CONFIG_HOME"]) / "sms-utils"

    return Path.home() / ".config" / "sms-utils"


def load_config(config_path: Optional[str] = None, load_env: bool = True) -> Config:
    """
    Load configuration from YAML file with environment variable overrides.

    This function loads configuration in the following order:
    1. Default values from dataclass
    2. Values from YAML file
    3. Environment variable overrides

    Args:
        config_path: Path to configuration file (optional)
        load_env: Whether to load environment variable overrides

    Returns:
        Config object with loaded values

    Raises:
        ConfigError: If configuration is invalid or cannot be loaded
    """
    config = Config()
    config.config_dir = str(get_default_config_dir())

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise ConfigError("Config file not found", {"path": str(yaml_path)})
    else:
        yaml_path = Path(config.config_dir) / "config.yaml"

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file: {e}", {"path": str(yaml_path)})
        except OSError as e:
            raise ConfigError(f"Failed to read config file: {e}", {"path": str(yaml_path)})

        if not isinstance(yaml_config, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(yaml_path)})

        _apply_yaml_config(config, yaml_config)

    if load_env:
        _apply_env_overrides(config)

    config.validate()

    return config


def _apply_yaml_config(config: Config, yaml_config: Dict[str, Any]) -> None:
    """
    Apply YAML configuration values to Config object.

    Unknown keys are ignored.

    Args:
        config: Config object to update
        yaml_config: Dictionary of configuration values from YAML
    """
    for key in ("app_name", "version", "debug"):
        if key in yaml_config:
            setattr(config, key, yaml_config[key])

    for section in _SECTIONS:
        values = yaml_config.get(section)
        if not values:
            continue
        if not isinstance(values, dict):
            raise ConfigError(f"Config section '{section}' must be a mapping")
        section_obj = getattr(config, section)
        for key, value in values.items():
            if hasattr(section_obj, key):
                setattr(section_obj, key, value)


def _apply_env_overrides(config: Config) -> None:
    """
    Apply environment variable overrides to Config object.

    Environment variables follow the pattern: SMS_UTILS_SECTION_KEY
    For example: SMS_UTILS_VALIDITY_MOCK, SMS_UTILS_LOGGING_LEVEL

    Args:
        config: Config object to update
    """
    env_mappings = {
        "SMS_UTILS_DEBUG": (None, "debug", bool),
        "SMS_UTILS_ENVELOPE_ENCODING": ("envelope", "encoding"),
        "SMS_UTILS_VALIDITY_MOCK": ("validity", "mock", bool),
        "SMS_UTILS_LOGGING_LEVEL": ("logging", "level"),
        "SMS_UTILS_LOGGING_JSON_FORMAT": ("logging", "json_format", bool),
        "SMS_UTILS_LOGGING_LOG_DIR": ("logging", "log_dir"),
    }

    for env_var, mapping in env_mappings.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        section, key = mapping[0], mapping[1]
        converter = mapping[2] if len(mapping) > 2 else str

        target = config if section is None else getattr(config, section)

        if converter == bool:
            converted = value.strip().lower() in ("true", "1", "yes", "on")
        else:
            converted = converter(value)

        setattr(target, key, converted)
