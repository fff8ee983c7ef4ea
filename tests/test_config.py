"""
Test Configuration Module
========================

Unit tests for configuration loading and validation.
"""

import pytest
from pathlib import Path

# Add parent directory to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import (
    Config, EnvelopeConfig, LoggingConfig, ValidityConfig,
    get_default_config_dir, load_config
)
from core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point the config directory at a temporary path and clear overrides."""
    monkeypatch.setenv("SMS_UTILS_CONFIG_DIR", str(tmp_path))
    for name in (
        "SMS_UTILS_DEBUG",
        "SMS_UTILS_ENVELOPE_ENCODING",
        "SMS_UTILS_VALIDITY_MOCK",
        "SMS_UTILS_LOGGING_LEVEL",
        "SMS_UTILS_LOGGING_JSON_FORMAT",
        "SMS_UTILS_LOGGING_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSections:
    """Tests for the configuration sections."""

    def test_default_values(self):
        assert EnvelopeConfig().encoding == "utf-8"
        assert ValidityConfig().mock is False
        assert LoggingConfig().level == "INFO"

    def test_invalid_encoding(self):
        with pytest.raises(ConfigError):
            EnvelopeConfig(encoding="no-such-encoding").validate()

    def test_invalid_mock(self):
        with pytest.raises(ConfigError):
            ValidityConfig(mock="sometimes").validate()

    def test_invalid_level(self):
        with pytest.raises(ConfigError):
            LoggingConfig(level="LOUD").validate()

    def test_level_case_insensitive(self):
        LoggingConfig(level="debug").validate()


class TestConfig:
    """Tests for main Config class."""

    def test_default_values(self):
        config = Config()
        assert config.app_name == "SMS Utils"
        assert config.envelope is not None
        assert config.validity is not None
        assert config.log_level == "INFO"

    def test_debug_log_level(self):
        config = Config(debug=True)
        assert config.log_level == "DEBUG"

    def test_to_dict(self):
        d = Config().to_dict()
        assert d["envelope"] == {"encoding": "utf-8"}
        assert d["validity"] == {"mock": False}
        assert "logging" in d


class TestLoadConfig:
    """Tests for loading from files and environment."""

    def test_default_dir(self, tmp_path):
        assert get_default_config_dir() == tmp_path

    def test_xdg_dir(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SMS_UTILS_CONFIG_DIR")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_default_config_dir() == tmp_path / "sms-utils"

    def test_no_file(self):
        config = load_config()
        assert config.validity.mock is False

    def test_default_file(self, tmp_path):
        (tmp_path / "config.yaml").write_text("validity:\n  mock: true\n", encoding="utf-8")
        assert load_config().validity.mock is True

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text(
            "debug: true\nenvelope:\n  encoding: latin-1\nlogging:\n  level: WARNING\n  unknown: 1\n",
            encoding="utf-8"
        )
        config = load_config(str(path))
        assert config.debug is True
        assert config.envelope.encoding == "latin-1"
        assert config.logging.level == "WARNING"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_bad_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("validity: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "invalid.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_env_overrides(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("validity:\n  mock: false\n", encoding="utf-8")
        monkeypatch.setenv("SMS_UTILS_VALIDITY_MOCK", "yes")
        monkeypatch.setenv("SMS_UTILS_LOGGING_LEVEL", "ERROR")
        config = load_config()
        assert config.validity.mock is True
        assert config.logging.level == "ERROR"

    def test_env_ignored(self, monkeypatch):
        monkeypatch.setenv("SMS_UTILS_VALIDITY_MOCK", "true")
        assert load_config(load_env=False).validity.mock is False
