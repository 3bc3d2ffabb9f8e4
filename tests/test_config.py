"""
Tests for configuration loading.
"""

import json
import pytest

from src.energy_monitor.core import Config


ENV_VARS = [
    "CONFIG_FILE",
    "EMS_API_BASE_URL",
    "EMS_API_TIMEOUT",
    "EMS_TIMEZONE",
    "EMS_POLL_INTERVAL",
    "EMS_TAGS",
    "ENVIRONMENT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path):
    """Write a config dictionary to a temporary file."""
    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


@pytest.mark.unit
class TestConfig:
    """Test cases for Config."""

    def test_defaults(self, write_config):
        """Only the base URL is required."""
        config = Config(write_config({"api": {"base_url": "http://ems.local:5000"}}))

        assert config.api_base_url == "http://ems.local:5000"
        assert config.api_timeout == 30
        assert config.api_max_retries == 0
        assert config.api_verify_ssl is True
        assert config.timezone == "UTC"
        assert config.poll_interval == 1.0
        assert config.meter_tags == []

    def test_values_from_file(self, write_config):
        """File values are exposed through properties and dot notation."""
        config = Config(write_config({
            "api": {"base_url": "http://ems.local:5000", "timeout": 5},
            "processing": {"timezone": "Asia/Bangkok", "poll_interval": 0.5},
            "meters": {"tags": [13, "15"]},
        }))

        assert config.api_timeout == 5
        assert config.timezone == "Asia/Bangkok"
        assert config.poll_interval == 0.5
        assert config.meter_tags == [13, 15]
        assert config.get("processing.timezone") == "Asia/Bangkok"
        assert config.get("processing.missing", "x") == "x"

    def test_env_overrides(self, write_config, monkeypatch):
        """Environment variables win over the file."""
        path = write_config({"api": {"base_url": "http://file"}})
        monkeypatch.setenv("EMS_API_BASE_URL", "http://env:5000")
        monkeypatch.setenv("EMS_TAGS", "11, 187")
        monkeypatch.setenv("EMS_TIMEZONE", "Europe/Berlin")
        monkeypatch.setenv("EMS_POLL_INTERVAL", "2.5")

        config = Config(path)

        assert config.api_base_url == "http://env:5000"
        assert config.meter_tags == [11, 187]
        assert config.timezone == "Europe/Berlin"
        assert config.poll_interval == 2.5

    def test_config_file_env(self, write_config, monkeypatch):
        """CONFIG_FILE selects the file when none is given."""
        monkeypatch.setenv("CONFIG_FILE", write_config({"api": {"base_url": "http://x"}}))
        assert Config().api_base_url == "http://x"

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.json"))

    def test_missing_base_url(self, write_config):
        """The base URL is required."""
        with pytest.raises(ValueError, match="api.base_url"):
            Config(write_config({"api": {"timeout": 5}}))

    def test_missing_api_section(self, write_config):
        """The api section is required."""
        with pytest.raises(ValueError, match="api"):
            Config(write_config({}))

    def test_non_positive_poll_interval(self, write_config):
        """Poll interval must be positive."""
        with pytest.raises(ValueError, match="poll_interval"):
            Config(write_config({
                "api": {"base_url": "http://x"},
                "processing": {"poll_interval": 0},
            }))
