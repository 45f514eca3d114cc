"""
Tests for configuration loading and logging helpers.
"""

import json
import logging

import pytest
from src.marine_heatwave.core.config import Config
from src.marine_heatwave.logger import LoggerContext, setup_logger, site_logger

ENV_VARS = ["ARCHIVE_FILE", "BASELINE_FILE", "PROCESSING_TIMEZONE", "ENVIRONMENT", "CONFIG_FILE"]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration overrides from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config_data():
    """Minimal valid configuration."""
    return {
        "environment": "test",
        "locations": {
            "jimbaran": {"name": "Jimbaran", "latitude": -8.783715, "longitude": 115.125306},
            "nusadua": {"name": "Nusa Dua", "latitude": -8.808350, "longitude": 115.263204},
        },
        "files": {"archive": "current_sst.csv", "baseline": "baseline.csv"},
    }


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestConfig:
    """Test cases for Config."""

    def test_load_with_defaults(self, tmp_path, clean_env, config_data):
        """Test properties and defaults."""
        config = Config(write_config(tmp_path, config_data))

        assert [location.key for location in config.locations] == ["jimbaran", "nusadua"]
        assert config.locations[1].name == "Nusa Dua"
        assert config.archive_file == "current_sst.csv"
        assert config.baseline_file == "baseline.csv"
        assert config.min_duration == 5
        assert config.timezone == "Asia/Singapore"
        assert config.get("files.archive") == "current_sst.csv"
        assert config.get("missing.key", "fallback") == "fallback"

    def test_env_overrides(self, tmp_path, clean_env, config_data):
        """Test environment variables override file values."""
        clean_env.setenv("ARCHIVE_FILE", "/data/archive.csv")
        clean_env.setenv("PROCESSING_TIMEZONE", "UTC")

        config = Config(write_config(tmp_path, config_data))

        assert config.archive_file == "/data/archive.csv"
        assert config.timezone == "UTC"

    def test_config_file_from_env(self, tmp_path, clean_env, config_data):
        """Test CONFIG_FILE selects the file when no path is given."""
        clean_env.setenv("CONFIG_FILE", write_config(tmp_path, config_data))

        assert Config().get("environment") == "test"

    def test_missing_file(self, tmp_path, clean_env):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.json"))

    def test_missing_section(self, tmp_path, clean_env, config_data):
        """Test missing sections are reported."""
        del config_data["files"]

        with pytest.raises(ValueError, match="files"):
            Config(write_config(tmp_path, config_data))

    def test_missing_key(self, tmp_path, clean_env, config_data):
        """Test missing keys are reported with dot notation."""
        del config_data["files"]["baseline"]

        with pytest.raises(ValueError, match="files.baseline"):
            Config(write_config(tmp_path, config_data))

    def test_empty_locations(self, tmp_path, clean_env, config_data):
        """Test at least one location is required."""
        config_data["locations"] = {}

        with pytest.raises(ValueError, match="locations"):
            Config(write_config(tmp_path, config_data))

    @pytest.mark.parametrize("value", [0, -1, "5", 2.5, True])
    def test_invalid_min_duration(self, tmp_path, clean_env, config_data, value):
        """Test min_duration must be a positive integer."""
        config_data["detection"] = {"min_duration": value}

        with pytest.raises(ValueError, match="min_duration"):
            Config(write_config(tmp_path, config_data))

    def test_invalid_timezone(self, tmp_path, clean_env, config_data):
        """Test unknown timezones are rejected at load time."""
        config_data["processing"] = {"timezone": "Bali/Nowhere"}

        with pytest.raises(ValueError, match="timezone"):
            Config(write_config(tmp_path, config_data))


class TestLogging:
    """Test cases for logging helpers."""

    def test_setup_logger_writes_file(self, tmp_path):
        """Test file handler output."""
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logger(name="marine_heatwave.test", log_file=str(log_file), log_level="DEBUG")

        logger.debug("debug line")
        for handler in logger.handlers:
            handler.flush()

        assert "debug line" in log_file.read_text(encoding="utf-8")
        assert logger.propagate is False

    def test_logger_context_success(self, caplog):
        """Test start and completion messages."""
        logger = logging.getLogger("marine_heatwave_context_test")

        with caplog.at_level(logging.INFO, logger="marine_heatwave_context_test"):
            with LoggerContext(logger, "baseline load"):
                pass

        assert "Starting baseline load" in caplog.text
        assert "Completed baseline load" in caplog.text

    def test_logger_context_reraises(self, caplog):
        """Test failures are logged and not swallowed."""
        logger = logging.getLogger("marine_heatwave_context_test")

        with caplog.at_level(logging.INFO, logger="marine_heatwave_context_test"):
            with pytest.raises(RuntimeError):
                with LoggerContext(logger, "archive import"):
                    raise RuntimeError("boom")

        assert "Failed archive import" in caplog.text

    def test_logger_context_summary(self, caplog):
        """Test the completion message carries the result summary."""
        logger = logging.getLogger("marine_heatwave_context_test")

        with caplog.at_level(logging.INFO, logger="marine_heatwave_context_test"):
            with LoggerContext(logger, "heatwave detection") as context:
                context.summary = "2 events"

        assert "Completed heatwave detection" in caplog.text
        assert caplog.text.rstrip().endswith(": 2 events")

    def test_site_logger_prefixes_site(self, caplog):
        """Test per-site messages name their site."""
        logger = logging.getLogger("marine_heatwave_site_test")

        with caplog.at_level(logging.INFO, logger="marine_heatwave_site_test"):
            with LoggerContext(site_logger(logger, "Nusa Dua"), "hourly import"):
                pass

        assert "[Nusa Dua] Starting hourly import" in caplog.text
        assert "[Nusa Dua] Completed hourly import" in caplog.text

    def test_console_hides_debug(self, tmp_path):
        """Test DEBUG reaches the file but not the console."""
        logger = setup_logger(
            name="marine_heatwave.console_test",
            log_file=str(tmp_path / "console.log"),
            log_level="DEBUG"
        )

        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert console and all(h.level == logging.INFO for h in console)
