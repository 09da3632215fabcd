"""Tests for configuration and logging setup."""

import json
import logging
import sys

import pytest
from unittest.mock import patch
from seo_grader.config import Config, GradingThresholds, settings
from seo_grader.logging_config import setup_logging


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        """Test defaults when nothing is configured."""
        with patch.dict("os.environ", {}, clear=True):
            config = Config.from_env()

        assert config.llm_api_key is None
        assert config.llm_model == "gpt-4o-mini"
        assert config.llm_provider == "openai"
        assert config.llm_max_retries == 2

    def test_from_env(self):
        """Test values are read from the environment."""
        env = {
            "LLM_API_KEY": "secret",
            "LLM_PROVIDER": "anthropic",
            "LLM_MODEL": "claude-test",
            "LLM_TIMEOUT": "12.5",
            "LLM_MAX_RETRIES": "0",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()

        assert config.llm_api_key == "secret"
        assert config.llm_provider == "anthropic"
        assert config.llm_model == "claude-test"
        assert config.llm_timeout == 12.5
        assert config.llm_max_retries == 0


class TestGradingThresholds:
    """Tests for GradingThresholds."""

    def test_defaults(self):
        """Verify the standard ranges."""
        thresholds = GradingThresholds()
        assert (thresholds.title_min, thresholds.title_max) == (50, 60)
        assert (thresholds.meta_description_min, thresholds.meta_description_max) == (150, 160)
        assert thresholds.min_word_count == 500
        assert thresholds.opening_words == 100
        assert (thresholds.keyword_density_min, thresholds.keyword_density_max) == (1.0, 3.0)

    def test_from_env(self):
        """Test prefixed environment overrides."""
        env = {
            "SEO_THRESHOLD_MIN_WORD_COUNT": "300",
            "SEO_THRESHOLD_KEYWORD_DENSITY_MAX": "2.5",
        }
        with patch.dict("os.environ", env, clear=True):
            thresholds = GradingThresholds.from_env()

        assert thresholds.min_word_count == 300
        assert thresholds.keyword_density_max == 2.5
        assert thresholds.title_min == 50

    def test_from_env_invalid_value_keeps_default(self):
        """Test unparsable overrides are ignored."""
        with patch.dict("os.environ", {"SEO_THRESHOLD_TITLE_MAX": "sixty"}, clear=True):
            assert GradingThresholds.from_env().title_max == 60

    def test_file_round_trip(self, tmp_path):
        """Test saving and loading a thresholds file."""
        path = tmp_path / "thresholds.json"
        GradingThresholds(title_max=65, min_word_count=800).save_to_file(str(path))

        loaded = GradingThresholds.from_file(str(path))

        assert loaded.title_max == 65
        assert loaded.min_word_count == 800
        assert json.loads(path.read_text())["thresholds"]["title_max"] == 65

    def test_from_flat_file(self, tmp_path):
        """Test a file without the thresholds wrapper."""
        path = tmp_path / "flat.json"
        path.write_text(json.dumps({"opening_words": 50, "unknown": 1}))

        assert GradingThresholds.from_file(str(path)).opening_words == 50

    def test_from_file_coerces_numeric_strings(self, tmp_path):
        """Test quoted numbers are converted to the field type."""
        path = tmp_path / "quoted.json"
        path.write_text(json.dumps({"title_min": "45", "keyword_density_max": "2.5", "opening_words": 80.0}))

        thresholds = GradingThresholds.from_file(str(path))

        assert thresholds.title_min == 45
        assert thresholds.keyword_density_max == 2.5
        assert thresholds.opening_words == 80
        assert isinstance(thresholds.opening_words, int)

    @pytest.mark.parametrize("value", ["fifty", None, True, 50.5, [50]])
    def test_from_file_rejects_bad_values(self, tmp_path, value):
        """Test values that do not fit the field type are rejected."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"thresholds": {"title_min": value}}))

        with pytest.raises(ValueError, match="title_min"):
            GradingThresholds.from_file(str(path))

    def test_from_file_rejects_malformed_json(self, tmp_path):
        """Test a file that is not JSON, or not an object."""
        broken = tmp_path / "broken.json"
        broken.write_text("{title_min: 50")
        listed = tmp_path / "list.json"
        listed.write_text("[50, 60]")

        with pytest.raises(ValueError):
            GradingThresholds.from_file(str(broken))
        with pytest.raises(ValueError, match="JSON object"):
            GradingThresholds.from_file(str(listed))

    def test_missing_file_gives_defaults(self, tmp_path):
        """Test a nonexistent file path."""
        assert GradingThresholds.from_file(str(tmp_path / "nope.json")) == GradingThresholds()


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """Put the root logger back the way pytest configured it."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_level_and_file_handler(self, tmp_path):
        """Test the root level and optional file handler."""
        log_file = tmp_path / "logs" / "grader.log"
        setup_logging(level="DEBUG", log_file=str(log_file))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        assert log_file.parent.is_dir()
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_records_go_to_stderr(self):
        """Test console logs do not mix with report output on stdout."""
        setup_logging(level="INFO")

        streams = [
            h.stream for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert streams == [sys.stderr]

    def test_level_defaults_to_setting(self):
        """Test the LOG_LEVEL setting is used when no level is given."""
        with patch.object(settings, "LOG_LEVEL", "WARNING"):
            assert setup_logging() == logging.WARNING
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        """Test an invalid level name."""
        assert setup_logging(level="chatty") == logging.INFO
        assert logging.getLogger().level == logging.INFO
