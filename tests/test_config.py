"""
Tests for configuration loading and logging setup.
"""

import logging

import pytest

from candidate_signals import config
from candidate_signals.config import AnalysisConfig, get_config
from candidate_signals.utils import setup_logging


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CANDIDATE_SIGNALS_LOG_FILE", "CANDIDATE_SIGNALS_LOG_LEVEL",
                 "CANDIDATE_SIGNALS_CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================
# TEST: Configuration
# =============================================================

class TestGetConfig:
    """Test defaults and environment overrides."""

    def test_defaults(self, clean_env):
        cfg = get_config()
        assert cfg.log_file == config.LOG_FILE
        assert cfg.log_level == "INFO"
        assert cfg.cache_ttl_seconds == config.CACHE_TTL_SECONDS
        assert cfg.primary_categories == ("domain_knowledge", "experience_relevance")
        assert sum(cfg.category_weights.values()) == pytest.approx(1.0)

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("CANDIDATE_SIGNALS_LOG_FILE", "/tmp/signals.log")
        clean_env.setenv("CANDIDATE_SIGNALS_LOG_LEVEL", "debug")
        clean_env.setenv("CANDIDATE_SIGNALS_CACHE_TTL", "120")

        cfg = get_config()
        assert cfg.log_file == "/tmp/signals.log"
        assert cfg.log_level == "DEBUG"
        assert cfg.cache_ttl_seconds == 120.0

    @pytest.mark.parametrize("ttl", ["soon", "-5"])
    def test_invalid_ttl(self, clean_env, ttl):
        clean_env.setenv("CANDIDATE_SIGNALS_CACHE_TTL", ttl)
        with pytest.raises(ValueError):
            get_config()

    @pytest.mark.parametrize("overrides", [
        {"primary_threshold": 120.0},
        {"minimum_threshold": -1.0},
        {"category_weights": {"communication": -0.5}},
    ])
    def test_validate_rejects_bad_values(self, overrides):
        with pytest.raises(ValueError):
            AnalysisConfig(**overrides).validate()

    def test_weights_are_copied(self):
        cfg = AnalysisConfig()
        cfg.category_weights["communication"] = 0.9
        assert config.CATEGORY_WEIGHTS["communication"] == 0.20


# =============================================================
# TEST: Logging setup
# =============================================================

class TestSetupLogging:
    """Test the file and console handlers."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_creates_log_directory(self, tmp_path):
        log_file = tmp_path / "nested" / "analysis.log"
        assert setup_logging(str(log_file)) == str(log_file)
        assert log_file.exists()

    def test_file_receives_records(self, tmp_path):
        log_file = tmp_path / "analysis.log"
        setup_logging(str(log_file), "debug")

        logging.getLogger("trajectory_analysis").debug("Built trajectory with 3 samples")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "DEBUG trajectory_analysis - Built trajectory with 3 samples" in content

    def test_console_only_shows_errors(self, tmp_path):
        setup_logging(str(tmp_path / "analysis.log"))
        levels = sorted(h.level for h in logging.getLogger().handlers)
        assert levels == [logging.INFO, logging.ERROR]

    def test_unknown_level(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(str(tmp_path / "analysis.log"), "chatty")
