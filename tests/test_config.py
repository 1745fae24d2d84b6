"""Tests for configuration and logging setup"""

import json
import logging

import pytest

from peermatch.config import Settings
from peermatch.schemas.enums import ExpertiseArea, Language
from peermatch.utils.labels import get_label
from peermatch.utils.logging import JsonFormatter, setup_logging


class TestSettings:
    """Test programme settings"""

    def test_defaults_are_consistent(self, config):
        assert config.max_total_score == 100
        assert config.validate_configuration() == {"errors": [], "warnings": []}

    def test_invalid_team_bounds(self):
        config = Settings(_env_file=None, min_team_size=6, max_team_size=5)
        issues = config.validate_configuration()
        assert any("min_team_size" in error for error in issues["errors"])

    def test_weight_warnings(self):
        config = Settings(_env_file=None, experience_max_score=20, team_coverage_weight=0.5)
        issues = config.validate_configuration()
        assert len(issues["warnings"]) == 2

    def test_oversized_expertise_pools(self):
        config = Settings(_env_file=None, expertise_preferred_points=20)
        assert len(config.validate_configuration()["errors"]) == 1

    def test_clamp_team_size(self, config):
        assert config.clamp_team_size(0) == 2
        assert config.clamp_team_size(4) == 4
        assert config.clamp_team_size(9) == 5

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("PEERMATCH_MAX_TEAM_SIZE", "7")
        monkeypatch.setenv("PEERMATCH_LOG_LEVEL", "debug")
        config = Settings(_env_file=None)
        assert config.max_team_size == 7
        assert config.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, log_level="chatty")


class TestLabels:
    """Test bilingual labels"""

    def test_expertise_and_language_labels(self):
        assert get_label(ExpertiseArea.ATS) == "Air Traffic Services"
        assert get_label(ExpertiseArea.MET, "fr") == "Météorologie"
        assert get_label(Language.PT, "FR") == "Portugais"


class TestLogging:
    """Test logging setup"""

    def test_json_formatter(self):
        record = logging.LogRecord("peermatch.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["message"] == "hello world"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "peermatch.test"

    @pytest.mark.parametrize("log_format,formatter_type", [
        ("json", JsonFormatter),
        ("text", logging.Formatter),
    ])
    def test_setup_logging(self, log_format, formatter_type):
        root_logger = logging.getLogger()
        saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
        try:
            setup_logging(Settings(_env_file=None, log_format=log_format, log_level="WARNING"))
            assert root_logger.level == logging.WARNING
            assert len(root_logger.handlers) == 1
            assert isinstance(root_logger.handlers[0].formatter, formatter_type)
        finally:
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)
