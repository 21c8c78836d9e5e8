"""Tests for structured logging configuration."""

import json
import logging

import pytest

from finarrow.logging_config import get_logger, is_configured, setup_logging


class TestSetupLogging:
    def test_marks_configured(self):
        setup_logging(json_logs=False, log_level="INFO")
        assert is_configured()

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_levels(self, level):
        setup_logging(json_logs=False, log_level=level)
        assert logging.getLogger().level == getattr(logging, level)

    def test_json_output(self, capsys):
        setup_logging(json_logs=True, log_level="INFO")
        get_logger("test").info("upload_parsed", records=12)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "upload_parsed"
        assert payload["records"] == 12
        assert payload["level"] == "info"

    def test_get_logger_has_methods(self):
        logger = get_logger(__name__)
        for method in ("debug", "info", "warning", "error"):
            assert hasattr(logger, method)
