"""Tests for environment-driven logging configuration."""

import logging

import pytest
from shared.logging import configure_logging, current_environment, get_log_level


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in ("ENV", "ENVIRONMENT", "PROTEAN_ENV", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(key, raising=False)


class TestLogLevel:
    def test_defaults_to_development(self):
        assert current_environment() == "development"
        assert get_log_level() == "DEBUG"

    @pytest.mark.parametrize(
        "environment,level",
        [("production", "INFO"), ("staging", "INFO"), ("test", "WARNING"), ("qa", "INFO")],
    )
    def test_level_by_environment(self, monkeypatch, environment, level):
        monkeypatch.setenv("PROTEAN_ENV", environment)
        assert get_log_level() == level

    def test_env_takes_precedence_over_protean_env(self, monkeypatch):
        monkeypatch.setenv("ENV", "Production")
        monkeypatch.setenv("PROTEAN_ENV", "test")
        assert current_environment() == "production"

    def test_explicit_log_level_wins(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestConfigureLogging:
    def test_writes_log_files_to_configured_directory(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PROTEAN_ENV", "test")
        root = logging.getLogger()
        original_handlers, original_level = root.handlers[:], root.level
        try:
            configure_logging(log_dir=str(tmp_path), log_file_prefix="unit")

            assert (tmp_path / "unit.log").exists()
            assert (tmp_path / "unit_error.log").exists()
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = original_handlers
            root.setLevel(original_level)
