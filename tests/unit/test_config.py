"""
Unit tests for environment-driven configuration.
"""

from pathlib import Path

import pytest

from roster.core.config import Config, Environment
from roster.core.exceptions import ConfigurationError


@pytest.fixture
def reload_config(monkeypatch):
    """Reload Config after a test changes the environment, then restore it."""
    yield monkeypatch
    monkeypatch.undo()
    Config.load()


@pytest.mark.unit
class TestConfigLoading:
    """Test Config.load()."""

    def test_testing_environment_from_conftest(self):
        assert Config.is_testing()
        assert Config.ROSTER_SEED_DEFAULTS is False

    def test_reads_environment_variables(self, reload_config):
        # Arrange
        reload_config.setenv("ENVIRONMENT", "production")
        reload_config.setenv("DATABASE_URL", "sqlite:///roster.db")
        reload_config.setenv("ROSTER_SEED_DEFAULTS", "yes")
        reload_config.setenv("LOGS_DIR", "var/logs")

        # Act
        Config.load()

        # Assert
        assert Config.is_production()
        assert Config.DATABASE_URL == "sqlite:///roster.db"
        assert Config.ROSTER_SEED_DEFAULTS is True
        assert Config.LOGS_DIR == Path("var/logs")

    def test_malformed_boolean_falls_back_to_default(self, reload_config):
        reload_config.setenv("DATABASE_ECHO", "maybe")

        Config.load()

        assert Config.DATABASE_ECHO is False
        assert Config.summary()["validation_errors"] == 1

    def test_unknown_environment_defaults_to_development(self, reload_config):
        reload_config.setenv("ENVIRONMENT", "moon")

        Config.load()

        assert Config.ENVIRONMENT == Environment.DEVELOPMENT.value

    def test_log_level_is_upper_cased(self, reload_config):
        reload_config.setenv("LOG_LEVEL", "warning")

        Config.load()

        assert Config.LOG_LEVEL == "WARNING"

    def test_summary_hides_database_credentials(self, reload_config):
        reload_config.setenv("DATABASE_URL", "postgresql://user:secret@db:5432/roster")

        Config.load()

        assert Config.summary()["database_url"] == "db:5432/roster"


@pytest.mark.unit
class TestConfigValidation:
    """Test Config.validate()."""

    def test_valid_configuration_passes(self):
        Config.validate()

    def test_invalid_log_level(self, reload_config):
        reload_config.setenv("LOG_LEVEL", "LOUD")
        Config.load()

        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()

        assert exc_info.value.config_key == "LOG_LEVEL"
        assert exc_info.value.error_code == "CONFIG_ERROR"

    def test_empty_database_url(self, reload_config):
        reload_config.setenv("DATABASE_URL", "")
        Config.load()

        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()

        assert exc_info.value.config_key == "DATABASE_URL"
