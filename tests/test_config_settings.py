"""Regression tests for runtime settings validation."""

import logging

import pytest
from pydantic import ValidationError

from learner_metrics.config import AppSettings, SettingsLoadError, config_load_database_url, config_load_settings
from learner_metrics.logging_config import configure_logging


def test_app_settings_normalizes_log_level_and_environment() -> None:
    """Upper-case log levels and trim environment labels.

    Returns:
        None: Assertions validate normalization.

    Raises:
        AssertionError: Raised when values are not normalized.
    """

    settings = AppSettings(environment_name=" Development ", log_level="debug")

    assert settings.log_level == "DEBUG"
    assert settings.environment_name == "Development"
    assert settings.config_is_development()
    assert settings.metrics_program_top_limit == 4


@pytest.mark.parametrize(
    "overrides",
    [
        {"log_level": "verbose"},
        {"metrics_program_top_limit": 0},
        {"application_port": 70000},
        {"environment_name": "  "},
    ],
)
def test_app_settings_rejects_invalid_values(overrides) -> None:
    """Reject invalid settings at construction.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when invalid settings are accepted.
    """

    with pytest.raises(ValidationError):
        AppSettings(**overrides)


def test_config_load_settings_wraps_validation_errors(monkeypatch) -> None:
    """Wrap environment validation failures into SettingsLoadError.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when validation errors leak unwrapped.
    """

    monkeypatch.setenv("METRICS_PROGRAM_TOP_LIMIT", "0")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_load_settings_reads_environment(monkeypatch) -> None:
    """Read settings from environment variables.

    Returns:
        None: Assertions validate environment loading.

    Raises:
        AssertionError: Raised when environment values are ignored.
    """

    monkeypatch.setenv("ENVIRONMENT_NAME", "production")
    monkeypatch.setenv("METRICS_PROGRAM_TOP_LIMIT", "2")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://reader@db:5432/learners")

    settings = config_load_settings()

    assert settings.environment_name == "production"
    assert not settings.config_is_development()
    assert settings.metrics_program_top_limit == 2
    assert config_load_database_url() == "postgresql+psycopg://reader@db:5432/learners"


def test_config_load_database_url_rejects_blank_value(monkeypatch) -> None:
    """Reject a blank database URL for migration tooling.

    Returns:
        None: Assertions validate blank URL handling.

    Raises:
        AssertionError: Raised when blank URLs are accepted.
    """

    monkeypatch.setenv("DATABASE_URL", "   ")

    with pytest.raises(SettingsLoadError, match="DATABASE_URL must not be blank"):
        config_load_database_url()


def test_configure_logging_sets_root_level() -> None:
    """Apply the configured level to the root logger.

    Returns:
        None: Assertions validate logging setup.

    Raises:
        AssertionError: Raised when the root level differs.
    """

    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    configure_logging("DEBUG")
    assert logging.getLogger().level == logging.DEBUG

    configure_logging("WARNING")
