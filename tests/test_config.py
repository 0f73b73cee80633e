"""Tests for settings resolution."""

import pytest
from quotecraft.config import Settings, configure_logging, load_settings
from quotecraft.domain.errors import ValidationError


def test_defaults():
    """Test built-in defaults when nothing is configured."""
    settings = load_settings()
    assert settings == Settings(currency="USD", validity_days=30, log_level="WARNING")


def test_environment_variables(monkeypatch):
    """Test values read from the environment."""
    monkeypatch.setenv("QUOTECRAFT_CURRENCY", "eur")
    monkeypatch.setenv("QUOTECRAFT_VALIDITY_DAYS", "14")
    monkeypatch.setenv("QUOTECRAFT_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.currency == "EUR"
    assert settings.validity_days == 14
    assert settings.log_level == "DEBUG"


def test_arguments_override_environment(monkeypatch):
    """Test that explicit arguments win over the environment."""
    monkeypatch.setenv("QUOTECRAFT_CURRENCY", "EUR")
    settings = load_settings(currency="GBP", validity_days=7)
    assert settings.currency == "GBP"
    assert settings.validity_days == 7


def test_invalid_validity_days(monkeypatch):
    """Test that a non-integer validity period is rejected."""
    monkeypatch.setenv("QUOTECRAFT_VALIDITY_DAYS", "soon")
    with pytest.raises(ValidationError, match="must be an integer"):
        load_settings()


def test_negative_validity_days():
    """Test that a negative validity period is rejected."""
    with pytest.raises(ValidationError, match="must not be negative"):
        load_settings(validity_days=-1)


def test_invalid_log_level():
    """Test that an unknown log level is rejected."""
    with pytest.raises(ValidationError, match="Invalid log level"):
        load_settings(log_level="chatty")


def test_empty_currency():
    """Test that an empty currency is rejected."""
    with pytest.raises(ValidationError):
        load_settings(currency="  ")


def test_configure_logging_accepts_settings():
    """Test that logging configuration runs for a valid level."""
    configure_logging(Settings(log_level="INFO"))
