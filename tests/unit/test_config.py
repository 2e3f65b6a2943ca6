"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from src.core.config import Constants, Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)  # type: ignore[call-arg]


def test_require_credential_with_valid_value() -> None:
    """Test require_credential returns value when credential is set."""
    settings = _settings(openrouter_api_key="sk-test")

    result = settings.require_credential("openrouter_api_key", "OpenRouter API key")

    assert result == "sk-test"


def test_require_credential_with_none_raises_error() -> None:
    """Test require_credential raises ValueError when credential is None."""
    settings = _settings(openrouter_api_key=None)

    with pytest.raises(ValueError, match="OpenRouter API key credential not configured"):
        settings.require_credential("openrouter_api_key", "OpenRouter API key")


def test_require_credential_with_empty_string_raises_error() -> None:
    """Test require_credential raises ValueError when credential is empty."""
    settings = _settings(openrouter_api_key="")

    with pytest.raises(ValueError, match="OpenRouter API key credential not configured"):
        settings.require_credential("openrouter_api_key", "OpenRouter API key")


def test_require_credential_error_message_includes_field_name() -> None:
    """Test error message includes the environment variable name."""
    settings = _settings(logfire_token=None)

    with pytest.raises(ValueError, match="LOGFIRE_TOKEN"):
        settings.require_credential("logfire_token", "Logfire")


def test_strategies_default_to_rule() -> None:
    """Test both strategies work offline by default."""
    settings = _settings()

    assert settings.expiry_estimator == "rule"
    assert settings.suggestion_generator == "rule"


def test_strategy_read_from_environment(monkeypatch) -> None:
    """Test strategies can be switched through environment variables."""
    monkeypatch.setenv("EXPIRY_ESTIMATOR", "ai")
    monkeypatch.setenv("SUGGESTION_GENERATOR", "ai")

    settings = _settings()

    assert settings.expiry_estimator == "ai"
    assert settings.suggestion_generator == "ai"


def test_unknown_strategy_rejected() -> None:
    """Test only 'rule' and 'ai' are accepted."""
    with pytest.raises(ValidationError, match="expiry_estimator"):
        _settings(expiry_estimator="magic")


def test_constants() -> None:
    """Test the business constants."""
    constants = Constants()

    assert constants.EXPIRING_SOON_DAYS == 2
    assert constants.DEFAULT_SUGGESTION_LIMIT == 5
    assert constants.MIN_PRODUCTS_FOR_SUGGESTIONS == 2
    assert constants.ESTIMATOR_TIMEOUT_SECONDS == 10
