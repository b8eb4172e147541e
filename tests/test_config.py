"""Tests for settings loading."""
import pytest
from pydantic import ValidationError

from finnolan.config import SECRET_ENV_VARS, Settings
from finnolan.domain.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for env_var in SECRET_ENV_VARS.values():
        monkeypatch.delenv(env_var, raising=False)
    for env_var in ("LLM_MODEL", "RETRY_ATTEMPTS", "ALERT_COOLDOWN_MINUTES"):
        monkeypatch.delenv(env_var, raising=False)
    return monkeypatch


def test_from_env_reads_keys_and_tuning(clean_env):
    clean_env.setenv("GNEWS_API_KEY", "abc")
    clean_env.setenv("LOVABLE_API_KEY", "def")
    clean_env.setenv("RETRY_ATTEMPTS", "3")
    clean_env.setenv("ALERT_COOLDOWN_MINUTES", "15")

    settings = Settings.from_env()

    assert settings.gnews_api_key == "abc"
    assert settings.llm_api_key == "def"
    assert settings.retry_attempts == 3
    assert settings.alert_cooldown_minutes == 15
    assert settings.llm_model == "google/gemini-2.5-flash"


def test_defaults_make_a_single_attempt(clean_env):
    settings = Settings.from_env()
    assert settings.retry_attempts == 1
    assert settings.resend_api_key is None


def test_require_names_missing_env_var(clean_env):
    settings = Settings.from_env()
    with pytest.raises(ConfigurationError) as exc_info:
        settings.require("google_tts_api_key")
    assert exc_info.value.message == "GOOGLE_CLOUD_API_KEY is not configured"
    assert exc_info.value.http_status == 500


def test_require_returns_value():
    assert Settings(resend_api_key="re_123").require("resend_api_key") == "re_123"


def test_configured_reports_each_secret():
    providers = Settings(gnews_api_key="x").configured()
    assert providers["gnews_api_key"] is True
    assert providers["llm_api_key"] is False
    assert set(providers) == set(SECRET_ENV_VARS)


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.llm_api_key = "changed"
