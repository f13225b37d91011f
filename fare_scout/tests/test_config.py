import pytest
from pydantic import ValidationError

from fare_scout.config import get_settings, Settings


@pytest.fixture(autouse=True)
def _clear_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
    monkeypatch.setenv("REQUEST_TIMEOUT_S", "15")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = get_settings()
    assert isinstance(cfg, Settings)
    assert cfg.gemini_api_key == "abc"
    assert cfg.gemini_model == "gemini-2.5-pro"
    assert cfg.request_timeout_s == 15.0
    assert cfg.log_level == "DEBUG"


def test_settings_reject_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT_S", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_accept_lowercase_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " warning ")
    assert Settings().log_level == "WARNING"
