"""Tests for environment-driven settings."""

import pytest

from clef_auth.config import DEFAULT_REDIRECT_URL, DEFAULT_SESSION_SECRET, Settings
from clef_auth.errors import ConfigError

ENV_VARS = (
    "CLEF_APP_ID",
    "CLEF_APP_SECRET",
    "CLEF_BASE_URL",
    "CLEF_REDIRECT_URL",
    "CLEF_HTTP_TIMEOUT_SECONDS",
    "SESSION_SECRET",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("CLEF_APP_ID", "id")
    monkeypatch.setenv("CLEF_APP_SECRET", "secret")

    settings = Settings.from_env()

    assert settings == Settings(app_id="id", app_secret="secret")
    assert settings.base_url == "https://clef.io/api/"
    assert settings.redirect_url == DEFAULT_REDIRECT_URL
    assert settings.http_timeout == 20.0
    assert settings.session_secret == DEFAULT_SESSION_SECRET
    assert settings.debug is False


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CLEF_APP_ID", "id")
    monkeypatch.setenv("CLEF_APP_SECRET", "secret")
    monkeypatch.setenv("CLEF_BASE_URL", "http://localhost:9000/api/")
    monkeypatch.setenv("CLEF_REDIRECT_URL", "https://example.com/cb")
    monkeypatch.setenv("CLEF_HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SESSION_SECRET", "s3cret")
    monkeypatch.setenv("DEBUG", "1")

    settings = Settings.from_env()

    assert settings.base_url == "http://localhost:9000/api/"
    assert settings.redirect_url == "https://example.com/cb"
    assert settings.http_timeout == 2.5
    assert settings.session_secret == "s3cret"
    assert settings.debug is True


def test_missing_credentials(monkeypatch) -> None:
    monkeypatch.setenv("CLEF_APP_ID", "id")
    with pytest.raises(ConfigError, match="CLEF_APP_SECRET"):
        Settings.from_env()


def test_bad_timeout(monkeypatch) -> None:
    monkeypatch.setenv("CLEF_APP_ID", "id")
    monkeypatch.setenv("CLEF_APP_SECRET", "secret")
    monkeypatch.setenv("CLEF_HTTP_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ConfigError, match="CLEF_HTTP_TIMEOUT_SECONDS"):
        Settings.from_env()
