"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from sportsday.config import Settings, get_settings


@pytest.fixture
def required_env(monkeypatch, tmp_path):
    """Required settings in the environment, isolated from any real .env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SPORTSDAY_API_KEY", "test_key_1234567890")
    monkeypatch.setenv("SPORTSDAY_SHEET_ID", "sheet123")


def test_settings_loads_from_env(required_env):
    settings = Settings()

    assert settings.api_key == "test_key_1234567890"
    assert settings.sheet_id == "sheet123"


def test_settings_has_defaults(required_env):
    settings = Settings()

    assert settings.log_level == "INFO"
    assert settings.cache_backend == "file"
    assert settings.cache_dir == ".sportsday_cache"
    assert settings.max_concurrency == 4
    assert settings.timeout == 30.0


def test_settings_loads_from_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SPORTSDAY_API_KEY", raising=False)
    monkeypatch.delenv("SPORTSDAY_SHEET_ID", raising=False)
    (tmp_path / ".env").write_text(
        "SPORTSDAY_API_KEY=file_key_1234567890\nSPORTSDAY_SHEET_ID=from_file\n"
    )

    settings = Settings()

    assert settings.api_key == "file_key_1234567890"
    assert settings.sheet_id == "from_file"


def test_settings_requires_api_key(monkeypatch, tmp_path):
    monkeypatch.delenv("SPORTSDAY_API_KEY", raising=False)
    monkeypatch.setenv("SPORTSDAY_SHEET_ID", "sheet123")
    (tmp_path / ".env").write_text("")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ValidationError) as exc_info:
        Settings()

    assert "api_key" in str(exc_info.value).lower()


def test_settings_validates_api_key_length(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_API_KEY", "short")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_validates_log_level(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_LOG_LEVEL", "INVALID")

    with pytest.raises(ValidationError) as exc_info:
        Settings()

    assert "log_level must be one of" in str(exc_info.value)


def test_log_level_uppercased(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_cache_backend_normalized(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_CACHE_BACKEND", "SQLite")
    assert Settings().cache_backend == "sqlite"


def test_cache_backend_rejects_unknown(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_CACHE_BACKEND", "redis")

    with pytest.raises(ValidationError):
        Settings()


def test_max_concurrency_bounds(required_env, monkeypatch):
    monkeypatch.setenv("SPORTSDAY_MAX_CONCURRENCY", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_cached(required_env):
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
