from pathlib import Path

import pytest
from pydantic import ValidationError

from event_catalog.configs.settings import Settings, get_settings

SETTING_NAMES = (
    "ENV",
    "DEBUG",
    "DATA_SOURCE",
    "WEBHOOK_URL",
    "LOCAL_DATA_PATH",
    "REQUEST_TIMEOUT",
    "API_KEY",
    "LOG_LEVEL",
    "JSON_LOGS",
    "CATALOG_CONFIG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the host environment out of the settings under test."""
    for name in SETTING_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_settings_default_values():
    """Test default values for settings."""
    settings = Settings(_env_file=None)
    assert settings.ENV == "development"
    assert settings.DEBUG is False
    assert settings.DATA_SOURCE == "webhook"
    assert settings.REQUEST_TIMEOUT == 30.0
    assert settings.API_KEY is None
    assert settings.JSON_LOGS is False


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("DATA_SOURCE", "local")
    monkeypatch.setenv("LOCAL_DATA_PATH", "/tmp/catalog.json")
    monkeypatch.setenv("REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("API_KEY", "secret")

    settings = Settings(_env_file=None)
    assert settings.DATA_SOURCE == "local"
    assert settings.LOCAL_DATA_PATH == Path("/tmp/catalog.json")
    assert settings.REQUEST_TIMEOUT == 5.0
    assert settings.API_KEY.get_secret_value() == "secret"


def test_api_key_is_masked():
    """Test that the API key does not leak through repr."""
    settings = Settings(_env_file=None, API_KEY="secret")
    assert "secret" not in repr(settings)


def test_invalid_data_source():
    """Test that unknown data sources are rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATA_SOURCE="ftp")


def test_timeout_must_be_positive():
    """Test that a zero timeout is rejected."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, REQUEST_TIMEOUT=0)


def test_paths():
    """Test that paths are correctly resolved."""
    settings = Settings(_env_file=None)
    assert settings.BASE_DIR.name == "event_catalog"
    assert settings.CATALOG_CONFIG_PATH.name == "catalog.yaml"


def test_get_settings_is_cached():
    """Test that get_settings returns the same instance."""
    assert get_settings() is get_settings()
