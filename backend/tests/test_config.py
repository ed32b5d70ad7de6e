# backend/tests/test_config.py
import pytest

from viestiapuri.config import DEFAULT_DASHSCOPE_URL, Settings
from viestiapuri.errors import ConfigError


def test_defaults(monkeypatch):
    for name in ("PORT", "DATABASE_URL", "DASHSCOPE_URL", "DASHSCOPE_MODEL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.port == 3000
    assert settings.database_url == "sqlite:///./feedback.db"
    assert settings.dashscope_url == DEFAULT_DASHSCOPE_URL
    assert settings.dashscope_model == "qwen-turbo"


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DASHSCOPE_API_KEY", "sk-env")
    monkeypatch.setenv("SQL_ECHO", "true")

    settings = Settings()

    assert settings.port == 8080
    assert settings.dashscope_api_key == "sk-env"
    assert settings.sql_echo is True


def test_missing_api_key_fails_fast(monkeypatch):
    monkeypatch.delenv("DASHSCOPE_API_KEY", raising=False)

    with pytest.raises(ConfigError):
        Settings().validate()

    with pytest.raises(ConfigError):
        Settings(dashscope_api_key="").validate()


def test_api_key_present_validates():
    Settings(dashscope_api_key="sk-test").validate()


def test_unknown_override_is_rejected():
    with pytest.raises(TypeError):
        Settings(not_a_setting=1)
