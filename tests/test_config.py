import dataclasses

import pytest

from config import DEFAULT_MODEL_NAME, Settings, load_settings

ENV_VARS = (
    "PORT",
    "HOST",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "RATE_LIMIT_SHORT_MAX",
    "RATE_LIMIT_LONG_MAX",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv first so values written by load_dotenv are removed on undo
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Empty .env so a developer's local file is not picked up
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


def test_defaults(clean_env):
    settings = load_settings(clean_env)

    assert settings == Settings()
    assert settings.port == 3001
    assert settings.gemini_api_key is None
    assert settings.model_name == DEFAULT_MODEL_NAME
    assert settings.rate_limit_short_max == 5
    assert settings.rate_limit_long_max == 50
    assert settings.cors_allow_origins == ("*",)


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-pro")
    monkeypatch.setenv("RATE_LIMIT_SHORT_MAX", "10")
    monkeypatch.setenv("RATE_LIMIT_LONG_MAX", "100")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    settings = load_settings(clean_env)

    assert settings.port == 8080
    assert settings.gemini_api_key == "secret"
    assert settings.model_name == "gemini-pro"
    assert settings.rate_limit_short_max == 10
    assert settings.rate_limit_long_max == 100
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")


def test_dotenv_file_is_loaded(clean_env, monkeypatch):
    clean_env.write_text("RATE_LIMIT_SHORT_MAX=3\n")
    monkeypatch.setenv("RATE_LIMIT_LONG_MAX", "30")

    settings = load_settings(clean_env)

    assert settings.rate_limit_short_max == 3
    assert settings.rate_limit_long_max == 30


@pytest.mark.parametrize("value", ["", "five", "5.5"])
def test_invalid_integers_fall_back(clean_env, monkeypatch, value):
    monkeypatch.setenv("RATE_LIMIT_SHORT_MAX", value)
    assert load_settings(clean_env).rate_limit_short_max == 5


def test_invalid_log_level_falls_back(clean_env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert load_settings(clean_env).log_level == "INFO"


def test_settings_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().port = 1
