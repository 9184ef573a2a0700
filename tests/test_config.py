"""
Unit tests for Settings and configure_logging
"""

import pytest

from e2e_support.config import REQUIRED_KEYS, Settings, configure_logging
from e2e_support.exceptions import ConfigurationError

ENV_KEYS = REQUIRED_KEYS + (
    "ACTION_TIMEOUT", "NAVIGATION_TIMEOUT", "STORAGE_STATE_PATH", "DEFAULT_COUNTRY",
    "DEFAULT_CITY", "EMAIL_DOMAINS", "CI", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def no_dotenv(tmp_path):
    return str(tmp_path / "missing.env")


def test_defaults(no_dotenv):
    settings = Settings.from_env(no_dotenv)
    assert settings.api_base_url == "https://restful-booker.herokuapp.com"
    assert settings.ui_base_url == "https://automationexercise.com"
    assert settings.action_timeout_ms == 15000
    assert settings.email_domains == ("gmail.com", "outlook.com", "yahoo.com")
    assert settings.ci is False


def test_environment_overrides(monkeypatch, no_dotenv):
    monkeypatch.setenv("UI_BASE_URL", "http://localhost:8080")
    monkeypatch.setenv("ACTION_TIMEOUT", "5000")
    monkeypatch.setenv("EMAIL_DOMAINS", " example.org, ,test.dev ")
    monkeypatch.setenv("CI", "TRUE")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env(no_dotenv)

    assert settings.ui_base_url == "http://localhost:8080"
    assert settings.action_timeout_ms == 5000
    assert settings.email_domains == ("example.org", "test.dev")
    assert settings.ci is True
    assert settings.log_level == "DEBUG"


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DEFAULT_CITY=Toronto\n")
    # load_dotenv writes into os.environ; register the key so it is undone
    monkeypatch.setenv("DEFAULT_CITY", "")
    monkeypatch.delenv("DEFAULT_CITY")

    assert Settings.from_env(str(env_file)).default_city == "Toronto"


def test_environment_wins_over_dotenv(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DEFAULT_CITY=Toronto\n")
    monkeypatch.setenv("DEFAULT_CITY", "Sydney")

    assert Settings.from_env(str(env_file)).default_city == "Sydney"


def test_invalid_integer_raises(monkeypatch, no_dotenv):
    monkeypatch.setenv("NAVIGATION_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError, match="NAVIGATION_TIMEOUT"):
        Settings.from_env(no_dotenv)


def test_missing_required_keys_warned(monkeypatch, no_dotenv, caplog):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:3001")

    with caplog.at_level("WARNING", logger="e2e_support.config"):
        Settings.from_env(no_dotenv)

    assert "API_BASE_URL" not in Settings.missing_required()
    assert "UI_BASE_URL" in caplog.text


def test_configure_logging_uses_env_level(monkeypatch, mocker):
    basic_config = mocker.patch("e2e_support.config.logging.basicConfig")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    configure_logging()

    assert basic_config.call_args.kwargs["level"] == "WARNING"


def test_configure_logging_explicit_level(mocker):
    basic_config = mocker.patch("e2e_support.config.logging.basicConfig")
    configure_logging("debug")
    assert basic_config.call_args.kwargs["level"] == "DEBUG"
