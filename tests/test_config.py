import dataclasses

import pytest

from core.config import Settings, load_settings

ENV_KEYS = [
    "DATABASE_URL", "APP_NAME", "SMTP_SERVER", "SMTP_PORT", "SMTP_EMAIL", "SMTP_PASSWORD", "EMAIL_FROM",
    "ADMIN_EMAIL", "ADMIN_PASSWORD", "GOOGLE_CLIENT_SECRETS_FILE", "GOOGLE_TOKEN_FILE",
    "API_HOST", "API_PORT", "CORS_ORIGINS", "TRACKER_POLL_SECONDS", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        # setenv first so teardown also removes what load_dotenv writes
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    # Keep a developer's real .env out of the picture
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.database_url == "sqlite:///bigbite.db"
    assert settings.tracker_poll_seconds == 12
    assert settings.cors_origins == ("*",)
    assert not settings.email_configured


def test_env_overrides(clean_env, tmp_path):
    clean_env.setenv("API_PORT", "9001")
    clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    clean_env.setenv("SMTP_EMAIL", "kitchen@bigbite.com")
    clean_env.setenv("SMTP_PASSWORD", "pw")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.api_port == 9001
    assert settings.cors_origins == ("http://a.test", "http://b.test")
    assert settings.email_configured
    assert settings.sender_address == "kitchen@bigbite.com"
    assert settings.log_level == "DEBUG"


def test_dotenv_file_is_read(clean_env, tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("APP_NAME=Big-Bite Test\nTRACKER_POLL_SECONDS=5\n")

    settings = load_settings(str(env_file))
    assert settings.app_name == "Big-Bite Test"
    assert settings.tracker_poll_seconds == 5


@pytest.mark.parametrize("raw,expected", [("0", 1), ("-4", 1), ("abc", 12), ("", 12)])
def test_bad_poll_interval(clean_env, tmp_path, raw, expected):
    clean_env.setenv("TRACKER_POLL_SECONDS", raw)
    assert load_settings(str(tmp_path / "missing.env")).tracker_poll_seconds == expected


def test_settings_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().app_name = "other"
