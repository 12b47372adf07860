import pytest

from roulette.core.config import load_settings

ENV_VARS = ["PEOPLE_PATH", "HISTORY_PATH", "DATABASE_URL", "LOG_LEVEL", "LOG_PATH"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults():
    settings = load_settings()
    assert settings.people_path is None
    assert settings.history_path is None
    assert settings.database_url is None
    assert settings.log_level == "INFO"
    assert settings.log_path is None


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PEOPLE_PATH", "people.txt")
    monkeypatch.setenv("HISTORY_PATH", "history.json")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///roulette.db")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_PATH", "logs/roulette.log")

    settings = load_settings()
    assert settings.people_path == "people.txt"
    assert settings.history_path == "history.json"
    assert settings.database_url == "sqlite:///roulette.db"
    assert settings.log_level == "DEBUG"
    assert settings.log_path == "logs/roulette.log"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError):
        load_settings()
