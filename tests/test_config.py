import pytest

from Shell.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("JOKE_API_URL", "JOKE_API_TIMEOUT", "SHELL_PROMPT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert settings.joke_api_url == "https://icanhazdadjoke.com/"
    assert settings.joke_api_timeout == 7
    assert settings.prompt == "shell:>"
    assert settings.log_level == "WARNING"


def test_from_env(monkeypatch):
    monkeypatch.setenv("JOKE_API_URL", "http://localhost:8080/")
    monkeypatch.setenv("JOKE_API_TIMEOUT", "2.5")
    monkeypatch.setenv("SHELL_PROMPT", ">>")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.joke_api_url == "http://localhost:8080/"
    assert settings.joke_api_timeout == 2.5
    assert settings.prompt == ">>"
    assert settings.log_level == "debug"


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_timeout_falls_back(monkeypatch, value):
    monkeypatch.setenv("JOKE_API_TIMEOUT", value)
    assert Settings.from_env().joke_api_timeout == 7


def test_settings_are_frozen():
    with pytest.raises(Exception):
        Settings().prompt = "$"  # type: ignore[misc]
