# tests/test_config.py
import pytest

from starchain.config import ChainSettings


def test_defaults():
    settings = ChainSettings()
    assert settings.challenge_window_minutes == 5
    assert settings.registry_tag == "starRegistry"
    assert settings.genesis_data == "Genesis Block"


def test_from_env(monkeypatch):
    monkeypatch.setenv("STARCHAIN_CHALLENGE_WINDOW_MINUTES", "2.5")
    monkeypatch.setenv("STARCHAIN_REGISTRY_TAG", "testRegistry")
    settings = ChainSettings.from_env()
    assert settings.challenge_window_minutes == 2.5
    assert settings.registry_tag == "testRegistry"


def test_from_env_defaults(monkeypatch):
    monkeypatch.delenv("STARCHAIN_CHALLENGE_WINDOW_MINUTES", raising=False)
    monkeypatch.delenv("STARCHAIN_REGISTRY_TAG", raising=False)
    assert ChainSettings.from_env() == ChainSettings()


def test_from_env_invalid_window(monkeypatch):
    monkeypatch.setenv("STARCHAIN_CHALLENGE_WINDOW_MINUTES", "five")
    with pytest.raises(ValueError, match="must be a number"):
        ChainSettings.from_env()


@pytest.mark.parametrize("kwargs", [
    {"challenge_window_minutes": 0},
    {"registry_tag": ""},
    {"registry_tag": "a:b"},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        ChainSettings(**kwargs)
