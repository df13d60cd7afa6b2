# tests/test_config.py

from point_potential.config import Settings


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("SHARE_BASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.SHARE_BASE_URL == "http://localhost:8501/"
    assert settings.LOG_LEVEL == "INFO"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SHARE_BASE_URL", "https://grades.example.com/")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.SHARE_BASE_URL == "https://grades.example.com/"
    assert settings.LOG_LEVEL == "DEBUG"
