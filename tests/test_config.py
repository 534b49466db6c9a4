import pytest

from app.core.config import ConfigurationError, load_settings
from app.db.session import _normalize


def test_missing_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_blank_database_url_is_fatal(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "   ")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/registry")
    monkeypatch.setenv("AUTO_MIGRATE", "no")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.DATABASE_URL == "postgresql://u:p@db/registry"
    assert s.AUTO_MIGRATE is False
    assert s.CORS_ORIGINS == ["https://a.example", "https://b.example"]
    assert s.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgres://u@h/db", "postgresql+psycopg://u@h/db"),
        ("postgresql://u@h/db", "postgresql+psycopg://u@h/db"),
        ("sqlite:///./data/registry.db", "sqlite:///./data/registry.db"),
    ],
)
def test_normalize_database_url(url, expected):
    assert _normalize(url) == expected
