"""Settings — required DATABASE_URL, driver rewrite and defaults."""

import pytest
from pydantic import ValidationError

from userapi.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("APP_PORT", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    settings = Settings(_env_file=None, database_url="sqlite+aiosqlite:///x.db")
    assert settings.app_port == 8080
    assert settings.app_env == "development"
    assert settings.log_format == "json"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("APP_PORT", "9000")
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@h:5432/db")
    settings = Settings(_env_file=None)
    assert settings.app_port == 9000
    assert settings.database_url == "postgresql+asyncpg://u:p@h:5432/db"


def test_postgresql_scheme_rewritten_to_asyncpg():
    settings = Settings(_env_file=None, database_url="postgresql://u:p@h/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@h/db"


def test_explicit_driver_kept():
    url = "postgresql+asyncpg://u:p@h/db"
    assert Settings(_env_file=None, database_url=url).database_url == url


def test_missing_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_empty_database_url_is_fatal():
    with pytest.raises(ValidationError, match="DATABASE_URL is required"):
        Settings(_env_file=None, database_url="   ")
