# tests/test_config.py

import pytest
from pydantic import ValidationError

from oauth_gateway.adapters.configuration.config import Settings


def make_settings(**values):
    return Settings(_env_file=None, SECRET_KEY="k", **values)


def test_database_url_is_assembled():
    settings = make_settings(
        DATABASE_URL=None,
        POSTGRES_USER="gw",
        POSTGRES_PASSWORD="pw",
        POSTGRES_HOST="db",
        POSTGRES_PORT=6543,
        POSTGRES_DB="gateway",
    )

    assert settings.DATABASE_URL == "postgresql+asyncpg://gw:pw@db:6543/gateway"


def test_explicit_database_url_wins():
    assert make_settings(DATABASE_URL="sqlite+aiosqlite:///x.db").DATABASE_URL == "sqlite+aiosqlite:///x.db"


def test_log_level_is_normalised():
    assert make_settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        make_settings(LOG_LEVEL="chatty")


def test_headers_only_defaults_to_false_when_unset():
    assert make_settings().HTTP_HEADERS_ONLY is None
    assert make_settings().headers_only is False
    assert make_settings(HTTP_HEADERS_ONLY=True).headers_only is True


def test_default_scopes():
    assert make_settings(DEFAULT_SCOPES="basic, write,").default_scopes == ["basic", "write"]
