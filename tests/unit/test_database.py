"""Unit tests for database URL resolution and engine options."""

import pytest

from app.core.config import Settings
from app.database import engine_options, resolve_database_url

PROD_URL = "postgresql+asyncpg://board:secret@db/board"
TEST_URL = "sqlite+aiosqlite:///./board-test.db"


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestResolveDatabaseUrl:
    def test_uses_database_url_outside_tests(self):
        config = _settings(database_url=f"  {PROD_URL}\n", test_database_url=TEST_URL)

        assert resolve_database_url(config, environ={}) == PROD_URL

    def test_testing_prefers_environment_override(self):
        config = _settings(database_url=PROD_URL, test_database_url="sqlite+aiosqlite://")
        environ = {"TESTING": "true", "TEST_DATABASE_URL": TEST_URL}

        assert resolve_database_url(config, environ=environ) == TEST_URL

    def test_testing_falls_back_to_settings(self):
        config = _settings(database_url=PROD_URL, test_database_url=TEST_URL)

        assert resolve_database_url(config, environ={"TESTING": "true"}) == TEST_URL

    def test_missing_url_is_an_error(self):
        config = _settings(database_url="   ")

        with pytest.raises(RuntimeError, match="DATABASE_URL is not configured"):
            resolve_database_url(config, environ={})


class TestEngineOptions:
    def test_sqlite_has_no_pre_ping(self):
        assert engine_options(TEST_URL) == {"echo": False}

    def test_server_backends_pre_ping(self):
        assert engine_options(PROD_URL, echo=True) == {"echo": True, "pool_pre_ping": True}
