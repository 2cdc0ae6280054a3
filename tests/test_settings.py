"""Tests for configuration loading and the session helpers."""

import pytest
from sqlalchemy import text

from realworld_db.core.settings import Settings
from realworld_db.db.session import get_db


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://app@db/realworld")
    monkeypatch.setenv("SQL_DEBUG", "true")

    configured = Settings()

    assert configured.database_url == "postgresql+psycopg://app@db/realworld"
    assert configured.sql_debug is True


def test_testing_database_override() -> None:
    configured = Settings(
        DATABASE_URL="postgresql+psycopg://app@db/realworld",
        TEST_DATABASE_URL="postgresql+psycopg://app@db/realworld_test",
    )
    assert configured.effective_database_url.endswith("/realworld")

    configured.use_testing_database = True
    assert configured.effective_database_url.endswith("/realworld_test")


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("postgresql://app@db/realworld", "postgresql+psycopg://app@db/realworld"),
        ("postgres://app@db/realworld", "postgresql+psycopg://app@db/realworld"),
        ("postgresql+psycopg://app@db/realworld", "postgresql+psycopg://app@db/realworld"),
        ("sqlite:///./realworld.db", "sqlite:///./realworld.db"),
    ],
)
def test_sqlalchemy_url_selects_psycopg(url: str, expected: str) -> None:
    assert Settings(DATABASE_URL=url).sqlalchemy_url == expected


def test_get_db_yields_working_session() -> None:
    sessions = get_db()
    session = next(sessions)
    try:
        assert session.execute(text("SELECT 1")).scalar_one() == 1
    finally:
        sessions.close()
