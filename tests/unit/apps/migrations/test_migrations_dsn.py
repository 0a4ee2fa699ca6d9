from __future__ import annotations

import pytest

from apps.migrations import resolve_dsn, to_sqlalchemy_psycopg_url


def test_resolve_dsn_prefers_cli_value_over_environment() -> None:
    environ = {"POSTGRES_DSN": "postgresql://env/db"}

    assert resolve_dsn(arg_dsn=" postgresql://cli/db ", environ=environ) == "postgresql://cli/db"
    assert resolve_dsn(arg_dsn="", environ=environ) == "postgresql://env/db"


def test_resolve_dsn_requires_some_value() -> None:
    with pytest.raises(ValueError, match="POSTGRES_DSN"):
        resolve_dsn(arg_dsn=" ", environ={})


@pytest.mark.parametrize(
    "dsn",
    [
        "postgresql://tracker:pw@db.local:5433/stocks",
        "postgres://tracker:pw@db.local:5433/stocks",
        "postgresql+psycopg://tracker:pw@db.local:5433/stocks",
    ],
)
def test_to_sqlalchemy_url_normalizes_url_dsn_to_psycopg_driver(dsn: str) -> None:
    url = to_sqlalchemy_psycopg_url(dsn=dsn)

    assert url.drivername == "postgresql+psycopg"
    assert url.host == "db.local"
    assert url.port == 5433
    assert url.database == "stocks"
    assert url.username == "tracker"


def test_to_sqlalchemy_url_accepts_libpq_keyword_dsn() -> None:
    url = to_sqlalchemy_psycopg_url(
        dsn="host=db.local port=5432 dbname=stocks user=tracker password=pw sslmode=require"
    )

    assert url.drivername == "postgresql+psycopg"
    assert url.host == "db.local"
    assert url.port == 5432
    assert url.database == "stocks"
    assert url.password == "pw"
    assert url.query == {"sslmode": "require"}


@pytest.mark.parametrize("dsn", ["", "postgresql+asyncpg://u@h/db"])
def test_to_sqlalchemy_url_rejects_blank_or_foreign_driver(dsn: str) -> None:
    with pytest.raises(ValueError):
        to_sqlalchemy_psycopg_url(dsn=dsn)
