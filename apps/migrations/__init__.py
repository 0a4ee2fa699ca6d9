"""Migrations application package."""

from apps.migrations.main import resolve_dsn, to_sqlalchemy_psycopg_url

__all__ = [
    "resolve_dsn",
    "to_sqlalchemy_psycopg_url",
]
