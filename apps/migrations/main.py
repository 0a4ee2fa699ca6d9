"""
Alembic migration runner for identity storage.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Mapping

from psycopg.conninfo import conninfo_to_dict
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection
from sqlalchemy.engine.url import make_url

from alembic import command
from alembic.config import Config

log = logging.getLogger(__name__)

_POSTGRES_DSN_ENV = "POSTGRES_DSN"
_DEFAULT_LOCK_KEY = 71830245519
_POSTGRES_URL_PREFIXES: tuple[str, ...] = (
    "postgresql+psycopg://",
    "postgresql://",
    "postgres://",
)
_CONNINFO_URL_FIELDS = frozenset({"dbname", "host", "hostaddr", "password", "port", "user"})


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stocktracker-migrations")
    parser.add_argument(
        "--dsn",
        default="",
        help=f"Postgres DSN. Falls back to ${_POSTGRES_DSN_ENV} when omitted.",
    )
    parser.add_argument(
        "--lock-key",
        type=int,
        default=_DEFAULT_LOCK_KEY,
        help="Key for pg_advisory_lock held while upgrading.",
    )
    return parser


def resolve_dsn(*, arg_dsn: str, environ: Mapping[str, str]) -> str:
    """
    Pick DSN from `--dsn` or `POSTGRES_DSN`.

    Args:
        arg_dsn: CLI value, may be blank.
        environ: Environment mapping.
    Returns:
        str: Non-empty DSN.
    Assumptions:
        CLI value wins over environment.
    Raises:
        ValueError: If neither source provides a DSN.
    Side Effects:
        None.
    """
    dsn = arg_dsn.strip() or environ.get(_POSTGRES_DSN_ENV, "").strip()
    if not dsn:
        raise ValueError(f"Migration DSN is required via --dsn or {_POSTGRES_DSN_ENV}")
    return dsn


def to_sqlalchemy_psycopg_url(*, dsn: str) -> URL:
    """
    Normalize URL-style or libpq keyword DSN into a `postgresql+psycopg` SQLAlchemy URL.

    Args:
        dsn: Raw Postgres DSN.
    Returns:
        URL: SQLAlchemy URL bound to the psycopg 3 driver.
    Assumptions:
        Keyword DSNs are validated by `psycopg.conninfo.conninfo_to_dict`.
    Raises:
        ValueError: If DSN is blank, uses a foreign driver, or cannot be parsed.
    Side Effects:
        None.
    """
    normalized = dsn.strip()
    if not normalized:
        raise ValueError("Postgres DSN cannot be empty")

    if normalized.startswith(_POSTGRES_URL_PREFIXES):
        parsed_url = make_url(normalized)
        if parsed_url.drivername not in {"postgresql", "postgres", "postgresql+psycopg"}:
            raise ValueError("Postgres URL DSN must use postgresql:// or postgres:// scheme")
        return parsed_url.set(drivername="postgresql+psycopg")

    try:
        fields = conninfo_to_dict(normalized)
    except Exception as error:  # noqa: BLE001
        raise ValueError("Postgres DSN must be URL or libpq conninfo format") from error

    raw_port = str(fields.get("port", "")).strip()
    try:
        port = int(raw_port) if raw_port else None
    except ValueError as error:
        raise ValueError("Conninfo port must be numeric when provided") from error

    return URL.create(
        "postgresql+psycopg",
        username=str(fields.get("user", "")).strip() or None,
        password=str(fields.get("password", "")).strip() or None,
        host=str(fields.get("host", fields.get("hostaddr", ""))).strip() or None,
        port=port,
        database=str(fields.get("dbname", "")).strip() or None,
        query={
            key: str(value)
            for key, value in sorted(fields.items())
            if key not in _CONNINFO_URL_FIELDS and str(value)
        },
    )


def _build_alembic_config(*, repo_root: Path) -> Config:
    alembic_ini = repo_root / "alembic.ini"
    if not alembic_ini.exists():
        raise ValueError(f"Missing Alembic config file: {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(repo_root / "alembic"))
    return config


def _upgrade_head_under_lock(*, config: Config, sqlalchemy_url: URL, lock_key: int) -> None:
    """
    Run `alembic upgrade head` on one connection that holds a Postgres advisory lock.

    Args:
        config: Prepared Alembic config.
        sqlalchemy_url: Target database URL.
        lock_key: Advisory lock key shared by all runners.
    Returns:
        None.
    Assumptions:
        Concurrent runners (several API replicas) serialize on the lock.
    Raises:
        Exception: Database or Alembic failures propagate after rollback.
    Side Effects:
        Applies schema migrations.
    """
    engine = create_engine(sqlalchemy_url, pool_pre_ping=True)
    with engine.connect() as connection:
        _set_advisory_lock(connection=connection, lock_key=lock_key, locked=True)
        try:
            config.attributes["connection"] = connection
            log.info("running alembic upgrade head")
            command.upgrade(config, "head")
            connection.commit()
            log.info("migration success")
        except Exception:  # noqa: BLE001
            connection.rollback()
            raise
        finally:
            _set_advisory_lock(connection=connection, lock_key=lock_key, locked=False)
            connection.commit()


def _set_advisory_lock(*, connection: Connection, lock_key: int, locked: bool) -> None:
    function_name = "pg_advisory_lock" if locked else "pg_advisory_unlock"
    log.info("%s(%s)", function_name, lock_key)
    connection.execute(text(f"SELECT {function_name}(:lock_key)"), {"lock_key": lock_key})


def main(argv: list[str] | None = None) -> int:
    """
    Apply identity migrations and return process exit code.

    Args:
        argv: Optional CLI argument list without program name.
    Returns:
        int: Zero on success, one on any failure.
    Assumptions:
        Deploy scripts run this before starting the API.
    Raises:
        None.
    Side Effects:
        Reads environment, connects to Postgres, applies migrations.
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    args = _build_parser().parse_args(argv)

    try:
        dsn = resolve_dsn(arg_dsn=args.dsn, environ=os.environ)
        config = _build_alembic_config(repo_root=Path(__file__).resolve().parents[2])
        _upgrade_head_under_lock(
            config=config,
            sqlalchemy_url=to_sqlalchemy_psycopg_url(dsn=dsn),
            lock_key=args.lock_key,
        )
    except Exception as error:  # noqa: BLE001
        log.error("migration failed: %s", error)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
