from __future__ import annotations

from typing import Any, Mapping

from stocktracker.contexts.identity.adapters.outbound.persistence.postgres.gateway import (
    IdentityPostgresGateway,
)
from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.domain.entities import User
from stocktracker.shared_kernel.primitives import UserId

_USER_COLUMNS = """
            user_id,
            email,
            username,
            password_hash,
            created_at,
            updated_at
"""


class PostgresIdentityUserRepository(UserRepository):
    """
    PostgresIdentityUserRepository — Postgres adapter for identity user storage port.

    Related:
      - src/stocktracker/contexts/identity/application/ports/user_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/gateway.py
      - alembic/versions/20261017_0001_identity_v1.py
    """

    def __init__(
        self,
        *,
        gateway: IdentityPostgresGateway,
        users_table: str = "identity_users",
    ) -> None:
        """
        Initialize repository with SQL gateway and target users table.

        Args:
            gateway: SQL gateway abstraction.
            users_table: Target users table name.
        Returns:
            None.
        Assumptions:
            Table has schema compatible with revision `20261017_0001`.
        Raises:
            ValueError: If dependencies are invalid.
        Side Effects:
            None.
        """
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresIdentityUserRepository requires gateway")
        normalized_table = users_table.strip()
        if not normalized_table:
            raise ValueError("PostgresIdentityUserRepository requires non-empty users_table")

        self._gateway = gateway
        self._users_table = normalized_table

    def find_by_user_id(self, *, user_id: UserId) -> User | None:
        return self._find_one(column="user_id", value=str(user_id))

    def find_by_email(self, *, email: str) -> User | None:
        return self._find_one(column="email", value=email)

    def find_by_username(self, *, username: str) -> User | None:
        return self._find_one(column="username", value=username)

    def create(self, *, user: User) -> User | None:
        """
        Insert user row; unique conflicts on email or username return `None`.

        Args:
            user: New user entity.
        Returns:
            User | None: Persisted snapshot or `None` on conflict.
        Assumptions:
            Unique indexes exist on `email` and `username`.
        Raises:
            ValueError: If returned row cannot be mapped.
        Side Effects:
            Executes one SQL insert statement.
        """
        query = f"""
        INSERT INTO {self._users_table}
        (
            user_id,
            email,
            username,
            password_hash,
            created_at,
            updated_at
        )
        VALUES
        (
            %(user_id)s,
            %(email)s,
            %(username)s,
            %(password_hash)s,
            %(created_at)s,
            %(updated_at)s
        )
        ON CONFLICT DO NOTHING
        RETURNING
        {_USER_COLUMNS}
        """
        row = self._gateway.fetch_one(query=query, parameters=_user_parameters(user=user))
        if row is None:
            return None
        return _map_user_row(row=row)

    def update(self, *, user: User) -> User | None:
        """
        Update mutable user fields unless email or username belongs to another user.

        Args:
            user: Updated user entity.
        Returns:
            User | None: Persisted snapshot, or `None` when missing or conflicting.
        Assumptions:
            A concurrent writer can still trip the unique index; the driver error propagates.
        Raises:
            ValueError: If returned row cannot be mapped.
        Side Effects:
            Executes one SQL update statement.
        """
        query = f"""
        UPDATE {self._users_table}
        SET
            email = %(email)s,
            username = %(username)s,
            password_hash = %(password_hash)s,
            updated_at = %(updated_at)s
        WHERE user_id = %(user_id)s
          AND NOT EXISTS (
            SELECT 1
            FROM {self._users_table} AS other
            WHERE other.user_id <> %(user_id)s
              AND (other.email = %(email)s OR other.username = %(username)s)
          )
        RETURNING
        {_USER_COLUMNS}
        """
        row = self._gateway.fetch_one(query=query, parameters=_user_parameters(user=user))
        if row is None:
            return None
        return _map_user_row(row=row)

    def _find_one(self, *, column: str, value: str) -> User | None:
        query = f"""
        SELECT
        {_USER_COLUMNS}
        FROM {self._users_table}
        WHERE {column} = %(value)s
        """
        row = self._gateway.fetch_one(query=query, parameters={"value": value})
        if row is None:
            return None
        return _map_user_row(row=row)


def _user_parameters(*, user: User) -> dict[str, Any]:
    return {
        "user_id": str(user.user_id),
        "email": user.email,
        "username": user.username,
        "password_hash": user.password_hash,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def _map_user_row(*, row: Mapping[str, Any]) -> User:
    """
    Map SQL row mapping into immutable domain `User` entity.

    Args:
        row: SQL result mapping.
    Returns:
        User: Domain user entity.
    Assumptions:
        Row follows schema from `identity_users` table.
    Raises:
        ValueError: If row fields are missing or malformed.
    Side Effects:
        None.
    """
    try:
        return User(
            user_id=UserId.from_string(str(row["user_id"])),
            email=str(row["email"]),
            username=str(row["username"]),
            password_hash=str(row["password_hash"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
    except (KeyError, TypeError, ValueError) as error:
        raise ValueError("PostgresIdentityUserRepository cannot map user row") from error
