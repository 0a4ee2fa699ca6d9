from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping
from uuid import UUID

from stocktracker.contexts.identity.adapters.outbound.persistence.postgres.gateway import (
    IdentityPostgresGateway,
)
from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.domain.entities import BrokerageCredential
from stocktracker.shared_kernel.primitives import UserId

_CREDENTIAL_COLUMNS = """
            credential_id,
            user_id,
            login,
            password_enc,
            mfa_enabled,
            created_at,
            updated_at,
            last_authenticated_at
"""


class PostgresIdentityBrokerageCredentialsRepository(BrokerageCredentialsRepository):
    """
    PostgresIdentityBrokerageCredentialsRepository — Postgres adapter for brokerage
    credential storage.

    Related:
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/gateway.py
      - alembic/versions/20261017_0001_identity_v1.py
    """

    def __init__(
        self,
        *,
        gateway: IdentityPostgresGateway,
        table_name: str = "identity_brokerage_credentials",
    ) -> None:
        """
        Initialize repository with SQL gateway and target table name.

        Args:
            gateway: SQL gateway abstraction.
            table_name: Target credentials table name.
        Returns:
            None.
        Assumptions:
            Table has `UNIQUE (user_id)` constraint.
        Raises:
            ValueError: If dependencies are invalid.
        Side Effects:
            None.
        """
        if gateway is None:  # type: ignore[truthy-bool]
            raise ValueError("PostgresIdentityBrokerageCredentialsRepository requires gateway")
        normalized_table_name = table_name.strip()
        if not normalized_table_name:
            raise ValueError(
                "PostgresIdentityBrokerageCredentialsRepository requires non-empty table_name"
            )
        self._gateway = gateway
        self._table_name = normalized_table_name

    def upsert(self, *, credential: BrokerageCredential) -> BrokerageCredential:
        """
        Insert credential or replace login, token and MFA flag of the existing row.

        Args:
            credential: Credential entity with encrypted token.
        Returns:
            BrokerageCredential: Persisted snapshot.
        Assumptions:
            On conflict the stored `credential_id`, `created_at` and
            `last_authenticated_at` survive.
        Raises:
            ValueError: If no row is returned or row mapping fails.
        Side Effects:
            Executes one SQL upsert statement.
        """
        query = f"""
        INSERT INTO {self._table_name}
        (
            credential_id,
            user_id,
            login,
            password_enc,
            mfa_enabled,
            created_at,
            updated_at,
            last_authenticated_at
        )
        VALUES
        (
            %(credential_id)s,
            %(user_id)s,
            %(login)s,
            %(password_enc)s,
            %(mfa_enabled)s,
            %(created_at)s,
            %(updated_at)s,
            NULL
        )
        ON CONFLICT (user_id) DO UPDATE
        SET
            login = EXCLUDED.login,
            password_enc = EXCLUDED.password_enc,
            mfa_enabled = EXCLUDED.mfa_enabled,
            updated_at = EXCLUDED.updated_at
        RETURNING
        {_CREDENTIAL_COLUMNS}
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={
                "credential_id": str(credential.credential_id),
                "user_id": str(credential.user_id),
                "login": credential.login,
                "password_enc": credential.password_enc,
                "mfa_enabled": credential.mfa_enabled,
                "created_at": credential.created_at,
                "updated_at": credential.updated_at,
            },
        )
        if row is None:
            raise ValueError("PostgresIdentityBrokerageCredentialsRepository upsert returned no row")
        return _map_credential_row(row=row)

    def find_by_user_id(self, *, user_id: UserId) -> BrokerageCredential | None:
        query = f"""
        SELECT
        {_CREDENTIAL_COLUMNS}
        FROM {self._table_name}
        WHERE user_id = %(user_id)s
        """
        row = self._gateway.fetch_one(query=query, parameters={"user_id": str(user_id)})
        if row is None:
            return None
        return _map_credential_row(row=row)

    def mark_authenticated(
        self,
        *,
        user_id: UserId,
        authenticated_at: datetime,
    ) -> BrokerageCredential | None:
        query = f"""
        UPDATE {self._table_name}
        SET
            last_authenticated_at = %(authenticated_at)s,
            updated_at = GREATEST(updated_at, %(authenticated_at)s)
        WHERE user_id = %(user_id)s
        RETURNING
        {_CREDENTIAL_COLUMNS}
        """
        row = self._gateway.fetch_one(
            query=query,
            parameters={"user_id": str(user_id), "authenticated_at": authenticated_at},
        )
        if row is None:
            return None
        return _map_credential_row(row=row)

    def delete(self, *, user_id: UserId) -> bool:
        query = f"""
        DELETE FROM {self._table_name}
        WHERE user_id = %(user_id)s
        RETURNING credential_id
        """
        row = self._gateway.fetch_one(query=query, parameters={"user_id": str(user_id)})
        return row is not None

    def exists(self, *, user_id: UserId) -> bool:
        query = f"""
        SELECT 1 AS present
        FROM {self._table_name}
        WHERE user_id = %(user_id)s
        """
        row = self._gateway.fetch_one(query=query, parameters={"user_id": str(user_id)})
        return row is not None


def _map_credential_row(*, row: Mapping[str, Any]) -> BrokerageCredential:
    """
    Map SQL row mapping into immutable domain `BrokerageCredential` entity.

    Raises:
        ValueError: If row fields are missing or malformed.
    """
    try:
        return BrokerageCredential(
            credential_id=UUID(str(row["credential_id"])),
            user_id=UserId.from_string(str(row["user_id"])),
            login=str(row["login"]),
            password_enc=str(row["password_enc"]),
            mfa_enabled=bool(row["mfa_enabled"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            last_authenticated_at=row["last_authenticated_at"],
        )
    except (KeyError, TypeError, ValueError) as error:
        raise ValueError(
            "PostgresIdentityBrokerageCredentialsRepository cannot map credential row"
        ) from error
