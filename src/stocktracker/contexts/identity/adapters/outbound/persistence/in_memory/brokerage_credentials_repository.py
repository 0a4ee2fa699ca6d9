from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.domain.entities import BrokerageCredential
from stocktracker.shared_kernel.primitives import UserId


class InMemoryIdentityBrokerageCredentialsRepository(BrokerageCredentialsRepository):
    """
    InMemoryIdentityBrokerageCredentialsRepository — in-memory credential storage for dev/test.

    Mirrors Postgres upsert semantics: one row per user, `credential_id`, `created_at` and
    `last_authenticated_at` kept on replace.

    Related:
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/
        brokerage_credentials_repository.py
    """

    def __init__(self) -> None:
        self._by_user_id: dict[str, BrokerageCredential] = {}

    def upsert(self, *, credential: BrokerageCredential) -> BrokerageCredential:
        key = str(credential.user_id)
        existing = self._by_user_id.get(key)
        if existing is None:
            stored = replace(credential, last_authenticated_at=None)
        else:
            stored = replace(
                existing,
                login=credential.login,
                password_enc=credential.password_enc,
                mfa_enabled=credential.mfa_enabled,
                updated_at=credential.updated_at,
            )
        self._by_user_id[key] = stored
        return stored

    def find_by_user_id(self, *, user_id: UserId) -> BrokerageCredential | None:
        return self._by_user_id.get(str(user_id))

    def mark_authenticated(
        self,
        *,
        user_id: UserId,
        authenticated_at: datetime,
    ) -> BrokerageCredential | None:
        existing = self._by_user_id.get(str(user_id))
        if existing is None:
            return None
        updated = replace(
            existing,
            last_authenticated_at=authenticated_at,
            updated_at=max(existing.updated_at, authenticated_at),
        )
        self._by_user_id[str(user_id)] = updated
        return updated

    def delete(self, *, user_id: UserId) -> bool:
        return self._by_user_id.pop(str(user_id), None) is not None

    def exists(self, *, user_id: UserId) -> bool:
        return str(user_id) in self._by_user_id
