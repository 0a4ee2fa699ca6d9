from __future__ import annotations

from datetime import datetime
from typing import Protocol

from stocktracker.contexts.identity.domain.entities import BrokerageCredential
from stocktracker.shared_kernel.primitives import UserId


class BrokerageCredentialsRepository(Protocol):
    """
    BrokerageCredentialsRepository — storage port for per-user encrypted brokerage logins.

    At most one credential exists per user; the password column holds only cipher tokens.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/
        brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/in_memory/
        brokerage_credentials_repository.py
    """

    def upsert(self, *, credential: BrokerageCredential) -> BrokerageCredential:
        """
        Create or replace the user's credential.

        Args:
            credential: Credential entity with encrypted password token.
        Returns:
            BrokerageCredential: Persisted snapshot. On replace the stored
                `credential_id`, `created_at` and `last_authenticated_at`
                are kept.
        Assumptions:
            Uniqueness by `user_id` is enforced by storage.
        Raises:
            ValueError: If storage rejects the row.
        Side Effects:
            Writes one credential row.
        """
        ...

    def find_by_user_id(self, *, user_id: UserId) -> BrokerageCredential | None:
        """Return the user's credential or `None`."""
        ...

    def mark_authenticated(
        self,
        *,
        user_id: UserId,
        authenticated_at: datetime,
    ) -> BrokerageCredential | None:
        """
        Stamp successful brokerage authentication time.

        Args:
            user_id: Credential owner.
            authenticated_at: UTC timestamp of the successful check.
        Returns:
            BrokerageCredential | None: Updated snapshot, or `None` when missing.
        Assumptions:
            `updated_at` is moved forward together with `last_authenticated_at`.
        Raises:
            ValueError: If storage rejects the update.
        Side Effects:
            Updates one credential row.
        """
        ...

    def delete(self, *, user_id: UserId) -> bool:
        """Delete the user's credential; return `True` when a row was removed."""
        ...

    def exists(self, *, user_id: UserId) -> bool:
        """Return whether the user has a stored credential."""
        ...
