from __future__ import annotations

from typing import Protocol

from stocktracker.contexts.identity.domain.entities import User
from stocktracker.shared_kernel.primitives import UserId


class UserRepository(Protocol):
    """
    UserRepository — storage port for registered users.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/user_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/in_memory/user_repository.py
    """

    def find_by_user_id(self, *, user_id: UserId) -> User | None:
        """
        Find user by stable identifier.

        Args:
            user_id: Identity user identifier.
        Returns:
            User | None: User snapshot or `None` when missing.
        Assumptions:
            Lookup is unique by `user_id`.
        Raises:
            ValueError: If stored row cannot be mapped to domain entity.
        Side Effects:
            None.
        """
        ...

    def find_by_email(self, *, email: str) -> User | None:
        """
        Find user by normalized (lower-case) email.

        Args:
            email: Lower-cased email address.
        Returns:
            User | None: User snapshot or `None` when missing.
        Assumptions:
            Emails are stored lower-cased and unique.
        Raises:
            ValueError: If stored row cannot be mapped to domain entity.
        Side Effects:
            None.
        """
        ...

    def find_by_username(self, *, username: str) -> User | None:
        """Find user by exact username, or `None` when missing."""
        ...

    def create(self, *, user: User) -> User | None:
        """
        Insert new user unless email or username is already taken.

        Args:
            user: Fully built user entity.
        Returns:
            User | None: Persisted snapshot, or `None` on unique conflict.
        Assumptions:
            Conflict detection is atomic inside storage.
        Raises:
            ValueError: If storage rejects the row for other reasons.
        Side Effects:
            Writes one user row.
        """
        ...

    def update(self, *, user: User) -> User | None:
        """
        Replace mutable fields (email, username, password_hash, updated_at) of a user.

        Args:
            user: Updated user entity.
        Returns:
            User | None: Persisted snapshot, or `None` when user is missing or a unique
                field conflicts with another user.
        Assumptions:
            `user_id` and `created_at` are immutable.
        Raises:
            ValueError: If storage rejects the row for other reasons.
        Side Effects:
            Updates one user row.
        """
        ...
