from __future__ import annotations

from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.domain.entities import User
from stocktracker.shared_kernel.primitives import UserId


class InMemoryIdentityUserRepository(UserRepository):
    """
    InMemoryIdentityUserRepository — in-memory identity user repository for dev/test.

    Related:
      - src/stocktracker/contexts/identity/application/ports/user_repository.py
      - src/stocktracker/contexts/identity/adapters/outbound/persistence/postgres/user_repository.py
      - tests/unit/contexts/identity/application/test_register_and_login_use_cases.py
    """

    def __init__(self) -> None:
        """
        Initialize empty in-memory repository state.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Repository instance is process-local and not shared between tests.
        Raises:
            None.
        Side Effects:
            None.
        """
        self._by_user_id: dict[str, User] = {}

    def find_by_user_id(self, *, user_id: UserId) -> User | None:
        return self._by_user_id.get(str(user_id))

    def find_by_email(self, *, email: str) -> User | None:
        for user in self._by_user_id.values():
            if user.email == email:
                return user
        return None

    def find_by_username(self, *, username: str) -> User | None:
        for user in self._by_user_id.values():
            if user.username == username:
                return user
        return None

    def create(self, *, user: User) -> User | None:
        if str(user.user_id) in self._by_user_id or self._conflicts(user=user):
            return None
        self._by_user_id[str(user.user_id)] = user
        return user

    def update(self, *, user: User) -> User | None:
        existing = self._by_user_id.get(str(user.user_id))
        if existing is None or self._conflicts(user=user):
            return None
        self._by_user_id[str(user.user_id)] = user
        return user

    def _conflicts(self, *, user: User) -> bool:
        for other in self._by_user_id.values():
            if other.user_id == user.user_id:
                continue
            if other.email == user.email or other.username == user.username:
                return True
        return False
