from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from stocktracker.shared_kernel.primitives import UserId


@dataclass(frozen=True, slots=True)
class User:
    """
    User — account snapshot of identity storage.

    Related:
      - src/stocktracker/contexts/identity/application/ports/user_repository.py
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - alembic/versions/20261017_0001_identity_v1.py
    """

    user_id: UserId
    email: str
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """
        Validate account invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Email is stored lower-cased; format checks belong to the register use-case.
        Raises:
            ValueError: If a required field is blank or timestamps are not ordered UTC values.
        Side Effects:
            None.
        """
        if not self.email.strip():
            raise ValueError("User.email must be non-empty")
        if self.email != self.email.strip().lower():
            raise ValueError("User.email must be normalized to stripped lower-case")
        if not self.username.strip():
            raise ValueError("User.username must be non-empty")
        if not self.password_hash:
            raise ValueError("User.password_hash must be non-empty")
        _ensure_utc_datetime(name="created_at", value=self.created_at)
        _ensure_utc_datetime(name="updated_at", value=self.updated_at)
        if self.updated_at < self.created_at:
            raise ValueError("User.updated_at cannot be before created_at")


def _ensure_utc_datetime(*, name: str, value: datetime) -> None:
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime")
    if offset.total_seconds() != 0:
        raise ValueError(f"{name} must be UTC datetime")
