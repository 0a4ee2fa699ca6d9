from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from stocktracker.shared_kernel.primitives import UserId

_TOKEN_FIELD_COUNT = 4


@dataclass(frozen=True, slots=True)
class BrokerageCredential:
    """
    BrokerageCredential — stored Webull login of one user with encrypted password token.

    Related:
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - alembic/versions/20261017_0001_identity_v1.py
    """

    credential_id: UUID
    user_id: UserId
    login: str
    password_enc: str = field(repr=False)
    mfa_enabled: bool
    created_at: datetime
    updated_at: datetime
    last_authenticated_at: datetime | None = None

    def __post_init__(self) -> None:
        """
        Validate stored credential invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            `password_enc` is an opaque `iv:salt:authTag:ciphertext` token; only its shape
            is checked here, authenticity is verified by the cipher on decrypt.
        Raises:
            ValueError: If login/token are blank, token shape is wrong, or timestamps
                are not ordered timezone-aware UTC values.
        Side Effects:
            None.
        """
        if not self.login.strip():
            raise ValueError("BrokerageCredential.login must be non-empty")
        if not self.password_enc:
            raise ValueError("BrokerageCredential.password_enc must be non-empty")
        if len(self.password_enc.split(":")) != _TOKEN_FIELD_COUNT:
            raise ValueError("BrokerageCredential.password_enc must be a 4-field cipher token")

        _ensure_utc_datetime(name="created_at", value=self.created_at)
        _ensure_utc_datetime(name="updated_at", value=self.updated_at)
        if self.updated_at < self.created_at:
            raise ValueError("BrokerageCredential.updated_at cannot be before created_at")
        if self.last_authenticated_at is not None:
            _ensure_utc_datetime(name="last_authenticated_at", value=self.last_authenticated_at)
            if self.last_authenticated_at < self.created_at:
                raise ValueError(
                    "BrokerageCredential.last_authenticated_at cannot be before created_at"
                )


def _ensure_utc_datetime(*, name: str, value: datetime) -> None:
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime")
    if offset.total_seconds() != 0:
        raise ValueError(f"{name} must be UTC datetime")
