from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from stocktracker.contexts.identity.domain.entities import BrokerageCredential, User
from stocktracker.shared_kernel.primitives import UserId


@dataclass(frozen=True, slots=True)
class UserView:
    """
    UserView — public account projection without password hash.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/get_user_profile.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    user_id: UserId
    email: str
    username: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    AuthResult — outcome of register and login flows.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/application/use_cases/login_user.py
    """

    user: UserView
    access_token: str = field(repr=False)
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class BrokerageCredentialView:
    """
    BrokerageCredentialView — non-secret credential projection; the password never leaves
    the application layer through this type.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
      - src/stocktracker/contexts/identity/application/use_cases/get_brokerage_credential.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    credential_id: UUID
    login: str
    mfa_enabled: bool
    created_at: datetime
    updated_at: datetime
    last_authenticated_at: datetime | None


@dataclass(frozen=True, slots=True)
class DecryptedBrokerageCredential:
    """
    DecryptedBrokerageCredential — plaintext login pair for in-process brokerage clients.

    Never serialized to HTTP responses or logs.
    """

    login: str
    password: str = field(repr=False)
    mfa_enabled: bool


def to_user_view(*, user: User) -> UserView:
    return UserView(
        user_id=user.user_id,
        email=user.email,
        username=user.username,
        created_at=user.created_at,
    )


def to_brokerage_credential_view(*, credential: BrokerageCredential) -> BrokerageCredentialView:
    return BrokerageCredentialView(
        credential_id=credential.credential_id,
        login=credential.login,
        mfa_enabled=credential.mfa_enabled,
        created_at=credential.created_at,
        updated_at=credential.updated_at,
        last_authenticated_at=credential.last_authenticated_at,
    )
