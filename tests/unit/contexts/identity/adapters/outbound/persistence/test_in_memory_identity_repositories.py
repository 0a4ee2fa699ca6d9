from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

from stocktracker.contexts.identity.adapters.outbound.persistence.in_memory import (
    InMemoryIdentityBrokerageCredentialsRepository,
    InMemoryIdentityUserRepository,
)
from stocktracker.contexts.identity.domain.entities import BrokerageCredential, User
from stocktracker.shared_kernel.primitives import UserId

_NOW = datetime(2026, 10, 17, 7, 0, 0, tzinfo=timezone.utc)
_TOKEN_A = f"{'01' * 16}:{'02' * 64}:{'03' * 16}:aa"
_TOKEN_B = f"{'04' * 16}:{'05' * 64}:{'06' * 16}:bb"


def _user(*, raw_id: str, email: str, username: str) -> User:
    return User(
        user_id=UserId.from_string(raw_id),
        email=email,
        username=username,
        password_hash="hash",
        created_at=_NOW,
        updated_at=_NOW,
    )


def _credential(*, credential_id: str, token: str, at: datetime) -> BrokerageCredential:
    return BrokerageCredential(
        credential_id=UUID(credential_id),
        user_id=UserId.from_string("00000000-0000-0000-0000-000000000111"),
        login="user@example.com",
        password_enc=token,
        mfa_enabled=False,
        created_at=at,
        updated_at=at,
    )


def test_in_memory_user_repository_rejects_duplicate_email_or_username() -> None:
    repository = InMemoryIdentityUserRepository()
    first = _user(
        raw_id="00000000-0000-0000-0000-000000000101",
        email="a@example.com",
        username="alpha",
    )

    assert repository.create(user=first) == first
    assert (
        repository.create(
            user=_user(
                raw_id="00000000-0000-0000-0000-000000000102",
                email="a@example.com",
                username="beta",
            )
        )
        is None
    )
    assert (
        repository.create(
            user=_user(
                raw_id="00000000-0000-0000-0000-000000000103",
                email="b@example.com",
                username="alpha",
            )
        )
        is None
    )
    assert repository.find_by_username(username="alpha") == first


def test_in_memory_user_repository_update_checks_other_users_only() -> None:
    repository = InMemoryIdentityUserRepository()
    first = _user(
        raw_id="00000000-0000-0000-0000-000000000104",
        email="first@example.com",
        username="first",
    )
    second = _user(
        raw_id="00000000-0000-0000-0000-000000000105",
        email="second@example.com",
        username="second",
    )
    repository.create(user=first)
    repository.create(user=second)

    assert repository.update(user=replace(first, username="first")) is not None
    assert repository.update(user=replace(first, email="second@example.com")) is None
    assert repository.find_by_email(email="first@example.com") == first


def test_in_memory_credentials_repository_upsert_keeps_identity_and_last_auth() -> None:
    """
    Verify replacing a credential keeps id, created_at and last authentication time.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Behavior mirrors Postgres `ON CONFLICT (user_id) DO UPDATE`.
    Raises:
        AssertionError: If replace semantics differ.
    Side Effects:
        None.
    """
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    original = repository.upsert(
        credential=_credential(
            credential_id="00000000-0000-0000-0000-00000000c001",
            token=_TOKEN_A,
            at=_NOW,
        )
    )
    marked = repository.mark_authenticated(
        user_id=original.user_id,
        authenticated_at=_NOW + timedelta(minutes=5),
    )
    assert marked is not None
    assert marked.last_authenticated_at == _NOW + timedelta(minutes=5)

    later = _NOW + timedelta(hours=1)
    replaced = repository.upsert(
        credential=_credential(
            credential_id="00000000-0000-0000-0000-00000000c002",
            token=_TOKEN_B,
            at=later,
        )
    )

    assert replaced.credential_id == original.credential_id
    assert replaced.created_at == _NOW
    assert replaced.updated_at == later
    assert replaced.password_enc == _TOKEN_B
    assert replaced.last_authenticated_at == _NOW + timedelta(minutes=5)


def test_in_memory_credentials_repository_delete_and_exists() -> None:
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    stored = repository.upsert(
        credential=_credential(
            credential_id="00000000-0000-0000-0000-00000000c003",
            token=_TOKEN_A,
            at=_NOW,
        )
    )

    assert repository.exists(user_id=stored.user_id)
    assert repository.delete(user_id=stored.user_id)
    assert not repository.exists(user_id=stored.user_id)
    assert not repository.delete(user_id=stored.user_id)
    assert (
        repository.mark_authenticated(user_id=stored.user_id, authenticated_at=_NOW) is None
    )
