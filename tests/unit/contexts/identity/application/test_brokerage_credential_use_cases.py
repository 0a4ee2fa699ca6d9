from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from stocktracker.contexts.identity.adapters.outbound.persistence.in_memory import (
    InMemoryIdentityBrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.adapters.outbound.security.credential_cipher import (
    AesGcmCredentialCipher,
    EnvironmentCredentialKeySource,
    StaticCredentialKeySource,
)
from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.credential_cipher import (
    AuthenticationFailure,
    ConfigurationError,
)
from stocktracker.contexts.identity.application.use_cases import (
    BrokerageCredentialNotFoundError,
    DeleteBrokerageCredentialUseCase,
    GetBrokerageCredentialUseCase,
    GetDecryptedBrokerageCredentialUseCase,
    IdentityValidationError,
    MarkBrokerageCredentialAuthenticatedUseCase,
    StoreBrokerageCredentialUseCase,
)
from stocktracker.contexts.identity.domain.value_objects import EncryptionKeyMaterial
from stocktracker.shared_kernel.primitives import UserId

_NOW = datetime(2026, 10, 17, 13, 0, 0, tzinfo=timezone.utc)
_USER_ID = UserId.from_string("00000000-0000-0000-0000-000000002001")


class _MutableClock(IdentityClock):
    """
    Mutable deterministic UTC clock for brokerage credential use-case tests.
    """

    def __init__(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def set_now(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def now(self) -> datetime:
        return self._now_value


def _build_cipher(*, key_hex: str = "5a" * 32) -> AesGcmCredentialCipher:
    return AesGcmCredentialCipher(
        key_source=StaticCredentialKeySource(
            key_material=EncryptionKeyMaterial.from_hex(key_hex),
        )
    )


def test_store_brokerage_credential_encrypts_password_before_storage() -> None:
    """
    Verify stored row holds a cipher token and the view exposes no secret.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        In-memory repository keeps exactly what the use-case hands it.
    Raises:
        AssertionError: If plaintext reaches storage or view fields are wrong.
    Side Effects:
        None.
    """
    clock = _MutableClock(now_value=_NOW)
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    cipher = _build_cipher()
    store = StoreBrokerageCredentialUseCase(repository=repository, cipher=cipher, clock=clock)

    view = store.store(
        user_id=_USER_ID,
        login="  +15550002222 ",
        password="webull-secret",
        mfa_enabled=True,
    )

    assert view.login == "+15550002222"
    assert view.mfa_enabled is True
    assert view.created_at == _NOW
    assert view.last_authenticated_at is None
    assert not hasattr(view, "password_enc")

    stored = repository.find_by_user_id(user_id=_USER_ID)
    assert stored is not None
    assert "webull-secret" not in stored.password_enc
    assert len(stored.password_enc.split(":")) == 4
    assert cipher.decrypt(token=stored.password_enc) == "webull-secret"


def test_store_brokerage_credential_replaces_existing_row() -> None:
    clock = _MutableClock(now_value=_NOW)
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    store = StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=_build_cipher(),
        clock=clock,
    )
    first = store.store(user_id=_USER_ID, login="one@example.com", password="first-secret")
    clock.set_now(now_value=_NOW + timedelta(days=1))

    second = store.store(user_id=_USER_ID, login="two@example.com", password="second-secret")

    assert second.credential_id == first.credential_id
    assert second.login == "two@example.com"
    assert second.created_at == _NOW
    assert second.updated_at == _NOW + timedelta(days=1)


@pytest.mark.parametrize(
    ("login", "password", "message"),
    [
        ("", "secret", "Webull email or phone is required"),
        ("   ", "secret", "Webull email or phone is required"),
        ("user@example.com", "", "Webull password is required"),
    ],
)
def test_store_brokerage_credential_validates_input(
    login: str,
    password: str,
    message: str,
) -> None:
    store = StoreBrokerageCredentialUseCase(
        repository=InMemoryIdentityBrokerageCredentialsRepository(),
        cipher=_build_cipher(),
        clock=_MutableClock(now_value=_NOW),
    )

    with pytest.raises(IdentityValidationError, match=message):
        store.store(user_id=_USER_ID, login=login, password=password)


def test_store_brokerage_credential_without_key_writes_nothing() -> None:
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    store = StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=AesGcmCredentialCipher(key_source=EnvironmentCredentialKeySource(environ={})),
        clock=_MutableClock(now_value=_NOW),
    )

    with pytest.raises(ConfigurationError):
        store.store(user_id=_USER_ID, login="user@example.com", password="secret")

    assert not repository.exists(user_id=_USER_ID)


def test_get_brokerage_credential_view_and_presence() -> None:
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    get_use_case = GetBrokerageCredentialUseCase(repository=repository)

    assert get_use_case.has(user_id=_USER_ID) is False
    with pytest.raises(BrokerageCredentialNotFoundError) as error_info:
        get_use_case.get(user_id=_USER_ID)
    assert error_info.value.message == "No Webull credentials found"

    StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=_build_cipher(),
        clock=_MutableClock(now_value=_NOW),
    ).store(user_id=_USER_ID, login="user@example.com", password="secret")

    assert get_use_case.has(user_id=_USER_ID) is True
    assert get_use_case.get(user_id=_USER_ID).login == "user@example.com"


def test_get_decrypted_brokerage_credential_returns_plaintext_or_none() -> None:
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    cipher = _build_cipher()
    decrypted_use_case = GetDecryptedBrokerageCredentialUseCase(
        repository=repository,
        cipher=cipher,
    )
    assert decrypted_use_case.get(user_id=_USER_ID) is None

    StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=cipher,
        clock=_MutableClock(now_value=_NOW),
    ).store(user_id=_USER_ID, login="user@example.com", password="pässwörd", mfa_enabled=True)

    decrypted = decrypted_use_case.get(user_id=_USER_ID)

    assert decrypted is not None
    assert decrypted.login == "user@example.com"
    assert decrypted.password == "pässwörd"
    assert decrypted.mfa_enabled is True
    assert "pässwörd" not in repr(decrypted)


def test_get_decrypted_brokerage_credential_propagates_tamper_detection() -> None:
    """
    Verify a corrupted stored token surfaces as AuthenticationFailure, not garbage text.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Flipping one ciphertext hex digit keeps the token well-formed.
    Raises:
        AssertionError: If tampered token decrypts.
    Side Effects:
        None.
    """
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    cipher = _build_cipher()
    StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=cipher,
        clock=_MutableClock(now_value=_NOW),
    ).store(user_id=_USER_ID, login="user@example.com", password="secret")
    stored = repository.find_by_user_id(user_id=_USER_ID)
    assert stored is not None
    iv_hex, salt_hex, tag_hex, ciphertext_hex = stored.password_enc.split(":")
    flipped = ("1" if ciphertext_hex[0] == "0" else "0") + ciphertext_hex[1:]
    repository.upsert(
        credential=replace(stored, password_enc=f"{iv_hex}:{salt_hex}:{tag_hex}:{flipped}")
    )

    with pytest.raises(AuthenticationFailure):
        GetDecryptedBrokerageCredentialUseCase(repository=repository, cipher=cipher).get(
            user_id=_USER_ID
        )


def test_mark_brokerage_credential_authenticated_stamps_clock_time() -> None:
    clock = _MutableClock(now_value=_NOW)
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    mark = MarkBrokerageCredentialAuthenticatedUseCase(repository=repository, clock=clock)

    with pytest.raises(BrokerageCredentialNotFoundError):
        mark.mark(user_id=_USER_ID)

    StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=_build_cipher(),
        clock=clock,
    ).store(user_id=_USER_ID, login="user@example.com", password="secret")
    clock.set_now(now_value=_NOW + timedelta(minutes=30))

    view = mark.mark(user_id=_USER_ID)

    assert view.last_authenticated_at == _NOW + timedelta(minutes=30)
    assert view.updated_at == _NOW + timedelta(minutes=30)


def test_delete_brokerage_credential_removes_row_once() -> None:
    repository = InMemoryIdentityBrokerageCredentialsRepository()
    StoreBrokerageCredentialUseCase(
        repository=repository,
        cipher=_build_cipher(),
        clock=_MutableClock(now_value=_NOW),
    ).store(user_id=_USER_ID, login="user@example.com", password="secret")
    delete = DeleteBrokerageCredentialUseCase(repository=repository)

    delete.delete(user_id=_USER_ID)

    assert not repository.exists(user_id=_USER_ID)
    with pytest.raises(BrokerageCredentialNotFoundError, match="No credentials found to delete"):
        delete.delete(user_id=_USER_ID)
