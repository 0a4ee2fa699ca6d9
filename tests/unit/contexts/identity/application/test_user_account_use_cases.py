from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stocktracker.contexts.identity.adapters.outbound.persistence.in_memory import (
    InMemoryIdentityUserRepository,
)
from stocktracker.contexts.identity.adapters.outbound.security.jwt import Hs256JwtCodec
from stocktracker.contexts.identity.adapters.outbound.security.password import (
    BcryptPasswordHasher,
)
from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.use_cases import (
    AccessTokenIssuer,
    EmailAlreadyRegisteredError,
    GetUserProfileUseCase,
    IdentityValidationError,
    InvalidCredentialsError,
    LoginUserUseCase,
    RegisterUserUseCase,
    UpdateUserProfileUseCase,
    UsernameAlreadyTakenError,
    UserNotFoundError,
)
from stocktracker.shared_kernel.primitives import UserId


class _MutableClock(IdentityClock):
    """
    Mutable deterministic UTC clock for account use-case tests.
    """

    def __init__(self, *, now_value: datetime) -> None:
        """
        Initialize clock with timezone-aware UTC datetime.

        Args:
            now_value: Initial UTC datetime value.
        Returns:
            None.
        Assumptions:
            Time moves only through `set_now`.
        Raises:
            None.
        Side Effects:
            None.
        """
        self._now_value = now_value

    def set_now(self, *, now_value: datetime) -> None:
        self._now_value = now_value

    def now(self) -> datetime:
        return self._now_value


class _AccountFixture:
    """
    Wire account use-cases over shared in-memory storage.
    """

    def __init__(self, *, now_value: datetime) -> None:
        self.clock = _MutableClock(now_value=now_value)
        self.repository = InMemoryIdentityUserRepository()
        self.hasher = BcryptPasswordHasher(rounds=4)
        self.jwt_codec = Hs256JwtCodec(secret_key="account-tests-secret", clock=self.clock)
        issuer = AccessTokenIssuer(jwt_codec=self.jwt_codec, clock=self.clock, jwt_ttl_days=7)
        self.register = RegisterUserUseCase(
            user_repository=self.repository,
            password_hasher=self.hasher,
            token_issuer=issuer,
            clock=self.clock,
        )
        self.login = LoginUserUseCase(
            user_repository=self.repository,
            password_hasher=self.hasher,
            token_issuer=issuer,
        )
        self.profile = GetUserProfileUseCase(user_repository=self.repository)
        self.update = UpdateUserProfileUseCase(
            user_repository=self.repository,
            password_hasher=self.hasher,
            clock=self.clock,
        )


_NOW = datetime(2026, 10, 17, 10, 0, 0, 250000, tzinfo=timezone.utc)


def test_register_user_normalizes_email_and_issues_token() -> None:
    """
    Verify registration lower-cases email, hashes password, and issues a decodable token.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Token lifetime is 7 days from issue time truncated to whole seconds.
    Raises:
        AssertionError: If stored user or token differ from expectations.
    Side Effects:
        None.
    """
    fixture = _AccountFixture(now_value=_NOW)

    result = fixture.register.register(
        email="  Trader@Example.COM ",
        username="trader_1",
        password="secret1",
    )

    assert result.user.email == "trader@example.com"
    assert result.user.username == "trader_1"
    assert result.user.created_at == _NOW
    assert result.expires_at == _NOW.replace(microsecond=0) + timedelta(days=7)

    stored = fixture.repository.find_by_email(email="trader@example.com")
    assert stored is not None
    assert stored.password_hash != "secret1"
    assert fixture.hasher.verify_password(password="secret1", password_hash=stored.password_hash)

    claims = fixture.jwt_codec.decode(token=result.access_token)
    assert claims.user_id == result.user.user_id
    assert claims.email == "trader@example.com"


@pytest.mark.parametrize(
    ("email", "username", "password", "message"),
    [
        ("", "valid_name", "secret1", "Email is required"),
        ("not-an-email", "valid_name", "secret1", "Invalid email format"),
        ("a@example.com", "", "secret1", "Username is required"),
        ("a@example.com", "ab", "secret1", "at least 3 characters"),
        ("a@example.com", "x" * 31, "secret1", "at most 30 characters"),
        ("a@example.com", "bad-name", "secret1", "letters, numbers, and underscores"),
        ("a@example.com", "valid_name", "", "Password is required"),
        ("a@example.com", "valid_name", "12345", "at least 6 characters"),
    ],
)
def test_register_user_validates_fields(
    email: str,
    username: str,
    password: str,
    message: str,
) -> None:
    fixture = _AccountFixture(now_value=_NOW)

    with pytest.raises(IdentityValidationError, match=message) as error_info:
        fixture.register.register(email=email, username=username, password=password)

    assert error_info.value.status_code == 422


def test_register_user_rejects_taken_email_and_username() -> None:
    fixture = _AccountFixture(now_value=_NOW)
    fixture.register.register(email="taken@example.com", username="taken", password="secret1")

    with pytest.raises(EmailAlreadyRegisteredError) as email_error:
        fixture.register.register(email="TAKEN@example.com", username="other", password="secret1")
    with pytest.raises(UsernameAlreadyTakenError) as username_error:
        fixture.register.register(email="fresh@example.com", username="taken", password="secret1")

    assert email_error.value.status_code == 409
    assert email_error.value.payload() == {
        "error": "email_already_registered",
        "message": "Email already registered",
    }
    assert username_error.value.message == "Username already taken"


def test_login_user_accepts_valid_credentials_case_insensitively() -> None:
    fixture = _AccountFixture(now_value=_NOW)
    registered = fixture.register.register(
        email="login@example.com",
        username="login_user",
        password="secret1",
    )

    result = fixture.login.login(email="LOGIN@example.com", password="secret1")

    assert result.user == registered.user
    assert fixture.jwt_codec.decode(token=result.access_token).user_id == registered.user.user_id


@pytest.mark.parametrize(
    ("email", "password"),
    [
        ("login@example.com", "wrong-password"),
        ("unknown@example.com", "secret1"),
    ],
)
def test_login_user_hides_which_credential_was_wrong(email: str, password: str) -> None:
    fixture = _AccountFixture(now_value=_NOW)
    fixture.register.register(email="login@example.com", username="login_user", password="secret1")

    with pytest.raises(InvalidCredentialsError) as error_info:
        fixture.login.login(email=email, password=password)

    assert error_info.value.status_code == 401
    assert error_info.value.message == "Invalid email or password"


def test_login_user_requires_both_fields() -> None:
    fixture = _AccountFixture(now_value=_NOW)

    with pytest.raises(IdentityValidationError, match="Email is required"):
        fixture.login.login(email=" ", password="secret1")
    with pytest.raises(IdentityValidationError, match="Password is required"):
        fixture.login.login(email="a@example.com", password="")


def test_get_user_profile_returns_view_or_not_found() -> None:
    fixture = _AccountFixture(now_value=_NOW)
    registered = fixture.register.register(
        email="profile@example.com",
        username="profile",
        password="secret1",
    )

    assert fixture.profile.get(user_id=registered.user.user_id) == registered.user
    with pytest.raises(UserNotFoundError):
        fixture.profile.get(user_id=UserId.from_string("00000000-0000-0000-0000-000000000404"))


def test_update_user_profile_changes_only_provided_fields() -> None:
    """
    Verify update applies given fields, ignores empty ones, and rehashes password.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Empty strings from forms mean "keep current value".
    Raises:
        AssertionError: If unchanged fields move or password is not replaced.
    Side Effects:
        None.
    """
    fixture = _AccountFixture(now_value=_NOW)
    registered = fixture.register.register(
        email="before@example.com",
        username="before",
        password="secret1",
    )
    fixture.clock.set_now(now_value=_NOW + timedelta(hours=2))

    updated = fixture.update.update(
        user_id=registered.user.user_id,
        email="After@Example.com",
        username="",
        password="new-secret",
    )

    assert updated.email == "after@example.com"
    assert updated.username == "before"
    stored = fixture.repository.find_by_user_id(user_id=registered.user.user_id)
    assert stored is not None
    assert stored.updated_at == _NOW + timedelta(hours=2)
    assert fixture.hasher.verify_password(password="new-secret", password_hash=stored.password_hash)
    assert fixture.login.login(email="after@example.com", password="new-secret").user == updated


def test_update_user_profile_rejects_values_owned_by_other_user() -> None:
    fixture = _AccountFixture(now_value=_NOW)
    first = fixture.register.register(email="one@example.com", username="one", password="secret1")
    fixture.register.register(email="two@example.com", username="two", password="secret1")

    with pytest.raises(EmailAlreadyRegisteredError):
        fixture.update.update(user_id=first.user.user_id, email="two@example.com")
    with pytest.raises(UsernameAlreadyTakenError):
        fixture.update.update(user_id=first.user.user_id, username="two")

    assert fixture.update.update(user_id=first.user.user_id, username="one").username == "one"


def test_update_user_profile_validates_and_requires_existing_user() -> None:
    fixture = _AccountFixture(now_value=_NOW)
    registered = fixture.register.register(
        email="valid@example.com",
        username="valid",
        password="secret1",
    )

    with pytest.raises(IdentityValidationError, match="at least 6 characters"):
        fixture.update.update(user_id=registered.user.user_id, password="123")
    with pytest.raises(UserNotFoundError):
        fixture.update.update(
            user_id=UserId.from_string("00000000-0000-0000-0000-000000000405"),
            username="ghost",
        )
