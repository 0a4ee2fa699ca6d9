from __future__ import annotations

import logging

from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.password_hasher import PasswordHasher
from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.application.use_cases.access_token_issuer import (
    AccessTokenIssuer,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    EmailAlreadyRegisteredError,
    UsernameAlreadyTakenError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    AuthResult,
    to_user_view,
)
from stocktracker.contexts.identity.application.use_cases.identity_validation import (
    ensure_utc_datetime,
    normalize_email,
    normalize_username,
    validate_password,
)
from stocktracker.contexts.identity.domain.entities import User
from stocktracker.shared_kernel.primitives import UserId

log = logging.getLogger(__name__)


class RegisterUserUseCase:
    """
    RegisterUserUseCase — create account with bcrypt-hashed password and issue JWT.

    Related:
      - src/stocktracker/contexts/identity/application/ports/user_repository.py
      - src/stocktracker/contexts/identity/application/ports/password_hasher.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: AccessTokenIssuer,
        clock: IdentityClock,
    ) -> None:
        """
        Initialize use-case dependencies.

        Args:
            user_repository: User storage port.
            password_hasher: Password hashing port.
            token_issuer: JWT issuer.
            clock: UTC clock for timestamps.
        Returns:
            None.
        Assumptions:
            Dependencies are initialized and non-null.
        Raises:
            ValueError: If any dependency is missing.
        Side Effects:
            None.
        """
        if user_repository is None:  # type: ignore[truthy-bool]
            raise ValueError("RegisterUserUseCase requires user_repository")
        if password_hasher is None:  # type: ignore[truthy-bool]
            raise ValueError("RegisterUserUseCase requires password_hasher")
        if token_issuer is None:  # type: ignore[truthy-bool]
            raise ValueError("RegisterUserUseCase requires token_issuer")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("RegisterUserUseCase requires clock")

        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        self._clock = clock

    def register(self, *, email: str, username: str, password: str) -> AuthResult:
        """
        Validate input, persist new user, and return user view with access token.

        Args:
            email: Raw email.
            username: Raw username.
            password: Plaintext password.
        Returns:
            AuthResult: Created user and signed token.
        Assumptions:
            Email uniqueness is case-insensitive through lower-case normalization.
        Raises:
            IdentityValidationError: If a field is invalid.
            EmailAlreadyRegisteredError: If email is taken.
            UsernameAlreadyTakenError: If username is taken.
        Side Effects:
            Hashes password and writes one user row.
        """
        normalized_email = normalize_email(email=email)
        normalized_username = normalize_username(username=username)
        validated_password = validate_password(password=password)

        if self._user_repository.find_by_email(email=normalized_email) is not None:
            raise EmailAlreadyRegisteredError()
        if self._user_repository.find_by_username(username=normalized_username) is not None:
            raise UsernameAlreadyTakenError()

        now = ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        candidate = User(
            user_id=UserId.generate(),
            email=normalized_email,
            username=normalized_username,
            password_hash=self._password_hasher.hash_password(password=validated_password),
            created_at=now,
            updated_at=now,
        )
        created = self._user_repository.create(user=candidate)
        if created is None:
            # lost a race against a concurrent registration
            if self._user_repository.find_by_email(email=normalized_email) is not None:
                raise EmailAlreadyRegisteredError()
            raise UsernameAlreadyTakenError()

        token, expires_at = self._token_issuer.issue(user=created)
        log.info("identity user registered: user_id=%s", created.user_id)
        return AuthResult(user=to_user_view(user=created), access_token=token, expires_at=expires_at)
