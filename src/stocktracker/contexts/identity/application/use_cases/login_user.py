from __future__ import annotations

from stocktracker.contexts.identity.application.ports.password_hasher import PasswordHasher
from stocktracker.contexts.identity.application.ports.user_repository import UserRepository
from stocktracker.contexts.identity.application.use_cases.access_token_issuer import (
    AccessTokenIssuer,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    IdentityValidationError,
    InvalidCredentialsError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    AuthResult,
    to_user_view,
)


class LoginUserUseCase:
    """
    LoginUserUseCase — verify email and password, then issue JWT.

    Related:
      - src/stocktracker/contexts/identity/application/ports/password_hasher.py
      - src/stocktracker/contexts/identity/application/use_cases/access_token_issuer.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    def __init__(
        self,
        *,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_issuer: AccessTokenIssuer,
    ) -> None:
        if user_repository is None:  # type: ignore[truthy-bool]
            raise ValueError("LoginUserUseCase requires user_repository")
        if password_hasher is None:  # type: ignore[truthy-bool]
            raise ValueError("LoginUserUseCase requires password_hasher")
        if token_issuer is None:  # type: ignore[truthy-bool]
            raise ValueError("LoginUserUseCase requires token_issuer")

        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    def login(self, *, email: str, password: str) -> AuthResult:
        """
        Authenticate account by email and password.

        Args:
            email: Raw email; compared lower-cased.
            password: Plaintext password.
        Returns:
            AuthResult: User view and signed token.
        Assumptions:
            Unknown email and wrong password are indistinguishable to the caller.
        Raises:
            IdentityValidationError: If email or password is empty.
            InvalidCredentialsError: If email is unknown or password does not match.
        Side Effects:
            Reads user storage.
        """
        normalized_email = email.strip().lower()
        if not normalized_email:
            raise IdentityValidationError(message="Email is required")
        if not password:
            raise IdentityValidationError(message="Password is required")

        user = self._user_repository.find_by_email(email=normalized_email)
        if user is None:
            raise InvalidCredentialsError()
        if not self._password_hasher.verify_password(
            password=password,
            password_hash=user.password_hash,
        ):
            raise InvalidCredentialsError()

        token, expires_at = self._token_issuer.issue(user=user)
        return AuthResult(user=to_user_view(user=user), access_token=token, expires_at=expires_at)
