from __future__ import annotations

import logging

from stocktracker.contexts.identity.application.ports.current_user import (
    CurrentUser,
    CurrentUserPrincipal,
    CurrentUserUnauthorizedError,
)
from stocktracker.contexts.identity.application.ports.jwt_codec import JwtCodec, JwtDecodeError
from stocktracker.contexts.identity.application.ports.user_repository import UserRepository

log = logging.getLogger(__name__)

INVALID_TOKEN_CODE = "invalid_token"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class JwtBearerCurrentUser(CurrentUser):
    """
    JwtBearerCurrentUser — resolves principal from bearer JWT and confirms the user exists.

    Related:
      - src/stocktracker/contexts/identity/application/ports/current_user.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/jwt/hs256_jwt_codec.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/deps/current_user.py
    """

    def __init__(self, *, jwt_codec: JwtCodec, user_repository: UserRepository) -> None:
        """
        Initialize resolver with JWT codec and user storage.

        Args:
            jwt_codec: Verifying codec for bearer tokens.
            user_repository: Storage used to reject tokens of removed users.
        Returns:
            None.
        Assumptions:
            Both dependencies are process-wide singletons.
        Raises:
            ValueError: If a dependency is missing.
        Side Effects:
            None.
        """
        if jwt_codec is None:  # type: ignore[truthy-bool]
            raise ValueError("JwtBearerCurrentUser requires jwt_codec")
        if user_repository is None:  # type: ignore[truthy-bool]
            raise ValueError("JwtBearerCurrentUser requires user_repository")
        self._jwt_codec = jwt_codec
        self._user_repository = user_repository

    def require(self, *, token: str | None) -> CurrentUserPrincipal:
        """
        Decode token and load user.

        Args:
            token: Raw bearer token or `None`.
        Returns:
            CurrentUserPrincipal: Principal with the stored (current) email.
        Assumptions:
            Email in token may be stale after profile update; storage wins. Every
            rejected token maps to one `invalid_token` error; the codec reason is
            only logged.
        Raises:
            CurrentUserUnauthorizedError: For missing, invalid, or expired token, or unknown user.
        Side Effects:
            Reads user storage.
        """
        if token is None or not token.strip():
            raise CurrentUserUnauthorizedError(
                code="missing_token",
                message="Access token required",
            )

        try:
            claims = self._jwt_codec.decode(token=token)
        except JwtDecodeError as error:
            log.debug("bearer token rejected: %s", error.code)
            raise CurrentUserUnauthorizedError(
                code=INVALID_TOKEN_CODE,
                message=INVALID_TOKEN_MESSAGE,
            ) from error

        user = self._user_repository.find_by_user_id(user_id=claims.user_id)
        if user is None:
            log.debug("bearer token rejected: unknown subject")
            raise CurrentUserUnauthorizedError(
                code=INVALID_TOKEN_CODE,
                message=INVALID_TOKEN_MESSAGE,
            )
        return CurrentUserPrincipal(user_id=user.user_id, email=user.email)
