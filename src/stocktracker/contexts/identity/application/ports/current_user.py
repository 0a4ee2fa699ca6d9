from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from stocktracker.shared_kernel.primitives import UserId


@dataclass(frozen=True, slots=True)
class CurrentUserPrincipal:
    """
    CurrentUserPrincipal — authenticated user context of protected endpoints.

    Related:
      - src/stocktracker/contexts/identity/adapters/inbound/api/deps/current_user.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/current_user/
        jwt_bearer_current_user.py
    """

    user_id: UserId
    email: str


class CurrentUserUnauthorizedError(ValueError):
    """
    CurrentUserUnauthorizedError — authorization failure with stable code for 401 payloads.
    """

    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class CurrentUser(Protocol):
    """
    CurrentUser — port resolving `CurrentUserPrincipal` from a bearer token.

    Related:
      - src/stocktracker/contexts/identity/adapters/inbound/api/deps/current_user.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/current_user/
        jwt_bearer_current_user.py
    """

    def require(self, *, token: str | None) -> CurrentUserPrincipal:
        """
        Resolve authenticated principal or raise.

        Args:
            token: Bearer token from `Authorization` header; may be missing.
        Returns:
            CurrentUserPrincipal: Authenticated user context.
        Assumptions:
            Token is signed by identity JWT secret and the user still exists.
        Raises:
            CurrentUserUnauthorizedError: If token is missing, invalid, expired, or
                user is unknown.
        Side Effects:
            Reads user storage.
        """
        ...
