from __future__ import annotations

from fastapi import HTTPException
from starlette.requests import Request

from stocktracker.contexts.identity.application.ports.current_user import (
    CurrentUser,
    CurrentUserPrincipal,
    CurrentUserUnauthorizedError,
)

_BEARER_SCHEME = "bearer"


class RequireCurrentUserDependency:
    """
    RequireCurrentUserDependency — FastAPI dependency resolving authenticated identity user.

    Related:
      - src/stocktracker/contexts/identity/application/ports/current_user.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/current_user/
        jwt_bearer_current_user.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    def __init__(self, *, current_user: CurrentUser, header_name: str = "Authorization") -> None:
        """
        Initialize dependency with current-user port and header key.

        Args:
            current_user: Port resolving user principal from JWT token.
            header_name: Request header carrying `Bearer <token>`.
        Returns:
            None.
        Assumptions:
            Clients send the token issued by register/login routes.
        Raises:
            ValueError: If dependencies are invalid.
        Side Effects:
            None.
        """
        normalized_header_name = header_name.strip()
        if current_user is None:  # type: ignore[truthy-bool]
            raise ValueError("RequireCurrentUserDependency requires current_user")
        if not normalized_header_name:
            raise ValueError("RequireCurrentUserDependency requires non-empty header_name")

        self._current_user = current_user
        self._header_name = normalized_header_name

    def __call__(self, request: Request) -> CurrentUserPrincipal:
        """
        Resolve authenticated principal from incoming request headers.

        Args:
            request: FastAPI HTTP request.
        Returns:
            CurrentUserPrincipal: Verified user context.
        Assumptions:
            Header value uses the `Bearer` scheme; any other scheme counts as missing token.
        Raises:
            HTTPException: 401 payload for unauthorized requests.
        Side Effects:
            None.
        """
        token = _extract_bearer_token(header_value=request.headers.get(self._header_name))
        try:
            return self._current_user.require(token=token)
        except CurrentUserUnauthorizedError as error:
            raise HTTPException(
                status_code=401,
                detail={
                    "error": error.code,
                    "message": error.message,
                },
                headers={"WWW-Authenticate": "Bearer"},
            ) from error


def _extract_bearer_token(*, header_value: str | None) -> str | None:
    if header_value is None:
        return None
    scheme, _, credentials = header_value.strip().partition(" ")
    if scheme.lower() != _BEARER_SCHEME:
        return None
    token = credentials.strip()
    return token or None
