from __future__ import annotations

from datetime import datetime, timedelta

from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.jwt_codec import IdentityJwtClaims, JwtCodec
from stocktracker.contexts.identity.application.use_cases.identity_validation import (
    ensure_utc_datetime,
)
from stocktracker.contexts.identity.domain.entities import User


class AccessTokenIssuer:
    """
    AccessTokenIssuer — builds identity claims for a user and signs them.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/application/use_cases/login_user.py
      - src/stocktracker/contexts/identity/application/ports/jwt_codec.py
    """

    def __init__(self, *, jwt_codec: JwtCodec, clock: IdentityClock, jwt_ttl_days: int) -> None:
        """
        Initialize issuer with codec, clock, and token lifetime.

        Args:
            jwt_codec: Signing codec.
            clock: UTC clock for `iat`.
            jwt_ttl_days: Token lifetime in days.
        Returns:
            None.
        Assumptions:
            Lifetime is fixed for the process.
        Raises:
            ValueError: If a dependency is missing or lifetime is not positive.
        Side Effects:
            None.
        """
        if jwt_codec is None:  # type: ignore[truthy-bool]
            raise ValueError("AccessTokenIssuer requires jwt_codec")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("AccessTokenIssuer requires clock")
        if jwt_ttl_days <= 0:
            raise ValueError("AccessTokenIssuer requires jwt_ttl_days > 0")

        self._jwt_codec = jwt_codec
        self._clock = clock
        self._jwt_ttl = timedelta(days=jwt_ttl_days)

    def issue(self, *, user: User) -> tuple[str, datetime]:
        """Return `(token, expires_at)` for the given user."""
        issued_at = ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        # JWT timestamps are whole seconds
        issued_at = issued_at.replace(microsecond=0)
        expires_at = issued_at + self._jwt_ttl
        token = self._jwt_codec.encode(
            claims=IdentityJwtClaims(
                user_id=user.user_id,
                email=user.email,
                issued_at=issued_at,
                expires_at=expires_at,
            )
        )
        return token, expires_at
