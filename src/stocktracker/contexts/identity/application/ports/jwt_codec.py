from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from stocktracker.shared_kernel.primitives import UserId


@dataclass(frozen=True, slots=True)
class IdentityJwtClaims:
    """
    IdentityJwtClaims — typed claims of the identity bearer token.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/jwt/hs256_jwt_codec.py
      - src/stocktracker/contexts/identity/application/use_cases/login_user.py
    """

    user_id: UserId
    email: str
    issued_at: datetime
    expires_at: datetime

    def __post_init__(self) -> None:
        """
        Validate claim invariants.

        Raises:
            ValueError: If email is blank, datetimes are not UTC, or expiry is not after issue.
        """
        if not self.email.strip():
            raise ValueError("IdentityJwtClaims.email must be non-empty")
        _ensure_utc_datetime(name="issued_at", value=self.issued_at)
        _ensure_utc_datetime(name="expires_at", value=self.expires_at)
        if self.expires_at <= self.issued_at:
            raise ValueError("IdentityJwtClaims.expires_at must be after issued_at")


class JwtDecodeError(ValueError):
    """
    JwtDecodeError — token verification failure with stable machine-readable code.

    Codes: `missing_token`, `invalid_token_format`, `invalid_header`, `invalid_signature`,
    `invalid_claims`, `expired_token`.
    """

    def __init__(self, *, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class JwtCodec(Protocol):
    """
    JwtCodec — stateless sign/verify port for identity bearer tokens.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/jwt/hs256_jwt_codec.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/current_user/
        jwt_bearer_current_user.py
    """

    def encode(self, *, claims: IdentityJwtClaims) -> str:
        """
        Sign claims into compact JWT.

        Args:
            claims: Typed identity claims.
        Returns:
            str: Signed compact token.
        Assumptions:
            Signing secret is configured and non-empty.
        Raises:
            ValueError: If claims cannot be serialized.
        Side Effects:
            None.
        """
        ...

    def decode(self, *, token: str) -> IdentityJwtClaims:
        """
        Verify signature and expiry, then return typed claims.

        Args:
            token: Compact JWT.
        Returns:
            IdentityJwtClaims: Verified claims.
        Assumptions:
            Token was issued by the same signer.
        Raises:
            JwtDecodeError: If token is malformed, forged, or expired.
        Side Effects:
            None.
        """
        ...

    def decode_unverified(self, *, token: str) -> dict[str, Any]:
        """
        Return raw payload without signature or expiry checks (diagnostics only).

        Raises:
            JwtDecodeError: If token segments cannot be decoded.
        """
        ...


def _ensure_utc_datetime(*, name: str, value: datetime) -> None:
    offset = value.utcoffset()
    if value.tzinfo is None or offset is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime")
    if offset.total_seconds() != 0:
        raise ValueError(f"{name} must be UTC datetime")
