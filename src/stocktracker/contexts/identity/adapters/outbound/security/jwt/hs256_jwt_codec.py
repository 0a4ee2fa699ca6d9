from __future__ import annotations

import base64
import binascii
import hmac
import json
from datetime import datetime, timezone
from typing import Any, Mapping, NamedTuple

from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.jwt_codec import (
    IdentityJwtClaims,
    JwtCodec,
    JwtDecodeError,
)
from stocktracker.shared_kernel.primitives import UserId

# base64url of {"alg":"HS256","typ":"JWT"}, as written by jsonwebtoken
_HEADER_SEGMENT = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
_SUBJECT_CLAIMS: tuple[str, ...] = ("userId", "sub")


class _CompactToken(NamedTuple):
    header_segment: str
    payload_segment: str
    signature: bytes

    @property
    def signing_input(self) -> bytes:
        return f"{self.header_segment}.{self.payload_segment}".encode("utf-8")


class Hs256JwtCodec(JwtCodec):
    """
    Hs256JwtCodec — HS256 bearer tokens shared with the Stock Tracker web backend.

    Tokens carry `userId`, `email`, `iat`, `exp` in the order jsonwebtoken writes them,
    matching the claim names the web client reads. Tokens that name the user in `sub`
    are accepted too.

    Related:
      - src/stocktracker/contexts/identity/application/ports/jwt_codec.py
      - src/stocktracker/contexts/identity/application/use_cases/access_token_issuer.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/current_user/
        jwt_bearer_current_user.py
    """

    def __init__(
        self,
        *,
        secret_key: str,
        clock: IdentityClock,
        leeway_seconds: int = 0,
    ) -> None:
        """
        Bind signing secret and clock.

        Args:
            secret_key: Shared HMAC secret (`JWT_SECRET`).
            clock: UTC clock used for `exp` checks.
            leeway_seconds: Grace period applied to `exp`.
        Returns:
            None.
        Assumptions:
            Surrounding whitespace in the secret is not significant.
        Raises:
            ValueError: If secret is blank, clock is missing, or leeway is negative.
        Side Effects:
            None.
        """
        secret = secret_key.strip()
        if not secret:
            raise ValueError("Hs256JwtCodec requires non-empty secret_key")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("Hs256JwtCodec requires clock")
        if leeway_seconds < 0:
            raise ValueError("Hs256JwtCodec requires leeway_seconds >= 0")

        self._secret = secret.encode("utf-8")
        self._clock = clock
        self._leeway_seconds = leeway_seconds

    def encode(self, *, claims: IdentityJwtClaims) -> str:
        payload = {
            "userId": str(claims.user_id),
            "email": claims.email,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        payload_segment = _b64url_encode(
            json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        )
        signing_input = f"{_HEADER_SEGMENT}.{payload_segment}".encode("ascii")
        return f"{_HEADER_SEGMENT}.{payload_segment}.{_b64url_encode(self._sign(signing_input))}"

    def decode(self, *, token: str) -> IdentityJwtClaims:
        """
        Verify token and return typed claims.

        Args:
            token: Compact JWT.
        Returns:
            IdentityJwtClaims: Claims of a genuine, unexpired token.
        Assumptions:
            Header is checked before the signature; claims only after the signature holds.
        Raises:
            JwtDecodeError: With code `missing_token`, `invalid_token_format`,
                `invalid_header`, `invalid_signature`, `invalid_claims`, or `expired_token`.
        Side Effects:
            None.
        """
        compact = _parse_compact(token=token)

        header = _load_json_object(segment=compact.header_segment)
        if header.get("alg") != "HS256" or header.get("typ", "JWT") != "JWT":
            raise JwtDecodeError(
                code="invalid_header",
                message="JWT header must contain alg=HS256 and typ=JWT",
            )
        if not hmac.compare_digest(self._sign(compact.signing_input), compact.signature):
            raise JwtDecodeError(
                code="invalid_signature",
                message="JWT signature verification failed",
            )

        claims = _claims_from_payload(payload=_load_json_object(segment=compact.payload_segment))
        if claims.expires_at.timestamp() <= self._now_timestamp() - self._leeway_seconds:
            raise JwtDecodeError(code="expired_token", message="JWT token is expired")
        return claims

    def decode_unverified(self, *, token: str) -> dict[str, Any]:
        return _load_json_object(segment=_parse_compact(token=token).payload_segment)

    def _sign(self, signing_input: bytes) -> bytes:
        return hmac.digest(self._secret, signing_input, "sha256")

    def _now_timestamp(self) -> float:
        now = self._clock.now()
        offset = now.utcoffset()
        if offset is None or offset.total_seconds() != 0:
            raise ValueError("Hs256JwtCodec clock must return timezone-aware UTC datetime")
        return now.timestamp()


def _parse_compact(*, token: str) -> _CompactToken:
    value = token.strip()
    if not value:
        raise JwtDecodeError(code="missing_token", message="JWT token is empty")
    parts = value.split(".")
    if len(parts) != 3:
        raise JwtDecodeError(
            code="invalid_token_format",
            message="JWT token must contain 3 dot-separated segments",
        )
    header_segment, payload_segment, signature_segment = parts
    return _CompactToken(
        header_segment=header_segment,
        payload_segment=payload_segment,
        signature=_b64url_decode(segment=signature_segment),
    )


def _claims_from_payload(*, payload: Mapping[str, Any]) -> IdentityJwtClaims:
    """
    Map verified JWT payload to typed identity claims.

    Args:
        payload: Decoded payload object.
    Returns:
        IdentityJwtClaims: Typed claims.
    Assumptions:
        Subject is read from `userId` first and from `sub` otherwise.
    Raises:
        JwtDecodeError: `invalid_claims` if a claim is absent or malformed.
    Side Effects:
        None.
    """
    subject = next(
        (str(payload[name]).strip() for name in _SUBJECT_CLAIMS if payload.get(name) is not None),
        "",
    )
    email = str(payload.get("email") or "").strip()
    if not subject or not email or "iat" not in payload or "exp" not in payload:
        raise JwtDecodeError(
            code="invalid_claims",
            message="JWT payload must contain userId, email, iat, and exp",
        )
    try:
        return IdentityJwtClaims(
            user_id=UserId.from_string(subject),
            email=email,
            issued_at=_epoch_to_utc(value=payload["iat"]),
            expires_at=_epoch_to_utc(value=payload["exp"]),
        )
    except (OSError, OverflowError, TypeError, ValueError) as error:
        raise JwtDecodeError(
            code="invalid_claims",
            message="JWT payload claims are malformed",
        ) from error


def _epoch_to_utc(*, value: Any) -> datetime:
    if isinstance(value, bool):
        raise TypeError("JWT timestamp must be numeric")
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


def _load_json_object(*, segment: str) -> dict[str, Any]:
    try:
        loaded = json.loads(_b64url_decode(segment=segment).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise JwtDecodeError(
            code="invalid_token_format",
            message="JWT segment is not valid JSON",
        ) from error
    if not isinstance(loaded, dict):
        raise JwtDecodeError(
            code="invalid_token_format",
            message="JWT JSON segment must be an object",
        )
    return loaded


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64url_decode(*, segment: str) -> bytes:
    try:
        return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except (binascii.Error, ValueError) as error:
        raise JwtDecodeError(
            code="invalid_token_format",
            message="JWT segment is not valid base64url",
        ) from error
