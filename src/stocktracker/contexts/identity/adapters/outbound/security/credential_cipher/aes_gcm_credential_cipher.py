from __future__ import annotations

import logging
import os
import re

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from stocktracker.contexts.identity.application.ports.credential_cipher import (
    AuthenticationFailure,
    CredentialCipher,
    CredentialKeySource,
    DecryptionError,
    EncryptionError,
    InvalidTokenFormat,
)

log = logging.getLogger(__name__)

IV_LENGTH = 16
SALT_LENGTH = 64
TAG_LENGTH = 16
KEY_LENGTH = 32
PBKDF2_ITERATIONS = 100_000
TOKEN_SEPARATOR = ":"
_TOKEN_FIELD_COUNT = 4
_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


class AesGcmCredentialCipher(CredentialCipher):
    """
    AesGcmCredentialCipher — AES-256-GCM cipher with PBKDF2-SHA512 per-token keys.

    Token layout is `iv:salt:authTag:ciphertext`, each field lower-case hex
    (16, 64, 16 and N bytes). Iteration count is not part of the token.

    Related:
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        key_material_source.py
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
    """

    def __init__(self, *, key_source: CredentialKeySource) -> None:
        """
        Initialize cipher with lazy key material source.

        Args:
            key_source: Provider of the 32-byte PBKDF2 base secret.
        Returns:
            None.
        Assumptions:
            Key material is not read here; a missing key fails each encrypt/decrypt call.
        Raises:
            ValueError: If key source is missing.
        Side Effects:
            None.
        """
        if key_source is None:  # type: ignore[truthy-bool]
            raise ValueError("AesGcmCredentialCipher requires key_source")
        self._key_source = key_source

    def encrypt(self, *, plaintext: str) -> str:
        """
        Encrypt plaintext under a fresh random iv and salt.

        Args:
            plaintext: Secret value; empty string is allowed.
        Returns:
            str: `iv:salt:authTag:ciphertext` hex token.
        Assumptions:
            `os.urandom` is the CSPRNG for iv and salt.
        Raises:
            ConfigurationError: If key material is absent or malformed.
            EncryptionError: If plaintext is not a string or the AEAD primitive fails.
        Side Effects:
            Consumes 80 bytes of OS entropy.
        """
        base_secret = self._key_source.load().value
        if not isinstance(plaintext, str):
            raise EncryptionError("Credential plaintext must be a string")

        iv = os.urandom(IV_LENGTH)
        salt = os.urandom(SALT_LENGTH)
        try:
            key = _derive_key(base_secret=base_secret, salt=salt)
            sealed = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
        except (ValueError, OverflowError, UnicodeEncodeError) as error:
            log.error("credential encrypt failed: %s", type(error).__name__)
            raise EncryptionError() from error

        ciphertext, auth_tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return TOKEN_SEPARATOR.join(
            (iv.hex(), salt.hex(), auth_tag.hex(), ciphertext.hex())
        )

    def decrypt(self, *, token: str) -> str:
        """
        Verify GCM tag and return original plaintext.

        Args:
            token: Token produced by `encrypt`.
        Returns:
            str: Plaintext, byte-for-byte equal to the encrypted input.
        Assumptions:
            Any single-bit change in iv, salt, tag or ciphertext breaks verification.
        Raises:
            ConfigurationError: If key material is absent or malformed.
            InvalidTokenFormat: If token is not 4 hex fields with expected lengths.
            AuthenticationFailure: If tag verification fails.
        Side Effects:
            Logs failure category only.
        """
        base_secret = self._key_source.load().value
        try:
            iv, salt, auth_tag, ciphertext = _parse_token(token=token)
            key = _derive_key(base_secret=base_secret, salt=salt)
            try:
                plaintext = AESGCM(key).decrypt(iv, ciphertext + auth_tag, None)
            except InvalidTag as error:
                raise AuthenticationFailure() from error
            try:
                return plaintext.decode("utf-8")
            except UnicodeDecodeError as error:
                raise DecryptionError() from error
        except DecryptionError as error:
            log.warning("credential token rejected: %s", error.code)
            raise


def generate_key_material() -> str:
    """
    Return 32 fresh CSPRNG bytes as 64 hex characters for `ENCRYPTION_KEY`.

    Args:
        None.
    Returns:
        str: Lower-case hex key material.
    Assumptions:
        Caller stores the value in deployment secrets; nothing is persisted here.
    Raises:
        None.
    Side Effects:
        Consumes OS entropy.
    """
    return os.urandom(KEY_LENGTH).hex()


def _derive_key(*, base_secret: bytes, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(base_secret)


def _parse_token(*, token: str) -> tuple[bytes, bytes, bytes, bytes]:
    """
    Split token into `(iv, salt, auth_tag, ciphertext)` bytes.

    Args:
        token: Raw persisted token.
    Returns:
        tuple[bytes, bytes, bytes, bytes]: Decoded fields.
    Assumptions:
        Ciphertext may be empty (empty plaintext).
    Raises:
        InvalidTokenFormat: If field count, hex encoding or fixed lengths are wrong.
    Side Effects:
        None.
    """
    if not isinstance(token, str):
        raise InvalidTokenFormat()
    fields = token.split(TOKEN_SEPARATOR)
    if len(fields) != _TOKEN_FIELD_COUNT:
        raise InvalidTokenFormat()

    decoded: list[bytes] = []
    for field in fields:
        if len(field) % 2 != 0 or _HEX_PATTERN.fullmatch(field) is None:
            raise InvalidTokenFormat()
        decoded.append(bytes.fromhex(field))

    iv, salt, auth_tag, ciphertext = decoded
    if len(iv) != IV_LENGTH or len(salt) != SALT_LENGTH or len(auth_tag) != TAG_LENGTH:
        raise InvalidTokenFormat()
    return iv, salt, auth_tag, ciphertext
