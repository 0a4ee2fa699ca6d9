from __future__ import annotations

from typing import Protocol

from stocktracker.contexts.identity.domain.value_objects import EncryptionKeyMaterial

_DECRYPT_FAILURE_MESSAGE = "Failed to decrypt data"


class CredentialCipherError(ValueError):
    """
    CredentialCipherError — base error of the credential cipher with stable category code.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        aes_gcm_credential_cipher.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    code = "credential_cipher_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CredentialCipherError):
    """Key material is absent or malformed; raised before any cryptographic work."""

    code = "configuration_error"


class EncryptionError(CredentialCipherError):
    """Encrypt primitive failed; no token is produced."""

    code = "encryption_error"

    def __init__(self, message: str = "Failed to encrypt data") -> None:
        super().__init__(message)


class DecryptionError(CredentialCipherError):
    """
    DecryptionError — base of every decrypt failure.

    All subclasses share one public message so callers cannot tell a malformed token
    from a forged one by the error text.
    """

    code = "decryption_error"

    def __init__(self) -> None:
        super().__init__(_DECRYPT_FAILURE_MESSAGE)


class InvalidTokenFormat(DecryptionError):
    """Token is not four colon-separated hex fields of the expected lengths."""

    code = "invalid_token_format"


class AuthenticationFailure(DecryptionError):
    """GCM tag verification failed: tampered token or wrong key material."""

    code = "authentication_failure"


class CredentialKeySource(Protocol):
    """
    CredentialKeySource — provider of process-wide cipher key material.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        key_material_source.py
    """

    def load(self) -> EncryptionKeyMaterial:
        """
        Return configured key material.

        Args:
            None.
        Returns:
            EncryptionKeyMaterial: 32-byte base secret.
        Assumptions:
            Result is immutable for the process lifetime once loaded.
        Raises:
            ConfigurationError: If key material is absent or malformed.
        Side Effects:
            May read process configuration on first call.
        """
        ...


class CredentialCipher(Protocol):
    """
    CredentialCipher — authenticated at-rest encryption port for brokerage passwords.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
      - src/stocktracker/contexts/identity/application/use_cases/
        get_decrypted_brokerage_credential.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        aes_gcm_credential_cipher.py
    """

    def encrypt(self, *, plaintext: str) -> str:
        """
        Encrypt secret into a self-describing `iv:salt:authTag:ciphertext` token.

        Args:
            plaintext: Any string, including empty.
        Returns:
            str: Opaque token to persist verbatim.
        Assumptions:
            Every call draws fresh iv and salt; tokens for equal plaintexts differ.
        Raises:
            ConfigurationError: If key material is absent or malformed.
            EncryptionError: If the cipher primitive fails.
        Side Effects:
            Consumes entropy from the OS random source.
        """
        ...

    def decrypt(self, *, token: str) -> str:
        """
        Verify and decrypt a token produced by `encrypt`.

        Args:
            token: Persisted token string.
        Returns:
            str: Exact original plaintext.
        Assumptions:
            Token was produced with the same key material.
        Raises:
            ConfigurationError: If key material is absent or malformed.
            InvalidTokenFormat: If token structure is invalid.
            AuthenticationFailure: If the GCM tag does not verify.
        Side Effects:
            None.
        """
        ...
