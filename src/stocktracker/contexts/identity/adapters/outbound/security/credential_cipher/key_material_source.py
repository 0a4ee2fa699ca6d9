from __future__ import annotations

from typing import Mapping

from stocktracker.contexts.identity.application.ports.credential_cipher import (
    ConfigurationError,
    CredentialKeySource,
)
from stocktracker.contexts.identity.domain.value_objects import EncryptionKeyMaterial

ENCRYPTION_KEY_ENV = "ENCRYPTION_KEY"


class EnvironmentCredentialKeySource(CredentialKeySource):
    """
    EnvironmentCredentialKeySource — reads hex key material from `ENCRYPTION_KEY` once.

    Related:
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        aes_gcm_credential_cipher.py
      - apps/api/wiring/modules/identity.py
    """

    def __init__(self, *, environ: Mapping[str, str], key_name: str = ENCRYPTION_KEY_ENV) -> None:
        """
        Bind source to an environment mapping without reading it yet.

        Args:
            environ: Process environment mapping (usually `os.environ`).
            key_name: Variable holding 64 hex characters.
        Returns:
            None.
        Assumptions:
            Reading is deferred to first `load()` so absence fails the cipher call itself.
        Raises:
            ValueError: If `key_name` is blank.
        Side Effects:
            None.
        """
        normalized_key_name = key_name.strip()
        if not normalized_key_name:
            raise ValueError("EnvironmentCredentialKeySource requires non-empty key_name")
        self._environ = environ
        self._key_name = normalized_key_name
        self._loaded: EncryptionKeyMaterial | None = None

    def load(self) -> EncryptionKeyMaterial:
        """
        Return cached key material, reading the environment on first successful call.

        Args:
            None.
        Returns:
            EncryptionKeyMaterial: Parsed key material.
        Assumptions:
            Concurrent first calls may both parse the same value; the result is identical,
            so the cache write needs no lock.
        Raises:
            ConfigurationError: If the variable is unset, not hex, or not 32 bytes.
        Side Effects:
            Caches parsed key material on the instance.
        """
        if self._loaded is not None:
            return self._loaded

        raw_value = self._environ.get(self._key_name, "")
        if not raw_value.strip():
            raise ConfigurationError(f"{self._key_name} environment variable is not set")
        try:
            material = EncryptionKeyMaterial.from_hex(raw_value)
        except ValueError as error:
            raise ConfigurationError(
                f"{self._key_name} must be 64 hex characters (32 bytes)"
            ) from error

        self._loaded = material
        return material


class StaticCredentialKeySource(CredentialKeySource):
    """Key source over already-resolved key material (tests, CLI verification)."""

    def __init__(self, *, key_material: EncryptionKeyMaterial) -> None:
        if not isinstance(key_material, EncryptionKeyMaterial):
            raise ValueError("StaticCredentialKeySource requires EncryptionKeyMaterial")
        self._key_material = key_material

    def load(self) -> EncryptionKeyMaterial:
        return self._key_material
