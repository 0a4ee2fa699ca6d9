"""
Process-wide credential cipher bound to `os.environ`.

Callers that do not take the cipher as a dependency use these functions directly:

    from stocktracker.contexts.identity.adapters.outbound.security.credential_cipher import (
        decrypt,
        encrypt,
    )
"""

from __future__ import annotations

import os
from functools import lru_cache

from .aes_gcm_credential_cipher import AesGcmCredentialCipher, generate_key_material
from .key_material_source import EnvironmentCredentialKeySource


@lru_cache(maxsize=1)
def get_default_cipher() -> AesGcmCredentialCipher:
    """Return the lazily built cipher reading `ENCRYPTION_KEY` from `os.environ`."""
    return AesGcmCredentialCipher(key_source=EnvironmentCredentialKeySource(environ=os.environ))


def encrypt(plaintext: str) -> str:
    return get_default_cipher().encrypt(plaintext=plaintext)


def decrypt(token: str) -> str:
    return get_default_cipher().decrypt(token=token)


__all__ = [
    "decrypt",
    "encrypt",
    "generate_key_material",
    "get_default_cipher",
]
