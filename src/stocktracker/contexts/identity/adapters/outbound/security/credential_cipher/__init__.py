from .aes_gcm_credential_cipher import (
    IV_LENGTH,
    KEY_LENGTH,
    PBKDF2_ITERATIONS,
    SALT_LENGTH,
    TAG_LENGTH,
    AesGcmCredentialCipher,
    generate_key_material,
)
from .default_cipher import decrypt, encrypt, get_default_cipher
from .key_material_source import (
    ENCRYPTION_KEY_ENV,
    EnvironmentCredentialKeySource,
    StaticCredentialKeySource,
)

__all__ = [
    "ENCRYPTION_KEY_ENV",
    "IV_LENGTH",
    "KEY_LENGTH",
    "PBKDF2_ITERATIONS",
    "SALT_LENGTH",
    "TAG_LENGTH",
    "AesGcmCredentialCipher",
    "EnvironmentCredentialKeySource",
    "StaticCredentialKeySource",
    "decrypt",
    "encrypt",
    "generate_key_material",
    "get_default_cipher",
]
