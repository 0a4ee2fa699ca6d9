from .credential_cipher import (
    AesGcmCredentialCipher,
    EnvironmentCredentialKeySource,
    StaticCredentialKeySource,
)
from .current_user import JwtBearerCurrentUser
from .jwt import Hs256JwtCodec
from .password import BcryptPasswordHasher

__all__ = [
    "AesGcmCredentialCipher",
    "BcryptPasswordHasher",
    "EnvironmentCredentialKeySource",
    "Hs256JwtCodec",
    "JwtBearerCurrentUser",
    "StaticCredentialKeySource",
]
