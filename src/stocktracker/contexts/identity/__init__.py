from .application import (
    AuthResult,
    BrokerageCredentialsRepository,
    CredentialCipher,
    CredentialCipherError,
    CurrentUser,
    CurrentUserPrincipal,
    CurrentUserUnauthorizedError,
    DecryptionError,
    IdentityClock,
    IdentityJwtClaims,
    IdentityOperationError,
    JwtCodec,
    JwtDecodeError,
    LoginUserUseCase,
    PasswordHasher,
    RegisterUserUseCase,
    StoreBrokerageCredentialUseCase,
    UserRepository,
)
from .domain import BrokerageCredential, EncryptionKeyMaterial, User

__all__ = [
    "AuthResult",
    "BrokerageCredential",
    "BrokerageCredentialsRepository",
    "CredentialCipher",
    "CredentialCipherError",
    "CurrentUser",
    "CurrentUserPrincipal",
    "CurrentUserUnauthorizedError",
    "DecryptionError",
    "EncryptionKeyMaterial",
    "IdentityClock",
    "IdentityJwtClaims",
    "IdentityOperationError",
    "JwtCodec",
    "JwtDecodeError",
    "LoginUserUseCase",
    "PasswordHasher",
    "RegisterUserUseCase",
    "StoreBrokerageCredentialUseCase",
    "User",
    "UserRepository",
]
