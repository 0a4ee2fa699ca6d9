from .ports import (
    BrokerageCredentialsRepository,
    CredentialCipher,
    CredentialCipherError,
    CurrentUser,
    CurrentUserPrincipal,
    CurrentUserUnauthorizedError,
    DecryptionError,
    IdentityClock,
    IdentityJwtClaims,
    JwtCodec,
    JwtDecodeError,
    PasswordHasher,
    UserRepository,
)
from .use_cases import (
    AuthResult,
    IdentityOperationError,
    LoginUserUseCase,
    RegisterUserUseCase,
    StoreBrokerageCredentialUseCase,
)

__all__ = [
    "AuthResult",
    "BrokerageCredentialsRepository",
    "CredentialCipher",
    "CredentialCipherError",
    "CurrentUser",
    "CurrentUserPrincipal",
    "CurrentUserUnauthorizedError",
    "DecryptionError",
    "IdentityClock",
    "IdentityJwtClaims",
    "IdentityOperationError",
    "JwtCodec",
    "JwtDecodeError",
    "LoginUserUseCase",
    "PasswordHasher",
    "RegisterUserUseCase",
    "StoreBrokerageCredentialUseCase",
    "UserRepository",
]
