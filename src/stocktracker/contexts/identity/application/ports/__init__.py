from .brokerage_credentials_repository import BrokerageCredentialsRepository
from .clock import IdentityClock
from .credential_cipher import (
    AuthenticationFailure,
    ConfigurationError,
    CredentialCipher,
    CredentialCipherError,
    CredentialKeySource,
    DecryptionError,
    EncryptionError,
    InvalidTokenFormat,
)
from .current_user import CurrentUser, CurrentUserPrincipal, CurrentUserUnauthorizedError
from .jwt_codec import IdentityJwtClaims, JwtCodec, JwtDecodeError
from .password_hasher import PasswordHasher
from .user_repository import UserRepository

__all__ = [
    "AuthenticationFailure",
    "BrokerageCredentialsRepository",
    "ConfigurationError",
    "CredentialCipher",
    "CredentialCipherError",
    "CredentialKeySource",
    "CurrentUser",
    "CurrentUserPrincipal",
    "CurrentUserUnauthorizedError",
    "DecryptionError",
    "EncryptionError",
    "IdentityClock",
    "IdentityJwtClaims",
    "InvalidTokenFormat",
    "JwtCodec",
    "JwtDecodeError",
    "PasswordHasher",
    "UserRepository",
]
