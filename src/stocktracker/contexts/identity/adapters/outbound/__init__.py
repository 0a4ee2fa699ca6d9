from .persistence import (
    IdentityPostgresGateway,
    InMemoryIdentityBrokerageCredentialsRepository,
    InMemoryIdentityUserRepository,
    PostgresIdentityBrokerageCredentialsRepository,
    PostgresIdentityUserRepository,
    PsycopgIdentityPostgresGateway,
)
from .security import (
    AesGcmCredentialCipher,
    BcryptPasswordHasher,
    EnvironmentCredentialKeySource,
    Hs256JwtCodec,
    JwtBearerCurrentUser,
    StaticCredentialKeySource,
)
from .time import SystemIdentityClock

__all__ = [
    "AesGcmCredentialCipher",
    "BcryptPasswordHasher",
    "EnvironmentCredentialKeySource",
    "Hs256JwtCodec",
    "IdentityPostgresGateway",
    "InMemoryIdentityBrokerageCredentialsRepository",
    "InMemoryIdentityUserRepository",
    "JwtBearerCurrentUser",
    "PostgresIdentityBrokerageCredentialsRepository",
    "PostgresIdentityUserRepository",
    "PsycopgIdentityPostgresGateway",
    "StaticCredentialKeySource",
    "SystemIdentityClock",
]
