"""
Adapters package for identity bounded context.
"""

from .inbound import (
    RequireCurrentUserDependency,
    build_auth_router,
    build_brokerage_credentials_router,
)
from .outbound import (
    AesGcmCredentialCipher,
    BcryptPasswordHasher,
    EnvironmentCredentialKeySource,
    Hs256JwtCodec,
    InMemoryIdentityBrokerageCredentialsRepository,
    InMemoryIdentityUserRepository,
    JwtBearerCurrentUser,
    PostgresIdentityBrokerageCredentialsRepository,
    PostgresIdentityUserRepository,
    PsycopgIdentityPostgresGateway,
    SystemIdentityClock,
)

__all__ = [
    "AesGcmCredentialCipher",
    "BcryptPasswordHasher",
    "EnvironmentCredentialKeySource",
    "Hs256JwtCodec",
    "InMemoryIdentityBrokerageCredentialsRepository",
    "InMemoryIdentityUserRepository",
    "JwtBearerCurrentUser",
    "PostgresIdentityBrokerageCredentialsRepository",
    "PostgresIdentityUserRepository",
    "PsycopgIdentityPostgresGateway",
    "RequireCurrentUserDependency",
    "SystemIdentityClock",
    "build_auth_router",
    "build_brokerage_credentials_router",
]
