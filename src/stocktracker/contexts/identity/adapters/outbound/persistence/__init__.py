from .in_memory import (
    InMemoryIdentityBrokerageCredentialsRepository,
    InMemoryIdentityUserRepository,
)
from .postgres import (
    IdentityPostgresGateway,
    PostgresIdentityBrokerageCredentialsRepository,
    PostgresIdentityUserRepository,
    PsycopgIdentityPostgresGateway,
)

__all__ = [
    "IdentityPostgresGateway",
    "InMemoryIdentityBrokerageCredentialsRepository",
    "InMemoryIdentityUserRepository",
    "PostgresIdentityBrokerageCredentialsRepository",
    "PostgresIdentityUserRepository",
    "PsycopgIdentityPostgresGateway",
]
