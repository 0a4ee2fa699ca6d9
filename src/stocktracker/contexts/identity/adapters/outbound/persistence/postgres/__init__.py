from .brokerage_credentials_repository import PostgresIdentityBrokerageCredentialsRepository
from .gateway import IdentityPostgresGateway, PsycopgIdentityPostgresGateway
from .user_repository import PostgresIdentityUserRepository

__all__ = [
    "IdentityPostgresGateway",
    "PostgresIdentityBrokerageCredentialsRepository",
    "PostgresIdentityUserRepository",
    "PsycopgIdentityPostgresGateway",
]
