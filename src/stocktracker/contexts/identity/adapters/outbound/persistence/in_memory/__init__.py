from .brokerage_credentials_repository import InMemoryIdentityBrokerageCredentialsRepository
from .user_repository import InMemoryIdentityUserRepository

__all__ = [
    "InMemoryIdentityBrokerageCredentialsRepository",
    "InMemoryIdentityUserRepository",
]
