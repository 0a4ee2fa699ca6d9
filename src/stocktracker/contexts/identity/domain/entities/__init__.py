from .brokerage_credential import BrokerageCredential
from .user import User

__all__ = [
    "BrokerageCredential",
    "User",
]
