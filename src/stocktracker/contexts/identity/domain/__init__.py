from .entities import BrokerageCredential, User
from .value_objects import ENCRYPTION_KEY_MATERIAL_LENGTH, EncryptionKeyMaterial

__all__ = [
    "BrokerageCredential",
    "ENCRYPTION_KEY_MATERIAL_LENGTH",
    "EncryptionKeyMaterial",
    "User",
]
