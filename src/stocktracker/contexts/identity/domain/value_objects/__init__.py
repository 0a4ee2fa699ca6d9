from .encryption_key_material import ENCRYPTION_KEY_MATERIAL_LENGTH, EncryptionKeyMaterial

__all__ = [
    "ENCRYPTION_KEY_MATERIAL_LENGTH",
    "EncryptionKeyMaterial",
]
