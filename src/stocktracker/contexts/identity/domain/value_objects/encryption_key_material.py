from __future__ import annotations

import re
from dataclasses import dataclass

ENCRYPTION_KEY_MATERIAL_LENGTH = 32
_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


@dataclass(frozen=True, slots=True, repr=False)
class EncryptionKeyMaterial:
    """
    EncryptionKeyMaterial — 32-byte PBKDF2 base secret of the credential cipher.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        key_material_source.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/credential_cipher/
        aes_gcm_credential_cipher.py
    """

    value: bytes

    def __post_init__(self) -> None:
        """
        Validate key length.

        Raises:
            ValueError: If value is not exactly 32 bytes.
        """
        if not isinstance(self.value, bytes):
            raise ValueError("EncryptionKeyMaterial.value must be bytes")
        if len(self.value) != ENCRYPTION_KEY_MATERIAL_LENGTH:
            raise ValueError(
                f"EncryptionKeyMaterial must be {ENCRYPTION_KEY_MATERIAL_LENGTH} bytes, "
                f"got {len(self.value)}"
            )

    @classmethod
    def from_hex(cls, raw_value: str) -> EncryptionKeyMaterial:
        """
        Parse key material from its 64-character hex representation.

        Args:
            raw_value: Hex string, surrounding whitespace is ignored.
        Returns:
            EncryptionKeyMaterial: Parsed key material.
        Assumptions:
            Hex digits may use either case; no separators are accepted.
        Raises:
            ValueError: If value is blank, not hex, or does not decode to 32 bytes.
                Error text never echoes the value.
        Side Effects:
            None.
        """
        normalized = raw_value.strip()
        if not normalized:
            raise ValueError("Encryption key material is empty")
        if len(normalized) % 2 != 0 or _HEX_PATTERN.fullmatch(normalized) is None:
            raise ValueError("Encryption key material must be a hex string")
        return cls(bytes.fromhex(normalized))

    def __repr__(self) -> str:
        return "EncryptionKeyMaterial(<redacted>)"
