from __future__ import annotations

import pytest

from stocktracker.contexts.identity.domain.value_objects import EncryptionKeyMaterial


def test_encryption_key_material_parses_hex_in_either_case() -> None:
    lower = EncryptionKeyMaterial.from_hex("ab" * 32)
    upper = EncryptionKeyMaterial.from_hex("AB" * 32)

    assert lower == upper
    assert lower.value == b"\xab" * 32


def test_encryption_key_material_strips_surrounding_whitespace() -> None:
    assert EncryptionKeyMaterial.from_hex(f"  {'01' * 32}\n").value == b"\x01" * 32


@pytest.mark.parametrize(
    ("raw_value", "message"),
    [
        ("", "empty"),
        ("xyz", "hex string"),
        ("0" * 63, "hex string"),
        ("00" * 16, "32 bytes"),
    ],
)
def test_encryption_key_material_rejects_invalid_values(raw_value: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        EncryptionKeyMaterial.from_hex(raw_value)


def test_encryption_key_material_repr_is_redacted() -> None:
    material = EncryptionKeyMaterial.from_hex("cd" * 32)

    assert repr(material) == "EncryptionKeyMaterial(<redacted>)"
    assert "cd" not in repr(material)
