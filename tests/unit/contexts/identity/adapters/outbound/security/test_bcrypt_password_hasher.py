from __future__ import annotations

import pytest

from stocktracker.contexts.identity.adapters.outbound.security.password import (
    BcryptPasswordHasher,
)


def test_bcrypt_hasher_verifies_matching_password() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    password_hash = hasher.hash_password(password="correct horse")

    assert password_hash.startswith("$2")
    assert password_hash != "correct horse"
    assert hasher.verify_password(password="correct horse", password_hash=password_hash)
    assert not hasher.verify_password(password="wrong horse", password_hash=password_hash)


def test_bcrypt_hasher_salts_every_hash() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.hash_password(password="same") != hasher.hash_password(password="same")


def test_bcrypt_hasher_truncates_input_past_72_bytes() -> None:
    """
    Verify passwords sharing the first 72 bytes verify against each other.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Truncation is explicit so newer bcrypt releases do not raise on long input.
    Raises:
        AssertionError: If long passwords fail to hash or verify.
    Side Effects:
        None.
    """
    hasher = BcryptPasswordHasher(rounds=4)
    prefix = "p" * 72

    password_hash = hasher.hash_password(password=f"{prefix}-tail-one")

    assert hasher.verify_password(password=f"{prefix}-tail-two", password_hash=password_hash)


@pytest.mark.parametrize(
    ("password", "password_hash"),
    [
        ("", "$2b$04$abcdefghijklmnopqrstuu5lUKLWS0G6T9M1xN7k9pAFA3mE2X5iG"),
        ("secret", ""),
        ("secret", "not-a-bcrypt-hash"),
    ],
)
def test_bcrypt_hasher_returns_false_for_unverifiable_input(
    password: str,
    password_hash: str,
) -> None:
    assert not BcryptPasswordHasher(rounds=4).verify_password(
        password=password,
        password_hash=password_hash,
    )


def test_bcrypt_hasher_validates_rounds_and_empty_password() -> None:
    with pytest.raises(ValueError, match="rounds must be within"):
        BcryptPasswordHasher(rounds=3)
    with pytest.raises(ValueError, match="non-empty password"):
        BcryptPasswordHasher(rounds=4).hash_password(password="")
