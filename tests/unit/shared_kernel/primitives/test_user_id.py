from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from stocktracker.shared_kernel.primitives import UserId


def test_user_id_from_string_parses_uuid() -> None:
    """
    Verify UserId parses canonical UUID text, ignoring surrounding whitespace.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        UUID string is valid.
    Raises:
        AssertionError: If parsing fails unexpectedly.
    Side Effects:
        None.
    """
    raw = str(uuid4())

    user_id = UserId.from_string(f" {raw} ")

    assert str(user_id) == raw
    assert user_id == UserId(UUID(raw))


@pytest.mark.parametrize("raw_value", [" ", "not-a-uuid"])
def test_user_id_from_string_rejects_invalid_value(raw_value: str) -> None:
    with pytest.raises(ValueError):
        UserId.from_string(raw_value)


def test_user_id_requires_uuid_instance_and_generates_unique_values() -> None:
    with pytest.raises(ValueError, match="requires UUID value"):
        UserId("00000000-0000-0000-0000-000000000001")  # type: ignore[arg-type]

    assert UserId.generate() != UserId.generate()
