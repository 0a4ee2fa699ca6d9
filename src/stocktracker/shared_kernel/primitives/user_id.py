from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class UserId:
    """
    UserId — UUID identifier of an account, shared by users and credential records.

    Related:
      - src/stocktracker/contexts/identity/domain/entities/user.py
      - src/stocktracker/contexts/identity/domain/entities/brokerage_credential.py
      - src/stocktracker/contexts/identity/application/ports/jwt_codec.py
    """

    value: UUID

    def __post_init__(self) -> None:
        """
        Validate wrapped value type.

        Raises:
            ValueError: If `value` is not a `uuid.UUID`.
        """
        if not isinstance(self.value, UUID):
            raise ValueError(f"UserId requires UUID value, got {self.value!r}")

    @classmethod
    def from_string(cls, raw_value: str) -> UserId:
        """
        Parse identifier from canonical UUID text.

        Args:
            raw_value: UUID string, surrounding whitespace is ignored.
        Returns:
            UserId: Parsed identifier.
        Raises:
            ValueError: If text is blank or not a UUID.
        """
        stripped = raw_value.strip()
        if not stripped:
            raise ValueError("UserId.from_string requires non-empty value")
        return cls(UUID(stripped))

    @classmethod
    def generate(cls) -> UserId:
        """Return a new random (UUID4) identifier."""
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)
