from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True, slots=True)
class StockTrackerError(Exception):
    """
    StockTrackerError — platform error contract rendered by API exception handlers.

    Related:
      - apps/api/common/errors.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
    """

    code: str
    message: str
    details: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        """
        Normalize code/message and freeze details into plain JSON-compatible values.

        Raises:
            ValueError: If `code` or `message` is blank.
            TypeError: If `details` is provided but is not a mapping.
        """
        code = self.code.strip()
        message = self.message.strip()
        if not code:
            raise ValueError("StockTrackerError.code must be non-empty")
        if not message:
            raise ValueError("StockTrackerError.message must be non-empty")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)

        if self.details is None:
            return
        if not isinstance(self.details, Mapping):
            raise TypeError("StockTrackerError.details must be a mapping when provided")
        object.__setattr__(self, "details", _to_plain(value=dict(self.details)))

    def to_payload(self) -> dict[str, Any]:
        """Return `{"error": {"code", "message", "details"}}` payload."""
        details: Mapping[str, Any] = self.details if self.details is not None else {}
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(details),
            }
        }


def _to_plain(*, value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            str(key): _to_plain(value=item)
            for key, item in sorted(value.items(), key=lambda pair: str(pair[0]))
        }
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_to_plain(value=item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)
