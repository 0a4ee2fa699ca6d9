from __future__ import annotations

from datetime import datetime
from typing import Protocol


class IdentityClock(Protocol):
    """
    IdentityClock — current-time port for identity use-cases and JWT expiry checks.

    Related:
      - src/stocktracker/contexts/identity/adapters/outbound/time/system_identity_clock.py
      - src/stocktracker/contexts/identity/adapters/outbound/security/jwt/hs256_jwt_codec.py
    """

    def now(self) -> datetime:
        """Return current timezone-aware UTC datetime."""
        ...
