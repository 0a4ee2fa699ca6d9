from __future__ import annotations

from datetime import datetime, timezone

from stocktracker.contexts.identity.application.ports.clock import IdentityClock


class SystemIdentityClock(IdentityClock):
    """
    SystemIdentityClock — `IdentityClock` backed by system UTC time.

    Related:
      - src/stocktracker/contexts/identity/application/ports/clock.py
      - apps/api/wiring/modules/identity.py
    """

    def now(self) -> datetime:
        """Return current timezone-aware UTC datetime."""
        return datetime.now(timezone.utc)
