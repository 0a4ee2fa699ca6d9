from __future__ import annotations

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    BrokerageCredentialNotFoundError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    BrokerageCredentialView,
    to_brokerage_credential_view,
)
from stocktracker.contexts.identity.application.use_cases.identity_validation import (
    ensure_utc_datetime,
)
from stocktracker.shared_kernel.primitives import UserId


class MarkBrokerageCredentialAuthenticatedUseCase:
    """Stamp `last_authenticated_at` of the user's credential with current UTC time."""

    def __init__(
        self,
        *,
        repository: BrokerageCredentialsRepository,
        clock: IdentityClock,
    ) -> None:
        if repository is None:  # type: ignore[truthy-bool]
            raise ValueError("MarkBrokerageCredentialAuthenticatedUseCase requires repository")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("MarkBrokerageCredentialAuthenticatedUseCase requires clock")
        self._repository = repository
        self._clock = clock

    def mark(self, *, user_id: UserId) -> BrokerageCredentialView:
        now = ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        updated = self._repository.mark_authenticated(user_id=user_id, authenticated_at=now)
        if updated is None:
            raise BrokerageCredentialNotFoundError()
        return to_brokerage_credential_view(credential=updated)
