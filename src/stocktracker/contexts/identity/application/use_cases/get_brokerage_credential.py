from __future__ import annotations

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    BrokerageCredentialNotFoundError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    BrokerageCredentialView,
    to_brokerage_credential_view,
)
from stocktracker.shared_kernel.primitives import UserId


class GetBrokerageCredentialUseCase:
    """
    GetBrokerageCredentialUseCase — read non-secret view of the user's credential.

    Related:
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    def __init__(self, *, repository: BrokerageCredentialsRepository) -> None:
        if repository is None:  # type: ignore[truthy-bool]
            raise ValueError("GetBrokerageCredentialUseCase requires repository")
        self._repository = repository

    def get(self, *, user_id: UserId) -> BrokerageCredentialView:
        """
        Return credential view.

        Raises:
            BrokerageCredentialNotFoundError: If the user has no stored credential.
        """
        credential = self._repository.find_by_user_id(user_id=user_id)
        if credential is None:
            raise BrokerageCredentialNotFoundError()
        return to_brokerage_credential_view(credential=credential)

    def has(self, *, user_id: UserId) -> bool:
        return self._repository.exists(user_id=user_id)
