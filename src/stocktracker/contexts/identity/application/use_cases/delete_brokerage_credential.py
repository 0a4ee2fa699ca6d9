from __future__ import annotations

import logging

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    BrokerageCredentialNotFoundError,
)
from stocktracker.shared_kernel.primitives import UserId

log = logging.getLogger(__name__)


class DeleteBrokerageCredentialUseCase:
    """
    DeleteBrokerageCredentialUseCase — hard-delete the user's stored credential.

    Related:
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    def __init__(self, *, repository: BrokerageCredentialsRepository) -> None:
        if repository is None:  # type: ignore[truthy-bool]
            raise ValueError("DeleteBrokerageCredentialUseCase requires repository")
        self._repository = repository

    def delete(self, *, user_id: UserId) -> None:
        """
        Delete credential row.

        Args:
            user_id: Owner identity user id.
        Returns:
            None.
        Assumptions:
            Deletion is permanent; the encrypted token is not retained.
        Raises:
            BrokerageCredentialNotFoundError: If nothing was stored.
        Side Effects:
            Deletes one credential row.
        """
        if not self._repository.delete(user_id=user_id):
            raise BrokerageCredentialNotFoundError(message="No credentials found to delete")
        log.info("brokerage credential deleted: user_id=%s", user_id)
