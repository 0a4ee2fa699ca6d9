from __future__ import annotations

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.application.ports.credential_cipher import CredentialCipher
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    DecryptedBrokerageCredential,
)
from stocktracker.shared_kernel.primitives import UserId


class GetDecryptedBrokerageCredentialUseCase:
    """
    GetDecryptedBrokerageCredentialUseCase — plaintext credential for in-process brokerage
    clients.

    Related:
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    def __init__(
        self,
        *,
        repository: BrokerageCredentialsRepository,
        cipher: CredentialCipher,
    ) -> None:
        if repository is None:  # type: ignore[truthy-bool]
            raise ValueError("GetDecryptedBrokerageCredentialUseCase requires repository")
        if cipher is None:  # type: ignore[truthy-bool]
            raise ValueError("GetDecryptedBrokerageCredentialUseCase requires cipher")
        self._repository = repository
        self._cipher = cipher

    def get(self, *, user_id: UserId) -> DecryptedBrokerageCredential | None:
        """
        Load and decrypt the user's credential.

        Args:
            user_id: Owner identity user id.
        Returns:
            DecryptedBrokerageCredential | None: Plaintext pair, or `None` when absent.
        Assumptions:
            Result is kept in memory only by the caller.
        Raises:
            ConfigurationError: If cipher key material is missing.
            DecryptionError: If stored token is malformed or fails authentication.
        Side Effects:
            Reads credential storage.
        """
        credential = self._repository.find_by_user_id(user_id=user_id)
        if credential is None:
            return None
        return DecryptedBrokerageCredential(
            login=credential.login,
            password=self._cipher.decrypt(token=credential.password_enc),
            mfa_enabled=credential.mfa_enabled,
        )
