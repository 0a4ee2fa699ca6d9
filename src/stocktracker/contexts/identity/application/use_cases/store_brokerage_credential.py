from __future__ import annotations

import logging
from uuid import uuid4

from stocktracker.contexts.identity.application.ports.brokerage_credentials_repository import (
    BrokerageCredentialsRepository,
)
from stocktracker.contexts.identity.application.ports.clock import IdentityClock
from stocktracker.contexts.identity.application.ports.credential_cipher import CredentialCipher
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    IdentityValidationError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    BrokerageCredentialView,
    to_brokerage_credential_view,
)
from stocktracker.contexts.identity.application.use_cases.identity_validation import (
    ensure_utc_datetime,
)
from stocktracker.contexts.identity.domain.entities import BrokerageCredential
from stocktracker.shared_kernel.primitives import UserId

log = logging.getLogger(__name__)


class StoreBrokerageCredentialUseCase:
    """
    StoreBrokerageCredentialUseCase — encrypt brokerage password and upsert the user's
    single credential record.

    Related:
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - src/stocktracker/contexts/identity/application/ports/brokerage_credentials_repository.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
    """

    def __init__(
        self,
        *,
        repository: BrokerageCredentialsRepository,
        cipher: CredentialCipher,
        clock: IdentityClock,
    ) -> None:
        """
        Initialize use-case dependencies for storage, encryption, and time.

        Args:
            repository: Credential storage port.
            cipher: Authenticated at-rest cipher.
            clock: UTC clock port for timestamps.
        Returns:
            None.
        Assumptions:
            Dependencies are initialized and non-null.
        Raises:
            ValueError: If any dependency is missing.
        Side Effects:
            None.
        """
        if repository is None:  # type: ignore[truthy-bool]
            raise ValueError("StoreBrokerageCredentialUseCase requires repository")
        if cipher is None:  # type: ignore[truthy-bool]
            raise ValueError("StoreBrokerageCredentialUseCase requires cipher")
        if clock is None:  # type: ignore[truthy-bool]
            raise ValueError("StoreBrokerageCredentialUseCase requires clock")

        self._repository = repository
        self._cipher = cipher
        self._clock = clock

    def store(
        self,
        *,
        user_id: UserId,
        login: str,
        password: str,
        mfa_enabled: bool = False,
    ) -> BrokerageCredentialView:
        """
        Validate input, encrypt password, and persist credential.

        Args:
            user_id: Owner identity user id.
            login: Webull email or phone.
            password: Plaintext Webull password.
            mfa_enabled: Whether the brokerage account uses MFA.
        Returns:
            BrokerageCredentialView: Stored credential without password.
        Assumptions:
            Plaintext is encrypted before any storage call and never logged.
        Raises:
            IdentityValidationError: If login or password is empty.
            ConfigurationError: If cipher key material is missing.
            EncryptionError: If encryption fails.
        Side Effects:
            Writes one credential row.
        """
        normalized_login = login.strip()
        if not normalized_login:
            raise IdentityValidationError(message="Webull email or phone is required")
        if not password:
            raise IdentityValidationError(message="Webull password is required")

        password_enc = self._cipher.encrypt(plaintext=password)
        now = ensure_utc_datetime(value=self._clock.now(), field_name="clock.now")
        stored = self._repository.upsert(
            credential=BrokerageCredential(
                credential_id=uuid4(),
                user_id=user_id,
                login=normalized_login,
                password_enc=password_enc,
                mfa_enabled=bool(mfa_enabled),
                created_at=now,
                updated_at=now,
            )
        )
        log.info("brokerage credential stored: user_id=%s", user_id)
        return to_brokerage_credential_view(credential=stored)
