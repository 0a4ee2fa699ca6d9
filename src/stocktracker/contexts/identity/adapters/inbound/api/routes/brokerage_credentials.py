from __future__ import annotations

import logging
from datetime import datetime
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from stocktracker.contexts.identity.adapters.inbound.api.deps.current_user import (
    RequireCurrentUserDependency,
)
from stocktracker.contexts.identity.application.ports.credential_cipher import (
    CredentialCipherError,
)
from stocktracker.contexts.identity.application.ports.current_user import CurrentUserPrincipal
from stocktracker.contexts.identity.application.use_cases.delete_brokerage_credential import (
    DeleteBrokerageCredentialUseCase,
)
from stocktracker.contexts.identity.application.use_cases.get_brokerage_credential import (
    GetBrokerageCredentialUseCase,
)
from stocktracker.contexts.identity.application.use_cases.get_decrypted_brokerage_credential import (
    GetDecryptedBrokerageCredentialUseCase,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    BrokerageCredentialNotFoundError,
    IdentityOperationError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    BrokerageCredentialView,
)
from stocktracker.contexts.identity.application.use_cases.mark_brokerage_credential_authenticated import (
    MarkBrokerageCredentialAuthenticatedUseCase,
)
from stocktracker.contexts.identity.application.use_cases.store_brokerage_credential import (
    StoreBrokerageCredentialUseCase,
)

log = logging.getLogger(__name__)

CREDENTIAL_UNAVAILABLE_PAYLOAD: dict[str, str] = {
    "error": "credential_unavailable",
    "message": "Stored credentials could not be processed",
}


class StoreBrokerageCredentialRequest(BaseModel):
    """
    StoreBrokerageCredentialRequest — payload for `POST /api/webull/credentials`.

    Web client sends camelCase keys; snake_case field names are accepted as well.
    """

    model_config = ConfigDict(populate_by_name=True)

    webull_email_or_phone: str = Field(alias="webullEmailOrPhone")
    webull_password: str = Field(alias="webullPassword")
    mfa_enabled: bool = Field(default=False, alias="mfaEnabled")


class BrokerageCredentialResponse(BaseModel):
    """
    BrokerageCredentialResponse — credential projection without password or token.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/identity_models.py
    """

    id: str
    webull_email_or_phone: str
    mfa_enabled: bool
    last_authenticated: datetime | None


class StoredBrokerageCredentialResponse(BaseModel):
    message: str
    credential: BrokerageCredentialResponse


class BrokerageCredentialEnvelopeResponse(BaseModel):
    credential: BrokerageCredentialResponse


class MessageResponse(BaseModel):
    message: str


class BrokerageAuthTestResponse(BaseModel):
    message: str
    last_authenticated: datetime | None


def build_brokerage_credentials_router(
    *,
    store_use_case: StoreBrokerageCredentialUseCase,
    get_use_case: GetBrokerageCredentialUseCase,
    get_decrypted_use_case: GetDecryptedBrokerageCredentialUseCase,
    mark_authenticated_use_case: MarkBrokerageCredentialAuthenticatedUseCase,
    delete_use_case: DeleteBrokerageCredentialUseCase,
    current_user_dependency: RequireCurrentUserDependency,
) -> APIRouter:
    """
    Build router exposing Webull credential endpoints under `/api/webull`.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/store_brokerage_credential.py
      - src/stocktracker/contexts/identity/application/ports/credential_cipher.py
      - apps/api/routes/identity.py

    Args:
        store_use_case: Encrypt-and-upsert use-case.
        get_use_case: Non-secret view use-case.
        get_decrypted_use_case: Plaintext credential use-case.
        mark_authenticated_use_case: Authentication timestamp use-case.
        delete_use_case: Hard-delete use-case.
        current_user_dependency: Bearer-token principal resolver.
    Returns:
        APIRouter: Configured credentials router.
    Assumptions:
        Cipher failures of any category map to one opaque 500 payload.
    Raises:
        ValueError: If required dependencies are missing.
    Side Effects:
        None.
    """
    if store_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_brokerage_credentials_router requires store_use_case")
    if get_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_brokerage_credentials_router requires get_use_case")
    if get_decrypted_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_brokerage_credentials_router requires get_decrypted_use_case")
    if mark_authenticated_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError(
            "build_brokerage_credentials_router requires mark_authenticated_use_case"
        )
    if delete_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_brokerage_credentials_router requires delete_use_case")
    if current_user_dependency is None:  # type: ignore[truthy-bool]
        raise ValueError("build_brokerage_credentials_router requires current_user_dependency")

    router = APIRouter(prefix="/api/webull", tags=["identity"])

    @router.post("/credentials", response_model=StoredBrokerageCredentialResponse)
    def post_credentials(
        request: StoreBrokerageCredentialRequest,
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> StoredBrokerageCredentialResponse:
        """
        Encrypt and store Webull credential of current user.

        Args:
            request: Credential payload with plaintext password.
            principal: Authenticated principal.
        Returns:
            StoredBrokerageCredentialResponse: Stored credential without password.
        Assumptions:
            Existing credential is replaced.
        Raises:
            HTTPException: 422 for empty fields, opaque 500 for cipher failures.
        Side Effects:
            Writes one credential row.
        """
        try:
            view = store_use_case.store(
                user_id=principal.user_id,
                login=request.webull_email_or_phone,
                password=request.webull_password,
                mfa_enabled=request.mfa_enabled,
            )
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        except CredentialCipherError as error:
            _raise_credential_unavailable(error=error)
        return StoredBrokerageCredentialResponse(
            message="Webull credentials stored successfully",
            credential=_to_credential_response(view=view),
        )

    @router.get("/credentials", response_model=BrokerageCredentialEnvelopeResponse)
    def get_credentials(
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> BrokerageCredentialEnvelopeResponse:
        try:
            view = get_use_case.get(user_id=principal.user_id)
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return BrokerageCredentialEnvelopeResponse(credential=_to_credential_response(view=view))

    @router.delete("/credentials", response_model=MessageResponse)
    def delete_credentials(
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> MessageResponse:
        try:
            delete_use_case.delete(user_id=principal.user_id)
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return MessageResponse(message="Webull credentials deleted successfully")

    @router.post("/test-auth", response_model=BrokerageAuthTestResponse)
    def post_test_auth(
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> BrokerageAuthTestResponse:
        """
        Check that the stored credential decrypts and stamp authentication time.

        Args:
            principal: Authenticated principal.
        Returns:
            BrokerageAuthTestResponse: Confirmation with new `last_authenticated`.
        Assumptions:
            No call to Webull is made; a verifiable decrypt is the success criterion.
        Raises:
            HTTPException: 404 without credential, opaque 500 for cipher failures.
        Side Effects:
            Updates one credential row.
        """
        try:
            decrypted = get_decrypted_use_case.get(user_id=principal.user_id)
            if decrypted is None:
                raise BrokerageCredentialNotFoundError()
            view = mark_authenticated_use_case.mark(user_id=principal.user_id)
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        except CredentialCipherError as error:
            _raise_credential_unavailable(error=error)
        return BrokerageAuthTestResponse(
            message="Webull authentication successful",
            last_authenticated=view.last_authenticated_at,
        )

    return router


def _raise_credential_unavailable(*, error: CredentialCipherError) -> NoReturn:
    log.error("brokerage credential cipher failure: %s", error.code)
    raise HTTPException(status_code=500, detail=dict(CREDENTIAL_UNAVAILABLE_PAYLOAD)) from error


def _to_credential_response(*, view: BrokerageCredentialView) -> BrokerageCredentialResponse:
    return BrokerageCredentialResponse(
        id=str(view.credential_id),
        webull_email_or_phone=view.login,
        mfa_enabled=view.mfa_enabled,
        last_authenticated=view.last_authenticated_at,
    )
