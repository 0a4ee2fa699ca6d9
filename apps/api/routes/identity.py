"""
Identity API routes.
"""

from __future__ import annotations

from fastapi import APIRouter

from stocktracker.contexts.identity.adapters.inbound.api.deps import (
    RequireCurrentUserDependency,
)
from stocktracker.contexts.identity.adapters.inbound.api.routes import (
    build_auth_router,
    build_brokerage_credentials_router,
)
from stocktracker.contexts.identity.application.use_cases import (
    DeleteBrokerageCredentialUseCase,
    GetBrokerageCredentialUseCase,
    GetDecryptedBrokerageCredentialUseCase,
    GetUserProfileUseCase,
    LoginUserUseCase,
    MarkBrokerageCredentialAuthenticatedUseCase,
    RegisterUserUseCase,
    StoreBrokerageCredentialUseCase,
    UpdateUserProfileUseCase,
)


def build_identity_router(
    *,
    register_user: RegisterUserUseCase,
    login_user: LoginUserUseCase,
    get_user_profile: GetUserProfileUseCase,
    update_user_profile: UpdateUserProfileUseCase,
    store_brokerage_credential: StoreBrokerageCredentialUseCase,
    get_brokerage_credential: GetBrokerageCredentialUseCase,
    get_decrypted_brokerage_credential: GetDecryptedBrokerageCredentialUseCase,
    mark_brokerage_credential_authenticated: MarkBrokerageCredentialAuthenticatedUseCase,
    delete_brokerage_credential: DeleteBrokerageCredentialUseCase,
    current_user_dependency: RequireCurrentUserDependency,
) -> APIRouter:
    """
    Build identity router facade for FastAPI app composition root.

    Related:
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/auth.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/routes/brokerage_credentials.py
      - apps/api/wiring/modules/identity.py

    Args:
        register_user: Registration use-case.
        login_user: Login use-case.
        get_user_profile: Profile read use-case.
        update_user_profile: Profile update use-case.
        store_brokerage_credential: Credential encrypt-and-store use-case.
        get_brokerage_credential: Credential view use-case.
        get_decrypted_brokerage_credential: Credential decrypt use-case.
        mark_brokerage_credential_authenticated: Authentication timestamp use-case.
        delete_brokerage_credential: Credential delete use-case.
        current_user_dependency: FastAPI dependency resolving authenticated principal.
    Returns:
        APIRouter: Router with `/api/auth` and `/api/webull` endpoints.
    Assumptions:
        All use-cases share one set of repositories.
    Raises:
        ValueError: If a nested router rejects its dependencies.
    Side Effects:
        None.
    """
    router = APIRouter()
    router.include_router(
        build_auth_router(
            register_use_case=register_user,
            login_use_case=login_user,
            profile_use_case=get_user_profile,
            update_profile_use_case=update_user_profile,
            current_user_dependency=current_user_dependency,
        )
    )
    router.include_router(
        build_brokerage_credentials_router(
            store_use_case=store_brokerage_credential,
            get_use_case=get_brokerage_credential,
            get_decrypted_use_case=get_decrypted_brokerage_credential,
            mark_authenticated_use_case=mark_brokerage_credential_authenticated,
            delete_use_case=delete_brokerage_credential,
            current_user_dependency=current_user_dependency,
        )
    )
    return router
