from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from stocktracker.contexts.identity.adapters.inbound.api.deps.current_user import (
    RequireCurrentUserDependency,
)
from stocktracker.contexts.identity.application.ports.current_user import CurrentUserPrincipal
from stocktracker.contexts.identity.application.use_cases.get_user_profile import (
    GetUserProfileUseCase,
)
from stocktracker.contexts.identity.application.use_cases.identity_errors import (
    IdentityOperationError,
)
from stocktracker.contexts.identity.application.use_cases.identity_models import (
    AuthResult,
    UserView,
)
from stocktracker.contexts.identity.application.use_cases.login_user import LoginUserUseCase
from stocktracker.contexts.identity.application.use_cases.register_user import (
    RegisterUserUseCase,
)
from stocktracker.contexts.identity.application.use_cases.update_user_profile import (
    UpdateUserProfileUseCase,
)


class RegisterRequest(BaseModel):
    """RegisterRequest — payload for `POST /api/auth/register`."""

    email: str
    username: str
    password: str


class LoginRequest(BaseModel):
    """LoginRequest — payload for `POST /api/auth/login`."""

    email: str
    password: str


class UpdateProfileRequest(BaseModel):
    """UpdateProfileRequest — partial payload for `PUT /api/auth/profile`."""

    email: str | None = None
    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: str
    email: str
    username: str
    created_at: datetime


class AuthResponse(BaseModel):
    """
    AuthResponse — register/login response with bearer token.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/identity_models.py
      - src/stocktracker/contexts/identity/adapters/inbound/api/deps/current_user.py
    """

    message: str
    token: str
    expires_at: datetime
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse


class ProfileUpdatedResponse(BaseModel):
    message: str
    user: UserResponse


def build_auth_router(
    *,
    register_use_case: RegisterUserUseCase,
    login_use_case: LoginUserUseCase,
    profile_use_case: GetUserProfileUseCase,
    update_profile_use_case: UpdateUserProfileUseCase,
    current_user_dependency: RequireCurrentUserDependency,
) -> APIRouter:
    """
    Build router exposing register, login, and profile endpoints under `/api/auth`.

    Related:
      - src/stocktracker/contexts/identity/application/use_cases/register_user.py
      - src/stocktracker/contexts/identity/application/use_cases/login_user.py
      - apps/api/routes/identity.py

    Args:
        register_use_case: Account registration use-case.
        login_use_case: Account login use-case.
        profile_use_case: Profile read use-case.
        update_profile_use_case: Profile update use-case.
        current_user_dependency: Bearer-token principal resolver.
    Returns:
        APIRouter: Configured auth router.
    Assumptions:
        Use-case errors carry their own HTTP status and payload.
    Raises:
        ValueError: If required dependencies are missing.
    Side Effects:
        None.
    """
    if register_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_auth_router requires register_use_case")
    if login_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_auth_router requires login_use_case")
    if profile_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_auth_router requires profile_use_case")
    if update_profile_use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_auth_router requires update_profile_use_case")
    if current_user_dependency is None:  # type: ignore[truthy-bool]
        raise ValueError("build_auth_router requires current_user_dependency")

    router = APIRouter(prefix="/api/auth", tags=["identity"])

    @router.post("/register", response_model=AuthResponse, status_code=201)
    def post_register(request: RegisterRequest) -> AuthResponse:
        """
        Register account and return bearer token.

        Raises:
            HTTPException: 422 for invalid fields, 409 for taken email or username.
        """
        try:
            result = register_use_case.register(
                email=request.email,
                username=request.username,
                password=request.password,
            )
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return _to_auth_response(result=result, message="User registered successfully")

    @router.post("/login", response_model=AuthResponse)
    def post_login(request: LoginRequest) -> AuthResponse:
        try:
            result = login_use_case.login(email=request.email, password=request.password)
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return _to_auth_response(result=result, message="Login successful")

    @router.get("/profile", response_model=ProfileResponse)
    def get_profile(
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> ProfileResponse:
        try:
            view = profile_use_case.get(user_id=principal.user_id)
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return ProfileResponse(user=_to_user_response(view=view))

    @router.put("/profile", response_model=ProfileUpdatedResponse)
    def put_profile(
        request: UpdateProfileRequest,
        principal: CurrentUserPrincipal = Depends(current_user_dependency),
    ) -> ProfileUpdatedResponse:
        """
        Update provided profile fields of current user.

        Raises:
            HTTPException: 422 for invalid fields, 409 for taken email or username.
        Side Effects:
            Writes one user row.
        """
        try:
            view = update_profile_use_case.update(
                user_id=principal.user_id,
                email=request.email,
                username=request.username,
                password=request.password,
            )
        except IdentityOperationError as error:
            raise HTTPException(
                status_code=error.status_code,
                detail=error.payload(),
            ) from error
        return ProfileUpdatedResponse(
            message="Profile updated successfully",
            user=_to_user_response(view=view),
        )

    return router


def _to_user_response(*, view: UserView) -> UserResponse:
    return UserResponse(
        id=str(view.user_id),
        email=view.email,
        username=view.username,
        created_at=view.created_at,
    )


def _to_auth_response(*, result: AuthResult, message: str) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=result.access_token,
        expires_at=result.expires_at,
        user=_to_user_response(view=result.user),
    )
