from .auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    build_auth_router,
)
from .brokerage_credentials import (
    BrokerageCredentialResponse,
    StoreBrokerageCredentialRequest,
    build_brokerage_credentials_router,
)

__all__ = [
    "AuthResponse",
    "BrokerageCredentialResponse",
    "LoginRequest",
    "RegisterRequest",
    "StoreBrokerageCredentialRequest",
    "UpdateProfileRequest",
    "build_auth_router",
    "build_brokerage_credentials_router",
]
