from .api import (
    RequireCurrentUserDependency,
    build_auth_router,
    build_brokerage_credentials_router,
)

__all__ = [
    "RequireCurrentUserDependency",
    "build_auth_router",
    "build_brokerage_credentials_router",
]
