from .deps import RequireCurrentUserDependency
from .routes import build_auth_router, build_brokerage_credentials_router

__all__ = [
    "RequireCurrentUserDependency",
    "build_auth_router",
    "build_brokerage_credentials_router",
]
