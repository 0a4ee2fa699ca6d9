from .health import build_health_router
from .identity import build_identity_router

__all__ = [
    "build_health_router",
    "build_identity_router",
]
