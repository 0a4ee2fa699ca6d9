from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str


def build_health_router() -> APIRouter:
    """Build router with unauthenticated liveness endpoint `GET /health`."""
    router = APIRouter(tags=["health"])

    @router.get("/health", response_model=HealthResponse)
    def get_health() -> HealthResponse:
        return HealthResponse(status="OK", message="Server is running")

    return router
