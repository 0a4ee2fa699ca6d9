"""
FastAPI application factory for Stock Tracker API.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping

from fastapi import FastAPI

from apps.api.common import register_api_error_handlers
from apps.api.routes import build_health_router
from apps.api.wiring.modules import build_identity_api_module


def create_app(*, environ: Mapping[str, str] | None = None) -> FastAPI:
    """
    Build FastAPI app with health and identity modules wired at startup.

    Related: apps.api.routes.identity,
      apps.api.wiring.modules.identity,
      apps.api.common.errors

    Args:
        environ: Optional environment mapping override.
    Returns:
        FastAPI: Application instance with registered routers.
    Assumptions:
        Module wiring performs fail-fast validation before first request.
    Raises:
        ValueError: If identity runtime settings are invalid.
    Side Effects:
        Configures root logging when no handler is installed.
    """
    effective_environ = os.environ if environ is None else environ
    logging.basicConfig(
        level=effective_environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Stock Tracker API",
        version="1.0.0",
    )
    register_api_error_handlers(app=app)
    app.include_router(build_health_router())
    identity_module = build_identity_api_module(environ=effective_environ)
    app.include_router(identity_module.router)
    return app


app = create_app()
