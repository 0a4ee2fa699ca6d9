"""
Shared API error handlers for the StockTrackerError contract and 422 validation payloads.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from stocktracker.platform.errors import StockTrackerError

log = logging.getLogger(__name__)

_STATUS_BY_ERROR_CODE: Mapping[str, int] = {
    "validation_error": 422,
    "not_found": 404,
    "conflict": 409,
    "unauthorized": 401,
    "unexpected_error": 500,
}


def register_api_error_handlers(*, app: FastAPI) -> None:
    """
    Register global handlers for StockTrackerError and FastAPI request validation errors.

    Args:
        app: FastAPI application instance.
    Returns:
        None.
    Assumptions:
        Handlers are installed once during application startup.
    Raises:
        ValueError: If `app` dependency is missing.
    Side Effects:
        Mutates FastAPI exception-handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_api_error_handlers requires app")

    app.add_exception_handler(StockTrackerError, stocktracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


def stocktracker_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert StockTrackerError into JSON response payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised StockTrackerError instance.
    Returns:
        JSONResponse: Response with contract payload `{"error": {...}}`.
    Assumptions:
        Status code is derived from error code; unknown codes map to 500.
    Raises:
        None.
    Side Effects:
        Logs unexpected errors.
    """
    platform_error = cast(StockTrackerError, error)
    status_code = _STATUS_BY_ERROR_CODE.get(platform_error.code, 500)
    if status_code >= 500:
        log.error("unexpected api error: code=%s", platform_error.code)
    return JSONResponse(status_code=status_code, content=platform_error.to_payload())


def request_validation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert RequestValidationError into `validation_error` payload with sorted items.

    Args:
        _request: Starlette request object (unused).
        error: Validation exception raised by FastAPI/pydantic.
    Returns:
        JSONResponse: HTTP 422 payload with `details.errors` sorted by path, code, message.
    Assumptions:
        Raw errors carry `loc`, `type`, and `msg`; submitted input values are not echoed,
        so plaintext passwords never come back in error bodies.
    Raises:
        None.
    Side Effects:
        None.
    """
    validation_error = cast(RequestValidationError, error)
    platform_error = StockTrackerError(
        code="validation_error",
        message="Validation failed",
        details={"errors": _sorted_validation_errors(raw_errors=validation_error.errors())},
    )
    return stocktracker_error_handler(_request, platform_error)


def _sorted_validation_errors(*, raw_errors: Any) -> list[dict[str, str]]:
    if not isinstance(raw_errors, Sequence) or isinstance(raw_errors, (str, bytes, bytearray)):
        return []

    items: list[dict[str, str]] = []
    for raw_error in raw_errors:
        if not isinstance(raw_error, Mapping):
            items.append(
                {
                    "path": "unknown",
                    "code": "validation_error",
                    "message": str(raw_error),
                }
            )
            continue
        items.append(
            {
                "path": _normalize_error_path(loc=raw_error.get("loc")),
                "code": _normalize_error_code(raw_type=raw_error.get("type")),
                "message": str(raw_error.get("msg", "Validation error")),
            }
        )
    return sorted(items, key=lambda item: (item["path"], item["code"], item["message"]))


def _normalize_error_path(*, loc: Any) -> str:
    """
    Convert pydantic `loc` into dot-delimited path such as `body.email`.
    """
    if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes, bytearray)):
        path_parts = [str(part) for part in loc]
        if path_parts:
            return ".".join(path_parts)
    if loc is None:
        return "unknown"
    return str(loc)


def _normalize_error_code(*, raw_type: Any) -> str:
    normalized = str(raw_type).strip().lower() if raw_type is not None else ""
    if not normalized:
        return "validation_error"
    if normalized == "missing" or normalized.endswith(".missing"):
        return "required"
    return normalized
