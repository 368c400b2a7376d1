from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

import structlog
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.observability.middleware import REQUEST_ID_HEADER, get_request_id


logger = structlog.get_logger(__name__)


def api_error(
    status_code: int,
    error: str,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> HTTPException:
    """Build an ``HTTPException`` whose body is ``{error, message, ...}``."""

    return HTTPException(status_code=status_code, detail={"error": error, "message": message, **extra}, headers=headers)


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body: dict[str, Any] = dict(exc.detail)
    else:
        body = {"error": _phrase(exc.status_code), "message": str(exc.detail)}

    body.setdefault("statusCode", exc.status_code)
    request_id = get_request_id(request)
    if request_id:
        body.setdefault("requestId", request_id)

    return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": [str(part) for part in err.get("loc", ())], "message": str(err.get("msg", ""))}
        for err in exc.errors()
    ]
    message = "; ".join(f"{'.'.join(d['loc'])}: {d['message']}" for d in details) or "Invalid request"
    body: dict[str, Any] = {
        "error": "Bad request",
        "message": message,
        "statusCode": 400,
        "details": details,
    }
    request_id = get_request_id(request)
    if request_id:
        body["requestId"] = request_id
    return JSONResponse(body, status_code=400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Runs outside RequestContextMiddleware, so the header is set here.
    request_id = get_request_id(request)
    logger.error("unhandled_exception", request_id=request_id, exc_info=exc)

    body: dict[str, Any] = {
        "message": "Internal server error",
        "statusCode": 500,
        "requestId": request_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    headers = {REQUEST_ID_HEADER: request_id} if request_id else None
    return JSONResponse(body, status_code=500, headers=headers)
