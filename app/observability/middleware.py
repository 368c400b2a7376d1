from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from fastapi import Request
from starlette.datastructures import Headers, MutableHeaders


REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware:
    """Assigns a correlation id per request, echoes it and writes access logs.

    The inbound ``x-request-id`` is reused when present; otherwise a UUID4 is
    generated. The id is stored on ``request.state.request_id`` before any
    handler runs and stays stable for the whole request.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        inbound = Headers(scope=scope).get(REQUEST_ID_HEADER, "").strip()
        request_id = inbound or str(uuid.uuid4())
        path = scope.get("path")
        method = scope.get("method")

        # Mutate in place: the outer 500 handler reads the same state dict.
        scope.setdefault("state", {})["request_id"] = request_id

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=path,
            method=method,
        )
        logger = structlog.get_logger("access")
        logger.info("request_started")

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0
            logger.info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )
            structlog.contextvars.clear_contextvars()


def get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)
