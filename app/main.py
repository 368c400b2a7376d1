from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.articles import router as articles_router
from app.api.auth import router as auth_router
from app.api.demo import router as demo_router
from app.api.errors import http_exception_handler, unhandled_exception_handler, validation_exception_handler
from app.api.payments import router as payments_router
from app.api.users import router as users_router
from app.config import get_settings
from app.db.session import init_db
from app.observability.logging import configure_logging
from app.observability.middleware import RequestContextMiddleware


app = FastAPI(
    title="Full Stack Demo API",
    description="Users, articles, demo utilities and idempotent payments",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
)
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(articles_router)
app.include_router(demo_router)
app.include_router(payments_router)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["x-request-id"],
)
# Added last so it wraps CORS and sees every request first.
app.add_middleware(RequestContextMiddleware)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    if settings.database_synchronize:
        init_db()
    structlog.get_logger(__name__).info("startup_complete", database_url=settings.database_url)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
