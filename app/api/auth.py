from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.errors import api_error
from app.db.models import User
from app.db.session import get_db
from app.models.schemas import AuthResponse, LoginRequest, RefreshRequest, RegisterRequest, TokenPair, UserCreate
from app.services.auth_service import create_access_token, create_refresh_token, decode_token
from app.services.user_service import (
    InvalidUserDataError,
    UserAlreadyExistsError,
    authenticate,
    create_user,
    get_user,
    to_auth_user,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])

logger = structlog.get_logger(__name__)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
        user=to_auth_user(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    try:
        user = create_user(db, UserCreate(**payload.model_dump()))
    except UserAlreadyExistsError as exc:
        raise api_error(409, "Conflict", str(exc)) from exc
    except InvalidUserDataError as exc:
        raise api_error(400, "Bad request", str(exc)) from exc
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> AuthResponse:
    user = authenticate(db, payload.email, payload.password)
    if user is None:
        logger.info("login_failed")
        raise api_error(401, "Unauthorized", "Invalid credentials")
    logger.info("login_succeeded", user_id=str(user.id))
    return _auth_response(user)


@router.post("/refresh", response_model=TokenPair)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)) -> TokenPair:
    try:
        claims = decode_token(payload.refresh_token, expected_type="refresh")
        user_id = uuid.UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise api_error(401, "Unauthorized", "Invalid refresh token") from exc

    user = get_user(db, user_id)
    if user is None or not user.is_active:
        raise api_error(401, "Unauthorized", "Invalid refresh token")

    return TokenPair(access_token=create_access_token(user), refresh_token=create_refresh_token(user))
