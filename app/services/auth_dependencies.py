from __future__ import annotations

import uuid
from collections.abc import Callable

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.errors import api_error
from app.db.models import User, UserRole
from app.db.session import get_db
from app.services.auth_service import decode_token
from app.services.user_service import get_user


_bearer = HTTPBearer(auto_error=False)


def _unauthorized(message: str) -> HTTPException:
    return api_error(401, "Unauthorized", message, headers={"WWW-Authenticate": "Bearer"})


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials, expected_type="access")
        user_uuid = uuid.UUID(str(payload.get("sub")))
    except ValueError as exc:
        raise _unauthorized("Invalid or expired token") from exc

    user = get_user(db, user_uuid)
    if user is None or not user.is_active:
        raise _unauthorized("User not found")
    return user


def require_role(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory: the current user must hold one of ``roles``."""

    def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise api_error(403, "Forbidden", "Insufficient permissions")
        return user

    return _check
