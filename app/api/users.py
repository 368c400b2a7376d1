from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.errors import api_error
from app.db.models import User, UserRole
from app.db.session import get_db
from app.models.schemas import MessageResponse, UserCreate, UserResponse, UserUpdate
from app.services.auth_dependencies import get_current_user, require_role
from app.services.user_service import (
    InvalidUserDataError,
    UserAlreadyExistsError,
    create_user,
    delete_user,
    get_user,
    list_users,
    to_response,
    update_user,
)

router = APIRouter(prefix="/api/users", tags=["users"], dependencies=[Depends(get_current_user)])

require_admin = require_role(UserRole.ADMIN)


@router.post("", response_model=UserResponse, status_code=201)
def create(
    payload: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> UserResponse:
    _ = admin
    try:
        user = create_user(db, payload)
    except UserAlreadyExistsError as exc:
        raise api_error(409, "Conflict", str(exc)) from exc
    except InvalidUserDataError as exc:
        raise api_error(400, "Bad request", str(exc)) from exc
    return to_response(user)


@router.get("", response_model=list[UserResponse])
def find_all(db: Session = Depends(get_db), admin: User = Depends(require_admin)) -> list[UserResponse]:
    _ = admin
    return [to_response(user) for user in list_users(db)]


@router.get("/profile", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return to_response(user)


@router.patch("/profile", response_model=UserResponse)
def update_profile(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> UserResponse:
    try:
        updated = update_user(db, user, payload)
    except UserAlreadyExistsError as exc:
        raise api_error(409, "Conflict", str(exc)) from exc
    except InvalidUserDataError as exc:
        raise api_error(400, "Bad request", str(exc)) from exc
    return to_response(updated)


@router.get("/{user_id}", response_model=UserResponse)
def find_one(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> UserResponse:
    _ = admin
    user = get_user(db, user_id)
    if user is None:
        raise api_error(404, "Not found", f"User with ID {user_id} not found")
    return to_response(user)


@router.delete("/{user_id}", response_model=MessageResponse)
def remove(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
) -> MessageResponse:
    _ = admin
    if not delete_user(db, user_id):
        raise api_error(404, "Not found", f"User with ID {user_id} not found")
    return MessageResponse(message="User deleted successfully")
