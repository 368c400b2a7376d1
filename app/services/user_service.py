from __future__ import annotations

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import User, UserRole
from app.models.schemas import AuthUser, UserCreate, UserResponse, UserUpdate
from app.services.auth_service import hash_password, verify_password


MIN_PASSWORD_LENGTH = 8

DEFAULT_USERS: tuple[UserCreate, ...] = (
    UserCreate(
        email="admin@test.com",
        password="password123",
        first_name="Admin",
        last_name="User",
        role=UserRole.ADMIN,
    ),
    UserCreate(
        email="user@test.com",
        password="password123",
        first_name="Regular",
        last_name="User",
        role=UserRole.USER,
    ),
)

logger = structlog.get_logger(__name__)


class UserAlreadyExistsError(ValueError):
    pass


class InvalidUserDataError(ValueError):
    pass


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _validate_email(email: str) -> str:
    email_norm = normalize_email(email)
    if not email_norm or "@" not in email_norm:
        raise InvalidUserDataError("Valid email is required")
    return email_norm


def to_response(user: User) -> UserResponse:
    return UserResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        role=user.role,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def to_auth_user(user: User) -> AuthUser:
    return AuthUser(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
    )


def get_user(db: Session, user_id: uuid.UUID) -> User | None:
    return db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()


def list_users(db: Session) -> list[User]:
    return list(db.execute(select(User).order_by(User.created_at)).scalars())


def create_user(db: Session, data: UserCreate) -> User:
    email_norm = _validate_email(data.email)
    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise InvalidUserDataError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if get_user_by_email(db, email_norm) is not None:
        raise UserAlreadyExistsError("User with this email already exists")

    user = User(
        id=uuid.uuid4(),
        email=email_norm,
        password_hash=hash_password(data.password),
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
        role=data.role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("user_created", user_id=str(user.id), role=user.role.value)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    if data.email is not None:
        email_norm = _validate_email(data.email)
        if email_norm != user.email:
            if get_user_by_email(db, email_norm) is not None:
                raise UserAlreadyExistsError("User with this email already exists")
            user.email = email_norm
    if data.first_name is not None:
        user.first_name = data.first_name.strip()
    if data.last_name is not None:
        user.last_name = data.last_name.strip()

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: uuid.UUID) -> bool:
    user = get_user(db, user_id)
    if user is None:
        return False
    db.delete(user)
    db.commit()
    logger.info("user_deleted", user_id=str(user_id))
    return True


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = get_user_by_email(db, email)
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        return None
    return user


def seed_default_users(db: Session) -> list[tuple[str, bool]]:
    """Create the demo admin and regular user if missing.

    Returns ``(email, created)`` pairs so callers can report what happened.
    """

    outcome: list[tuple[str, bool]] = []
    for data in DEFAULT_USERS:
        if get_user_by_email(db, data.email) is not None:
            logger.info("seed_user_exists", email=data.email)
            outcome.append((data.email, False))
            continue
        create_user(db, data)
        logger.info("seed_user_created", email=data.email)
        outcome.append((data.email, True))
    return outcome
