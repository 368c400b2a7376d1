from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.db.models import UserRole


class ApiModel(BaseModel):
    """Base for payloads exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Articles


class ArticleSummary(ApiModel):
    id: int
    title: str
    excerpt: str
    author: str
    published_at: str
    tags: list[str] = Field(default_factory=list)


class Article(ArticleSummary):
    content: str


class ArticleCreate(ApiModel):
    # Required fields are checked by the handler so that blanks are rejected too.
    title: str | None = None
    content: str | None = None
    author: str | None = None
    tags: list[str] | None = None


class ArticleResponse(ApiModel):
    request_id: str | None = None
    article: Article


class ArticleCreatedResponse(ArticleResponse):
    message: str


class ArticleListResponse(ApiModel):
    request_id: str | None = None
    articles: list[ArticleSummary]
    total: int
    search_term: str


# Demo


class EchoResponse(ApiModel):
    request_id: str | None = None
    x: str | None = None


class RandomValue(ApiModel):
    q: str
    value: float
    hits: int


class DemoItem(ApiModel):
    id: int
    name: str
    value: int


class Pagination(ApiModel):
    offset: int
    limit: int
    total: int
    has_more: bool


class ItemsResponse(ApiModel):
    request_id: str | None = None
    items: list[DemoItem]
    pagination: Pagination


# Payments


class PaymentCreate(ApiModel):
    amount: int | float | None = 0


class Payment(ApiModel):
    payment_id: str
    amount: int | float
    status: str
    timestamp: str
    idempotency_key: str


class PaymentsDebugResponse(ApiModel):
    count: int
    payments: dict[str, Payment]


class ClearedResponse(ApiModel):
    message: str
    count: int


# Users & auth


class RegisterRequest(ApiModel):
    email: str
    password: str
    first_name: str = ""
    last_name: str = ""


class UserCreate(RegisterRequest):
    role: UserRole = UserRole.USER


class UserUpdate(ApiModel):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class LoginRequest(ApiModel):
    email: str
    password: str


class UserResponse(ApiModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AuthUser(ApiModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


class AuthResponse(TokenPair):
    user: AuthUser


class RefreshRequest(BaseModel):
    refresh_token: str


class MessageResponse(ApiModel):
    message: str

