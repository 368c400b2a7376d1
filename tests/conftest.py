from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.models import UserRole
from app.db.session import init_db, reset_engines, session_factory
from app.main import app
from app.models.schemas import UserCreate
from app.services.article_service import reset_article_store
from app.services.cache import reset_cache
from app.services.demo_service import get_demo_service
from app.services.idempotency import reset_payments_store
from app.services.user_service import create_user


ADMIN_EMAIL = "admin@example.com"
USER_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.sqlite'}")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    get_settings.cache_clear()
    init_db()

    reset_cache()
    reset_payments_store()
    reset_article_store()
    get_demo_service().reset_hits()

    yield

    reset_engines()
    get_settings.cache_clear()


@pytest.fixture
def db() -> Iterator[Session]:
    with session_factory()() as session:
        yield session


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _register(api_client: AsyncClient, email: str, password: str = USER_PASSWORD) -> dict:
    resp = await api_client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": "Test", "lastName": "User"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user_headers(api_client: AsyncClient) -> dict[str, str]:
    payload = await _register(api_client, "reader@example.com")
    return _bearer(payload["access_token"])


@pytest.fixture
async def admin_headers(api_client: AsyncClient, db: Session) -> dict[str, str]:
    create_user(
        db,
        UserCreate(email=ADMIN_EMAIL, password=USER_PASSWORD, first_name="Ada", last_name="Admin", role=UserRole.ADMIN),
    )
    resp = await api_client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": USER_PASSWORD})
    assert resp.status_code == 200, resp.text
    return _bearer(resp.json()["access_token"])
