import uuid


async def _register(api_client, email: str, password: str = "password123") -> dict:
    resp = await api_client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": "Grace", "lastName": "Hopper"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_register_returns_tokens_and_user(api_client) -> None:
    payload = await _register(api_client, "Grace@Example.com")
    assert payload["access_token"]
    assert payload["refresh_token"]
    assert payload["user"]["email"] == "grace@example.com"
    assert payload["user"]["firstName"] == "Grace"
    assert payload["user"]["role"] == "user"


async def test_register_rejects_duplicate_email(api_client) -> None:
    await _register(api_client, "dup@example.com")
    resp = await api_client.post("/api/auth/register", json={"email": "dup@example.com", "password": "password123"})
    assert resp.status_code == 409


async def test_register_rejects_short_password(api_client) -> None:
    resp = await api_client.post("/api/auth/register", json={"email": "short@example.com", "password": "abc"})
    assert resp.status_code == 400
    assert "at least 8" in resp.json()["message"]


async def test_login_with_bad_password_is_unauthorized(api_client) -> None:
    await _register(api_client, "login@example.com")
    resp = await api_client.post("/api/auth/login", json={"email": "login@example.com", "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid credentials"


async def test_refresh_issues_new_tokens(api_client) -> None:
    tokens = await _register(api_client, "refresh@example.com")

    resp = await api_client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert resp.status_code == 200
    fresh = resp.json()

    profile = await api_client.get("/api/users/profile", headers={"Authorization": f"Bearer {fresh['access_token']}"})
    assert profile.status_code == 200


async def test_access_token_cannot_be_used_to_refresh(api_client) -> None:
    tokens = await _register(api_client, "wrongtype@example.com")
    resp = await api_client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert resp.status_code == 401


async def test_refresh_token_is_not_a_bearer_token(api_client) -> None:
    tokens = await _register(api_client, "bearer@example.com")
    resp = await api_client.get("/api/users/profile", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
    assert resp.status_code == 401


async def test_profile_requires_token(api_client) -> None:
    resp = await api_client.get("/api/users/profile")
    assert resp.status_code == 401
    assert resp.headers.get("www-authenticate") == "Bearer"


async def test_profile_rejects_garbage_token(api_client) -> None:
    resp = await api_client.get("/api/users/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_profile_read_and_update(api_client, user_headers) -> None:
    profile = (await api_client.get("/api/users/profile", headers=user_headers)).json()
    assert profile["email"] == "reader@example.com"
    assert profile["fullName"] == "Test User"
    assert profile["isActive"] is True

    resp = await api_client.patch("/api/users/profile", json={"firstName": "Updated"}, headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["fullName"] == "Updated User"


async def test_profile_update_rejects_taken_email(api_client, user_headers) -> None:
    await _register(api_client, "taken@example.com")
    resp = await api_client.patch("/api/users/profile", json={"email": "taken@example.com"}, headers=user_headers)
    assert resp.status_code == 409


async def test_admin_routes_forbidden_for_regular_user(api_client, user_headers) -> None:
    assert (await api_client.get("/api/users", headers=user_headers)).status_code == 403
    create = await api_client.post(
        "/api/users",
        json={"email": "new@example.com", "password": "password123"},
        headers=user_headers,
    )
    assert create.status_code == 403
    assert create.json()["error"] == "Forbidden"
    assert (await api_client.delete(f"/api/users/{uuid.uuid4()}", headers=user_headers)).status_code == 403


async def test_admin_routes_unauthorized_without_token(api_client) -> None:
    assert (await api_client.get("/api/users")).status_code == 401


async def test_admin_can_manage_users(api_client, admin_headers) -> None:
    created = await api_client.post(
        "/api/users",
        json={"email": "staff@example.com", "password": "password123", "firstName": "Staff", "role": "admin"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    user = created.json()
    assert user["role"] == "admin"

    listing = (await api_client.get("/api/users", headers=admin_headers)).json()
    assert {"admin@example.com", "staff@example.com"} <= {u["email"] for u in listing}

    fetched = await api_client.get(f"/api/users/{user['id']}", headers=admin_headers)
    assert fetched.status_code == 200
    assert fetched.json()["email"] == "staff@example.com"

    deleted = await api_client.delete(f"/api/users/{user['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "User deleted successfully"}

    missing = await api_client.get(f"/api/users/{user['id']}", headers=admin_headers)
    assert missing.status_code == 404


async def test_admin_create_rejects_duplicate(api_client, admin_headers) -> None:
    resp = await api_client.post(
        "/api/users",
        json={"email": "admin@example.com", "password": "password123"},
        headers=admin_headers,
    )
    assert resp.status_code == 409


def test_seed_default_users_is_idempotent(db) -> None:
    from app.services.user_service import get_user_by_email, seed_default_users

    first = seed_default_users(db)
    second = seed_default_users(db)

    assert first == [("admin@test.com", True), ("user@test.com", True)]
    assert second == [("admin@test.com", False), ("user@test.com", False)]
    admin = get_user_by_email(db, "admin@test.com")
    assert admin is not None
    assert admin.role.value == "admin"
