# tests/test_auth.py
from datetime import datetime, timedelta, timezone

from jose import jwt

from config import get_settings
from services.auth_service import AuthService


def test_register_returns_token_and_user(client):
    response = client.post("/api/auth/register", json={
        "email": "New.User@Example.com",
        "password": "secret123",
        "firstName": "New",
        "lastName": "User",
        "role": "landlord",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "new.user@example.com"
    assert body["user"]["role"] == "landlord"
    assert body["user"]["home"] == "/landlord"
    claims = AuthService.decode_access_token(body["token"])
    assert claims["sub"] == str(body["user"]["id"])
    assert claims["role"] == "landlord"


def test_register_rejects_admin_role(client):
    response = client.post("/api/auth/register", json={
        "email": "sneaky@example.com",
        "password": "secret123",
        "first_name": "S",
        "last_name": "N",
        "role": "admin",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid role"


def test_register_duplicate_email(client, tenant):
    response = client.post("/api/auth/register", json={
        "email": tenant.email.upper(),
        "password": "secret123",
        "first_name": "Dup",
        "last_name": "Licate",
    })
    assert response.status_code == 400
    assert response.json()["error"] == "Email already registered"


def test_login(client, tenant):
    response = client.post("/api/auth/login", json={"email": tenant.email, "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["user"]["id"] == tenant.id


def test_login_wrong_password(client, tenant):
    response = client.post("/api/auth/login", json={"email": tenant.email, "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_admin_login_requires_matching_admin_id(client, admin, tenant):
    ok = client.post("/api/auth/login", json={"email": admin.email, "password": "secret123", "adminId": "ADM-001"})
    assert ok.status_code == 200
    assert ok.json()["user"]["home"] == "/admin"

    wrong_id = client.post("/api/auth/login", json={"email": admin.email, "password": "secret123", "adminId": "nope"})
    assert wrong_id.status_code == 403
    assert wrong_id.json()["error"] == "Invalid Admin ID."

    not_admin = client.post("/api/auth/login", json={"email": tenant.email, "password": "secret123", "adminId": "ADM-001"})
    assert not_admin.status_code == 403
    assert not_admin.json()["error"] == "Only admins can log in here."


def test_disabled_account(client, make_user, headers):
    user = make_user("tenant", is_active=False)
    login = client.post("/api/auth/login", json={"email": user.email, "password": "secret123"})
    assert login.status_code == 403
    me = client.get("/api/auth/me", headers=headers(user))
    assert me.status_code == 403


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "Missing token"


def test_me_rejects_bad_and_expired_tokens(client, tenant):
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401

    settings = get_settings()
    expired = jwt.encode(
        {"sub": str(tenant.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_token_for_deleted_user(client, db, tenant, headers):
    auth = headers(tenant)
    db.delete(tenant)
    db.commit()
    response = client.get("/api/auth/me", headers=auth)
    assert response.status_code == 401
    assert response.json()["error"] == "User not found"


def test_update_profile(client, tenant, headers):
    response = client.put("/api/auth/me", headers=headers(tenant), json={"phone": "555-0100", "firstName": "Tommy"})
    assert response.status_code == 200
    assert response.json()["phone"] == "555-0100"
    assert response.json()["first_name"] == "Tommy"


def test_update_profile_nothing_to_update(client, tenant, headers):
    response = client.put("/api/auth/me", headers=headers(tenant), json={})
    assert response.status_code == 400
    assert response.json()["error"] == "No fields to update"


def test_password_change_needs_current_password(client, tenant, headers):
    denied = client.put("/api/auth/me", headers=headers(tenant), json={"password": "newpass1"})
    assert denied.status_code == 401

    changed = client.put(
        "/api/auth/me",
        headers=headers(tenant),
        json={"password": "newpass1", "currentPassword": "secret123"},
    )
    assert changed.status_code == 200
    login = client.post("/api/auth/login", json={"email": tenant.email, "password": "newpass1"})
    assert login.status_code == 200


def test_avatar_upload_stored_locally(client, tenant, headers):
    response = client.post(
        "/api/auth/avatar",
        headers=headers(tenant),
        files={"avatar": ("me.png", b"\x89PNG fake", "image/png")},
    )
    assert response.status_code == 200
    url = response.json()["avatar"]
    assert url.startswith(f"/uploads/avatars/{tenant.id}/")
    assert url.endswith(".png")
    assert client.get(url).content == b"\x89PNG fake"


def test_dashboard_home_redirect(client, landlord, headers):
    response = client.get("/api/dashboard/home", headers=headers(landlord))
    assert response.json() == {"role": "landlord", "redirect": "/landlord"}


def test_unknown_route_and_health(client):
    missing = client.get("/api/nope")
    assert missing.status_code == 404
    assert missing.json()["error"] == "Route not found"
    assert client.get("/api/health").json()["status"] == "ok"


def test_firebase_token_links_existing_account(client, db, monkeypatch, tenant):
    import utils.firebase

    def fake_verify(token):
        if token != "firebase-id-token":
            raise ValueError("bad token")
        return {"uid": "fb-uid-1", "email": tenant.email}

    monkeypatch.setattr(get_settings(), "auth_provider", "firebase")
    monkeypatch.setattr(utils.firebase, "verify_id_token", fake_verify)

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer firebase-id-token"})
    assert response.status_code == 200
    assert response.json()["id"] == tenant.id
    db.expire_all()
    assert db.get(type(tenant), tenant.id).firebase_uid == "fb-uid-1"

    rejected = client.get("/api/auth/me", headers={"Authorization": "Bearer other"})
    assert rejected.status_code == 401
