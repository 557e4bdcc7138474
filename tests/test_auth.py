"""
tests/test_auth.py
"""
from __future__ import annotations

from sqlalchemy import delete, select

from capacity.models.admin import Admin
from tests.helpers import ADMIN_PASSWORD, ADMIN_USERNAME


async def test_register_first_admin(client, db_session):
    rv = await client.post("/api/auth/register", json={"username": "admin", "password": "secret1"})
    assert rv.status_code == 201
    body = rv.json()
    assert body["username"] == "admin"
    assert "password_hash" not in body
    assert "password" not in body

    admin = (await db_session.execute(select(Admin))).scalar_one()
    assert admin.password_hash != "secret1"


async def test_second_registration_is_conflict(client, auth_headers):
    rv = await client.post("/api/auth/register", json={"username": "other", "password": "another1"})
    assert rv.status_code == 409
    assert rv.json() == {"error": "Admin already exists. Registration is disabled.", "status": 409}


async def test_register_validates_input(client):
    rv = await client.post("/api/auth/register", json={"username": "ab", "password": "123"})
    assert rv.status_code == 400


async def test_login_returns_token_and_user(client, auth_headers):
    rv = await client.post(
        "/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert rv.status_code == 200
    body = rv.json()
    assert body["token"]
    assert body["expires_at"]
    assert body["user"]["username"] == ADMIN_USERNAME


async def test_login_wrong_password(client, auth_headers):
    rv = await client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": "wrong-pass"})
    assert rv.status_code == 401
    assert rv.json() == {"error": "Invalid credentials", "status": 401}


async def test_login_unknown_user(client, auth_headers):
    rv = await client.post("/api/auth/login", json={"username": "nobody", "password": ADMIN_PASSWORD})
    assert rv.status_code == 401
    assert rv.json()["error"] == "Invalid credentials"


async def test_me(client, auth_headers):
    rv = await client.get("/api/auth/me", headers=auth_headers)
    assert rv.status_code == 200
    assert rv.json()["username"] == ADMIN_USERNAME


async def test_me_for_deleted_admin_is_unauthorized(client, auth_headers, db_session):
    await db_session.execute(delete(Admin).where(Admin.username == ADMIN_USERNAME))
    await db_session.commit()

    rv = await client.get("/api/auth/me", headers=auth_headers)
    assert rv.status_code == 401
    assert rv.json()["error"] == "Unauthorized"


async def test_me_requires_token(client):
    rv = await client.get("/api/auth/me")
    assert rv.status_code == 401


async def test_invalid_token_rejected(client):
    rv = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert rv.status_code == 401
    assert rv.json()["error"] == "Invalid token"
