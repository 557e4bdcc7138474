"""
tests/test_security.py
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from capacity.core.errors import AppError, ErrorKind
from capacity.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_token_round_trip(settings):
    admin_id = uuid.uuid4()
    token, expires_at = create_access_token(admin_id, "admin", settings)

    identity = decode_access_token(token, settings)
    assert identity.admin_id == admin_id
    assert identity.username == "admin"
    assert expires_at > datetime.now(timezone.utc)


def test_claims(settings):
    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    token, expires_at = create_access_token(uuid.uuid4(), "admin", settings, now=now)

    claims = jwt.get_unverified_claims(token)
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] == int(now.timestamp()) + settings.JWT_EXPIRATION
    assert expires_at == now + timedelta(seconds=settings.JWT_EXPIRATION)


def test_expired_token_is_token_expired_not_invalid(settings):
    issued = datetime.now(timezone.utc) - timedelta(seconds=settings.JWT_EXPIRATION + 60)
    token, _ = create_access_token(uuid.uuid4(), "admin", settings, now=issued)

    with pytest.raises(AppError) as excinfo:
        decode_access_token(token, settings)
    assert excinfo.value.kind == ErrorKind.TOKEN_EXPIRED


def test_wrong_signature_is_invalid_token(settings):
    other = settings.model_copy(update={"JWT_SECRET": "another-secret"})
    token, _ = create_access_token(uuid.uuid4(), "admin", other)

    with pytest.raises(AppError) as excinfo:
        decode_access_token(token, settings)
    assert excinfo.value.kind == ErrorKind.INVALID_TOKEN


def test_non_uuid_subject_is_invalid_token(settings):
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode(
        {"sub": "42", "username": "admin", "iat": now, "exp": now + 60},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(AppError) as excinfo:
        decode_access_token(token, settings)
    assert excinfo.value.kind == ErrorKind.INVALID_TOKEN


def test_garbage_token_is_invalid_token(settings):
    with pytest.raises(AppError) as excinfo:
        decode_access_token("not.a.jwt", settings)
    assert excinfo.value.kind == ErrorKind.INVALID_TOKEN


def test_password_hashing():
    hashed = get_password_hash("secret1")
    assert hashed != "secret1"
    assert hashed.startswith("$argon2")
    assert verify_password("secret1", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_unknown_hash_format():
    assert not verify_password("secret1", "plain-text-not-a-hash")


# ───────────────────────── protected routes ───────────────────────────
async def test_missing_header(client):
    rv = await client.post("/api/novels", json={"title": "T"})
    assert rv.status_code == 401
    assert rv.json() == {"error": "Missing authorization header", "status": 401}


async def test_malformed_header(client):
    rv = await client.post("/api/novels", json={"title": "T"}, headers={"Authorization": "Token abc"})
    assert rv.status_code == 401
    assert rv.json()["error"] == "Invalid authorization header format"


async def test_expired_token_rejected(client, settings):
    issued = datetime.now(timezone.utc) - timedelta(days=30)
    token, _ = create_access_token(uuid.uuid4(), "admin", settings, now=issued)
    rv = await client.post("/api/novels", json={"title": "T"}, headers={"Authorization": f"Bearer {token}"})
    assert rv.status_code == 401
    assert rv.json()["error"] == "Token expired"
