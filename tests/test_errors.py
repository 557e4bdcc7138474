"""
tests/test_errors.py
"""
from __future__ import annotations

import json

from sqlalchemy.exc import IntegrityError, OperationalError

from capacity.core.errors import (
    AppError,
    ErrorKind,
    from_db_error,
    render_app_error,
)


class _Orig(Exception):
    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _body(response) -> dict:
    return json.loads(response.body)


def test_status_mapping():
    assert AppError.unauthorized().status_code == 401
    assert AppError.invalid_token().status_code == 401
    assert AppError.token_expired().status_code == 401
    assert AppError.invalid_credentials().status_code == 401
    assert AppError.validation("bad").status_code == 400
    assert AppError.bad_request("bad").status_code == 400
    assert AppError.not_found("Novel").status_code == 404
    assert AppError.conflict("dup").status_code == 409
    assert AppError.database().status_code == 500
    assert AppError.internal("boom").status_code == 500


def test_not_found_message():
    assert AppError.not_found("Chapter").message == "Chapter not found"


def test_unique_violation_postgres_is_conflict():
    exc = IntegrityError("INSERT ...", {}, _Orig("duplicate key", sqlstate="23505"))
    err = from_db_error(exc, "Novel with this slug already exists")
    assert err.kind == ErrorKind.CONFLICT
    assert err.message == "Novel with this slug already exists"


def test_unique_violation_sqlite_is_conflict():
    exc = IntegrityError("INSERT ...", {}, _Orig("UNIQUE constraint failed: novels.slug"))
    assert from_db_error(exc).kind == ErrorKind.CONFLICT


def test_other_integrity_error_is_database():
    exc = IntegrityError("INSERT ...", {}, _Orig("FOREIGN KEY constraint failed"))
    assert from_db_error(exc).kind == ErrorKind.DATABASE


def test_database_message_redacted_unless_debug():
    err = from_db_error(OperationalError("SELECT 1", {}, _Orig("connection refused to 10.0.0.5")))

    body = _body(render_app_error(err))
    assert body == {"error": "A database error occurred", "status": 500}

    debug_body = _body(render_app_error(err, debug=True))
    assert "connection refused" in debug_body["error"]


def test_internal_message_is_fixed():
    body = _body(render_app_error(AppError.internal("stack trace here")))
    assert body == {"error": "An internal error occurred", "status": 500}


async def test_unknown_route_uses_envelope(client):
    rv = await client.get("/api/does-not-exist")
    assert rv.status_code == 404
    assert rv.json() == {"error": "The requested resource does not exist", "status": 404}


async def test_method_not_allowed_uses_envelope(client):
    rv = await client.patch("/api/novels")
    assert rv.status_code == 405
    assert rv.json()["status"] == 405


async def test_request_validation_is_400(client, auth_headers):
    rv = await client.post("/api/novels", json={"title": ""}, headers=auth_headers)
    assert rv.status_code == 400
    assert rv.json()["status"] == 400
