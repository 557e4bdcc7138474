"""
tests/test_partial_update.py
"""
from __future__ import annotations

import pytest

from capacity.core.errors import AppError, ErrorKind
from capacity.db.partial_update import build_update_values
from capacity.schemas.blog import BlogPostUpdate
from capacity.schemas.novel import NovelUpdate
from capacity.services.novel import NOVEL_NON_NULLABLE, NOVEL_UPDATABLE
from tests.helpers import create_novel


def test_only_present_fields():
    values = build_update_values(NovelUpdate(title="New"), NOVEL_UPDATABLE, NOVEL_NON_NULLABLE)
    assert list(values) == ["title", "updated_at"]
    assert values["title"] == "New"


def test_explicit_null_is_kept_for_nullable_column():
    values = build_update_values(NovelUpdate(description=None), NOVEL_UPDATABLE, NOVEL_NON_NULLABLE)
    assert "description" in values
    assert values["description"] is None


def test_explicit_null_rejected_for_non_nullable_column():
    with pytest.raises(AppError) as excinfo:
        build_update_values(NovelUpdate(title=None), NOVEL_UPDATABLE, NOVEL_NON_NULLABLE)
    assert excinfo.value.kind == ErrorKind.VALIDATION


def test_no_fields_is_bad_request():
    with pytest.raises(AppError) as excinfo:
        build_update_values(NovelUpdate(), NOVEL_UPDATABLE, NOVEL_NON_NULLABLE)
    assert excinfo.value.kind == ErrorKind.BAD_REQUEST
    assert excinfo.value.message == "No fields to update"


def test_fields_outside_whitelist_are_ignored():
    with pytest.raises(AppError):
        build_update_values(BlogPostUpdate(title="x"), ("content",))


def test_enum_values_are_plain_strings():
    values = build_update_values(
        NovelUpdate(status="ongoing", genres=["fantasy", "fantasy", "sf"]),
        NOVEL_UPDATABLE,
        NOVEL_NON_NULLABLE,
    )
    assert values["status"] == "ongoing"
    assert values["genres"] == ["fantasy", "sf"]


# ───────────────────────── through the API ────────────────────────────
async def test_empty_update_leaves_row_unchanged(client, auth_headers):
    novel = await create_novel(client, auth_headers, title="Original")

    rv = await client.put(f"/api/novels/{novel['slug']}", json={}, headers=auth_headers)
    assert rv.status_code == 400
    assert rv.json()["error"] == "No fields to update"

    rv = await client.get(f"/api/novels/{novel['slug']}", headers=auth_headers)
    assert rv.json()["title"] == "Original"
    assert rv.json()["updated_at"] == novel["updated_at"]


async def test_partial_update_changes_only_present_fields(client, auth_headers):
    novel = await create_novel(client, auth_headers, title="Original", description="keep me")

    rv = await client.put(
        f"/api/novels/{novel['slug']}", json={"status": "ongoing"}, headers=auth_headers
    )
    assert rv.status_code == 200
    body = rv.json()
    assert body["status"] == "ongoing"
    assert body["title"] == "Original"
    assert body["description"] == "keep me"
    assert body["slug"] == novel["slug"]
    assert body["updated_at"] > novel["updated_at"]

    rv = await client.put(
        f"/api/novels/{novel['slug']}", json={"title": "Renamed"}, headers=auth_headers
    )
    assert rv.json()["updated_at"] > body["updated_at"]


async def test_update_missing_row_is_not_found(client, auth_headers):
    rv = await client.put("/api/novels/novel-missing0", json={"title": "x"}, headers=auth_headers)
    assert rv.status_code == 404
    assert rv.json()["error"] == "Novel not found"
