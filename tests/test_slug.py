"""
tests/test_slug.py
"""
from __future__ import annotations

import re

from capacity.models.novel import Novel
from capacity.utils import slug as slug_utils
from capacity.utils.slug import ensure_unique_slug, generate_slug

SLUG_RE = re.compile(r"^novel-[a-z0-9]{8}$")


def test_generate_slug_format():
    for _ in range(50):
        assert SLUG_RE.match(generate_slug("novel"))


async def test_unique_slug_without_collision(db_session):
    assert await ensure_unique_slug(db_session, Novel, "novel-abcdefgh") == "novel-abcdefgh"


async def test_unique_slug_appends_counter(db_session):
    db_session.add(Novel(slug="novel-abcdefgh", title="A"))
    db_session.add(Novel(slug="novel-abcdefgh-1", title="B"))
    await db_session.commit()

    assert await ensure_unique_slug(db_session, Novel, "novel-abcdefgh") == "novel-abcdefgh-2"


async def test_unique_slug_falls_back_to_random_suffix(db_session, monkeypatch):
    monkeypatch.setattr(slug_utils, "MAX_SLUG_ATTEMPTS", 2)
    db_session.add(Novel(slug="novel-zzzzzzzz", title="A"))
    db_session.add(Novel(slug="novel-zzzzzzzz-1", title="B"))
    await db_session.commit()

    result = await ensure_unique_slug(db_session, Novel, "novel-zzzzzzzz")
    assert re.match(r"^novel-zzzzzzzz-[0-9a-f]{8}$", result)


async def test_created_slugs_are_unique(client, auth_headers):
    slugs = set()
    for i in range(10):
        rv = await client.post("/api/novels", json={"title": f"N{i}"}, headers=auth_headers)
        assert rv.status_code == 201
        slugs.add(rv.json()["slug"])
    assert len(slugs) == 10
