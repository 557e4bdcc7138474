"""
tests/test_relations.py
"""
from __future__ import annotations

from tests.helpers import create_novel


async def _relate(client, headers, slug, related_slug, relation_type=None):
    payload = {"related_novel_slug": related_slug}
    if relation_type:
        payload["relation_type"] = relation_type
    return await client.post(f"/api/novels/{slug}/relations", json=payload, headers=headers)


async def test_add_and_list_relation(client, auth_headers):
    a = await create_novel(client, auth_headers, title="A", status="ongoing")
    b = await create_novel(client, auth_headers, title="B", status="ongoing")

    rv = await _relate(client, auth_headers, a["slug"], b["slug"], "sequel")
    assert rv.status_code == 201
    assert rv.json()["slug"] == b["slug"]
    assert rv.json()["relation_type"] == "sequel"

    rv = await client.get(f"/api/novels/{a['slug']}/relations")
    assert [r["title"] for r in rv.json()] == ["B"]

    # 关联有方向
    rv = await client.get(f"/api/novels/{b['slug']}/relations")
    assert rv.json() == []


async def test_default_relation_type(client, auth_headers):
    a = await create_novel(client, auth_headers)
    b = await create_novel(client, auth_headers)
    rv = await _relate(client, auth_headers, a["slug"], b["slug"])
    assert rv.json()["relation_type"] == "related"


async def test_self_relation_rejected(client, auth_headers):
    a = await create_novel(client, auth_headers)
    rv = await _relate(client, auth_headers, a["slug"], a["slug"])
    assert rv.status_code == 400
    assert rv.json()["error"] == "A novel cannot be related to itself"


async def test_duplicate_relation_is_conflict(client, auth_headers):
    a = await create_novel(client, auth_headers)
    b = await create_novel(client, auth_headers)
    await _relate(client, auth_headers, a["slug"], b["slug"])

    rv = await _relate(client, auth_headers, a["slug"], b["slug"], "prequel")
    assert rv.status_code == 409


async def test_relation_to_missing_novel(client, auth_headers):
    a = await create_novel(client, auth_headers)
    rv = await _relate(client, auth_headers, a["slug"], "novel-missing0")
    assert rv.status_code == 404


async def test_draft_relations_hidden_from_anonymous(client, auth_headers):
    a = await create_novel(client, auth_headers, status="ongoing")
    draft = await create_novel(client, auth_headers)
    await _relate(client, auth_headers, a["slug"], draft["slug"])

    rv = await client.get(f"/api/novels/{a['slug']}/relations")
    assert rv.json() == []

    rv = await client.get(f"/api/novels/{a['slug']}/relations", headers=auth_headers)
    assert len(rv.json()) == 1


async def test_remove_relation(client, auth_headers):
    a = await create_novel(client, auth_headers)
    b = await create_novel(client, auth_headers)
    await _relate(client, auth_headers, a["slug"], b["slug"])

    rv = await client.delete(
        f"/api/novels/{a['slug']}/relations", params={"related_slug": b["slug"]}, headers=auth_headers
    )
    assert rv.status_code == 204

    rv = await client.delete(
        f"/api/novels/{a['slug']}/relations", params={"related_slug": b["slug"]}, headers=auth_headers
    )
    assert rv.status_code == 404


async def test_relations_require_auth(client, auth_headers):
    a = await create_novel(client, auth_headers)
    b = await create_novel(client, auth_headers)
    rv = await _relate(client, {}, a["slug"], b["slug"])
    assert rv.status_code == 401
