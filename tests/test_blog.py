"""
tests/test_blog.py
"""
from __future__ import annotations

import re

from tests.helpers import create_post


async def test_create_post_defaults(client, auth_headers):
    post = await create_post(client, auth_headers)
    assert re.match(r"^post-[a-z0-9]{8}$", post["slug"])
    assert post["published"] is False
    assert post["published_at"] is None
    assert post["tags"] == []


async def test_create_published_sets_published_at(client, auth_headers):
    post = await create_post(client, auth_headers, published=True)
    assert post["published_at"] is not None


async def test_tags_are_cleaned(client, auth_headers):
    post = await create_post(client, auth_headers, tags=[" rust ", "rust", "", "python"])
    assert post["tags"] == ["rust", "python"]


async def test_anonymous_sees_only_published(client, auth_headers):
    await create_post(client, auth_headers, title="Hidden")
    await create_post(client, auth_headers, title="Visible", published=True)

    rv = await client.get("/api/blog")
    assert [p["title"] for p in rv.json()] == ["Visible"]
    assert "content" not in rv.json()[0]

    # 匿名请求 published=false 也不会泄露未发布文章
    rv = await client.get("/api/blog", params={"published": "false"})
    assert [p["title"] for p in rv.json()] == ["Visible"]

    rv = await client.get("/api/blog", params={"published": "false"}, headers=auth_headers)
    assert [p["title"] for p in rv.json()] == ["Hidden"]

    rv = await client.get("/api/blog", headers=auth_headers)
    assert {p["title"] for p in rv.json()} == {"Hidden", "Visible"}


async def test_unpublished_post_hidden_from_anonymous(client, auth_headers):
    post = await create_post(client, auth_headers)
    rv = await client.get(f"/api/blog/{post['slug']}")
    assert rv.status_code == 404

    rv = await client.get(f"/api/blog/{post['slug']}", headers=auth_headers)
    assert rv.status_code == 200
    assert rv.json()["content"] == "# Hello\n\nWorld"


async def test_tag_filter(client, auth_headers):
    await create_post(client, auth_headers, title="A", tags=["rust"], published=True)
    await create_post(client, auth_headers, title="B", tags=["python"], published=True)
    await create_post(client, auth_headers, title="C", tags=["rust"])

    rv = await client.get("/api/blog", params={"tag": "rust"})
    assert [p["title"] for p in rv.json()] == ["A"]

    rv = await client.get("/api/blog/tags/rust")
    assert [p["title"] for p in rv.json()] == ["A"]

    rv = await client.get("/api/blog/tags/go")
    assert rv.json() == []


async def test_publish_sets_published_at_once(client, auth_headers):
    post = await create_post(client, auth_headers)

    rv = await client.put(f"/api/blog/{post['slug']}", json={"published": True}, headers=auth_headers)
    assert rv.status_code == 200
    first = rv.json()["published_at"]
    assert first is not None

    rv = await client.put(f"/api/blog/{post['slug']}", json={"published": False}, headers=auth_headers)
    rv = await client.put(f"/api/blog/{post['slug']}", json={"published": True}, headers=auth_headers)
    assert rv.json()["published_at"] == first


async def test_publish_with_null_date_still_sets_published_at(client, auth_headers):
    post = await create_post(client, auth_headers)

    rv = await client.put(
        f"/api/blog/{post['slug']}",
        json={"published": True, "published_at": None},
        headers=auth_headers,
    )
    assert rv.status_code == 200
    assert rv.json()["published"] is True
    assert rv.json()["published_at"] is not None

    rv = await client.get("/sitemap.xml")
    assert f"/blog/{post['slug']}/" in rv.text
    assert rv.text.count("<lastmod>") == 2


async def test_update_post_fields(client, auth_headers):
    post = await create_post(client, auth_headers, excerpt="short")

    rv = await client.put(
        f"/api/blog/{post['slug']}", json={"excerpt": None, "tags": ["a"]}, headers=auth_headers
    )
    assert rv.status_code == 200
    assert rv.json()["excerpt"] is None
    assert rv.json()["tags"] == ["a"]
    assert rv.json()["title"] == post["title"]

    rv = await client.put(f"/api/blog/{post['slug']}", json={"content": None}, headers=auth_headers)
    assert rv.status_code == 400


async def test_delete_post(client, auth_headers):
    post = await create_post(client, auth_headers)
    rv = await client.delete(f"/api/blog/{post['slug']}", headers=auth_headers)
    assert rv.status_code == 204
    rv = await client.delete(f"/api/blog/{post['slug']}", headers=auth_headers)
    assert rv.status_code == 404


async def test_post_increment_view(client, auth_headers):
    post = await create_post(client, auth_headers, published=True)
    rv = await client.post(f"/api/blog/{post['slug']}/increment-view")
    assert rv.status_code == 204
    rv = await client.get(f"/api/blog/{post['slug']}")
    assert rv.json()["view_count"] == 1

    rv = await client.post("/api/blog/post-missing0/increment-view")
    assert rv.status_code == 404


async def test_blog_mutations_require_auth(client):
    rv = await client.post("/api/blog", json={"title": "x", "content": "y"})
    assert rv.status_code == 401
