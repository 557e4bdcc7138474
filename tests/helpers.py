"""
tests/helpers.py
"""
from __future__ import annotations

from typing import Dict

from httpx import AsyncClient

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret1"


# ───────────────────────── helpers ────────────────────────────────────
async def create_novel(client: AsyncClient, headers: Dict[str, str], **fields) -> dict:
    payload = {"title": "Test Novel", **fields}
    rv = await client.post("/api/novels", json=payload, headers=headers)
    assert rv.status_code == 201, rv.text
    return rv.json()


async def create_chapter(client: AsyncClient, headers: Dict[str, str], slug: str, **fields) -> dict:
    payload = {"title": "Chapter", "content": "Once upon a time.", **fields}
    rv = await client.post(f"/api/novels/{slug}/chapters", json=payload, headers=headers)
    assert rv.status_code == 201, rv.text
    return rv.json()


async def create_post(client: AsyncClient, headers: Dict[str, str], **fields) -> dict:
    payload = {"title": "Hello", "content": "# Hello\n\nWorld", **fields}
    rv = await client.post("/api/blog", json=payload, headers=headers)
    assert rv.status_code == 201, rv.text
    return rv.json()
