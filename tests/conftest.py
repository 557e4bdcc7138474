"""
tests/conftest.py
"""
from __future__ import annotations

from typing import AsyncIterator, Dict

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from capacity.core.config import Settings
from capacity.db.init_db import create_database
from capacity.main import create_app
from tests.helpers import ADMIN_PASSWORD, ADMIN_USERNAME


@pytest.fixture
def settings() -> Settings:
    """每个测试一个独立的内存 SQLite 库"""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite+aiosqlite://",
        AUTO_MIGRATE=False,
        JWT_SECRET="test-secret-key",
        JWT_EXPIRATION=3600,
        SITE_BASE_URL="https://example.com/",
        DEBUG=False,
    )


@pytest.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    # ASGITransport 不会触发 lifespan，这里手动建表
    application = create_app(settings)
    await create_database(application.state.db.engine)
    yield application
    await application.state.db.dispose()


@pytest.fixture
async def db_session(app: FastAPI):
    async with app.state.db.session_factory() as session:
        yield session


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def auth_headers(client: AsyncClient) -> Dict[str, str]:
    """注册唯一的管理员并登录，返回 Authorization 头"""
    rv = await client.post(
        "/api/auth/register", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert rv.status_code == 201, rv.text
    rv = await client.post(
        "/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert rv.status_code == 200, rv.text
    return {"Authorization": f"Bearer {rv.json()['token']}"}
