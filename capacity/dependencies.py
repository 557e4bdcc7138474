from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.config import Settings

# 公共依赖：配置与数据库会话都挂在 app.state 上，由 create_app 构造


def get_app_settings(request: Request) -> Settings:
    """获取当前应用的（只读）配置"""
    return request.app.state.settings


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """数据库会话依赖"""
    async with request.app.state.db.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


__all__ = ["get_app_settings", "get_db"]
