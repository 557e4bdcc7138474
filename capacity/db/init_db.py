import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from capacity.core.config import get_settings
from capacity.db.base import Base
from capacity.db.database import create_engine_from_settings

# 注册所有模型到 Base.metadata
import capacity.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_database(engine: AsyncEngine, drop: bool = False) -> None:
    """直接按模型创建数据库表（开发与测试使用，生产环境走 alembic）"""
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created successfully!")


async def main() -> None:
    engine = create_engine_from_settings(get_settings())
    try:
        await create_database(engine, drop=True)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
