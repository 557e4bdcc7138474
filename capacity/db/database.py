"""数据库引擎与会话管理"""
import logging
from typing import Optional

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from capacity.core.config import Settings

logger = logging.getLogger(__name__)


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """SQLite 默认不启用外键，级联删除依赖它"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def async_database_url(url: str) -> str:
    """postgres:// 与 postgresql:// 统一使用 asyncpg 驱动"""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """根据配置创建异步引擎（连接池）"""
    url = async_database_url(settings.DATABASE_URL)

    if url.startswith("sqlite"):
        # 内存库必须共享同一个连接，否则每个连接看到的是不同的库
        engine = create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)
    else:
        engine = create_async_engine(
            url,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.DATABASE_POOL_SIZE,
            pool_pre_ping=True,
        )

    return engine


class Database:
    """一个应用实例持有的连接池与会话工厂"""

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.engine = engine or create_engine_from_settings(settings)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def test_connection(self) -> bool:
        """测试数据库连接"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def get_version(self) -> str:
        """获取数据库版本"""
        async with self.engine.connect() as conn:
            if self.engine.dialect.name == "sqlite":
                result = await conn.execute(text("SELECT sqlite_version()"))
                return f"SQLite {result.scalar()}"
            result = await conn.execute(text("SELECT version()"))
            return result.scalar()

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("数据库连接池已关闭")
