"""数据库迁移管理模块"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from capacity.core.config import Settings
from capacity.db.database import async_database_url

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


class DatabaseMigrationManager:
    """数据库迁移管理器"""

    def __init__(self, engine: AsyncEngine, settings: Settings):
        self.engine = engine
        self.settings = settings
        self.alembic_cfg = self._get_alembic_config()

    def _get_alembic_config(self) -> Config:
        """获取 Alembic 配置"""
        alembic_ini_path = PROJECT_ROOT / "alembic.ini"

        if not alembic_ini_path.exists():
            raise FileNotFoundError(f"Alembic配置文件不存在: {alembic_ini_path}")

        config = Config(str(alembic_ini_path))
        config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
        # env.py 使用异步引擎，直接传入应用的连接串
        config.set_main_option("sqlalchemy.url", async_database_url(self.settings.DATABASE_URL).replace("%", "%%"))
        config.attributes["configure_logger"] = False
        return config

    async def get_current_revision(self) -> Optional[str]:
        """获取当前数据库版本（未初始化时为 None）"""
        async with self.engine.connect() as conn:
            return await conn.run_sync(
                lambda sync_conn: MigrationContext.configure(sync_conn).get_current_revision()
            )

    def get_latest_revision(self) -> Optional[str]:
        """获取最新的迁移版本"""
        script_dir = ScriptDirectory.from_config(self.alembic_cfg)
        return script_dir.get_current_head()

    async def needs_migration(self) -> bool:
        """检查是否需要执行迁移"""
        current_rev = await self.get_current_revision()
        latest_rev = self.get_latest_revision()

        logger.info(f"当前数据库版本: {current_rev}")
        logger.info(f"最新迁移版本: {latest_rev}")

        return current_rev != latest_rev

    def run_migrations_sync(self) -> None:
        """同步执行数据库迁移（alembic 的 env.py 会自己启动事件循环）"""
        logger.info("开始执行数据库迁移...")
        command.upgrade(self.alembic_cfg, "head")
        logger.info("✅ 数据库迁移执行成功！所有表结构已更新到最新版本")

    async def run_migrations(self) -> None:
        """在线程池中执行同步的迁移操作"""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.run_migrations_sync)

    async def auto_migrate(self) -> bool:
        """自动迁移：检查并执行必要的数据库迁移"""
        try:
            if await self.needs_migration():
                logger.info("检测到需要执行数据库迁移")
                await self.run_migrations()
            else:
                logger.info("数据库已是最新版本，无需迁移")
            return True
        except SQLAlchemyError as e:
            logger.error(f"❌ 数据库迁移执行失败: {e}")
            return False


async def run_auto_migration(engine: AsyncEngine, settings: Settings) -> bool:
    """运行自动迁移的便捷函数"""
    migration_manager = DatabaseMigrationManager(engine, settings)
    return await migration_manager.auto_migrate()
