import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from capacity.api import api_router, site_router
from capacity.core.config import Settings, get_settings
from capacity.core.errors import register_exception_handlers
from capacity.db.database import Database
from capacity.db.migration import run_auto_migration

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings: Settings = app.state.settings
    db: Database = app.state.db

    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    logger.info("应用正在启动...")

    # 执行数据库迁移
    if settings.AUTO_MIGRATE:
        logger.info("检查并执行数据库迁移...")
        migration_success = await run_auto_migration(db.engine, settings)

        if migration_success:
            logger.info("🎉 数据库已准备就绪")
        else:
            logger.error("❌ 数据库迁移失败")
            raise RuntimeError("数据库迁移失败，应用无法启动")

    await db.test_connection()
    logger.info("✅ 数据库连接成功")
    logger.info("应用启动完成")

    yield  # 应用运行期间

    logger.info("应用正在关闭...")
    await db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings)

    # CORS配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # 根路径路由
    @app.get("/")
    async def root():
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "endpoints": {
                "health": "/health",
                "auth": f"{settings.API_PREFIX}/auth",
                "novels": f"{settings.API_PREFIX}/novels",
                "blog": f"{settings.API_PREFIX}/blog",
                "apps": f"{settings.API_PREFIX}/apps",
                "sitemap": "/sitemap.xml",
                "docs": "/docs",
            },
        }

    # 注册API路由
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(site_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("capacity.main:app", host="0.0.0.0", port=get_settings().PORT, reload=True)
