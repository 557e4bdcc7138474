import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError
from capacity.db.crud import delete_where, insert_and_refresh
from capacity.db.partial_update import apply_partial_update, build_update_values
from capacity.db.types import array_contains
from capacity.models.app import App
from capacity.schemas.app import AppCreate, AppUpdate
from capacity.utils.slug import new_unique_slug

logger = logging.getLogger(__name__)

APP_UPDATABLE = (
    "name",
    "description",
    "platforms",
    "icon_url",
    "screenshots",
    "distribution_channels",
    "privacy_policy_url",
)
APP_NON_NULLABLE = ("name", "platforms", "screenshots", "distribution_channels")


class AppService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, app_data: AppCreate) -> App:
        slug = await new_unique_slug(self.db, App, "app")
        app = await insert_and_refresh(
            self.db, App(slug=slug, **app_data.model_dump()), "App with this slug already exists"
        )
        logger.info(f"✅ 创建应用: {app.slug}")
        return app

    async def get_by_slug(self, slug: str) -> App:
        result = await self.db.execute(select(App).where(App.slug == slug))
        app = result.scalar_one_or_none()
        if app is None:
            raise AppError.not_found("App")
        return app

    async def list(self, platform: Optional[str] = None, limit: int = 20, offset: int = 0) -> List[App]:
        stmt = select(App)
        if platform:
            stmt = stmt.where(array_contains(App.platforms, platform))

        stmt = stmt.order_by(App.created_at.desc(), App.id).offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, slug: str, app_data: AppUpdate) -> App:
        values = build_update_values(app_data, APP_UPDATABLE, APP_NON_NULLABLE)
        return await apply_partial_update(self.db, App, [App.slug == slug], values, "App")

    async def delete(self, slug: str) -> None:
        await delete_where(self.db, App, [App.slug == slug], "App")
