import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError
from capacity.db.crud import delete_where, increment_view_count, insert_and_refresh
from capacity.db.partial_update import apply_partial_update, build_update_values
from capacity.db.types import array_contains
from capacity.models.chapter import NovelChapter
from capacity.models.novel import Novel, NovelStatus
from capacity.schemas.novel import NovelCreate, NovelUpdate
from capacity.utils.slug import new_unique_slug

logger = logging.getLogger(__name__)

NOVEL_UPDATABLE = ("title", "description", "cover_image_url", "novel_type", "genres", "status")
NOVEL_NON_NULLABLE = ("title", "novel_type", "genres", "status")


class NovelService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, novel_data: NovelCreate) -> Novel:
        slug = await new_unique_slug(self.db, Novel, "novel")
        novel = Novel(slug=slug, **novel_data.model_dump())
        novel = await insert_and_refresh(self.db, novel, "Novel with this slug already exists")
        logger.info(f"✅ 创建小说: {novel.slug}")
        return novel

    async def get_by_slug(self, slug: str, include_drafts: bool = True) -> Novel:
        """按 slug 获取小说；include_drafts 为 False 时草稿视为不存在"""
        stmt = select(Novel).where(Novel.slug == slug)
        if not include_drafts:
            stmt = stmt.where(Novel.status != NovelStatus.DRAFT.value)

        result = await self.db.execute(stmt)
        novel = result.scalar_one_or_none()
        if novel is None:
            raise AppError.not_found("Novel")
        return novel

    async def list_with_stats(
        self,
        status: Optional[str] = None,
        genre: Optional[str] = None,
        novel_type: Optional[str] = None,
        include_drafts: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Tuple[Novel, int]]:
        """获取小说列表及章节数，所有过滤条件均为绑定参数"""
        chapter_count = func.count(NovelChapter.id).label("chapter_count")
        stmt = (
            select(Novel, chapter_count)
            .outerjoin(NovelChapter, NovelChapter.novel_id == Novel.id)
            .group_by(Novel.id)
        )

        if not include_drafts:
            stmt = stmt.where(Novel.status != NovelStatus.DRAFT.value)
        if status:
            stmt = stmt.where(Novel.status == status)
        if genre:
            stmt = stmt.where(array_contains(Novel.genres, genre))
        if novel_type:
            stmt = stmt.where(Novel.novel_type == novel_type)

        stmt = stmt.order_by(Novel.created_at.desc(), Novel.id).offset(offset).limit(limit)

        result = await self.db.execute(stmt)
        return [(novel, count) for novel, count in result.all()]

    async def list_public(self) -> List[Novel]:
        """所有非草稿小说（用于HTML页面与sitemap）"""
        result = await self.db.execute(
            select(Novel)
            .where(Novel.status != NovelStatus.DRAFT.value)
            .order_by(Novel.created_at.desc())
        )
        return list(result.scalars().all())

    async def update(self, slug: str, novel_data: NovelUpdate) -> Novel:
        values = build_update_values(novel_data, NOVEL_UPDATABLE, NOVEL_NON_NULLABLE)
        return await apply_partial_update(self.db, Novel, [Novel.slug == slug], values, "Novel")

    async def delete(self, slug: str) -> None:
        # 章节与关联通过外键级联删除
        await delete_where(self.db, Novel, [Novel.slug == slug], "Novel")

    async def increment_view(self, slug: str) -> None:
        await increment_view_count(self.db, Novel, [Novel.slug == slug], "Novel")
