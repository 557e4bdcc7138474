import logging
from typing import List

from sqlalchemy import select, desc, asc
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError
from capacity.db.crud import delete_where, increment_view_count, insert_and_refresh
from capacity.db.partial_update import apply_partial_update, build_update_values
from capacity.models.chapter import NovelChapter
from capacity.models.novel import Novel
from capacity.schemas.chapter import ChapterCreate, ChapterUpdate

logger = logging.getLogger(__name__)

CHAPTER_UPDATABLE = ("title", "content", "published_at")
CHAPTER_NON_NULLABLE = ("title", "content")
DUPLICATE_CHAPTER_MESSAGE = "Chapter number already exists for this novel"


class ChapterService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_novel_id(self, slug: str):
        """按 slug 取小说 id，小说不存在时抛 NOT_FOUND(Novel)"""
        result = await self.db.execute(select(Novel.id).where(Novel.slug == slug))
        novel_id = result.scalar_one_or_none()
        if novel_id is None:
            raise AppError.not_found("Novel")
        return novel_id

    async def _chapter_criteria(self, slug: str, chapter_number: int):
        novel_id = await self._require_novel_id(slug)
        return [
            NovelChapter.novel_id == novel_id,
            NovelChapter.chapter_number == chapter_number,
        ]

    async def get_latest_chapter_number(self, novel_id) -> int:
        """获取小说的最新章节号"""
        result = await self.db.execute(
            select(NovelChapter.chapter_number)
            .where(NovelChapter.novel_id == novel_id)
            .order_by(desc(NovelChapter.chapter_number))
            .limit(1)
        )
        latest = result.scalar_one_or_none()
        return latest if latest is not None else 0

    async def list_by_novel(self, novel_id) -> List[NovelChapter]:
        """按章节号正序返回小说的全部章节"""
        result = await self.db.execute(
            select(NovelChapter)
            .where(NovelChapter.novel_id == novel_id)
            .order_by(asc(NovelChapter.chapter_number))
        )
        return list(result.scalars().all())

    async def get(self, novel_id, chapter_number: int) -> NovelChapter:
        result = await self.db.execute(
            select(NovelChapter).where(
                NovelChapter.novel_id == novel_id,
                NovelChapter.chapter_number == chapter_number,
            )
        )
        chapter = result.scalar_one_or_none()
        if chapter is None:
            raise AppError.not_found("Chapter")
        return chapter

    async def create(self, slug: str, chapter_data: ChapterCreate) -> NovelChapter:
        novel_id = await self._require_novel_id(slug)

        chapter_number = chapter_data.chapter_number
        if chapter_number is None:
            chapter_number = await self.get_latest_chapter_number(novel_id) + 1

        chapter = NovelChapter(
            novel_id=novel_id,
            chapter_number=chapter_number,
            title=chapter_data.title,
            content=chapter_data.content,
            published_at=chapter_data.published_at,
        )
        chapter = await insert_and_refresh(self.db, chapter, DUPLICATE_CHAPTER_MESSAGE)
        logger.info(f"✅ 创建章节: {slug} #{chapter.chapter_number}")
        return chapter

    async def update(self, slug: str, chapter_number: int, chapter_data: ChapterUpdate) -> NovelChapter:
        values = build_update_values(chapter_data, CHAPTER_UPDATABLE, CHAPTER_NON_NULLABLE)
        return await apply_partial_update(
            self.db,
            NovelChapter,
            await self._chapter_criteria(slug, chapter_number),
            values,
            "Chapter",
        )

    async def delete(self, slug: str, chapter_number: int) -> None:
        await delete_where(self.db, NovelChapter, await self._chapter_criteria(slug, chapter_number), "Chapter")

    async def increment_view(self, slug: str, chapter_number: int) -> None:
        await increment_view_count(
            self.db, NovelChapter, await self._chapter_criteria(slug, chapter_number), "Chapter"
        )
