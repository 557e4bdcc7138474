import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError
from capacity.db.crud import delete_where, insert_and_refresh
from capacity.models.novel import Novel, NovelRelation, NovelStatus
from capacity.schemas.novel import RelatedNovelCreate, RelatedNovelResponse

logger = logging.getLogger(__name__)


def _to_response(relation: NovelRelation, related: Novel) -> RelatedNovelResponse:
    return RelatedNovelResponse(
        id=related.id,
        slug=related.slug,
        title=related.title,
        novel_type=related.novel_type,
        status=related.status,
        cover_image_url=related.cover_image_url,
        relation_type=relation.relation_type,
        created_at=relation.created_at,
    )


class RelationService:
    """小说之间的关联（有方向）"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_novel(self, slug: str) -> Novel:
        result = await self.db.execute(select(Novel).where(Novel.slug == slug))
        novel = result.scalar_one_or_none()
        if novel is None:
            raise AppError.not_found("Novel")
        return novel

    async def list_related(self, slug: str, include_drafts: bool = True) -> List[RelatedNovelResponse]:
        novel = await self._get_novel(slug)

        stmt = (
            select(NovelRelation, Novel)
            .join(Novel, Novel.id == NovelRelation.related_novel_id)
            .where(NovelRelation.novel_id == novel.id)
            .order_by(NovelRelation.created_at)
        )
        if not include_drafts:
            stmt = stmt.where(Novel.status != NovelStatus.DRAFT.value)

        result = await self.db.execute(stmt)
        return [_to_response(relation, related) for relation, related in result.all()]

    async def add(self, slug: str, relation_data: RelatedNovelCreate) -> RelatedNovelResponse:
        novel = await self._get_novel(slug)
        related = await self._get_novel(relation_data.related_novel_slug)

        if novel.id == related.id:
            raise AppError.bad_request("A novel cannot be related to itself")

        relation = NovelRelation(
            novel_id=novel.id,
            related_novel_id=related.id,
            relation_type=relation_data.relation_type,
        )
        relation = await insert_and_refresh(self.db, relation, "Relation already exists")
        logger.info(f"✅ 添加关联: {novel.slug} -> {related.slug} ({relation.relation_type})")
        return _to_response(relation, related)

    async def remove(self, slug: str, related_slug: str) -> None:
        novel = await self._get_novel(slug)
        related = await self._get_novel(related_slug)
        await delete_where(
            self.db,
            NovelRelation,
            [NovelRelation.novel_id == novel.id, NovelRelation.related_novel_id == related.id],
            "Relation",
        )
