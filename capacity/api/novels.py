from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.security import AuthIdentity, get_current_admin, get_optional_admin
from capacity.dependencies import get_db
from capacity.models.novel import NovelGenre, NovelStatus, NovelType, RelationType
from capacity.schemas.chapter import ChapterCreate, ChapterPreview, ChapterResponse, ChapterUpdate
from capacity.schemas.novel import (
    NovelCreate,
    NovelResponse,
    NovelUpdate,
    NovelWithStats,
    RelatedNovelCreate,
    RelatedNovelResponse,
)
from capacity.schemas.options import (
    GENRE_LABELS,
    NOVEL_STATUS_LABELS,
    NOVEL_TYPE_LABELS,
    RELATION_TYPE_LABELS,
    OptionItem,
    option_list,
)
from capacity.services.chapter import ChapterService
from capacity.services.novel import NovelService
from capacity.services.relation import RelationService

router = APIRouter()


# === 选项（需在 /{slug} 之前声明） ===

@router.get("/genres", response_model=List[OptionItem], summary="获取题材列表")
async def list_genres():
    return option_list(NovelGenre, GENRE_LABELS)


@router.get("/types", response_model=List[OptionItem], summary="获取作品类型列表")
async def list_novel_types():
    return option_list(NovelType, NOVEL_TYPE_LABELS)


@router.get("/statuses", response_model=List[OptionItem], summary="获取状态列表")
async def list_novel_statuses():
    return option_list(NovelStatus, NOVEL_STATUS_LABELS)


@router.get("/relation-types", response_model=List[OptionItem], summary="获取关联类型列表")
async def list_relation_types():
    return option_list(RelationType, RELATION_TYPE_LABELS)


# === 小说 ===

@router.get("", response_model=List[NovelWithStats], summary="获取小说列表")
async def list_novels(
    status_filter: Optional[NovelStatus] = Query(None, alias="status"),
    genre: Optional[NovelGenre] = None,
    novel_type: Optional[NovelType] = None,
    include_drafts: bool = False,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    获取小说列表（附带章节数）

    草稿只有在管理员显式请求 include_drafts=true 时才会返回
    """
    novel_service = NovelService(db)
    rows = await novel_service.list_with_stats(
        status=status_filter.value if status_filter else None,
        genre=genre.value if genre else None,
        novel_type=novel_type.value if novel_type else None,
        include_drafts=include_drafts and admin is not None,
        limit=limit,
        offset=offset,
    )
    return [
        NovelWithStats.model_validate(novel).model_copy(update={"chapter_count": count})
        for novel, count in rows
    ]


@router.post("", response_model=NovelResponse, status_code=status.HTTP_201_CREATED, summary="创建小说")
async def create_novel(
    novel_data: NovelCreate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await NovelService(db).create(novel_data)


@router.get("/{slug}", response_model=NovelResponse, summary="获取小说详情")
async def get_novel(
    slug: str,
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    return await NovelService(db).get_by_slug(slug, include_drafts=admin is not None)


@router.put("/{slug}", response_model=NovelResponse, summary="更新小说")
async def update_novel(
    slug: str,
    novel_data: NovelUpdate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await NovelService(db).update(slug, novel_data)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT, summary="删除小说")
async def delete_novel(
    slug: str,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await NovelService(db).delete(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{slug}/increment-view", status_code=status.HTTP_204_NO_CONTENT, summary="增加阅读数")
async def increment_novel_view(slug: str, db: AsyncSession = Depends(get_db)):
    await NovelService(db).increment_view(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === 作品关联 ===

@router.get("/{slug}/relations", response_model=List[RelatedNovelResponse], summary="获取关联作品")
async def list_relations(
    slug: str,
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    include_drafts = admin is not None
    # 草稿本身对匿名用户不可见
    await NovelService(db).get_by_slug(slug, include_drafts=include_drafts)
    return await RelationService(db).list_related(slug, include_drafts=include_drafts)


@router.post(
    "/{slug}/relations",
    response_model=RelatedNovelResponse,
    status_code=status.HTTP_201_CREATED,
    summary="添加关联作品",
)
async def add_relation(
    slug: str,
    relation_data: RelatedNovelCreate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await RelationService(db).add(slug, relation_data)


@router.delete("/{slug}/relations", status_code=status.HTTP_204_NO_CONTENT, summary="删除关联作品")
async def remove_relation(
    slug: str,
    related_slug: str = Query(..., min_length=1),
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await RelationService(db).remove(slug, related_slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# === 章节 ===

@router.get("/{slug}/chapters", response_model=List[ChapterPreview], summary="获取章节列表")
async def list_chapters(
    slug: str,
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    novel = await NovelService(db).get_by_slug(slug, include_drafts=admin is not None)
    return await ChapterService(db).list_by_novel(novel.id)


@router.post(
    "/{slug}/chapters",
    response_model=ChapterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="创建章节",
)
async def create_chapter(
    slug: str,
    chapter_data: ChapterCreate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await ChapterService(db).create(slug, chapter_data)


@router.get("/{slug}/chapters/{chapter_number}", response_model=ChapterResponse, summary="获取章节")
async def get_chapter(
    slug: str,
    chapter_number: int,
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    novel = await NovelService(db).get_by_slug(slug, include_drafts=admin is not None)
    return await ChapterService(db).get(novel.id, chapter_number)


@router.put("/{slug}/chapters/{chapter_number}", response_model=ChapterResponse, summary="更新章节")
async def update_chapter(
    slug: str,
    chapter_number: int,
    chapter_data: ChapterUpdate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await ChapterService(db).update(slug, chapter_number, chapter_data)


@router.delete(
    "/{slug}/chapters/{chapter_number}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="删除章节",
)
async def delete_chapter(
    slug: str,
    chapter_number: int,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await ChapterService(db).delete(slug, chapter_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{slug}/chapters/{chapter_number}/increment-view",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="增加章节阅读数",
)
async def increment_chapter_view(slug: str, chapter_number: int, db: AsyncSession = Depends(get_db)):
    await ChapterService(db).increment_view(slug, chapter_number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
