import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError
from capacity.db.crud import delete_where, increment_view_count, insert_and_refresh
from capacity.db.partial_update import apply_partial_update, build_update_values
from capacity.db.types import array_contains
from capacity.models.blog import BlogPost
from capacity.schemas.blog import BlogPostCreate, BlogPostUpdate
from capacity.utils.slug import new_unique_slug

logger = logging.getLogger(__name__)

BLOG_UPDATABLE = ("title", "content", "excerpt", "cover_image_url", "tags", "published", "published_at")
BLOG_NON_NULLABLE = ("title", "content", "tags", "published")


class BlogService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, post_data: BlogPostCreate) -> BlogPost:
        slug = await new_unique_slug(self.db, BlogPost, "post")

        values = post_data.model_dump()
        if values["published"] and values["published_at"] is None:
            values["published_at"] = datetime.now(timezone.utc)

        post = await insert_and_refresh(
            self.db, BlogPost(slug=slug, **values), "Blog post with this slug already exists"
        )
        logger.info(f"✅ 创建博客文章: {post.slug}")
        return post

    async def get_by_slug(self, slug: str, include_unpublished: bool = True) -> BlogPost:
        stmt = select(BlogPost).where(BlogPost.slug == slug)
        if not include_unpublished:
            stmt = stmt.where(BlogPost.published.is_(True))

        result = await self.db.execute(stmt)
        post = result.scalar_one_or_none()
        if post is None:
            raise AppError.not_found("Blog post")
        return post

    async def list(
        self,
        published: Optional[bool] = None,
        tag: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[BlogPost]:
        stmt = select(BlogPost)

        if published is not None:
            stmt = stmt.where(BlogPost.published.is_(published))
        if tag:
            stmt = stmt.where(array_contains(BlogPost.tags, tag))

        stmt = (
            stmt.order_by(BlogPost.published_at.desc().nulls_last(), BlogPost.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def update(self, slug: str, post_data: BlogPostUpdate) -> BlogPost:
        values = build_update_values(post_data, BLOG_UPDATABLE, BLOG_NON_NULLABLE)

        # 发布时若没有发布时间（未传或传 null）则在同一条语句里补上
        if values.get("published") and values.get("published_at") is None:
            values["published_at"] = func.coalesce(BlogPost.published_at, values["updated_at"])

        return await apply_partial_update(self.db, BlogPost, [BlogPost.slug == slug], values, "Blog post")

    async def delete(self, slug: str) -> None:
        await delete_where(self.db, BlogPost, [BlogPost.slug == slug], "Blog post")

    async def increment_view(self, slug: str) -> None:
        await increment_view_count(self.db, BlogPost, [BlogPost.slug == slug], "Blog post")
