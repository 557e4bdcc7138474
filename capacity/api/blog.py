from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.security import AuthIdentity, get_current_admin, get_optional_admin
from capacity.dependencies import get_db
from capacity.schemas.blog import BlogPostCreate, BlogPostPreview, BlogPostResponse, BlogPostUpdate
from capacity.services.blog import BlogService

router = APIRouter()


@router.get("", response_model=List[BlogPostPreview], summary="获取博客文章列表")
async def list_posts(
    published: Optional[bool] = None,
    tag: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    """匿名用户只能看到已发布的文章"""
    if admin is None:
        published = True
    return await BlogService(db).list(published=published, tag=tag, limit=limit, offset=offset)


@router.get("/tags/{tag}", response_model=List[BlogPostPreview], summary="按标签获取文章")
async def list_posts_by_tag(
    tag: str,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await BlogService(db).list(published=True, tag=tag, limit=limit, offset=offset)


@router.post("", response_model=BlogPostResponse, status_code=status.HTTP_201_CREATED, summary="创建文章")
async def create_post(
    post_data: BlogPostCreate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await BlogService(db).create(post_data)


@router.get("/{slug}", response_model=BlogPostResponse, summary="获取文章")
async def get_post(
    slug: str,
    admin: Optional[AuthIdentity] = Depends(get_optional_admin),
    db: AsyncSession = Depends(get_db),
):
    return await BlogService(db).get_by_slug(slug, include_unpublished=admin is not None)


@router.put("/{slug}", response_model=BlogPostResponse, summary="更新文章")
async def update_post(
    slug: str,
    post_data: BlogPostUpdate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await BlogService(db).update(slug, post_data)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT, summary="删除文章")
async def delete_post(
    slug: str,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await BlogService(db).delete(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{slug}/increment-view", status_code=status.HTTP_204_NO_CONTENT, summary="增加阅读数")
async def increment_post_view(slug: str, db: AsyncSession = Depends(get_db)):
    await BlogService(db).increment_view(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
