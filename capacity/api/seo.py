"""
SEO 路由

- sitemap.xml / robots.txt
- /pages/... 服务端渲染的博客与小说页面，草稿与未发布内容一律 404
"""
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.config import Settings
from capacity.dependencies import get_app_settings, get_db
from capacity.services.blog import BlogService
from capacity.services.chapter import ChapterService
from capacity.services.novel import NovelService
from capacity.utils.html import (
    render_blog_html,
    render_blog_list_html,
    render_chapter_html,
    render_novel_html,
    render_novels_list_html,
    render_robots_txt,
    render_sitemap_xml,
)

router = APIRouter()

# sitemap 最多收录的文章数
SITEMAP_POST_LIMIT = 1000


@router.get("/sitemap.xml")
async def sitemap_xml(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    posts = await BlogService(db).list(published=True, limit=SITEMAP_POST_LIMIT)
    novels = await NovelService(db).list_public()
    xml = render_sitemap_xml(posts, novels, settings.site_base_url)
    return Response(content=xml, media_type="application/xml; charset=utf-8")


@router.get("/robots.txt")
async def robots_txt(settings: Settings = Depends(get_app_settings)):
    return Response(content=render_robots_txt(settings.site_base_url), media_type="text/plain; charset=utf-8")


@router.get("/pages/blog", response_class=HTMLResponse)
async def blog_list_page(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    posts = await BlogService(db).list(published=True, limit=100)
    return HTMLResponse(render_blog_list_html(posts, settings.site_base_url, settings.SITE_NAME, settings.SITE_LANG))


@router.get("/pages/blog/{slug}", response_class=HTMLResponse)
async def blog_page(
    slug: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    post = await BlogService(db).get_by_slug(slug, include_unpublished=False)
    return HTMLResponse(render_blog_html(post, settings.site_base_url, settings.SITE_NAME, settings.SITE_LANG))


@router.get("/pages/novels", response_class=HTMLResponse)
async def novels_list_page(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    novels = await NovelService(db).list_public()
    return HTMLResponse(render_novels_list_html(novels, settings.site_base_url, settings.SITE_NAME, settings.SITE_LANG))


@router.get("/pages/novels/{slug}", response_class=HTMLResponse)
async def novel_page(
    slug: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    novel = await NovelService(db).get_by_slug(slug, include_drafts=False)
    chapters = await ChapterService(db).list_by_novel(novel.id)
    return HTMLResponse(render_novel_html(novel, chapters, settings.site_base_url, settings.SITE_NAME, settings.SITE_LANG))


@router.get("/pages/novels/{slug}/chapters/{chapter_number}", response_class=HTMLResponse)
async def chapter_page(
    slug: str,
    chapter_number: int,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    novel = await NovelService(db).get_by_slug(slug, include_drafts=False)
    chapter = await ChapterService(db).get(novel.id, chapter_number)
    return HTMLResponse(render_chapter_html(novel, chapter, settings.site_base_url, settings.SITE_NAME, settings.SITE_LANG))
