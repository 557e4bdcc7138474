"""
服务端渲染的 SEO 页面与 sitemap

页面外壳是 jinja2 模板（自动转义），片段用 markupsafe 转义，markdown 正文由 capacity.utils.markdown 渲染
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from jinja2 import Environment
from markupsafe import Markup, escape

from capacity.models.blog import BlogPost
from capacity.models.chapter import NovelChapter
from capacity.models.novel import Novel, NovelStatus
from capacity.utils.markdown import markdown_to_html, plain_excerpt

DEFAULT_SITE_NAME = "0010capacity"
DEFAULT_LANG = "ko"

NOVEL_STATUS_TEXT = {
    NovelStatus.ONGOING.value: "연재중",
    NovelStatus.COMPLETED.value: "완결",
    NovelStatus.HIATUS.value: "휴재",
    NovelStatus.DRAFT.value: "초안",
}

STYLE = """
        * { margin: 0; padding: 0; box-sizing: border-box; }
        html, body {
            background: #0a0a0a;
            color: #e5e7eb;
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', sans-serif;
            line-height: 1.6;
        }
        .container { max-width: 42rem; margin: 0 auto; padding: 1.5rem; }
        header { margin-bottom: 2rem; }
        a { color: #9ca3af; text-decoration: none; }
        a:hover { color: #e5e7eb; }
        .back-link { font-size: 0.875rem; margin-bottom: 2rem; display: inline-block; }
        h1 { font-size: 1.875rem; font-weight: 300; margin-bottom: 1rem; line-height: 1.2; }
        h2 { font-size: 1rem; font-weight: 400; }
        time, .meta, .subtitle { font-size: 0.875rem; color: #9ca3af; display: block; }
        .tags { display: flex; gap: 0.5rem; flex-wrap: wrap; margin-top: 1rem; }
        .tags a, .tags span { font-size: 0.75rem; }
        .item { display: flex; justify-content: space-between; padding: 1rem 0; border-bottom: 1px solid #171717; }
        article { margin: 3rem 0 2rem; }
        article p { margin-bottom: 1rem; color: #d1d5db; }
        article h1, article h2, article h3 { font-weight: 300; margin: 1.5rem 0 0.75rem; }
        article code { background: #1f2937; padding: 0.125rem 0.375rem; border-radius: 0.25rem; font-size: 0.875rem; }
        article pre { background: #111827; border: 1px solid #374151; border-radius: 0.5rem; padding: 1rem; overflow-x: auto; margin-bottom: 1rem; }
        article pre code { background: none; padding: 0; }
        article blockquote { border-left: 2px solid #374151; color: #9ca3af; padding-left: 1.5rem; margin: 1.5rem 0; }
        article ul, article ol { margin: 0 0 1rem 1.5rem; }
        footer { border-top: 1px solid #1f2937; padding-top: 2rem; margin-top: 3rem; font-size: 0.875rem; }
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }} | {{ site_name }}</title>
    <meta name="description" content="{{ description }}">
    <meta name="author" content="{{ site_name }}">
    <meta property="og:type" content="{{ og_type }}">
    <meta property="og:title" content="{{ title }}">
    <meta property="og:description" content="{{ description }}">
    <meta property="og:url" content="{{ url }}">
    <meta property="og:site_name" content="{{ site_name }}">
    <meta name="twitter:card" content="summary_large_image">
    <meta name="twitter:title" content="{{ title }}">
    <meta name="twitter:description" content="{{ description }}">
{%- if published_time %}
    <meta property="article:published_time" content="{{ published_time }}">
{%- endif %}
{%- if image %}
    <meta property="og:image" content="{{ image }}">
    <meta name="twitter:image" content="{{ image }}">
{%- endif %}
{%- if keywords %}
    <meta name="keywords" content="{{ keywords | join(', ') }}">
{%- endif %}
    <link rel="canonical" href="{{ url }}">
    <meta name="robots" content="index, follow">
    <style>{{ style | safe }}</style>
</head>
<body>
    <div class="container">
{{ body }}
    </div>
</body>
</html>"""

_env = Environment(autoescape=True)
_page_template = _env.from_string(PAGE_TEMPLATE)


def format_date(dt: Optional[datetime]) -> str:
    if dt is None:
        return ""
    return dt.strftime("%Y년 %m월 %d일")


def _iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def _base(base_url: str) -> str:
    return base_url.rstrip("/")


def _page(
    *,
    title: str,
    description: str,
    url: str,
    body: Markup,
    og_type: str = "website",
    published_time: Optional[str] = None,
    keywords: Sequence[str] = (),
    image: Optional[str] = None,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    """完整 HTML 文档：标题、描述、Open Graph / Twitter 卡片、canonical（jinja2 自动转义）"""
    return _page_template.render(
        title=title,
        description=description,
        url=url,
        body=body,
        og_type=og_type,
        published_time=published_time,
        keywords=list(keywords),
        image=image,
        site_name=site_name,
        lang=lang,
        style=STYLE,
    )


# === 博客 ===

def render_blog_html(
    post: BlogPost,
    base_url: str,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    base = _base(base_url)
    url = f"{base}/blog/{post.slug}/"
    description = post.excerpt or plain_excerpt(post.content)
    date = post.published_at or post.created_at

    tags_html = "".join(
        f'<a href="/blog?tag={escape(tag)}">#{escape(tag)}</a>' for tag in post.tags or []
    )
    body = Markup(
        f"""        <a href="/" class="back-link">← 돌아가기</a>
        <header>
            <time>{escape(format_date(date))}</time>
            <h1>{escape(post.title)}</h1>
            <div class="tags">{tags_html}</div>
        </header>
        <article>
            {markdown_to_html(post.content)}
        </article>
        <footer><a href="/blog/">← 블로그로 돌아가기</a></footer>"""
    )
    return _page(
        title=post.title,
        description=description,
        url=url,
        body=body,
        og_type="article",
        published_time=_iso(date),
        keywords=post.tags or [],
        image=post.cover_image_url,
        site_name=site_name,
        lang=lang,
    )


def render_blog_list_html(
    posts: Iterable[BlogPost],
    base_url: str,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    base = _base(base_url)
    items = []
    for post in posts:
        tags_html = "".join(f"<span>#{escape(tag)}</span>" for tag in (post.tags or [])[:3])
        items.append(
            f"""            <a href="/blog/{escape(post.slug)}/" class="item">
                <div>
                    <h2>{escape(post.title)}</h2>
                    <div class="tags">{tags_html}</div>
                </div>
                <time>{escape(format_date(post.published_at or post.created_at))}</time>
            </a>"""
        )
    items_html = "\n".join(items)

    body = Markup(
        f"""        <a href="/" class="back-link">← 돌아가기</a>
        <header>
            <h1>블로그</h1>
            <p class="subtitle">기술, 경험, 그리고 생각들</p>
        </header>
        <div class="posts">
{items_html}
        </div>"""
    )
    return _page(
        title="블로그",
        description="기술, 경험, 그리고 생각들에 대한 블로그",
        url=f"{base}/blog/",
        body=body,
        site_name=site_name,
        lang=lang,
    )


# === 小说 ===

def render_novel_html(
    novel: Novel,
    chapters: Sequence[NovelChapter],
    base_url: str,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    base = _base(base_url)
    url = f"{base}/novels/{novel.slug}/"
    description = plain_excerpt(novel.description) or novel.title

    chapter_items = "".join(
        f"""            <a href="/novels/{escape(novel.slug)}/chapter/{chapter.chapter_number}/" class="item">
                <h2>{chapter.chapter_number}. {escape(chapter.title)}</h2>
                <time>{escape(format_date(chapter.published_at or chapter.created_at))}</time>
            </a>"""
        for chapter in chapters
    )
    genres = " · ".join(novel.genres or [])

    body = Markup(
        f"""        <a href="/novels/" class="back-link">← 소설 목록</a>
        <header>
            <h1>{escape(novel.title)}</h1>
            <span class="meta">{escape(NOVEL_STATUS_TEXT.get(novel.status, novel.status))} · {len(chapters)}화</span>
            <span class="meta">{escape(genres)}</span>
        </header>
        <article>
            {markdown_to_html(novel.description or "")}
        </article>
        <div class="chapters">
{chapter_items}
        </div>"""
    )
    return _page(
        title=novel.title,
        description=description,
        url=url,
        body=body,
        og_type="book",
        published_time=_iso(novel.created_at),
        keywords=novel.genres or [],
        image=novel.cover_image_url,
        site_name=site_name,
        lang=lang,
    )


def render_novels_list_html(
    novels: Iterable[Novel],
    base_url: str,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    base = _base(base_url)
    items = "".join(
        f"""            <a href="/novels/{escape(novel.slug)}/" class="item">
                <h2>{escape(novel.title)}</h2>
                <span class="meta">{escape(NOVEL_STATUS_TEXT.get(novel.status, novel.status))}</span>
            </a>"""
        for novel in novels
    )
    body = Markup(
        f"""        <a href="/" class="back-link">← 돌아가기</a>
        <header>
            <h1>소설</h1>
            <p class="subtitle">창작 소설</p>
        </header>
        <div class="novels">
{items}
        </div>"""
    )
    return _page(
        title="소설",
        description="창작 소설 목록",
        url=f"{base}/novels/",
        body=body,
        site_name=site_name,
        lang=lang,
    )


def render_chapter_html(
    novel: Novel,
    chapter: NovelChapter,
    base_url: str,
    site_name: str = DEFAULT_SITE_NAME,
    lang: str = DEFAULT_LANG,
) -> str:
    base = _base(base_url)
    url = f"{base}/novels/{novel.slug}/chapter/{chapter.chapter_number}/"
    title = f"{novel.title} {chapter.chapter_number}화 - {chapter.title}"

    body = Markup(
        f"""        <a href="/novels/{escape(novel.slug)}/" class="back-link">← {escape(novel.title)}</a>
        <header>
            <span class="meta">{chapter.chapter_number}화</span>
            <h1>{escape(chapter.title)}</h1>
        </header>
        <article>
            {markdown_to_html(chapter.content)}
        </article>
        <footer><a href="/novels/{escape(novel.slug)}/">← 목록으로</a></footer>"""
    )
    return _page(
        title=title,
        description=plain_excerpt(chapter.content),
        url=url,
        body=body,
        og_type="article",
        published_time=_iso(chapter.published_at or chapter.created_at),
        image=novel.cover_image_url,
        site_name=site_name,
        lang=lang,
    )


# === sitemap ===

def _url_xml(loc: str, priority: str, lastmod: Optional[datetime] = None) -> str:
    parts = [f"  <url>\n    <loc>{escape(loc)}</loc>\n"]
    if lastmod is not None:
        parts.append(f"    <lastmod>{lastmod.strftime('%Y-%m-%d')}</lastmod>\n")
    parts.append(f"    <priority>{priority}</priority>\n  </url>\n")
    return "".join(parts)


def render_sitemap_xml(
    posts: Iterable[BlogPost],
    novels: Iterable[Novel],
    base_url: str,
    today: Optional[datetime] = None,
) -> str:
    """首页 1.0，已发布文章与非草稿小说 0.8"""
    base = _base(base_url)
    urls: List[str] = [_url_xml(f"{base}/", "1.0", today or datetime.now(timezone.utc))]

    for post in posts:
        if post.published:
            urls.append(_url_xml(f"{base}/blog/{post.slug}/", "0.8", post.published_at))

    for novel in novels:
        if novel.status != NovelStatus.DRAFT.value:
            urls.append(_url_xml(f"{base}/novels/{novel.slug}/", "0.8", novel.updated_at))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "".join(urls)
        + "</urlset>\n"
    )


def render_robots_txt(base_url: str) -> str:
    base = _base(base_url)
    lines = [
        "User-agent: *",
        "Allow: /",
        "Disallow: /admin",
        "Disallow: /api/auth",
        "",
        f"Sitemap: {base}/sitemap.xml",
        "",
    ]
    return "\n".join(lines)
