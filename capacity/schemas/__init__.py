from capacity.schemas.auth import AdminCredentials, AdminInfo, AdminResponse, LoginResponse
from capacity.schemas.novel import (
    NovelCreate,
    NovelUpdate,
    NovelResponse,
    NovelWithStats,
    RelatedNovelCreate,
    RelatedNovelResponse,
)
from capacity.schemas.chapter import ChapterCreate, ChapterUpdate, ChapterPreview, ChapterResponse
from capacity.schemas.blog import BlogPostCreate, BlogPostUpdate, BlogPostPreview, BlogPostResponse
from capacity.schemas.app import AppCreate, AppUpdate, AppResponse, DistributionChannel
from capacity.schemas.options import OptionItem

__all__ = [
    # 认证相关
    "AdminCredentials", "AdminInfo", "AdminResponse", "LoginResponse",
    # 小说与关联
    "NovelCreate", "NovelUpdate", "NovelResponse", "NovelWithStats",
    "RelatedNovelCreate", "RelatedNovelResponse",
    # 章节
    "ChapterCreate", "ChapterUpdate", "ChapterPreview", "ChapterResponse",
    # 博客
    "BlogPostCreate", "BlogPostUpdate", "BlogPostPreview", "BlogPostResponse",
    # 应用
    "AppCreate", "AppUpdate", "AppResponse", "DistributionChannel",
    "OptionItem",
]
