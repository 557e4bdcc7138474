import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from capacity.models.novel import NovelGenre, NovelStatus, NovelType, RelationType
from capacity.schemas.common import dedupe

# 请求模型统一把枚举转换为字符串值，方便直接写入数据库
REQUEST_CONFIG = ConfigDict(use_enum_values=True, validate_default=True)


# 创建小说请求模式（slug 由服务端生成）
class NovelCreate(BaseModel):
    model_config = REQUEST_CONFIG

    title: str = Field(min_length=1, max_length=500, description="小说标题")
    description: Optional[str] = Field(None, description="小说简介")
    cover_image_url: Optional[str] = None
    novel_type: NovelType = Field(NovelType.SERIES, description="短篇/长篇/连载")
    genres: List[NovelGenre] = Field(default_factory=list, description="题材标签")
    status: NovelStatus = Field(NovelStatus.DRAFT, description="状态，默认草稿")

    @field_validator("genres")
    @classmethod
    def unique_genres(cls, value):
        return dedupe(value)


# 更新小说请求模式：所有字段可选，只更新出现的字段
class NovelUpdate(BaseModel):
    model_config = REQUEST_CONFIG

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    novel_type: Optional[NovelType] = None
    genres: Optional[List[NovelGenre]] = None
    status: Optional[NovelStatus] = None

    @field_validator("genres")
    @classmethod
    def unique_genres(cls, value):
        return dedupe(value) if value is not None else value


# 小说响应模式
class NovelResponse(BaseModel):
    id: uuid.UUID
    slug: str
    title: str
    description: Optional[str] = None
    cover_image_url: Optional[str] = None
    novel_type: str
    genres: List[str] = []
    status: str
    view_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# 列表项：附带章节数
class NovelWithStats(NovelResponse):
    chapter_count: int = 0


# === 作品关联 ===

class RelatedNovelCreate(BaseModel):
    model_config = REQUEST_CONFIG

    related_novel_slug: str = Field(min_length=1, max_length=255)
    relation_type: RelationType = RelationType.RELATED


class RelatedNovelResponse(BaseModel):
    id: uuid.UUID = Field(description="关联小说ID")
    slug: str
    title: str
    novel_type: str
    status: str
    cover_image_url: Optional[str] = None
    relation_type: str
    created_at: datetime
