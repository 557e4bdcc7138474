import uuid
from typing import Optional, List
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from capacity.schemas.common import dedupe


def _clean_tags(value):
    if value is None:
        return value
    return dedupe(tag.strip() for tag in value if tag and tag.strip())


class BlogPostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1, description="markdown 正文")
    excerpt: Optional[str] = Field(None, max_length=1000)
    cover_image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    published: bool = False
    published_at: Optional[datetime] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _clean_tags(value)


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=1000)
    cover_image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    published: Optional[bool] = None
    published_at: Optional[datetime] = None

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value):
        return _clean_tags(value)


class BlogPostPreview(BaseModel):
    """列表项（不含正文）"""
    id: uuid.UUID
    slug: str
    title: str
    excerpt: Optional[str] = None
    cover_image_url: Optional[str] = None
    tags: List[str] = []
    published: bool
    view_count: int
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BlogPostResponse(BlogPostPreview):
    content: str
