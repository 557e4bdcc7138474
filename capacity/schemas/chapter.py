import uuid
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field


# === 请求模型 ===

class ChapterCreate(BaseModel):
    # 不传则自动使用下一个章节号
    chapter_number: Optional[int] = Field(None, ge=1, description="章节序号")
    title: str = Field(min_length=1, max_length=500, description="章节标题")
    content: str = Field(min_length=1, description="章节正文")
    published_at: Optional[datetime] = None


class ChapterUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    published_at: Optional[datetime] = None


# === 响应模型 ===

class ChapterPreview(BaseModel):
    """章节列表项（不含正文）"""
    id: uuid.UUID
    novel_id: uuid.UUID
    chapter_number: int
    title: str
    view_count: int
    published_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ChapterResponse(ChapterPreview):
    content: str
    updated_at: datetime
