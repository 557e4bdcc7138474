import uuid
from enum import Enum as PyEnum

from sqlalchemy import Column, String, Text, DateTime, BigInteger, ForeignKey, Uuid, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from capacity.db.base import Base
from capacity.db.types import JSONList


class NovelType(str, PyEnum):
    """小说类型"""
    SHORT = "short"    # 短篇
    LONG = "long"      # 长篇
    SERIES = "series"  # 连载


class NovelStatus(str, PyEnum):
    """小说状态"""
    DRAFT = "draft"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    HIATUS = "hiatus"


class NovelGenre(str, PyEnum):
    """预定义的题材标签"""
    FANTASY = "fantasy"
    ROMANCE = "romance"
    ACTION = "action"
    THRILLER = "thriller"
    MYSTERY = "mystery"
    SF = "sf"
    HORROR = "horror"
    DRAMA = "drama"
    COMEDY = "comedy"
    SLICE_OF_LIFE = "slice_of_life"
    HISTORICAL = "historical"
    MARTIAL_ARTS = "martial_arts"
    GAME = "game"
    SPORTS = "sports"
    MUSIC = "music"
    PSYCHOLOGICAL = "psychological"
    SUPERNATURAL = "supernatural"
    ADVENTURE = "adventure"


class RelationType(str, PyEnum):
    """作品关联类型"""
    RELATED = "related"
    SEQUEL = "sequel"
    PREQUEL = "prequel"
    SPINOFF = "spinoff"
    SAME_UNIVERSE = "same_universe"


class Novel(Base):
    __tablename__ = "novels"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), unique=True, index=True, nullable=False)  # 自动生成，创建后不可修改
    title = Column(String(500), nullable=False, index=True)
    description = Column(Text)  # 小说简介（markdown）
    cover_image_url = Column(Text)
    novel_type = Column(String(20), nullable=False, default=NovelType.SERIES.value, server_default=NovelType.SERIES.value)
    genres = Column(JSONList, nullable=False, default=list)  # NovelGenre 取值列表
    status = Column(String(20), nullable=False, default=NovelStatus.DRAFT.value, server_default=NovelStatus.DRAFT.value)
    view_count = Column(BigInteger, nullable=False, default=0, server_default="0")  # 只增不减
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # 关系（删除由数据库级联完成）
    chapters = relationship("NovelChapter", back_populates="novel", passive_deletes=True)

    def __repr__(self):
        return f"<Novel(id={self.id}, slug='{self.slug}', title='{self.title}')>"


class NovelRelation(Base):
    """两部小说之间的关联，按方向存储：A->B 不代表 B->A"""
    __tablename__ = "novel_relations"
    __table_args__ = (
        UniqueConstraint("novel_id", "related_novel_id", name="uq_novel_relations_pair"),
        CheckConstraint("novel_id <> related_novel_id", name="not_self"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    novel_id = Column(Uuid, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True)
    related_novel_id = Column(Uuid, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False)
    relation_type = Column(String(20), nullable=False, default=RelationType.RELATED.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


    def __repr__(self):
        return f"<NovelRelation(novel_id={self.novel_id}, related_novel_id={self.related_novel_id}, type='{self.relation_type}')>"
