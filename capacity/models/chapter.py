import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, BigInteger, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from capacity.db.base import Base


class NovelChapter(Base):
    __tablename__ = "novel_chapters"
    __table_args__ = (
        UniqueConstraint("novel_id", "chapter_number", name="uq_novel_chapters_number"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    novel_id = Column(Uuid, ForeignKey("novels.id", ondelete="CASCADE"), nullable=False, index=True)
    chapter_number = Column(Integer, nullable=False)  # 章节序号，在同一小说内唯一
    title = Column(String(500), nullable=False)  # 章节标题
    content = Column(Text, nullable=False)  # 章节正文（markdown）
    view_count = Column(BigInteger, nullable=False, default=0, server_default="0")
    published_at = Column(DateTime(timezone=True), nullable=True)  # 发布时间
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # 关系
    novel = relationship("Novel", back_populates="chapters")

    def __repr__(self):
        return f"<NovelChapter(id={self.id}, novel_id={self.novel_id}, chapter_number={self.chapter_number}, title='{self.title}')>"
