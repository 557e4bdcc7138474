import uuid

from sqlalchemy import Column, String, Text, DateTime, BigInteger, Boolean, Uuid, false
from sqlalchemy.sql import func

from capacity.db.base import Base
from capacity.db.types import JSONList


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)  # markdown 正文
    excerpt = Column(String(1000))  # 摘要
    cover_image_url = Column(Text)
    tags = Column(JSONList, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False, server_default=false())
    view_count = Column(BigInteger, nullable=False, default=0, server_default="0")
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<BlogPost(id={self.id}, slug='{self.slug}', published={self.published})>"
