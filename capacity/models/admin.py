import uuid

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func

from capacity.db.base import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)  # argon2 哈希，从不返回给客户端
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Admin(id={self.id}, username='{self.username}')>"
