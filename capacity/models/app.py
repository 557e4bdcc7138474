import uuid
from enum import Enum as PyEnum

from sqlalchemy import Column, String, Text, DateTime, Uuid
from sqlalchemy.sql import func

from capacity.db.base import Base
from capacity.db.types import JSONList


class Platform(str, PyEnum):
    """应用支持的平台"""
    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    GAME = "game"


class DistributionChannelType(str, PyEnum):
    """分发渠道"""
    APP_STORE = "app_store"
    PLAY_STORE = "play_store"
    WEB = "web"
    STEAM = "steam"
    STOVE = "stove"
    EPIC = "epic"
    GOG = "gog"
    ITCH = "itch"
    LANDING_PAGE = "landing_page"
    DIRECT_DOWNLOAD = "direct_download"
    GITHUB = "github"
    OTHER = "other"


class App(Base):
    __tablename__ = "apps"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text)
    platforms = Column(JSONList, nullable=False, default=list)  # Platform 取值列表
    icon_url = Column(Text)
    screenshots = Column(JSONList, nullable=False, default=list)  # 截图URL列表
    distribution_channels = Column(JSONList, nullable=False, default=list)  # [{type, url, label}]，保持顺序
    privacy_policy_url = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<App(id={self.id}, slug='{self.slug}', name='{self.name}')>"
