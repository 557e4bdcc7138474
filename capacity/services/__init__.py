from capacity.services.auth import AuthService
from capacity.services.novel import NovelService
from capacity.services.chapter import ChapterService
from capacity.services.relation import RelationService
from capacity.services.blog import BlogService
from capacity.services.app import AppService

__all__ = ["AuthService", "NovelService", "ChapterService", "RelationService", "BlogService", "AppService"]
