from capacity.models.admin import Admin
from capacity.models.novel import Novel, NovelRelation
from capacity.models.chapter import NovelChapter
from capacity.models.blog import BlogPost
from capacity.models.app import App

__all__ = ["Admin", "Novel", "NovelRelation", "NovelChapter", "BlogPost", "App"]
