from fastapi import APIRouter

from . import apps, auth, blog, health, novels, seo

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(novels.router, prefix="/novels", tags=["novels"])
api_router.include_router(blog.router, prefix="/blog", tags=["blog"])
api_router.include_router(apps.router, prefix="/apps", tags=["apps"])

# 不带 /api 前缀的路由
site_router = APIRouter()

site_router.include_router(health.router, tags=["health"])
site_router.include_router(seo.router, tags=["seo"])
