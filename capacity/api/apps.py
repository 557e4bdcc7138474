from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.security import AuthIdentity, get_current_admin
from capacity.dependencies import get_db
from capacity.models.app import DistributionChannelType, Platform
from capacity.schemas.app import AppCreate, AppResponse, AppUpdate
from capacity.schemas.options import CHANNEL_LABELS, PLATFORM_LABELS, OptionItem, option_list
from capacity.services.app import AppService

router = APIRouter()


@router.get("/platforms", response_model=List[OptionItem], summary="获取平台列表")
async def list_platforms():
    return option_list(Platform, PLATFORM_LABELS)


@router.get("/channels", response_model=List[OptionItem], summary="获取分发渠道列表")
async def list_channels():
    return option_list(DistributionChannelType, CHANNEL_LABELS)


@router.get("", response_model=List[AppResponse], summary="获取应用列表")
async def list_apps(
    platform: Optional[Platform] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await AppService(db).list(
        platform=platform.value if platform else None, limit=limit, offset=offset
    )


@router.post("", response_model=AppResponse, status_code=status.HTTP_201_CREATED, summary="创建应用")
async def create_app_entry(
    app_data: AppCreate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await AppService(db).create(app_data)


@router.get("/{slug}", response_model=AppResponse, summary="获取应用")
async def get_app(slug: str, db: AsyncSession = Depends(get_db)):
    return await AppService(db).get_by_slug(slug)


@router.put("/{slug}", response_model=AppResponse, summary="更新应用")
async def update_app(
    slug: str,
    app_data: AppUpdate,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    return await AppService(db).update(slug, app_data)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT, summary="删除应用")
async def delete_app(
    slug: str,
    admin: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    await AppService(db).delete(slug)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
