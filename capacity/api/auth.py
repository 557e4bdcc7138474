from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.config import Settings
from capacity.core.security import AuthIdentity, get_current_admin
from capacity.dependencies import get_app_settings, get_db
from capacity.schemas.auth import AdminCredentials, AdminInfo, AdminResponse, LoginResponse
from capacity.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def register(
    credentials: AdminCredentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """注册管理员（仅在还没有管理员时可用）"""
    auth_service = AuthService(db, settings)
    return await auth_service.register_first_admin(credentials)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: AdminCredentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """管理员登录"""
    auth_service = AuthService(db, settings)
    token, expires_at, admin = await auth_service.login(credentials)
    return LoginResponse(token=token, expires_at=expires_at, user=AdminInfo.model_validate(admin))


@router.get("/me", response_model=AdminInfo)
async def get_me(
    identity: AuthIdentity = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """获取当前管理员信息"""
    auth_service = AuthService(db, settings)
    return await auth_service.get_current_admin(identity)
