import logging
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.config import Settings
from capacity.core.errors import AppError
from capacity.core.security import (
    AuthIdentity,
    create_access_token,
    get_password_hash,
    verify_password,
)
from capacity.db.crud import insert_and_refresh
from capacity.models.admin import Admin
from capacity.schemas.auth import AdminCredentials

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_by_username(self, username: str) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).where(Admin.username == username))
        return result.scalar_one_or_none()

    async def admin_exists(self) -> bool:
        result = await self.db.execute(select(Admin.id).limit(1))
        return result.first() is not None

    async def register_first_admin(self, credentials: AdminCredentials) -> Admin:
        """注册管理员：系统只允许一个管理员，已存在时拒绝"""
        if await self.admin_exists():
            raise AppError.conflict("Admin already exists. Registration is disabled.")

        admin = Admin(
            username=credentials.username,
            password_hash=get_password_hash(credentials.password),
        )
        admin = await insert_and_refresh(self.db, admin, "Admin already exists. Registration is disabled.")
        logger.info(f"✅ 管理员已注册: {admin.username}")
        return admin

    async def login(self, credentials: AdminCredentials) -> Tuple[str, datetime, Admin]:
        """管理员登录，返回 (token, 过期时间, 管理员)"""
        admin = await self.get_by_username(credentials.username)
        if admin is None or not verify_password(credentials.password, admin.password_hash):
            logger.warning(f"登录失败: {credentials.username}")
            raise AppError.invalid_credentials()

        token, expires_at = create_access_token(admin.id, admin.username, self.settings)
        logger.info(f"管理员登录: {admin.username}")
        return token, expires_at, admin

    async def get_current_admin(self, identity: AuthIdentity) -> Admin:
        """令牌对应的管理员必须仍然存在"""
        result = await self.db.execute(select(Admin).where(Admin.id == identity.admin_id))
        admin = result.scalar_one_or_none()
        if admin is None:
            logger.warning(f"令牌对应的管理员已不存在: {identity.username}")
            raise AppError.unauthorized()
        return admin
