import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from capacity.core.config import Settings
from capacity.core.errors import AppError
from capacity.dependencies import get_app_settings

# 密码加密配置（argon2：加盐、内存困难）
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# JWT Bearer token，缺失时由我们自己返回统一错误格式
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthIdentity:
    """已认证的管理员身份"""
    admin_id: uuid.UUID
    username: str


def create_access_token(
    admin_id: uuid.UUID,
    username: str,
    settings: Settings,
    now: Optional[datetime] = None,
) -> Tuple[str, datetime]:
    """创建访问令牌，返回 (token, 过期时间)"""
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + timedelta(seconds=settings.JWT_EXPIRATION)

    to_encode = {
        "sub": str(admin_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
    }
    encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt, expire


def decode_access_token(token: str, settings: Settings) -> AuthIdentity:
    """
    验证令牌并取出身份

    Raises:
        AppError: 过期 -> TOKEN_EXPIRED；签名或结构错误 -> INVALID_TOKEN
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AppError.token_expired()
    except JWTError:
        raise AppError.invalid_token()

    username = payload.get("username")
    if not isinstance(username, str):
        raise AppError.invalid_token()

    try:
        admin_id = uuid.UUID(str(payload.get("sub")))
    except (ValueError, TypeError):
        raise AppError.invalid_token()

    return AuthIdentity(admin_id=admin_id, username=username)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # 存储的哈希格式无法识别
        return False


def get_password_hash(password: str) -> str:
    """获取密码哈希"""
    return pwd_context.hash(password)


def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> AuthIdentity:
    """获取当前管理员（受保护接口使用）"""
    if credentials is None:
        if request.headers.get("Authorization"):
            raise AppError.unauthorized("Invalid authorization header format")
        raise AppError.unauthorized("Missing authorization header")

    return decode_access_token(credentials.credentials, settings)


def get_optional_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> Optional[AuthIdentity]:
    """可选认证：任何认证失败都只返回 None，不拒绝请求"""
    if credentials is None:
        return None
    try:
        return decode_access_token(credentials.credentials, settings)
    except AppError:
        return None
