import uuid
from datetime import datetime

from pydantic import BaseModel, Field


# 登录/注册请求
class AdminCredentials(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=256)


# 管理员信息（不含密码哈希）
class AdminInfo(BaseModel):
    id: uuid.UUID
    username: str

    class Config:
        from_attributes = True


# 注册响应
class AdminResponse(AdminInfo):
    created_at: datetime


# 登录响应
class LoginResponse(BaseModel):
    token: str
    expires_at: datetime
    user: AdminInfo
