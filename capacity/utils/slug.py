"""唯一 slug 生成"""
import secrets
import string
import uuid
from typing import Type

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_RANDOM_LENGTH = 8
MAX_SLUG_ATTEMPTS = 100


def random_suffix(length: int = SLUG_RANDOM_LENGTH) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def generate_slug(prefix: str) -> str:
    """生成带类型前缀的随机 slug，例如 novel-k3j9x0qa"""
    return f"{prefix}-{random_suffix()}"


async def slug_exists(db: AsyncSession, model: Type, slug: str) -> bool:
    result = await db.execute(select(model.id).where(model.slug == slug).limit(1))
    return result.first() is not None


async def ensure_unique_slug(db: AsyncSession, model: Type, base_slug: str) -> str:
    """
    冲突时追加递增后缀；超过尝试上限后追加新的随机后缀

    只是插入前的预检查，真正的唯一性由数据库唯一索引保证。
    """
    slug = base_slug
    counter = 1

    while await slug_exists(db, model, slug):
        slug = f"{base_slug}-{counter}"
        counter += 1

        if counter > MAX_SLUG_ATTEMPTS:
            slug = f"{base_slug}-{uuid.uuid4().hex[:SLUG_RANDOM_LENGTH]}"
            break

    return slug


async def new_unique_slug(db: AsyncSession, model: Type, prefix: str) -> str:
    return await ensure_unique_slug(db, model, generate_slug(prefix))
