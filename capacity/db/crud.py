"""各实体服务共用的写操作：插入、按条件删除、浏览数自增"""
import logging
from typing import Any, Iterable, Type, TypeVar

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError, from_db_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


async def insert_and_refresh(db: AsyncSession, obj: ModelT, conflict_message: str) -> ModelT:
    """插入一行并刷新（取回服务端默认值），唯一冲突 -> CONFLICT"""
    db.add(obj)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise from_db_error(e, conflict_message)

    await db.refresh(obj)
    return obj


async def delete_where(db: AsyncSession, model: Type, criteria: Iterable[Any], resource: str) -> None:
    """按条件删除，没有匹配行 -> NOT_FOUND"""
    try:
        result = await db.execute(delete(model).where(*criteria))
        if result.rowcount == 0:
            await db.rollback()
            raise AppError.not_found(resource)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise from_db_error(e)

    logger.info(f"已删除 {resource}")


async def increment_view_count(db: AsyncSession, model: Type, criteria: Iterable[Any], resource: str) -> None:
    """view_count = view_count + 1，由数据库保证原子性"""
    try:
        result = await db.execute(
            update(model)
            .where(*criteria)
            .values(view_count=model.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.rollback()
            raise AppError.not_found(resource)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise from_db_error(e)
