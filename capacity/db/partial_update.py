"""
部分更新（只更新请求中出现的字段）

请求模型的所有字段都是可选的，是否"出现"以 pydantic 的 model_fields_set 为准，
因此"未传"和"显式传 null"可以区分。每个实体只允许白名单内的列进入 SET 子句，
所有值都以绑定参数传入，整个更新是一条 UPDATE ... RETURNING 语句。
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capacity.core.errors import AppError, from_db_error

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def build_update_values(
    payload: BaseModel,
    updatable: Iterable[str],
    non_nullable: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    从请求模型中取出出现过的白名单字段

    Args:
        payload: 更新请求（字段均可选）
        updatable: 允许更新的列名
        non_nullable: 不允许显式设为 null 的列名

    Returns:
        Dict[str, Any]: 列名 -> 值，末尾总是带 updated_at（应用侧 UTC 时间，保留微秒）

    Raises:
        AppError: 没有任何字段 -> BAD_REQUEST；非空列传 null -> VALIDATION
    """
    allowed = set(updatable)
    present = [name for name in payload.model_fields_set if name in allowed]
    if not present:
        raise AppError.bad_request("No fields to update")

    values = payload.model_dump(include=set(present))

    for name in non_nullable:
        if name in values and values[name] is None:
            raise AppError.validation(f"{name} cannot be null")

    # 保持模型字段声明顺序，SET 子句与绑定参数顺序一致
    ordered = {name: values[name] for name in type(payload).model_fields if name in values}
    ordered["updated_at"] = datetime.now(timezone.utc)
    return ordered


async def apply_partial_update(
    db: AsyncSession,
    model: Type[ModelT],
    criteria: Iterable[Any],
    values: Dict[str, Any],
    resource: str,
    conflict_message: str = "Unique constraint violation",
) -> ModelT:
    """执行单条 UPDATE ... RETURNING，找不到行则抛 NOT_FOUND"""
    stmt = (
        update(model)
        .where(*criteria)
        .values(**values)
        .returning(model)
        .execution_options(synchronize_session=False, populate_existing=True)
    )

    try:
        result = await db.execute(stmt)
        updated = result.scalar_one_or_none()
        if updated is None:
            await db.rollback()
            raise AppError.not_found(resource)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise from_db_error(e, conflict_message)

    logger.info(f"已更新 {resource}: {', '.join(k for k in values if k != 'updated_at')}")
    return updated
