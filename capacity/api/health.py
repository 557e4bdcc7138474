import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter()


class DatabaseHealth(BaseModel):
    connected: bool
    version: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    database: DatabaseHealth


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    db = request.app.state.db
    try:
        await db.test_connection()
        database = DatabaseHealth(connected=True, version=await db.get_version())
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"❌ 数据库健康检查失败: {e}")
        database = DatabaseHealth(connected=False)

    return HealthResponse(
        status="healthy" if database.connected else "degraded",
        timestamp=datetime.now(timezone.utc),
        database=database,
    )
