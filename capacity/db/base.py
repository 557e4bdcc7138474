"""
数据库Base定义模块
将Base定义与引擎创建分离，避免在Alembic迁移时触发异步引擎初始化
"""
from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# 约束命名规则，保证Alembic生成的约束名稳定
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# 创建SQLAlchemy Base类
Base = declarative_base(metadata=MetaData(naming_convention=naming_convention))
