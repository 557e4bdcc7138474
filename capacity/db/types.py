"""
跨数据库的列类型与表达式

生产环境使用 PostgreSQL，测试使用 SQLite；列表类字段统一存为 JSON
（PostgreSQL 上为 JSONB），并提供参数化的"数组包含"判断。
"""
from sqlalchemy import Boolean, String, cast, types
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement, literal


class JSONList(types.TypeDecorator):
    """JSON 数组列：PostgreSQL 用 JSONB，其余用 JSON；NULL 读出为空列表"""

    impl = types.JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(types.JSON())

    def process_bind_param(self, value, dialect):
        if value is None:
            return []
        return list(value)

    def process_result_value(self, value, dialect):
        return value or []


class json_array_contains(FunctionElement):
    """json_array_contains(column, value)：JSON 数组列是否包含某个字符串"""

    type = Boolean()
    inherit_cache = True
    name = "json_array_contains"


def array_contains(column, value: str) -> json_array_contains:
    return json_array_contains(column, cast(literal(value), String))


@compiles(json_array_contains, "postgresql")
def _pg_json_array_contains(element, compiler, **kw):
    column, value = list(element.clauses)
    return "%s @> jsonb_build_array(%s)" % (
        compiler.process(column, **kw),
        compiler.process(value, **kw),
    )


@compiles(json_array_contains)
def _default_json_array_contains(element, compiler, **kw):
    # SQLite：展开 JSON 数组逐项比较
    column, value = list(element.clauses)
    return "EXISTS (SELECT 1 FROM json_each(%s) WHERE json_each.value = %s)" % (
        compiler.process(column, **kw),
        compiler.process(value, **kw),
    )
