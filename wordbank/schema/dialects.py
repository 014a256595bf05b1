from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .types import Column, ColumnKind, ColumnType

# order_by 中可使用的占位词，渲染时替换成各数据库的实现
TERM_FUNC_RANDOM = "{FUNC_RANDOM}"


@dataclass(frozen=True)
class Dialect:
    name: str
    integer_type: str
    placeholder: str
    random_func: str
    returning: bool = False
    # 整型自增列在 postgresql 下改写成 SERIAL
    serial_type: Optional[str] = None
    auto_increment_keyword: Optional[str] = None
    # AUTOINCREMENT 只能紧跟在 PRIMARY KEY 之后（sqlite）
    auto_increment_after_pk: bool = False
    supports_on_update: bool = False
    index_if_not_exists: bool = True
    # OFFSET 必须搭配 LIMIT 时使用的“无上限”值（默认是 MySQL 文档给出的写法）
    unlimited: str = "18446744073709551615"

    def type_sql(self, col_type: ColumnType) -> str:
        if col_type.kind is ColumnKind.INTEGER:
            return self.integer_type
        if col_type.kind is ColumnKind.VARCHAR:
            return f"VARCHAR({col_type.length})"
        if col_type.kind is ColumnKind.TEXT:
            return "TEXT"
        return "TIMESTAMP"

    def column_type_sql(self, col: Column) -> str:
        if col.auto_increment and self.serial_type and col.type.kind is ColumnKind.INTEGER:
            return self.serial_type
        return self.type_sql(col.type)

    def default_sql(self, default: str) -> str:
        if not self.supports_on_update:
            # 只有 MySQL 支持 "ON UPDATE CURRENT_TIMESTAMP"，其它库去掉这一段
            upper = default.upper()
            pos = upper.find(" ON UPDATE")
            if pos >= 0:
                return default[:pos].strip()
        return default

    def translate_terms(self, text: str) -> str:
        return text.replace(TERM_FUNC_RANDOM, self.random_func)


SQLITE = Dialect(
    name="sqlite",
    integer_type="INTEGER",
    placeholder="?",
    random_func="RANDOM()",
    auto_increment_keyword="AUTOINCREMENT",
    auto_increment_after_pk=True,
    unlimited="-1",
)

MYSQL = Dialect(
    name="mysql",
    integer_type="INT",
    placeholder="%s",
    random_func="RAND()",
    auto_increment_keyword="AUTO_INCREMENT",
    supports_on_update=True,
    index_if_not_exists=False,
)

POSTGRESQL = Dialect(
    name="postgresql",
    integer_type="INTEGER",
    placeholder="%s",
    random_func="RANDOM()",
    returning=True,
    serial_type="SERIAL",
    unlimited="ALL",
)

DIALECTS = {d.name: d for d in (SQLITE, MYSQL, POSTGRESQL)}


def get_dialect(dialect: Union[str, Dialect, None]) -> Dialect:
    if isinstance(dialect, Dialect):
        return dialect
    key = (dialect or "sqlite").lower()
    if key == "postgres":
        key = "postgresql"
    try:
        return DIALECTS[key]
    except KeyError:
        raise ValueError(f"unsupported database type: {dialect}. Supported: {', '.join(DIALECTS)}") from None
