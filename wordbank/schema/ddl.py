"""
DDL 生成与建表

根据注册中心里的表定义生成 CREATE TABLE / CREATE INDEX 语句，并按外键依赖排序后执行。
已存在的表依靠 "IF NOT EXISTS" 跳过，不比对列差异。
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Iterator, List, NamedTuple, Optional, Union

from ..errors import CyclicSchema, DatabaseError, InvalidTableDefinition
from .dialects import Dialect, get_dialect
from .registry import TableRegistry
from .types import IDENTIFIER_RE, Column, ColumnKind, TableDefinition

logger = logging.getLogger(__name__)


class Statement(NamedTuple):
    table: str
    kind: str  # "table" | "index"
    sql: str


# ---------------- Validation ----------------

def validate_table(table: TableDefinition, registry: Optional[TableRegistry] = None) -> None:
    """
    校验单张表定义是否自洽

    Args:
        table: 表定义
        registry: 注册中心；提供时同时校验外键目标表/列是否存在

    Raises:
        InvalidTableDefinition: 汇总所有问题后一次性抛出
    """
    problems: list[str] = []
    names = table.column_names()

    seen: set[str] = set()
    for name in names:
        if name in seen:
            problems.append(f"duplicate column '{name}'")
        seen.add(name)

    pk_cols = table.primary_key_columns()
    if not pk_cols:
        problems.append("no primary key column")

    for col in table.columns:
        if col.auto_increment:
            if col.type.kind is not ColumnKind.INTEGER:
                problems.append(f"auto increment column '{col.name}' must be an integer")
            if pk_cols != [col.name]:
                problems.append(f"auto increment column '{col.name}' must be the only primary key")
        fk = col.foreign_key
        if fk is None or registry is None:
            continue
        target = table if fk.table == table.name else registry.get(fk.table)
        if target is None:
            problems.append(f"foreign key '{col.name}' references unknown table '{fk.table}'")
        elif target.get_column(fk.column) is None:
            problems.append(f"foreign key '{col.name}' references unknown column '{fk.table}.{fk.column}'")

    for idx in table.indexes:
        if not idx.columns:
            problems.append(f"index '{idx.name}' has no columns")
        for c in idx.columns:
            if c not in seen:
                problems.append(f"index '{idx.name}' references unknown column '{c}'")

    if problems:
        raise InvalidTableDefinition(table.name, problems)


# ---------------- Ordering ----------------

def creation_order(registry: TableRegistry) -> List[TableDefinition]:
    """Tables ordered so that every foreign key target comes first.

    Ties keep registration order. Self references do not count as
    dependencies; references to unregistered tables are left to
    validate_table.
    """
    pending = list(registry.all())
    registered = {t.name for t in pending}
    placed: set[str] = set()
    ordered: list[TableDefinition] = []

    while pending:
        for i, table in enumerate(pending):
            deps = [d for d in table.referenced_tables() if d != table.name and d in registered]
            if all(d in placed for d in deps):
                ordered.append(table)
                placed.add(table.name)
                del pending[i]
                break
        else:
            raise CyclicSchema(_find_cycle(pending, registered))
    return ordered


def _find_cycle(pending: List[TableDefinition], registered: set[str]) -> List[str]:
    # 剩下的每张表至少依赖一张剩下的表，沿依赖走下去必然回到走过的表
    by_name = {t.name: t for t in pending}
    path: list[str] = []
    current = pending[0].name
    while current not in path:
        path.append(current)
        current = next(
            d for d in by_name[current].referenced_tables()
            if d != current and d in by_name
        )
    return path[path.index(current):] + [current]


# ---------------- SQL synthesis ----------------

def column_sql(col: Column, dialect: Dialect, single_pk: bool = True) -> str:
    parts = [col.name, dialect.column_type_sql(col)]

    if col.auto_increment and dialect.auto_increment_keyword and not dialect.auto_increment_after_pk:
        parts.append(dialect.auto_increment_keyword)
    if not col.nullable:
        parts.append("NOT NULL")
    if col.default is not None and col.default != "":
        parts.append(f"DEFAULT {dialect.default_sql(col.default)}")
    if col.primary_key and single_pk:
        parts.append("PRIMARY KEY")
        if col.auto_increment and dialect.auto_increment_keyword and dialect.auto_increment_after_pk:
            parts.append(dialect.auto_increment_keyword)
    if col.unique:
        parts.append("UNIQUE")
    return " ".join(parts)


def create_table_sql(table: TableDefinition, dialect: Union[str, Dialect] = "sqlite", prefix: str = "") -> str:
    """Generate the CREATE TABLE IF NOT EXISTS statement."""
    d = get_dialect(dialect)
    pk_cols = table.primary_key_columns()
    single_pk = len(pk_cols) == 1

    defs = [column_sql(col, d, single_pk) for col in table.columns]
    if len(pk_cols) > 1:
        defs.append(f"PRIMARY KEY ({', '.join(pk_cols)})")
    for col in table.columns:
        if col.foreign_key is not None:
            defs.append(
                f"FOREIGN KEY ({col.name}) REFERENCES {prefix}{col.foreign_key.table} ({col.foreign_key.column})"
            )

    return f"CREATE TABLE IF NOT EXISTS {prefix}{table.name} (\n    " + ",\n    ".join(defs) + "\n)"


def create_index_sql(table: TableDefinition, dialect: Union[str, Dialect] = "sqlite", prefix: str = "") -> List[str]:
    """Generate CREATE INDEX statements, declared indexes first, then column-level ones."""
    d = get_dialect(dialect)
    if_not_exists = "IF NOT EXISTS " if d.index_if_not_exists else ""
    full_name = f"{prefix}{table.name}"
    stmts = []
    covered = set()
    for idx in table.indexes:
        unique = "UNIQUE " if idx.unique else ""
        stmts.append(
            f"CREATE {unique}INDEX {if_not_exists}idx_{table.name}_{idx.name} "
            f"ON {full_name} ({', '.join(idx.columns)})"
        )
        if len(idx.columns) == 1:
            covered.add(idx.columns[0])
    for col in table.columns:
        if col.index and col.name not in covered:
            stmts.append(f"CREATE INDEX {if_not_exists}idx_{table.name}_{col.name} ON {full_name} ({col.name})")
    return stmts


def check_table_name(name: str) -> str:
    """Prefixed table names end up in SQL text, so they must be plain identifiers."""
    if not isinstance(name, str) or not IDENTIFIER_RE.match(name):
        raise InvalidTableDefinition(str(name), "table name (with prefix) is not a valid identifier")
    return name


def build_statements(
    registry: TableRegistry, dialect: Union[str, Dialect] = "sqlite", prefix: str = ""
) -> Iterator[Statement]:
    """Validate every registered table, then yield DDL in creation order.

    Validation and ordering run before the first statement is yielded, so
    a declaration error never leaves half a schema behind.
    """
    d = get_dialect(dialect)
    for table in registry.all():
        validate_table(table, registry)
        check_table_name(f"{prefix}{table.name}")
    ordered = creation_order(registry)

    def _gen() -> Iterator[Statement]:
        for table in ordered:
            yield Statement(table.name, "table", create_table_sql(table, d, prefix))
            for sql in create_index_sql(table, d, prefix):
                yield Statement(table.name, "index", sql)

    return _gen()


def initialize_all(
    conn, registry: TableRegistry, dialect: Union[str, Dialect] = "sqlite", table_prefix: str = ""
) -> int:
    """
    创建所有已注册的表及索引

    Args:
        conn: DB-API 连接（由调用方管理生命周期）
        registry: 表定义注册中心
        dialect: 数据库类型
        table_prefix: 表名前缀

    Returns:
        处理的表数量

    Raises:
        InvalidTableDefinition / CyclicSchema: 表定义有误，不会执行任何语句
        DatabaseError: 建表失败
    """
    statements = build_statements(registry, dialect, table_prefix)
    driver_errors = getattr(conn, "Error", sqlite3.Error)
    logger.info(f"Initializing database tables: count={len(registry)}")

    cursor = conn.cursor()
    tables = 0
    for stmt in statements:
        logger.debug(f"Executing DDL for {stmt.table}: {stmt.sql}")
        try:
            cursor.execute(stmt.sql)
        except driver_errors as e:
            if stmt.kind == "index":
                # 索引创建失败不影响启动，只记录告警
                logger.warning(f"Failed to create index for table {stmt.table}: {e}")
                continue
            raise DatabaseError("initialize", stmt.table, e) from e
        if stmt.kind == "table":
            tables += 1
            logger.info(f"Table ensured: {table_prefix}{stmt.table}")
    conn.commit()
    logger.info("Database tables initialized successfully")
    return tables
