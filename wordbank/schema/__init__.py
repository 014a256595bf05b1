"""Schema layer: table declarations, the registry and DDL synthesis."""
from __future__ import annotations

from .ddl import build_statements, check_table_name, create_index_sql, create_table_sql, creation_order, initialize_all, validate_table
from .dialects import DIALECTS, MYSQL, POSTGRESQL, SQLITE, TERM_FUNC_RANDOM, Dialect, get_dialect
from .registry import TableRegistry
from .types import (
    INTEGER,
    TEXT,
    TIMESTAMP,
    Column,
    ColumnKind,
    ColumnType,
    ForeignKey,
    Index,
    TableDefinition,
    varchar,
)

__all__ = [
    "Column",
    "ColumnKind",
    "ColumnType",
    "DIALECTS",
    "Dialect",
    "ForeignKey",
    "INTEGER",
    "Index",
    "MYSQL",
    "POSTGRESQL",
    "SQLITE",
    "TERM_FUNC_RANDOM",
    "TEXT",
    "TIMESTAMP",
    "TableDefinition",
    "TableRegistry",
    "build_statements",
    "check_table_name",
    "create_index_sql",
    "create_table_sql",
    "creation_order",
    "get_dialect",
    "initialize_all",
    "validate_table",
    "varchar",
]
