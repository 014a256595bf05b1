"""
wordbank: schema-driven data access layer

启动流程：register_all_tables(registry) -> initialize_all(conn, registry) -> 各 Peer 读写。
"""
from __future__ import annotations

from .errors import (
    CyclicSchema,
    DatabaseError,
    DuplicateTable,
    EmptyArrayValue,
    EmptyUpdate,
    FilterError,
    InvalidArrayValue,
    InvalidCondition,
    InvalidIdentifier,
    InvalidLogicOperator,
    InvalidTableDefinition,
    SchemaError,
    UnsupportedOperator,
    WordbankError,
)
from .filters import SearchCondition, SearchFilter, compile_filter
from .repository import Peer
from .schema import TableRegistry, initialize_all

__version__ = "0.1.0"

__all__ = [
    "CyclicSchema",
    "DatabaseError",
    "DuplicateTable",
    "EmptyArrayValue",
    "EmptyUpdate",
    "FilterError",
    "InvalidArrayValue",
    "InvalidCondition",
    "InvalidIdentifier",
    "InvalidLogicOperator",
    "InvalidTableDefinition",
    "Peer",
    "SchemaError",
    "SearchCondition",
    "SearchFilter",
    "TableRegistry",
    "UnsupportedOperator",
    "WordbankError",
    "compile_filter",
    "initialize_all",
]
