"""
错误类型

三类错误：
- 声明错误（重复表名、外键成环等），启动阶段发现，应视为致命；
- 过滤条件编译错误，属于调用方输入问题，返回给调用方（对应 4xx）；
- 数据库错误，原样包装后抛出（对应 5xx），本层不重试。
"""
from __future__ import annotations

from typing import Optional


class WordbankError(Exception):
    """Base class for every error raised by this package."""


# ---------------- Declaration errors ----------------

class SchemaError(WordbankError):
    pass


class DuplicateTable(SchemaError):
    def __init__(self, name: str):
        super().__init__(f"table '{name}' is already registered")
        self.name = name


class InvalidTableDefinition(SchemaError):
    def __init__(self, table: str, problems: list[str] | str):
        if isinstance(problems, str):
            problems = [problems]
        self.table = table
        self.problems = list(problems)
        super().__init__(f"invalid table '{table}': " + "; ".join(self.problems))


class CyclicSchema(SchemaError):
    def __init__(self, tables: list[str]):
        self.tables = list(tables)
        super().__init__("foreign key references form a cycle between tables: " + ", ".join(self.tables))


# ---------------- Filter errors ----------------

class FilterError(WordbankError, ValueError):
    """Caller supplied a filter that cannot be compiled.

    ``position`` is the 1-based index of the offending condition, or None
    when the problem is with the filter as a whole.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.reason = message
        self.position = position
        if position is not None:
            message = f"condition {position}: {message}"
        super().__init__(message)


class InvalidLogicOperator(FilterError):
    pass


class InvalidCondition(FilterError):
    pass


class UnsupportedOperator(FilterError):
    pass


class InvalidArrayValue(FilterError):
    pass


class EmptyArrayValue(FilterError):
    pass


class InvalidIdentifier(FilterError):
    pass


# ---------------- Write errors ----------------

class EmptyUpdate(WordbankError, ValueError):
    def __init__(self, table: str):
        self.table = table
        super().__init__(f"no data to update in table '{table}'")


# ---------------- Database errors ----------------

class DatabaseError(WordbankError):
    """Driver error wrapped with the table and operation it happened in.

    The original exception is kept as ``__cause__``.
    """

    def __init__(self, operation: str, table: Optional[str], err: BaseException):
        self.operation = operation
        self.table = table
        self.err = err
        where = f" on table '{table}'" if table else ""
        super().__init__(f"database {operation} error{where}: {err}")
