"""Table declarations as data.

Declarations are frozen dataclasses so a definition handed to the
registry cannot change underneath the DDL synthesizer.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ColumnKind(str, Enum):
    INTEGER = "integer"
    VARCHAR = "varchar"
    TEXT = "text"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class ColumnType:
    kind: ColumnKind
    length: Optional[int] = None

    def __post_init__(self):
        if self.kind is ColumnKind.VARCHAR:
            if not isinstance(self.length, int) or self.length <= 0:
                raise ValueError(f"varchar length must be a positive integer, got {self.length!r}")
        elif self.length is not None:
            raise ValueError(f"{self.kind.value} columns take no length")


INTEGER = ColumnType(ColumnKind.INTEGER)
TEXT = ColumnType(ColumnKind.TEXT)
TIMESTAMP = ColumnType(ColumnKind.TIMESTAMP)


def varchar(length: int) -> ColumnType:
    return ColumnType(ColumnKind.VARCHAR, length)


@dataclass(frozen=True)
class ForeignKey:
    table: str
    column: str


@dataclass(frozen=True)
class Column:
    name: str
    type: ColumnType
    nullable: bool = True
    auto_increment: bool = False
    primary_key: bool = False
    default: Optional[str] = None  # raw SQL expression, e.g. "'red'" / "0" / "CURRENT_TIMESTAMP"
    unique: bool = False
    index: bool = False
    foreign_key: Optional[ForeignKey] = None


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[str, ...]
    unique: bool = False

    def __post_init__(self):
        # 允许传 list，统一存成 tuple
        object.__setattr__(self, "columns", tuple(self.columns))


@dataclass(frozen=True)
class TableDefinition:
    name: str
    columns: tuple[Column, ...]
    indexes: tuple[Index, ...] = field(default_factory=tuple)
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "indexes", tuple(self.indexes))

    def column_names(self) -> list[str]:
        """Column names in definition order."""
        return [col.name for col in self.columns]

    def get_column(self, name: str) -> Optional[Column]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def primary_key_columns(self) -> list[str]:
        return [col.name for col in self.columns if col.primary_key]

    def referenced_tables(self) -> list[str]:
        """Tables this one points at through foreign keys, in column order."""
        out: list[str] = []
        for col in self.columns:
            if col.foreign_key is not None and col.foreign_key.table not in out:
                out.append(col.foreign_key.table)
        return out
