"""
表定义注册中心

只做登记和查询，不校验列/索引是否自洽（交给 DDL 生成阶段），
因此各表的注册顺序无关紧要，外键可以引用尚未注册的表。
"""
from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Iterator, Optional

from ..errors import DuplicateTable, InvalidTableDefinition
from .types import TableDefinition


class TableRegistry:
    def __init__(self):
        self._tables: "OrderedDict[str, TableDefinition]" = OrderedDict()
        self._lock = threading.Lock()

    def register(self, table: TableDefinition) -> None:
        """
        登记一张表

        Raises:
            InvalidTableDefinition: 表名为空或没有任何列
            DuplicateTable: 同名表已登记
        """
        if table is None:
            raise InvalidTableDefinition("<none>", "table definition cannot be None")
        if not table.name:
            raise InvalidTableDefinition("<empty>", "table name cannot be empty")
        if not table.columns:
            raise InvalidTableDefinition(table.name, "table must have at least one column")

        with self._lock:
            if table.name in self._tables:
                raise DuplicateTable(table.name)
            self._tables[table.name] = table

    def get(self, name: str) -> Optional[TableDefinition]:
        with self._lock:
            return self._tables.get(name)

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._tables

    def all(self) -> Iterator[TableDefinition]:
        """Registered definitions in registration order.

        The snapshot is taken when this is called; the returned iterator
        is single-pass.
        """
        with self._lock:
            snapshot = list(self._tables.values())
        return iter(snapshot)

    def names(self) -> list[str]:
        with self._lock:
            return list(self._tables.keys())

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)
