"""
通用数据访问对象（Peer）

一个 Peer 绑定一张表和一个实体 dataclass，按字段元数据里声明的列名做映射，
提供 select / insert / update / delete / count，不需要为每个实体手写 SQL。

连接由调用方管理：Peer 不负责打开、关闭、重试或提交事务。
"""
from __future__ import annotations

import datetime as dt
import json
import logging
import sqlite3
from dataclasses import is_dataclass
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar, Union

from ..errors import DatabaseError, EmptyUpdate
from ..filters.predicate import AndGroup, Condition, OrGroup, Predicate
from ..filters.search_filter import SearchFilter, compile_filter
from ..models import column_map
from ..schema.ddl import check_table_name
from ..schema.dialects import Dialect, get_dialect
from .sql import check_identifier, placeholders, render_columns, render_limit, render_order_by, render_where

logger = logging.getLogger(__name__)

E = TypeVar("E")

Where = Union[Predicate, SearchFilter, None]

UPDATED_AT_COLUMN = "updated_at"


class Peer(Generic[E]):
    table_name: str = ""
    entity_cls: Optional[Type[E]] = None

    def __init__(
        self,
        conn,
        table_name: Optional[str] = None,
        entity_cls: Optional[Type[E]] = None,
        dialect: Union[str, Dialect] = "sqlite",
        table_prefix: str = "",
        id_column: str = "id",
    ):
        self.conn = conn
        self.table_name = table_name or self.table_name
        self.entity_cls = entity_cls or self.entity_cls
        if not self.table_name:
            raise ValueError("table name is required")
        if self.entity_cls is None or not is_dataclass(self.entity_cls):
            raise TypeError("entity_cls must be a dataclass")

        self.dialect = get_dialect(dialect)
        self.table = check_table_name(f"{table_prefix}{self.table_name}")
        self.id_column = check_identifier(id_column)
        self.field_to_column = column_map(self.entity_cls)
        self.column_to_field = {c: f for f, c in self.field_to_column.items()}
        self._driver_errors = getattr(conn, "Error", sqlite3.Error)

    # ---------------- helpers ----------------

    @staticmethod
    def resolve_where(where: Where) -> Optional[Predicate]:
        """SearchFilter 先编译；编译错误在访问数据库之前抛出"""
        if where is None:
            return None
        if isinstance(where, SearchFilter):
            return compile_filter(where)
        if isinstance(where, (Condition, AndGroup, OrGroup)):
            return where
        raise TypeError(f"unsupported filter type: {type(where).__name__}")

    def _execute(self, operation: str, sql: str, params: Sequence[Any] = ()):
        logger.debug(f"Executing query: sql={sql} args={json.dumps(list(params), default=str, ensure_ascii=False)}")
        try:
            cursor = self.conn.cursor()
            cursor.execute(sql, list(params))
            return cursor
        except self._driver_errors as e:
            logger.error(f"{operation} on {self.table} failed: {e}")
            raise DatabaseError(operation, self.table, e) from e

    def _entity_data(self, entity: E) -> dict:
        if not isinstance(entity, self.entity_cls):
            raise TypeError(f"expected {self.entity_cls.__name__}, got {type(entity).__name__}")
        data = {}
        for field_name, col in self.field_to_column.items():
            value = getattr(entity, field_name)
            if value is not None:
                data[col] = value
        return data

    def _to_entity(self, names: List[str], row) -> E:
        entity = self.entity_cls()
        for i, name in enumerate(names):
            field_name = self.column_to_field.get(name)
            # 表里多出来的列直接忽略
            if field_name is not None:
                setattr(entity, field_name, row[i])
        return entity

    # ---------------- operations ----------------

    def select(
        self,
        columns: Optional[Sequence[str]] = None,
        where: Where = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[E]:
        """
        查询记录

        Args:
            columns: 要查询的列，None 表示全部
            where: Predicate / SearchFilter / None
            order_by: 如 ["id DESC"]；支持 "{FUNC_RANDOM}" 随机排序。None 时顺序由数据库决定
            limit: 返回条数上限
            offset: 跳过条数

        Returns:
            实体列表
        """
        pred = self.resolve_where(where)
        where_sql, params = render_where(pred, self.dialect)
        order_sql = render_order_by(order_by, self.dialect)
        limit_sql, limit_params = render_limit(limit, offset, self.dialect)
        sql = f"SELECT {render_columns(columns)} FROM {self.table}{where_sql}{order_sql}{limit_sql}"

        cursor = self._execute("select", sql, params + limit_params)
        try:
            names = [d[0] for d in cursor.description]
            rows = cursor.fetchall()
        except self._driver_errors as e:
            raise DatabaseError("select", self.table, e) from e
        return [self._to_entity(names, row) for row in rows]

    def select_one(self, where: Where = None, order_by: Optional[Sequence[str]] = None) -> Optional[E]:
        rows = self.select(where=where, order_by=order_by, limit=1)
        return rows[0] if rows else None

    def insert(self, entity: E) -> int:
        """写入一条记录，返回生成的主键；值为 None 的字段不写，由数据库默认值/自增生成"""
        data = self._entity_data(entity)
        if data:
            cols = ", ".join(data.keys())
            sql = f"INSERT INTO {self.table} ({cols}) VALUES ({placeholders(self.dialect, len(data))})"
        elif self.dialect.name == "mysql":
            sql = f"INSERT INTO {self.table} () VALUES ()"
        else:
            sql = f"INSERT INTO {self.table} DEFAULT VALUES"
        if self.dialect.returning:
            sql += f" RETURNING {self.id_column}"

        cursor = self._execute("insert", sql, list(data.values()))
        if self.dialect.returning:
            row = cursor.fetchone()
            return row[0] if row else 0
        return cursor.lastrowid

    def update(self, entity: E, where: Where) -> int:
        """
        更新记录，只写非 None 字段

        where 必须显式传入；传 None 或空 SearchFilter 会更新整张表。
        实体映射了 updated_at 且未设置时自动写当前时间。

        Returns:
            受影响行数
        """
        pred = self.resolve_where(where)
        data = self._entity_data(entity)
        if UPDATED_AT_COLUMN in self.column_to_field and UPDATED_AT_COLUMN not in data and data:
            # 与 CURRENT_TIMESTAMP 默认值保持同一时钟（UTC）
            data[UPDATED_AT_COLUMN] = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None, microsecond=0)
        if not data:
            raise EmptyUpdate(self.table)

        ph = self.dialect.placeholder
        set_sql = ", ".join(f"{col} = {ph}" for col in data.keys())
        where_sql, where_params = render_where(pred, self.dialect)
        if pred is None:
            logger.warning(f"Update without filter on {self.table}: all rows will be updated")

        cursor = self._execute("update", f"UPDATE {self.table} SET {set_sql}{where_sql}", list(data.values()) + where_params)
        affected = cursor.rowcount
        if affected == 0:
            logger.warning(f"Update on {self.table} affected no rows")
        return affected

    def delete(self, where: Where) -> int:
        """删除记录；where 为 None 或空 SearchFilter 时删除整张表。返回受影响行数"""
        pred = self.resolve_where(where)
        where_sql, params = render_where(pred, self.dialect)
        if pred is None:
            logger.warning(f"Delete without filter on {self.table}: all rows will be deleted")

        cursor = self._execute("delete", f"DELETE FROM {self.table}{where_sql}", params)
        affected = cursor.rowcount
        if affected == 0:
            logger.warning(f"Delete on {self.table} affected no rows")
        return affected

    def count(self, where: Where = None) -> int:
        pred = self.resolve_where(where)
        where_sql, params = render_where(pred, self.dialect)
        cursor = self._execute("count", f"SELECT COUNT(*) FROM {self.table}{where_sql}", params)
        row = cursor.fetchone()
        return int(row[0]) if row else 0
