"""
Predicate -> SQL 渲染

唯一负责拼 SQL 的地方：列名只允许合法标识符，值一律走占位符绑定。
"""
from __future__ import annotations

import re
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..errors import InvalidIdentifier
from ..filters.predicate import AndGroup, Condition, Op, OrGroup, Predicate
from ..schema.dialects import TERM_FUNC_RANDOM, Dialect
from ..schema.types import IDENTIFIER_RE

_ORDER_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)(?:\s+(ASC|DESC))?\s*$", re.IGNORECASE)

_COMPARE = {
    Op.EQ: "=",
    Op.NE: "<>",
    Op.LIKE: "LIKE",
    Op.NOT_LIKE: "NOT LIKE",
}


def check_identifier(name: str) -> str:
    if not isinstance(name, str) or not IDENTIFIER_RE.match(name):
        raise InvalidIdentifier(f"invalid column name: {name!r}")
    return name


def render_predicate(pred: Predicate, dialect: Dialect) -> Tuple[str, List[Any]]:
    """
    渲染 Predicate

    Returns:
        (sql 片段, 绑定参数列表)
    """
    params: List[Any] = []
    sql = _render(pred, dialect.placeholder, params)
    return sql, params


def _render(pred: Predicate, ph: str, params: List[Any]) -> str:
    if isinstance(pred, Condition):
        col = check_identifier(pred.column)
        if pred.op in (Op.IN, Op.NOT_IN):
            values = list(pred.value)
            params.extend(values)
            keyword = "IN" if pred.op is Op.IN else "NOT IN"
            return f"{col} {keyword} ({', '.join([ph] * len(values))})"
        params.append(pred.value)
        return f"{col} {_COMPARE[pred.op]} {ph}"

    if isinstance(pred, (AndGroup, OrGroup)):
        joiner = " AND " if isinstance(pred, AndGroup) else " OR "
        parts = [_render(item, ph, params) for item in pred.items]
        return "(" + joiner.join(parts) + ")"

    raise TypeError(f"unknown predicate type: {type(pred).__name__}")


def render_where(pred: Optional[Predicate], dialect: Dialect) -> Tuple[str, List[Any]]:
    """Render the WHERE clause with its leading space, or an empty string."""
    if pred is None:
        return "", []
    sql, params = render_predicate(pred, dialect)
    return f" WHERE {sql}", params


def render_columns(columns: Optional[Sequence[str]]) -> str:
    if not columns:
        return "*"
    return ", ".join(check_identifier(c) for c in columns)


def render_order_by(order_by: Optional[Sequence[str]], dialect: Dialect) -> str:
    if not order_by:
        return ""
    parts = []
    for item in order_by:
        if isinstance(item, str) and item.strip() == TERM_FUNC_RANDOM:
            parts.append(dialect.translate_terms(TERM_FUNC_RANDOM))
            continue
        m = _ORDER_RE.match(item) if isinstance(item, str) else None
        if not m:
            raise InvalidIdentifier(f"invalid order by item: {item!r}")
        direction = f" {m.group(2).upper()}" if m.group(2) else ""
        parts.append(f"{m.group(1)}{direction}")
    return " ORDER BY " + ", ".join(parts)


def _is_count(value) -> bool:
    # bool 是 int 的子类，这里不接受
    return isinstance(value, int) and not isinstance(value, bool)


def render_limit(limit: Optional[int], offset: Optional[int], dialect: Dialect) -> Tuple[str, List[Any]]:
    if limit is None and offset is None:
        return "", []
    if limit is not None and (not _is_count(limit) or limit < 0):
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
    if offset is not None and (not _is_count(offset) or offset < 0):
        raise ValueError(f"offset must be a non-negative integer, got {offset!r}")
    ph = dialect.placeholder
    if limit is None:
        # OFFSET 需要配合 LIMIT
        return f" LIMIT {dialect.unlimited} OFFSET {ph}", [offset]
    if offset is None:
        return f" LIMIT {ph}", [limit]
    return f" LIMIT {ph} OFFSET {ph}", [limit, offset]


def placeholders(dialect: Union[Dialect, str], n: int) -> str:
    ph = dialect.placeholder if isinstance(dialect, Dialect) else dialect
    return ", ".join([ph] * n)
