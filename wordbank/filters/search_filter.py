"""
搜索条件编译

把前端传来的 SearchFilter（条件列表 + AND/OR）编译成 Predicate 树。
只做字符串层面的校验和转换，不拼 SQL。
"""
from __future__ import annotations

import json
from typing import List, Optional

from pydantic import BaseModel, Field

from ..errors import (
    EmptyArrayValue,
    InvalidArrayValue,
    InvalidCondition,
    InvalidLogicOperator,
    UnsupportedOperator,
)
from .predicate import AndGroup, Condition, Op, OrGroup, Predicate

LOGIC_AND = "AND"
LOGIC_OR = "OR"

OPERATOR_ALIASES = {
    "equal": Op.EQ,
    "eq": Op.EQ,
    "not_equal": Op.NE,
    "ne": Op.NE,
    "neq": Op.NE,
    "in": Op.IN,
    "not_in": Op.NOT_IN,
    "nin": Op.NOT_IN,
    "like": Op.LIKE,
    "not_like": Op.NOT_LIKE,
    "nlike": Op.NOT_LIKE,
}

SUPPORTED_OPERATORS = "equal/eq, not_equal/ne/neq, in, not_in/nin, like, not_like/nlike"

_SCALAR_TYPES = (str, int, float, bool)


class SearchCondition(BaseModel):
    """单个条件 key-operator-value，三者均为字符串"""
    key: str = ""
    operator: str = ""
    value: str = ""


class SearchFilter(BaseModel):
    """多条件搜索；logic 为 "AND" 或 "OR"（不区分大小写）"""
    conditions: List[SearchCondition] = Field(default_factory=list)
    logic: str = ""

    def is_empty(self) -> bool:
        return len(self.conditions) == 0

    def to_predicate(self) -> Optional[Predicate]:
        return compile_filter(self)


def compile_filter(search_filter: Optional[SearchFilter]) -> Optional[Predicate]:
    """
    编译 SearchFilter

    Args:
        search_filter: 搜索条件；None 或空条件列表表示不过滤

    Returns:
        Predicate；不过滤时返回 None

    Raises:
        InvalidLogicOperator: logic 不是 AND/OR
        InvalidCondition / UnsupportedOperator / InvalidArrayValue / EmptyArrayValue:
            第 i 个条件有误（position 从 1 开始）
    """
    if search_filter is None or search_filter.is_empty():
        return None

    logic = (search_filter.logic or "").upper()
    if logic not in (LOGIC_AND, LOGIC_OR):
        raise InvalidLogicOperator("logic operator must be 'AND' or 'OR'")

    compiled = [
        compile_condition(cond, position)
        for position, cond in enumerate(search_filter.conditions, start=1)
    ]

    if len(compiled) == 1:
        return compiled[0]
    if logic == LOGIC_AND:
        return AndGroup(tuple(compiled))
    return OrGroup(tuple(compiled))


def compile_condition(condition: SearchCondition, position: Optional[int] = None) -> Condition:
    if not condition.key:
        raise InvalidCondition("condition key cannot be empty", position)
    if not condition.operator:
        raise InvalidCondition("condition operator cannot be empty", position)

    op = OPERATOR_ALIASES.get(condition.operator)
    if op is None:
        raise UnsupportedOperator(
            f"unsupported operator: {condition.operator}. Supported operators: {SUPPORTED_OPERATORS}",
            position,
        )

    if op in (Op.IN, Op.NOT_IN):
        return Condition(condition.key, op, _parse_array(condition.value, position))

    if not condition.value:
        raise InvalidCondition(
            f"condition value cannot be empty for {condition.operator} operation", position
        )
    return Condition(condition.key, op, condition.value)


def _parse_array(value: str, position: Optional[int]) -> tuple:
    try:
        values = json.loads(value)
    except (TypeError, ValueError) as e:
        raise InvalidArrayValue(
            f"condition value must be a valid JSON array for array operations: {e}", position
        ) from e

    if not isinstance(values, list):
        raise InvalidArrayValue(
            "condition value must be a valid JSON array for array operations", position
        )
    if not values:
        raise EmptyArrayValue("condition value array cannot be empty for array operations", position)

    for v in values:
        # 只接受标量，保留 JSON 原始类型
        if v is None or not isinstance(v, _SCALAR_TYPES):
            raise InvalidArrayValue(
                f"array elements must be strings, numbers or booleans, got {json.dumps(v)}", position
            )
    return tuple(values)
