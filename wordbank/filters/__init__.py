from __future__ import annotations

from .predicate import AndGroup, Condition, Op, OrGroup, Predicate, and_, eq, in_, or_
from .search_filter import SUPPORTED_OPERATORS, SearchCondition, SearchFilter, compile_condition, compile_filter

__all__ = [
    "AndGroup",
    "Condition",
    "Op",
    "OrGroup",
    "Predicate",
    "SUPPORTED_OPERATORS",
    "SearchCondition",
    "SearchFilter",
    "and_",
    "compile_condition",
    "compile_filter",
    "eq",
    "in_",
    "or_",
]
