"""Compiled filter predicates.

A predicate is a small tagged tree: ``Condition`` leaves combined by
``AndGroup`` or ``OrGroup``. It carries column names and values only;
turning it into SQL is repository.sql's job.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class Op(str, Enum):
    EQ = "eq"
    NE = "ne"
    IN = "in"
    NOT_IN = "not_in"
    LIKE = "like"
    NOT_LIKE = "not_like"


@dataclass(frozen=True)
class Condition:
    column: str
    op: Op
    value: Any  # tuple of values for IN / NOT_IN


@dataclass(frozen=True)
class AndGroup:
    items: Tuple["Predicate", ...]


@dataclass(frozen=True)
class OrGroup:
    items: Tuple["Predicate", ...]


Predicate = Union[Condition, AndGroup, OrGroup]


def eq(column: str, value: Any) -> Condition:
    return Condition(column, Op.EQ, value)


def in_(column: str, values) -> Condition:
    return Condition(column, Op.IN, tuple(values))


def and_(*items: Predicate) -> AndGroup:
    return AndGroup(tuple(items))


def or_(*items: Predicate) -> OrGroup:
    return OrGroup(tuple(items))
