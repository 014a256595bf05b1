"""
实体定义

每个字段通过 column("列名") 声明映射关系；所有字段默认 None，
None 表示“未设置”（写入时跳过），与 0 / "" 这类显式零值区分开。
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

COLUMN_KEY = "column"


def column(name: str) -> Any:
    """Dataclass field mapped to the given table column."""
    return field(default=None, metadata={COLUMN_KEY: name})


def column_map(entity_cls: type) -> Dict[str, str]:
    """Field name -> column name for every mapped field, in declaration order."""
    return {f.name: f.metadata[COLUMN_KEY] for f in fields(entity_cls) if COLUMN_KEY in f.metadata}


@dataclass
class Word:
    id: Optional[int] = column("id")
    word: Optional[str] = column("word")
    familiarity: Optional[str] = column("familiarity")
    created_at: Optional[dt.datetime] = column("created_at")
    updated_at: Optional[dt.datetime] = column("updated_at")
    # 不映射到列，由 word_svc 组装
    definitions: List["WordDefinition"] = field(default_factory=list)


@dataclass
class WordDefinition:
    id: Optional[int] = column("id")
    word_id: Optional[int] = column("word_id")
    part_of_speech: Optional[str] = column("part_of_speech")
    definition: Optional[str] = column("definition")
    phonetics: Optional[str] = column("phonetics")
    examples: Optional[str] = column("examples")
    notes: Optional[str] = column("notes")
    created_at: Optional[dt.datetime] = column("created_at")
    updated_at: Optional[dt.datetime] = column("updated_at")


@dataclass
class Question:
    id: Optional[int] = column("id")
    question: Optional[str] = column("question")
    option_a: Optional[str] = column("option_a")
    option_b: Optional[str] = column("option_b")
    option_c: Optional[str] = column("option_c")
    option_d: Optional[str] = column("option_d")
    answer: Optional[str] = column("answer")
    reference: Optional[str] = column("reference")
    notes: Optional[str] = column("notes")
    count_practise: Optional[int] = column("count_practise")
    count_failure_practise: Optional[int] = column("count_failure_practise")
    created_at: Optional[dt.datetime] = column("created_at")
    updated_at: Optional[dt.datetime] = column("updated_at")
