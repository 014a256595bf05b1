"""
单词聚合服务

Word 与 WordDefinition 分两张表存储；这里负责在一个事务里整体写入/删除，
以及批量查询释义后组装成完整的 Word 实体。
"""
from __future__ import annotations

import logging
from sqlite3 import Connection
from typing import Dict, Iterable, List, Optional

from ..db import transaction
from ..filters.predicate import eq, in_
from ..models import Word, WordDefinition
from ..repository import WordDefinitionPeer, WordPeer
from ..repository.peer import Where

logger = logging.getLogger(__name__)


def create_word(
    conn: Connection,
    word: Word,
    definitions: Optional[Iterable[WordDefinition]] = None,
    table_prefix: str = "",
) -> int:
    """
    写入单词及其全部释义（同一事务）

    Args:
        conn: 自动提交模式的连接（get_conn() 返回的即是）
        word: 单词实体；写入后回填 id
        definitions: 释义列表，缺省使用 word.definitions；写入后回填 id / word_id
        table_prefix: 表名前缀

    Returns:
        新单词 id
    """
    defs = list(word.definitions if definitions is None else definitions)
    word_peer = WordPeer(conn, table_prefix=table_prefix)
    def_peer = WordDefinitionPeer(conn, table_prefix=table_prefix)

    with transaction(conn):
        word_id = word_peer.insert(word)
        for d in defs:
            d.word_id = word_id
            d.id = def_peer.insert(d)

    word.id = word_id
    word.definitions = defs
    logger.debug(f"Created word {word.word} id={word_id} with {len(defs)} definitions")
    return word_id


def get_words(
    conn: Connection,
    where: Where = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    table_prefix: str = "",
) -> List[Word]:
    """按条件查询单词（按 id 排序），并一次性批量加载释义"""
    words = WordPeer(conn, table_prefix=table_prefix).select(where=where, order_by=["id"], limit=limit, offset=offset)
    if not words:
        return []

    defs = WordDefinitionPeer(conn, table_prefix=table_prefix).select(
        where=in_("word_id", [w.id for w in words]),
        order_by=["word_id", "id"],
    )
    by_word: Dict[int, List[WordDefinition]] = {}
    for d in defs:
        by_word.setdefault(d.word_id, []).append(d)
    for w in words:
        w.definitions = by_word.get(w.id, [])
    return words


def get_word(conn: Connection, word_id: int, table_prefix: str = "") -> Optional[Word]:
    words = get_words(conn, eq("id", word_id), limit=1, table_prefix=table_prefix)
    return words[0] if words else None


def delete_word(conn: Connection, word_id: int, table_prefix: str = "") -> int:
    """先删释义再删单词（外键约束），返回删除的单词数"""
    with transaction(conn):
        WordDefinitionPeer(conn, table_prefix=table_prefix).delete(eq("word_id", word_id))
        deleted = WordPeer(conn, table_prefix=table_prefix).delete(eq("id", word_id))
    return deleted
