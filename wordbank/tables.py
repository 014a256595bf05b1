"""
业务表定义：words / word_definitions / questions

启动时调用 register_all_tables(registry) 登记，再由 initialize_all 建表。
"""
from __future__ import annotations

import logging

from .errors import DuplicateTable
from .schema import INTEGER, TEXT, TIMESTAMP, Column, ForeignKey, Index, TableDefinition, TableRegistry, varchar

logger = logging.getLogger(__name__)

WORDS_TABLE = "words"
WORD_DEFINITIONS_TABLE = "word_definitions"
QUESTIONS_TABLE = "questions"

FAMILIARITY_DEFAULT = "red"


def _id_column() -> Column:
    return Column("id", INTEGER, nullable=False, auto_increment=True, primary_key=True)


def _timestamp_columns() -> list[Column]:
    return [
        Column("created_at", TIMESTAMP, nullable=False, default="CURRENT_TIMESTAMP"),
        Column("updated_at", TIMESTAMP, nullable=False, default="CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP"),
    ]


def words_table() -> TableDefinition:
    return TableDefinition(
        name=WORDS_TABLE,
        columns=[
            _id_column(),
            Column("word", varchar(255), nullable=False, index=True),
            Column("familiarity", varchar(20), nullable=False, default=f"'{FAMILIARITY_DEFAULT}'"),
            *_timestamp_columns(),
        ],
        indexes=[Index("word_unique", ["word"], unique=True)],
        description="Dictionary words with their familiarity level",
    )


def word_definitions_table() -> TableDefinition:
    return TableDefinition(
        name=WORD_DEFINITIONS_TABLE,
        columns=[
            _id_column(),
            Column("word_id", INTEGER, nullable=False, index=True, foreign_key=ForeignKey(WORDS_TABLE, "id")),
            Column("part_of_speech", varchar(50)),
            Column("definition", TEXT, nullable=False),
            Column("phonetics", TEXT),
            Column("examples", TEXT),
            Column("notes", TEXT),
            *_timestamp_columns(),
        ],
        indexes=[Index("word_id_index", ["word_id"])],
        description="Word definitions with multiple entries per word",
    )


def questions_table() -> TableDefinition:
    return TableDefinition(
        name=QUESTIONS_TABLE,
        columns=[
            _id_column(),
            Column("question", varchar(1024), nullable=False),
            Column("option_a", varchar(255), nullable=False),
            Column("option_b", varchar(255)),
            Column("option_c", varchar(255)),
            Column("option_d", varchar(255)),
            Column("answer", varchar(5), nullable=False),
            Column("reference", varchar(255)),
            Column("notes", TEXT),
            Column("count_practise", INTEGER, nullable=False, default="0"),
            Column("count_failure_practise", INTEGER, nullable=False, default="0"),
            *_timestamp_columns(),
        ],
        description="Question records for recapping to improve the skill",
    )


def all_tables() -> list[TableDefinition]:
    return [words_table(), word_definitions_table(), questions_table()]


def register_all_tables(registry: TableRegistry) -> None:
    """登记全部业务表；重复登记视为启动错误，直接抛出。"""
    for table in all_tables():
        try:
            registry.register(table)
        except DuplicateTable:
            logger.error(f"Failed to register table {table.name}: already registered")
            raise
        logger.debug(f"Successfully registered table {table.name}")
    logger.info(f"All data layer tables registered: {len(registry)}")
