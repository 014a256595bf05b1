from __future__ import annotations

import json
import logging
from sqlite3 import Connection

from ..models import Word, WordDefinition
from ..repository import WordPeer
from .word_svc import create_word

logger = logging.getLogger(__name__)

# (word, part_of_speech, definition, examples)
DEMO_WORDS = [
    ("album", "noun", "A collection of several pieces of music, made available as a single item",
     ["Have you heard their new album?"]),
    ("breeze", "noun", "A light and pleasant wind", ["She let the gentle breeze cool her face."]),
    ("corn", "noun", "The seeds of plants such as wheat, maize, oats and barley", []),
    ("daisy", "noun", "A small flower with white petals and a yellow centre", []),
    ("element", "noun", "A part of something", ["The movie had all the elements of a good thriller."]),
    ("fair", "adjective", "Treating someone in a way that is right or reasonable", ["a fair trial"]),
    ("garden", "noun", "A piece of land next to a house where flowers and other plants are grown",
     ["a garden shed"]),
    ("honey", "noun", "A sweet, sticky, yellow substance made by bees and used as food", ["clover honey"]),
    ("ice", "noun", "A solid form of water", ["The roads were covered in ice."]),
    ("jungle", "noun", "An area of land covered with thick, tropical trees and plants", []),
    ("kitten", "noun", "A young cat", ["a litter of kittens"]),
    ("lemon", "noun", "A yellow, oval fruit with a thick skin and sour juice", ["a slice of lemon"]),
]


def insert_demo_data(conn: Connection, table_prefix: str = "") -> int:
    """words 表为空时写入演示数据，返回写入的单词数"""
    existing = WordPeer(conn, table_prefix=table_prefix).count()
    if existing > 0:
        logger.info(f"Skip inserting demo data. Data already exists in the table: {existing} words")
        return 0

    for text, pos, definition, examples in DEMO_WORDS:
        create_word(
            conn,
            Word(word=text),
            [
                WordDefinition(
                    part_of_speech=pos,
                    definition=definition,
                    examples=json.dumps(examples, ensure_ascii=False) if examples else None,
                )
            ],
            table_prefix=table_prefix,
        )
    logger.info(f"Inserted demo data: {len(DEMO_WORDS)} words")
    return len(DEMO_WORDS)
