"""
单词聚合服务测试
"""
import json

import pytest

from wordbank.errors import DatabaseError
from wordbank.filters import SearchCondition, SearchFilter, eq
from wordbank.models import Word, WordDefinition
from wordbank.repository import WordDefinitionPeer, WordPeer
from wordbank.services import demo_svc, word_svc


def _defs(*texts):
    return [WordDefinition(part_of_speech="noun", definition=t) for t in texts]


class TestWordService:

    def test_create_and_get_word(self, conn):
        word = Word(word="album")
        word_id = word_svc.create_word(conn, word, _defs("music collection", "photo book"))

        assert word.id == word_id
        assert all(d.word_id == word_id and d.id for d in word.definitions)

        got = word_svc.get_word(conn, word_id)
        assert got.word == "album"
        assert got.familiarity == "red"
        assert [d.definition for d in got.definitions] == ["music collection", "photo book"]

    def test_uses_entity_definitions_by_default(self, conn):
        word = Word(word="breeze", definitions=_defs("a light wind"))
        word_svc.create_word(conn, word)
        assert WordDefinitionPeer(conn).count(eq("word_id", word.id)) == 1

    def test_get_words_groups_definitions(self, conn):
        a = word_svc.create_word(conn, Word(word="a"), _defs("a1", "a2"))
        b = word_svc.create_word(conn, Word(word="b"), [])
        c = word_svc.create_word(conn, Word(word="c"), _defs("c1"))

        words = word_svc.get_words(conn)
        assert [w.id for w in words] == [a, b, c]
        assert [len(w.definitions) for w in words] == [2, 0, 1]

        search = SearchFilter(conditions=[SearchCondition(key="word", operator="ne", value="b")], logic="AND")
        assert [w.word for w in word_svc.get_words(conn, search)] == ["a", "c"]
        assert word_svc.get_words(conn, eq("word", "zzz")) == []

    def test_failed_definition_rolls_back_word(self, conn):
        with pytest.raises(DatabaseError):
            word_svc.create_word(conn, Word(word="corn"), [WordDefinition(part_of_speech="noun")])
        assert WordPeer(conn).count() == 0
        assert WordDefinitionPeer(conn).count() == 0

    def test_foreign_key_enforced(self, conn):
        with pytest.raises(DatabaseError) as exc:
            WordDefinitionPeer(conn).insert(WordDefinition(word_id=424242, definition="orphan"))
        assert exc.value.table == "word_definitions"

    def test_delete_word_removes_definitions(self, conn):
        keep = word_svc.create_word(conn, Word(word="keep"), _defs("k"))
        gone = word_svc.create_word(conn, Word(word="gone"), _defs("g1", "g2"))

        assert word_svc.delete_word(conn, gone) == 1
        assert word_svc.get_word(conn, gone) is None
        assert WordDefinitionPeer(conn).count() == 1
        assert word_svc.get_word(conn, keep).definitions[0].definition == "k"
        assert word_svc.delete_word(conn, gone) == 0


class TestDemoData:

    def test_insert_demo_data_once(self, conn):
        inserted = demo_svc.insert_demo_data(conn)
        assert inserted == len(demo_svc.DEMO_WORDS)
        assert WordPeer(conn).count() == inserted
        assert WordDefinitionPeer(conn).count() == inserted

        # 已有数据时跳过
        assert demo_svc.insert_demo_data(conn) == 0
        assert WordPeer(conn).count() == inserted

    def test_demo_examples_are_json(self, conn):
        demo_svc.insert_demo_data(conn)
        album = word_svc.get_words(conn, eq("word", "album"))[0]
        assert json.loads(album.definitions[0].examples) == ["Have you heard their new album?"]
