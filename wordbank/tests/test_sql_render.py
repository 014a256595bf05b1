import pytest

from wordbank.errors import InvalidIdentifier
from wordbank.filters import SearchCondition, SearchFilter, and_, compile_filter, eq, in_, or_
from wordbank.filters.predicate import Condition, Op
from wordbank.repository.sql import render_limit, render_order_by, render_predicate, render_where
from wordbank.schema import MYSQL, POSTGRESQL, SQLITE


def _compile(key, operator, value, logic="AND"):
    return compile_filter(SearchFilter(conditions=[SearchCondition(key=key, operator=operator, value=value)], logic=logic))


def test_familiarity_equals_red():
    assert render_predicate(_compile("familiarity", "eq", "red"), SQLITE) == ("familiarity = ?", ["red"])


def test_id_in_list():
    assert render_predicate(_compile("id", "in", "[1,2,3]", "OR"), SQLITE) == ("id IN (?, ?, ?)", [1, 2, 3])


def test_operators():
    assert render_predicate(Condition("a", Op.NE, "x"), SQLITE) == ("a <> ?", ["x"])
    assert render_predicate(Condition("a", Op.LIKE, "x%"), SQLITE) == ("a LIKE ?", ["x%"])
    assert render_predicate(Condition("a", Op.NOT_LIKE, "x%"), SQLITE) == ("a NOT LIKE ?", ["x%"])
    assert render_predicate(Condition("a", Op.NOT_IN, ("x", "y")), MYSQL) == ("a NOT IN (%s, %s)", ["x", "y"])


def test_groups_are_parenthesised():
    pred = and_(eq("a", 1), or_(eq("b", 2), in_("c", [3, 4])))
    sql, params = render_predicate(pred, POSTGRESQL)
    assert sql == "(a = %s AND (b = %s OR c IN (%s, %s)))"
    assert params == [1, 2, 3, 4]


def test_value_is_never_inlined():
    sql, params = render_predicate(eq("word", "x'; DROP TABLE words; --"), SQLITE)
    assert sql == "word = ?"
    assert params == ["x'; DROP TABLE words; --"]


@pytest.mark.parametrize("key", ["word; DROP TABLE words", "a b", "1abc", "w.id", ""])
def test_invalid_column_names(key):
    with pytest.raises(InvalidIdentifier):
        render_predicate(Condition(key, Op.EQ, "x"), SQLITE)


def test_render_where_empty():
    assert render_where(None, SQLITE) == ("", [])
    assert render_where(eq("id", 1), SQLITE) == (" WHERE id = ?", [1])


def test_order_by():
    assert render_order_by(["word", "id desc"], SQLITE) == " ORDER BY word, id DESC"
    assert render_order_by(["{FUNC_RANDOM}"], MYSQL) == " ORDER BY RAND()"
    assert render_order_by(["{FUNC_RANDOM}"], SQLITE) == " ORDER BY RANDOM()"
    assert render_order_by(None, SQLITE) == ""
    with pytest.raises(InvalidIdentifier):
        render_order_by(["id; DELETE FROM words"], SQLITE)


def test_limit_offset():
    assert render_limit(None, None, SQLITE) == ("", [])
    assert render_limit(10, None, SQLITE) == (" LIMIT ?", [10])
    assert render_limit(10, 5, SQLITE) == (" LIMIT ? OFFSET ?", [10, 5])
    assert render_limit(None, 5, SQLITE) == (" LIMIT -1 OFFSET ?", [5])
    assert render_limit(None, 5, POSTGRESQL) == (" LIMIT ALL OFFSET %s", [5])
    assert render_limit(None, 5, MYSQL) == (" LIMIT 18446744073709551615 OFFSET %s", [5])
    assert render_limit(3, 5, POSTGRESQL) == (" LIMIT %s OFFSET %s", [3, 5])
    with pytest.raises(ValueError):
        render_limit(-1, None, SQLITE)


@pytest.mark.parametrize("limit, offset", [(True, None), (None, False), (10, True)])
def test_limit_offset_reject_bool(limit, offset):
    with pytest.raises(ValueError):
        render_limit(limit, offset, SQLITE)
