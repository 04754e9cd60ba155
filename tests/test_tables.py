"""Test the lexeme tables and the dialect bundle."""

import pytest

from orsonlex.errors import TableError
from orsonlex.tables import (
    CLAUSE_KEYWORDS,
    OPERATORS,
    ORSON,
    PLAIN_NAMES,
    TABLE_NAMES,
    LexemeTable,
)
from orsonlex.tokens import TokenClass


class TestLexemeTable:
    def test_duplicate_rejected(self):
        with pytest.raises(TableError) as exc_info:
            LexemeTable.of("t", TokenClass.OPERATOR, ["+", "-", "+"])
        assert exc_info.value.lexeme == "+"
        assert exc_info.value.table == "t"
        assert "duplicate" in str(exc_info.value)

    def test_longest_first(self):
        table = LexemeTable.of("t", TokenClass.OPERATOR, ["<", "<=", "<<", "<<="])
        assert table.longest_first() == ["<<=", "<<", "<=", "<"]

    def test_membership(self):
        assert "<=" in OPERATORS
        assert "maximum" not in PLAIN_NAMES
        assert len(CLAUSE_KEYWORDS) == len(set(CLAUSE_KEYWORDS))

    def test_extended_skips_existing(self):
        table = LexemeTable.of("t", TokenClass.PLAIN_NAME, ["max"])
        bigger = table.extended(["max", "assert", "assert"])
        assert bigger.lexemes == ("max", "assert")
        assert table.lexemes == ("max",)

    def test_prefix_operators_retained(self):
        for lexeme in ("<", "<=", "<<", "<<="):
            assert lexeme in OPERATORS


class TestOrsonDialect:
    def test_tables_are_disjoint(self):
        assert ORSON.overlaps() == {}

    def test_priority_order(self):
        classes = [table.cls for table in ORSON.tables()]
        assert classes == [
            TokenClass.PLAIN_NAME,
            TokenClass.OPERATOR,
            TokenClass.CLAUSE_KEYWORD,
            TokenClass.QUOTED_NAME,
            TokenClass.SIMPLE_TYPE,
            TokenClass.JOKER_TYPE,
        ]

    def test_table_names_match_fields(self):
        assert [table.name for table in ORSON.tables()] == list(TABLE_NAMES)

    def test_with_table_replaces(self):
        d = ORSON.with_table("simple_types", ["int", "real"])
        assert d.simple_types.lexemes == ("int", "real")
        assert d.simple_types.cls == TokenClass.SIMPLE_TYPE
        assert "int0" in ORSON.simple_types

    def test_with_extra_appends(self):
        d = ORSON.with_extra("plain_names", ["assert"])
        assert "assert" in d.plain_names
        assert "max" in d.plain_names

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            ORSON.table("verbs")

    def test_overlap_reported(self):
        d = ORSON.with_extra("plain_names", ["for"])
        assert d.overlaps() == {"for": ["plain_names", "clause_keywords"]}

    def test_dialect_is_hashable(self):
        assert hash(ORSON) == hash(ORSON.with_table("operators", OPERATORS.lexemes))
