"""End-to-end classification properties."""

from dataclasses import replace

import pytest

from orsonlex.engine import classify
from orsonlex.mode import ORSON_MODE
from orsonlex.tables import ORSON
from orsonlex.tokens import Fence, RegionKind, Span, TokenClass

from .conftest import assert_classes, span_texts


class TestStandaloneLexemes:
    @pytest.mark.parametrize("table", ORSON.tables(), ids=lambda t: t.name)
    def test_every_lexeme_alone(self, table):
        for lexeme in table:
            text = f" {lexeme} "
            result = classify(text)
            assert result.spans == (Span(1, 1 + len(lexeme), table.cls),), lexeme


class TestLongestMatch:
    def test_less_equal_single_span(self, classify_text):
        result = classify_text("<=")
        assert result.spans == (Span(0, 2, TokenClass.OPERATOR),)

    def test_assignment_in_context(self, classify_text):
        text = "x :- y + 1"
        assert_classes(
            text,
            classify_text(text),
            [(":-", TokenClass.OPERATOR), ("+", TokenClass.OPERATOR)],
        )


class TestBoundary:
    def test_maximum_is_not_max(self, classify_text):
        assert classify_text("maximum").spans_of(TokenClass.PLAIN_NAME) == []

    def test_identifier_with_keyword_prefix(self, classify_text):
        assert classify_text("former iffy typed").spans == ()

    def test_glued_operators_unclassified(self, classify_text):
        assert classify_text("x:=-1").spans == ()

    def test_mode_word_chars(self):
        text = "max? max"
        assert len(classify(text).spans_of(TokenClass.PLAIN_NAME)) == 2
        mode = replace(ORSON_MODE, word_chars="_?")
        assert classify(text, mode=mode).spans_of(TokenClass.PLAIN_NAME) == [
            Span(5, 8, TokenClass.PLAIN_NAME)
        ]


class TestStringFencing:
    def test_fences(self, classify_text):
        result = classify_text("''abc''")
        assert result.fence_at(0) == Fence.OPEN
        assert result.fence_at(6) == Fence.CLOSE
        assert result.spans == (Span(0, 7, TokenClass.STRING),)

    def test_keywords_inside_string_suppressed(self, classify_text):
        text = "''if max then'' else"
        assert_classes(
            text,
            classify_text(text),
            [("''if max then''", TokenClass.STRING), ("else", TokenClass.CLAUSE_KEYWORD)],
        )

    def test_unterminated_string(self, classify_text):
        result = classify_text("''abc")
        assert result.fence_at(0) == Fence.OPEN
        assert result.spans == (Span(0, 5, TokenClass.STRING),)
        (region,) = result.regions
        assert region.kind == RegionKind.STRING
        assert not region.terminated

    def test_code_after_broken_literal(self, classify_text):
        text = "write(''it's'') ! x\nif a then b"
        result = classify_text(text)
        assert result.spans_of(TokenClass.STRING) == []
        assert [s.text(text) for s in result.spans_of(TokenClass.COMMENT)] == ["! x"]
        assert result.class_at(20) == TokenClass.CLAUSE_KEYWORD
        assert result.class_at(25) == TokenClass.CLAUSE_KEYWORD


class TestComments:
    def test_comment_then_code(self, classify_text):
        text = "! comment text\ncode"
        result = classify_text(text)
        assert result.spans == (Span(0, 14, TokenClass.COMMENT),)
        assert result.class_at(14) is None

    def test_comment_overrides_keywords(self, classify_text):
        text = "for x ! if then else\nwhile"
        assert_classes(
            text,
            classify_text(text),
            [
                ("for", TokenClass.CLAUSE_KEYWORD),
                ("! if then else", TokenClass.COMMENT),
                ("while", TokenClass.CLAUSE_KEYWORD),
            ],
        )

    def test_classification_resumes_after_comment(self, classify_text):
        text = "! note\nint1 x"
        assert span_texts(text, classify_text(text))[-1] == ("int1", TokenClass.SIMPLE_TYPE)


class TestPrecedence:
    def test_for_is_clause_keyword(self, classify_text):
        assert classify_text("for").spans == (Span(0, 3, TokenClass.CLAUSE_KEYWORD),)

    def test_later_table_wins_on_overlap(self):
        mode_dialect = ORSON.with_extra("simple_types", ["max"])
        mode = replace(ORSON_MODE, dialect=mode_dialect)
        assert classify("max", mode=mode).spans == (Span(0, 3, TokenClass.SIMPLE_TYPE),)


class TestRanges:
    def test_empty_text(self, classify_text):
        result = classify_text("")
        assert result.spans == ()
        assert result.regions == ()

    def test_empty_range(self, classify_text):
        assert classify_text("if x then", 3, 3).spans == ()

    def test_bounds_clamped(self, classify_text):
        result = classify_text("if", -5, 99)
        assert (result.start, result.end) == (0, 2)
        assert result.spans == (Span(0, 2, TokenClass.CLAUSE_KEYWORD),)

    def test_reversed_bounds(self, classify_text):
        assert classify_text("if x", 3, 1).spans == ()

    def test_sub_range(self, classify_text):
        text = "if x then y else z"
        result = classify_text(text, 5, 11)
        assert_classes(text, result, [("then", TokenClass.CLAUSE_KEYWORD)])

    def test_sub_range_clips_string(self, classify_text):
        text = "''abcdef'' if"
        result = classify_text(text, 0, 4)
        assert result.spans == (Span(0, 4, TokenClass.STRING),)
        assert result.fences == {0: Fence.OPEN}


class TestIdempotence:
    def test_reclassify_same(self, classify_text):
        text = "proc f(int1 a) int1: ! doc\n  if a < 0 then -a else a  ''s''"
        assert classify_text(text) == classify_text(text)

    def test_sub_range_matches_full(self, classify_text):
        text = "with int0 i :- 0 do\n  while i <= 10 do i += 1"
        full = classify_text(text)
        part = classify_text(text, 20)
        assert part.spans == tuple(s for s in full.spans if s.start >= 20)
