"""Tests for the HTML/ANSI renderers and the debug dump."""

from __future__ import annotations

import io

from orsonlex.debug import dump_classification
from orsonlex.engine import classify
from orsonlex.render import ANSI_STYLES, CSS_CLASSES, render_ansi, render_html, segments
from orsonlex.tokens import TokenClass


class TestSegments:
    def test_gaps_included(self) -> None:
        text = "if a then"
        pieces = list(segments(text, classify(text)))
        assert pieces == [
            ("if", TokenClass.CLAUSE_KEYWORD),
            (" a ", None),
            ("then", TokenClass.CLAUSE_KEYWORD),
        ]
        assert "".join(p for p, _ in pieces) == text

    def test_sub_range(self) -> None:
        text = "if a then"
        pieces = list(segments(text, classify(text, 2, 9)))
        assert "".join(p for p, _ in pieces) == " a then"


class TestHtml:
    def test_every_class_has_style(self) -> None:
        assert set(CSS_CLASSES) == set(TokenClass)
        assert set(ANSI_STYLES) == set(TokenClass)

    def test_render_html(self) -> None:
        text = "a <= b ! x < y"
        html = render_html(text, classify(text))
        assert html.startswith('<pre class="orson">')
        assert '<span class="orson-operator">&lt;=</span>' in html
        assert '<span class="orson-comment">! x &lt; y</span>' in html
        assert html.endswith("</pre>\n")

    def test_render_string(self) -> None:
        text = "''a&b''"
        html = render_html(text, classify(text))
        assert "<span class=\"orson-string\">''a&amp;b''</span>" in html


class TestAnsi:
    def test_render_ansi(self) -> None:
        text = "int0 x"
        out = render_ansi(text, classify(text))
        assert out == f"\x1b[{ANSI_STYLES[TokenClass.SIMPLE_TYPE]}mint0\x1b[0m x"


class TestDebugDump:
    def test_dump(self) -> None:
        text = "for i\n''s'' ! c"
        buf = io.StringIO()
        dump_classification(text, classify(text), file=buf)
        out = buf.getvalue()
        assert out.startswith("Classification [0, 15)\n")
        assert "1:1 CLAUSE_KEYWORD 'for'" in out
        assert "region STRING 2:1 [6, 11)" in out
        assert "region COMMENT 2:7 [12, 15)" in out
        assert "fence OPEN @6" in out
        assert "fence CLOSE @10" in out

    def test_dump_unterminated(self) -> None:
        text = "''abc"
        buf = io.StringIO()
        dump_classification(text, classify(text), file=buf)
        assert "(unterminated)" in buf.getvalue()
