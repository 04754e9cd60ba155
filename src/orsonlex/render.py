"""Reference presentation layer: map each token class to a visual style."""

from __future__ import annotations

from collections.abc import Iterator

from orsonlex.engine import Classification
from orsonlex.tokens import TokenClass

# CSS class suffix per token class (rendered as "orson-<suffix>")
CSS_CLASSES: dict[TokenClass, str] = {
    TokenClass.OPERATOR: "operator",
    TokenClass.CLAUSE_KEYWORD: "keyword",
    TokenClass.QUOTED_NAME: "constant",
    TokenClass.PLAIN_NAME: "builtin",
    TokenClass.SIMPLE_TYPE: "type",
    TokenClass.JOKER_TYPE: "joker",
    TokenClass.STRING: "string",
    TokenClass.COMMENT: "comment",
}

# SGR parameters per token class
ANSI_STYLES: dict[TokenClass, str] = {
    TokenClass.OPERATOR: "37",
    TokenClass.CLAUSE_KEYWORD: "1;35",
    TokenClass.QUOTED_NAME: "36",
    TokenClass.PLAIN_NAME: "34",
    TokenClass.SIMPLE_TYPE: "32",
    TokenClass.JOKER_TYPE: "1;32",
    TokenClass.STRING: "33",
    TokenClass.COMMENT: "2;3",
}


def segments(text: str, result: Classification) -> Iterator[tuple[str, TokenClass | None]]:
    """Yield (text, class) pieces covering the classified range, gaps included."""
    pos = result.start
    for span in result.spans:
        if span.start > pos:
            yield text[pos : span.start], None
        yield text[span.start : span.end], span.cls
        pos = span.end
    if pos < result.end:
        yield text[pos : result.end], None


def _escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def render_html(text: str, result: Classification) -> str:
    """Render the classified range as a ``<pre>`` block of styled spans."""
    parts: list[str] = ['<pre class="orson">']
    for piece, cls in segments(text, result):
        escaped = _escape_html(piece)
        if cls is None:
            parts.append(escaped)
        else:
            parts.append(f'<span class="orson-{CSS_CLASSES[cls]}">{escaped}</span>')
    parts.append("</pre>\n")
    return "".join(parts)


def render_ansi(text: str, result: Classification) -> str:
    """Render the classified range with terminal colors."""
    parts: list[str] = []
    for piece, cls in segments(text, result):
        if cls is None:
            parts.append(piece)
        else:
            parts.append(f"\x1b[{ANSI_STYLES[cls]}m{piece}\x1b[0m")
    return "".join(parts)
