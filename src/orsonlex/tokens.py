"""Token classes, span data structures, and character classification helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum, auto


class TokenClass(Enum):
    # Lexeme classes (primary pass)
    OPERATOR = auto()  # + - <= := and or ...
    CLAUSE_KEYWORD = auto()  # if then else for do ...
    QUOTED_NAME = auto()  # reserved value names: true false nil ...
    PLAIN_NAME = auto()  # builtin names: max min write ...
    SIMPLE_TYPE = auto()  # int0 real1 char0 bool ...
    JOKER_TYPE = auto()  # type sets: inj cha num obj ...

    # Region classes (secondary pass)
    STRING = auto()  # ''...''
    COMMENT = auto()  # ! to end of line


class Fence(Enum):
    OPEN = auto()
    CLOSE = auto()


class RegionKind(Enum):
    STRING = auto()
    COMMENT = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range [start, end) with an assigned class."""

    start: int
    end: int
    cls: TokenClass

    @property
    def length(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class RegionMarker:
    """A string or comment region found by the secondary pass.

    For strings, ``open`` and ``close`` are the offsets of the two fence
    characters. An unterminated string has no closing fence and ``close`` is
    the end of input. For comments, ``open`` is the trigger character and
    ``close`` is the line terminator (or end of input), which is not part of
    the comment.
    """

    kind: RegionKind
    open: int
    close: int
    terminated: bool = True

    @property
    def end(self) -> int:
        """Half-open end of the characters the region covers."""
        if self.kind == RegionKind.STRING and self.terminated:
            return self.close + 1
        return self.close

    @property
    def cls(self) -> TokenClass:
        return TokenClass.STRING if self.kind == RegionKind.STRING else TokenClass.COMMENT


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


class LineIndex:
    """Map character offsets to line/column positions for one text."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._starts.append(i + 1)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        idx = bisect_right(self._starts, offset) - 1
        return Position(idx + 1, offset - self._starts[idx] + 1, offset)

    def line_start(self, line: int) -> int:
        """Offset of the first character of 1-based ``line`` (clamped)."""
        idx = max(0, min(line - 1, len(self._starts) - 1))
        return self._starts[idx]

    def line_end(self, line: int) -> int:
        """Offset of the line terminator of 1-based ``line`` (or end of text)."""
        idx = max(0, min(line - 1, len(self._starts) - 1))
        if idx + 1 < len(self._starts):
            return self._starts[idx + 1] - 1
        return len(self._text)

    def offset(self, line: int, column: int) -> int:
        """Offset of 1-based ``line``/``column``, clamped to the line."""
        start = self.line_start(line)
        return min(start + max(0, column - 1), self.line_end(line))


# Characters that can extend an operator into a longer one
_SYMBOL_CHARS = frozenset("+-*/<>=&|~^@#$%?:\\")


def is_word_char(ch: str, extra: str = "_") -> bool:
    """Return True if ch can continue a name: a letter, a digit, or one of *extra*."""
    return ch.isalnum() or ch in extra


def is_symbol_char(ch: str) -> bool:
    """Return True if ch can continue an operator."""
    return ch in _SYMBOL_CHARS


def symbol_chars() -> str:
    """Return the operator-continuation characters as a string."""
    return "".join(sorted(_SYMBOL_CHARS))
