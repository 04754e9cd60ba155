"""Compile lexeme tables into boundary-aware, longest-match-first regexes."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from orsonlex.log import get_logger
from orsonlex.tables import Dialect, LexemeTable
from orsonlex.tokens import TokenClass, is_symbol_char, is_word_char, symbol_chars

logger = get_logger(__name__)

_NEVER = re.compile(r"(?!)")

# Name characters besides letters and digits
DEFAULT_WORD_CHARS = "_"


@dataclass(frozen=True, slots=True)
class CompiledTable:
    """A lexeme table together with its compiled matcher."""

    table: LexemeTable
    pattern: re.Pattern[str]

    @property
    def cls(self) -> TokenClass:
        return self.table.cls


def _word_class(word_chars: str) -> str:
    if word_chars == DEFAULT_WORD_CHARS:
        return r"\w"
    extra = "".join(re.escape(ch) for ch in sorted(set(word_chars)))
    return rf"[^\W_]|[{extra}]" if extra else r"[^\W_]"


def _symbol_class(word_chars: str) -> str | None:
    chars = [ch for ch in symbol_chars() if ch not in word_chars]
    if not chars:
        return None
    return "[" + "".join(re.escape(ch) for ch in chars) + "]"


def _guard(ch: str, word_chars: str) -> str | None:
    """Return the character class that must not touch a lexeme edge ``ch``."""
    if is_word_char(ch, word_chars):
        return _word_class(word_chars)
    if is_symbol_char(ch):
        return _symbol_class(word_chars)
    return None


def lexeme_pattern(lexeme: str, word_chars: str = DEFAULT_WORD_CHARS) -> str:
    """Regex source for one lexeme, guarded so it cannot match inside a longer token.

    ``word_chars`` are the characters other than letters and digits that
    continue a name. Note that the symbol guard is strict: an operator
    touching any other operator character never matches, so ``x:=-1``
    yields no operator at all rather than ``:=`` followed by ``-``.
    """
    parts = []
    before = _guard(lexeme[0], word_chars)
    if before:
        parts.append(f"(?<!{before})")
    parts.append(re.escape(lexeme))
    after = _guard(lexeme[-1], word_chars)
    if after:
        parts.append(f"(?!{after})")
    return "".join(parts)


def compile_table(table: LexemeTable, word_chars: str = DEFAULT_WORD_CHARS) -> re.Pattern[str]:
    """Compile ``table`` into a single alternation.

    Alternatives are ordered longest first, so at any start position the
    longest lexeme that satisfies its boundary guards wins. Empty lexemes are
    ignored; a table with nothing left compiles to a pattern that never
    matches.
    """
    lexemes = [lexeme for lexeme in table.longest_first() if lexeme]
    if not lexemes:
        logger.debug("table %s is empty; compiled to a never-matching pattern", table.name)
        return _NEVER
    source = "|".join(lexeme_pattern(lexeme, word_chars) for lexeme in lexemes)
    logger.debug("compiled table %s (%d lexemes)", table.name, len(lexemes))
    return re.compile(source)


@lru_cache(maxsize=None)
def compile_dialect(
    dialect: Dialect, word_chars: str = DEFAULT_WORD_CHARS
) -> tuple[CompiledTable, ...]:
    """Compile every table of ``dialect`` in priority order, once per dialect."""
    return tuple(
        CompiledTable(table, compile_table(table, word_chars)) for table in dialect.tables()
    )
