"""Orson lexeme tables, one per token class, and the dialect that bundles them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from orsonlex.errors import TableError
from orsonlex.tokens import TokenClass


@dataclass(frozen=True, slots=True)
class LexemeTable:
    """An ordered set of lexeme strings sharing one token class."""

    name: str
    cls: TokenClass
    lexemes: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for lexeme in self.lexemes:
            if lexeme in seen:
                raise TableError("duplicate lexeme", self.name, lexeme)
            seen.add(lexeme)

    @classmethod
    def of(cls, name: str, token_class: TokenClass, words: Iterable[str]) -> LexemeTable:
        return cls(name, token_class, tuple(words))

    def __contains__(self, lexeme: object) -> bool:
        return lexeme in self.lexemes

    def __iter__(self):
        return iter(self.lexemes)

    def __len__(self) -> int:
        return len(self.lexemes)

    def longest_first(self) -> list[str]:
        """Lexemes ordered so that no lexeme precedes a longer one it prefixes."""
        return sorted(self.lexemes, key=lambda s: (-len(s), s))

    def extended(self, words: Iterable[str]) -> LexemeTable:
        """Return a copy with ``words`` appended, skipping ones already present."""
        extra = [w for w in dict.fromkeys(words) if w not in self.lexemes]
        return replace(self, lexemes=self.lexemes + tuple(extra))


# ---------------------------------------------------------------------------
# Orson tables
# ---------------------------------------------------------------------------

OPERATORS = LexemeTable.of(
    "operators",
    TokenClass.OPERATOR,
    [
        # Arithmetic and bitwise
        "+", "-", "*", "/", "&", "|", "~", "^",
        "<<", ">>",
        # Comparison
        "=", "<>", "<", "<=", ">", ">=",
        # Assignment and binding
        ":-", ":=", "+=", "-=", "*=", "/=", "&=", "|=", "^=", "<<=", ">>=",
        # Structure
        "->", "@", "..", ",", ";", ":", "(", ")", "[", "]", "{", "}",
        # Word operators
        "and", "or", "not", "mod", "xor",
    ],
)  # fmt: skip

CLAUSE_KEYWORDS = LexemeTable.of(
    "clause_keywords",
    TokenClass.CLAUSE_KEYWORD,
    [
        "alt", "begin", "case", "catch", "do", "else", "end", "for", "form",
        "gen", "if", "in", "load", "of", "past", "proc", "prog", "then",
        "while", "with",
    ],
)  # fmt: skip

QUOTED_NAMES = LexemeTable.of(
    "quoted_names",
    TokenClass.QUOTED_NAME,
    ["false", "true", "nil", "none", "skip", "self", "eos", "eop"],
)

PLAIN_NAMES = LexemeTable.of(
    "plain_names",
    TokenClass.PLAIN_NAME,
    [
        "abs", "apply", "catenate", "close", "error", "exit", "halt", "head",
        "isDigit", "isLetter", "isSpace", "length", "lower", "max", "min",
        "next", "open", "read", "size", "sqrt", "tail", "upper", "write",
        "writeln",
    ],
)  # fmt: skip

SIMPLE_TYPES = LexemeTable.of(
    "simple_types",
    TokenClass.SIMPLE_TYPE,
    [
        "bool", "char0", "char1", "int0", "int1", "int2", "null", "real0",
        "real1", "string", "void",
    ],
)  # fmt: skip

JOKER_TYPES = LexemeTable.of(
    "joker_types",
    TokenClass.JOKER_TYPE,
    [
        "alj", "cha", "exe", "foj", "gej", "inj", "met", "mut", "num", "obj",
        "pro", "rej", "sca", "sej", "sym", "tup", "type",
    ],
)  # fmt: skip


# Field names in dialect order, keyed by the config/table name
TABLE_NAMES = (
    "plain_names",
    "operators",
    "clause_keywords",
    "quoted_names",
    "simple_types",
    "joker_types",
)


@dataclass(frozen=True, slots=True)
class Dialect:
    """The complete set of lexeme tables the classifier applies.

    Table order is the compositing priority: later tables overwrite the
    classes written by earlier ones on overlapping characters, so keyword
    and type names always outrank builtins, operators, and clause keywords.
    """

    name: str = "orson"
    plain_names: LexemeTable = PLAIN_NAMES
    operators: LexemeTable = OPERATORS
    clause_keywords: LexemeTable = CLAUSE_KEYWORDS
    quoted_names: LexemeTable = QUOTED_NAMES
    simple_types: LexemeTable = SIMPLE_TYPES
    joker_types: LexemeTable = JOKER_TYPES

    def tables(self) -> tuple[LexemeTable, ...]:
        """All tables in priority order, lowest first."""
        return tuple(getattr(self, name) for name in TABLE_NAMES)

    def table(self, name: str) -> LexemeTable:
        if name not in TABLE_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def with_table(self, name: str, words: Iterable[str]) -> Dialect:
        """Return a dialect whose table ``name`` is replaced by ``words``."""
        old = self.table(name)
        return replace(self, **{name: LexemeTable.of(old.name, old.cls, words)})

    def with_extra(self, name: str, words: Iterable[str]) -> Dialect:
        """Return a dialect whose table ``name`` also contains ``words``."""
        return replace(self, **{name: self.table(name).extended(words)})

    def overlaps(self) -> dict[str, list[str]]:
        """Map each lexeme found in more than one table to those table names."""
        owners: dict[str, list[str]] = {}
        for table in self.tables():
            for lexeme in table:
                owners.setdefault(lexeme, []).append(table.name)
        return {lexeme: names for lexeme, names in owners.items() if len(names) > 1}


ORSON = Dialect()
