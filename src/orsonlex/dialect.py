"""Build a mode descriptor from TOML configuration.

Example file::

    [mode]
    name = "orson-local"

    [tables]
    simple_types = ["int", "real", "bool"]

    [extend]
    plain_names = ["assert"]
"""

from __future__ import annotations

import tomllib
from dataclasses import replace
from pathlib import Path
from typing import Any

from orsonlex.errors import DialectError, TableError
from orsonlex.log import get_logger
from orsonlex.mode import ORSON_MODE, ModeDescriptor
from orsonlex.tables import TABLE_NAMES

logger = get_logger(__name__)


def _word_list(value: Any, key: str, path: Path | None) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DialectError("expected a list of strings", path, key)
    return value


def _table_section(config: dict[str, Any], section: str, path: Path | None) -> dict[str, list[str]]:
    raw = config.get(section)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DialectError(f"[{section}] must be a table", path, section)
    result: dict[str, list[str]] = {}
    for name, value in raw.items():
        key = f"{section}.{name}"
        if name not in TABLE_NAMES:
            raise DialectError(f"unknown lexeme table '{name}'", path, key)
        result[name] = _word_list(value, key, path)
    return result


def mode_from_config(
    config: dict[str, Any],
    base: ModeDescriptor = ORSON_MODE,
    path: Path | None = None,
) -> ModeDescriptor:
    """Apply the ``[mode]``, ``[tables]`` and ``[extend]`` sections to ``base``."""
    dialect = base.dialect
    try:
        for name, words in _table_section(config, "tables", path).items():
            dialect = dialect.with_table(name, words)
        for name, words in _table_section(config, "extend", path).items():
            dialect = dialect.with_extra(name, words)
    except TableError as exc:
        raise DialectError(f"duplicate lexeme {exc.lexeme!r}", path, exc.table) from exc

    settings = config.get("mode", {})
    if not isinstance(settings, dict):
        raise DialectError("[mode] must be a table", path, "mode")

    name = settings.get("name", base.name)
    if not isinstance(name, str) or not name:
        raise DialectError("mode name must be a non-empty string", path, "mode.name")

    comment_start = settings.get("comment_start", base.comment_start)
    if not isinstance(comment_start, str) or len(comment_start) != 1:
        raise DialectError(
            "comment_start must be a single character", path, "mode.comment_start"
        )

    delimiter = settings.get("string_delimiter", base.string_delimiter)
    if not isinstance(delimiter, str) or not delimiter:
        raise DialectError(
            "string_delimiter must be a non-empty string", path, "mode.string_delimiter"
        )
    if comment_start in delimiter:
        raise DialectError(
            "string_delimiter must not contain the comment character",
            path,
            "mode.string_delimiter",
        )

    word_chars = settings.get("word_chars", base.word_chars)
    if not isinstance(word_chars, str):
        raise DialectError("word_chars must be a string", path, "mode.word_chars")
    if comment_start in word_chars or delimiter[0] in word_chars:
        raise DialectError(
            "word_chars must not contain comment or string characters",
            path,
            "mode.word_chars",
        )

    if dialect is not base.dialect:
        dialect = replace(dialect, name=name)
    return replace(
        base,
        name=name,
        dialect=dialect,
        comment_start=comment_start,
        string_delimiter=delimiter,
        word_chars=word_chars,
    )


def read_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file, reporting syntax errors as DialectError."""
    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise DialectError(f"invalid TOML: {exc}", path) from exc


def load_dialect(path: Path, base: ModeDescriptor = ORSON_MODE) -> ModeDescriptor:
    """Read a TOML file and return ``base`` with its overrides applied."""
    config = read_toml(path)
    logger.debug("loaded dialect file %s", path)
    return mode_from_config(config, base, path)
