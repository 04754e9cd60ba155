"""Mode descriptor: the declarative bundle an editor shell wires to a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath

from orsonlex.regions import scan_regions
from orsonlex.tables import ORSON, Dialect


@dataclass(frozen=True, slots=True)
class ModeDescriptor:
    """Which tables apply, and the comment, string, and block conventions.

    ``word_chars`` lists the characters besides letters and digits that may
    continue a name; a lexeme never matches next to one of them.

    ``block_open``/``block_close`` are not used for classification; they are
    what a "jump to enclosing block" command needs (see ``enclosing_block``).
    """

    name: str = "orson"
    file_extensions: tuple[str, ...] = (".op", ".os")
    dialect: Dialect = field(default=ORSON)
    comment_start: str = "!"
    string_delimiter: str = "''"
    block_open: str = "("
    block_close: str = ")"
    word_chars: str = "_"


ORSON_MODE = ModeDescriptor()

_MODES: dict[str, ModeDescriptor] = {}


def register_mode(mode: ModeDescriptor) -> None:
    """Make ``mode`` the descriptor for each of its file extensions."""
    for ext in mode.file_extensions:
        _MODES[ext.lower()] = mode


def mode_for_path(path: str | PurePath) -> ModeDescriptor | None:
    """Return the descriptor registered for the extension of ``path``."""
    return _MODES.get(PurePath(path).suffix.lower())


register_mode(ORSON_MODE)


def enclosing_block(text: str, offset: int, mode: ModeDescriptor = ORSON_MODE) -> int | None:
    """Return the offset of the innermost unclosed block opener before ``offset``.

    Block delimiters inside strings and comments are ignored. Returns None
    when ``offset`` is at top level.
    """
    offset = max(0, min(offset, len(text)))
    regions = scan_regions(
        text,
        0,
        offset,
        comment_start=mode.comment_start,
        string_delimiter=mode.string_delimiter,
    )
    stack: list[int] = []
    pos = 0
    for region in [*regions, None]:
        stop = offset if region is None else min(region.open, offset)
        _scan_blocks(text, pos, stop, mode, stack)
        if region is None or region.end >= offset:
            break
        pos = region.end
    return stack[-1] if stack else None


def _scan_blocks(text: str, start: int, stop: int, mode: ModeDescriptor, stack: list[int]) -> None:
    pos = start
    while pos < stop:
        if text.startswith(mode.block_open, pos):
            stack.append(pos)
            pos += len(mode.block_open)
        elif text.startswith(mode.block_close, pos):
            if stack:
                stack.pop()
            pos += len(mode.block_close)
        else:
            pos += 1
