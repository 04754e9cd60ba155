"""Secondary lexical pass: fenced string literals and line comments.

These regions are paired and content-opaque, so a single alternation cannot
express them. One forward scan finds both kinds, which means a comment
trigger inside a string is string text and a string delimiter inside a
comment is comment text. Region markings are authoritative: they are
painted over whatever the primary classifier assigned.

Known limitation: string content may not contain the delimiter's quote
character. A lone quote inside a literal makes the opening delimiter fail to
match, and the characters are then classified as ordinary code. The scan
resumes after the first delimiter following the lone quote, so the broken
literal's own closer is never taken for a new opener.
"""

from __future__ import annotations

import re
from functools import lru_cache

from orsonlex.classifier import Annotations
from orsonlex.log import get_logger
from orsonlex.tokens import Fence, RegionKind, RegionMarker

logger = get_logger(__name__)

_LINE_END = re.compile(r"[\r\n]")


@lru_cache(maxsize=None)
def _compile(comment_start: str, string_delimiter: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    trigger = re.compile(f"{re.escape(comment_start)}|{re.escape(string_delimiter)}")
    quote = re.escape(string_delimiter[0])
    closing = re.compile(f"[^{quote}]*{re.escape(string_delimiter)}")
    return trigger, closing


def scan_regions(
    text: str,
    start: int = 0,
    end: int | None = None,
    *,
    comment_start: str = "!",
    string_delimiter: str = "''",
) -> list[RegionMarker]:
    """Find every string and comment region that opens inside ``[start, end)``.

    The scan assumes ``start`` is not inside a region; callers re-scanning an
    edit should begin at ``line_start`` of the edit or at a known fence.
    Regions are followed to their closing delimiter even past ``end``.
    """
    n = len(text)
    end = n if end is None else min(end, n)
    start = max(0, start)
    trigger, closing = _compile(comment_start, string_delimiter)
    quote = string_delimiter[0]
    width = len(string_delimiter)

    regions: list[RegionMarker] = []
    pos = start
    while pos < end:
        m = trigger.search(text, pos)
        if m is None or m.start() >= end:
            break
        at = m.start()

        if m.group() == comment_start:
            eol = _LINE_END.search(text, at)
            close = eol.start() if eol else n
            regions.append(RegionMarker(RegionKind.COMMENT, at, close))
            pos = close
            continue

        body = at + width
        match = closing.match(text, body)
        if match is not None:
            close = match.end() - 1
            regions.append(RegionMarker(RegionKind.STRING, at, close))
            pos = match.end()
        elif text.find(quote, body) == -1:
            logger.debug("unterminated string at offset %d", at)
            regions.append(RegionMarker(RegionKind.STRING, at, n, terminated=False))
            pos = n
        else:
            lone = text.find(quote, body)
            closer = text.find(string_delimiter, lone + 1)
            pos = lone + 1 if closer == -1 else closer + width
    return regions


def apply_regions(annotations: Annotations, regions: list[RegionMarker]) -> dict[int, Fence]:
    """Paint each region over ``annotations`` and return its fence characters.

    Only fences that fall inside the annotated range are returned.
    """
    fences: dict[int, Fence] = {}
    for region in regions:
        annotations.paint(region.open, region.end, region.cls)
        if region.kind != RegionKind.STRING:
            continue
        if annotations.start <= region.open < annotations.end:
            fences[region.open] = Fence.OPEN
        if region.terminated and annotations.start <= region.close < annotations.end:
            fences[region.close] = Fence.CLOSE
    return fences


def line_start(text: str, offset: int) -> int:
    """Offset of the start of the line containing ``offset``."""
    offset = max(0, min(offset, len(text)))
    return text.rfind("\n", 0, offset) + 1
