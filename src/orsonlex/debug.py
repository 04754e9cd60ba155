"""--debug classification dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from orsonlex.engine import Classification
from orsonlex.tokens import LineIndex


def dump_classification(text: str, result: Classification, *, file: TextIO | None = None) -> None:
    """Print one line per span and region to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    index = LineIndex(text)
    file.write(f"Classification [{result.start}, {result.end})\n")
    for span in result.spans:
        pos = index.position(span.start)
        file.write(f"  {pos.line}:{pos.column} {span.cls.name} {span.text(text)!r}\n")
    for region in result.regions:
        pos = index.position(region.open)
        state = "" if region.terminated else " (unterminated)"
        file.write(
            f"  region {region.kind.name} {pos.line}:{pos.column} "
            f"[{region.open}, {region.end}){state}\n"
        )
    for offset in sorted(result.fences):
        file.write(f"  fence {result.fences[offset].name} @{offset}\n")
