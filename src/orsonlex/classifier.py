"""Primary classifier: tag table matches into a per-offset class array."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from orsonlex.patterns import CompiledTable
from orsonlex.tokens import Span, TokenClass


class Annotations:
    """Per-offset class array over ``[start, end)`` with last-write-wins painting.

    Every ``paint`` call gets its own write serial, so two adjacent spans of
    the same class stay separate when read back with ``spans``.
    """

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        size = max(0, end - start)
        self._classes: list[TokenClass | None] = [None] * size
        self._writes: list[int] = [0] * size
        self._serial = 0

    def paint(self, start: int, end: int, cls: TokenClass | None) -> None:
        """Assign ``cls`` to ``[start, end)``, clipped to the annotated range."""
        lo = max(start, self.start) - self.start
        hi = min(end, self.end) - self.start
        if lo >= hi:
            return
        self._serial += 1
        for i in range(lo, hi):
            self._classes[i] = cls
            self._writes[i] = self._serial

    def class_at(self, offset: int) -> TokenClass | None:
        if not self.start <= offset < self.end:
            return None
        return self._classes[offset - self.start]

    def spans(self) -> list[Span]:
        """Read back the visible portion of every write as ordered spans."""
        result: list[Span] = []
        run_start = 0
        size = len(self._classes)
        for i in range(1, size + 1):
            if i < size and (
                self._classes[i] == self._classes[run_start]
                and self._writes[i] == self._writes[run_start]
            ):
                continue
            cls = self._classes[run_start]
            if cls is not None:
                result.append(Span(run_start + self.start, i + self.start, cls))
            run_start = i
        return result


def scan_table(text: str, start: int, end: int, compiled: CompiledTable) -> Iterator[Span]:
    """Yield a span for each non-overlapping match starting inside ``[start, end)``.

    The scan reads the text past ``end`` so that boundary guards see the real
    following character; spans are clipped to ``end``.
    """
    for m in compiled.pattern.finditer(text, start):
        if m.start() >= end:
            break
        if m.end() == m.start():
            continue
        yield Span(m.start(), min(m.end(), end), compiled.cls)


def classify_primary(
    text: str,
    start: int,
    end: int,
    tables: Iterable[CompiledTable],
    annotations: Annotations | None = None,
) -> Annotations:
    """Apply each compiled table in order, later tables overwriting earlier ones."""
    if annotations is None:
        annotations = Annotations(start, end)
    for compiled in tables:
        for span in scan_table(text, start, end, compiled):
            annotations.paint(span.start, span.end, span.cls)
    return annotations
