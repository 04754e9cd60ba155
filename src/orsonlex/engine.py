"""Classification entry point: primary pass, then the secondary region pass."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from orsonlex.classifier import Annotations, classify_primary
from orsonlex.log import get_logger
from orsonlex.mode import ORSON_MODE, ModeDescriptor
from orsonlex.patterns import compile_dialect
from orsonlex.regions import apply_regions, scan_regions
from orsonlex.tokens import Fence, RegionMarker, Span, TokenClass

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Classification:
    """Classified spans, regions, and fences for one text range."""

    start: int
    end: int
    spans: tuple[Span, ...] = ()
    regions: tuple[RegionMarker, ...] = ()
    fences: Mapping[int, Fence] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Span]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def class_at(self, offset: int) -> TokenClass | None:
        for span in self.spans:
            if span.start <= offset < span.end:
                return span.cls
            if span.start > offset:
                break
        return None

    def fence_at(self, offset: int) -> Fence | None:
        return self.fences.get(offset)

    def spans_of(self, cls: TokenClass) -> list[Span]:
        return [span for span in self.spans if span.cls == cls]


def classify(
    text: str,
    start: int = 0,
    end: int | None = None,
    mode: ModeDescriptor = ORSON_MODE,
) -> Classification:
    """Classify ``text[start:end]`` and return its spans.

    Bounds are clamped to the text; an empty range gives an empty result.
    Comment and string regions override any table match on the same
    characters.
    """
    n = len(text)
    end = n if end is None else end
    start = max(0, min(start, n))
    end = max(start, min(end, n))
    if start == end:
        return Classification(start, end)

    annotations = Annotations(start, end)
    compiled = compile_dialect(mode.dialect, mode.word_chars)
    classify_primary(text, start, end, compiled, annotations)
    regions = scan_regions(
        text,
        start,
        end,
        comment_start=mode.comment_start,
        string_delimiter=mode.string_delimiter,
    )
    fences = apply_regions(annotations, regions)
    spans = annotations.spans()
    logger.debug(
        "classified [%d, %d) with mode %s: %d spans, %d regions",
        start,
        end,
        mode.name,
        len(spans),
        len(regions),
    )
    return Classification(start, end, tuple(spans), tuple(regions), fences)
