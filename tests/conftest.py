"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from orsonlex.engine import Classification, classify
from orsonlex.tokens import TokenClass


@pytest.fixture
def classify_text():
    """Return a helper that classifies a whole source string."""

    def _classify(source: str, start: int = 0, end: int | None = None) -> Classification:
        return classify(source, start, end)

    return _classify


def span_texts(source: str, result: Classification) -> list[tuple[str, TokenClass]]:
    """Return (text, class) for each span, in order."""
    return [(span.text(source), span.cls) for span in result.spans]


def assert_classes(
    source: str, result: Classification, expected: list[tuple[str, TokenClass]]
) -> None:
    """Assert that the classified spans match the expected (text, class) list."""
    actual = span_texts(source, result)
    assert actual == expected, f"Expected {expected}, got {actual}"
