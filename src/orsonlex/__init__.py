"""Lexical classifier for the Orson programming language."""

from __future__ import annotations

from orsonlex.engine import Classification, classify
from orsonlex.mode import ORSON_MODE, ModeDescriptor
from orsonlex.tables import ORSON, Dialect, LexemeTable
from orsonlex.tokens import Fence, RegionKind, RegionMarker, Span, TokenClass

__version__ = "0.1.0"

__all__ = [
    "ORSON",
    "ORSON_MODE",
    "Classification",
    "Dialect",
    "Fence",
    "LexemeTable",
    "ModeDescriptor",
    "RegionKind",
    "RegionMarker",
    "Span",
    "TokenClass",
    "classify",
]
