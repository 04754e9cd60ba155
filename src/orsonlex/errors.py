"""Error types for table construction and dialect configuration.

Classifying text never raises; only building tables and loading dialect
files can fail.
"""

from __future__ import annotations

from pathlib import Path


class TableError(Exception):
    """Raised when a lexeme table is constructed with a duplicate lexeme."""

    def __init__(self, message: str, table: str, lexeme: str) -> None:
        self.message = message
        self.table = table
        self.lexeme = lexeme
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  in table {self.table}: {self.lexeme!r}"


class DialectError(Exception):
    """Raised on the first problem found in a dialect or config file."""

    def __init__(
        self, message: str, path: Path | str | None = None, key: str | None = None
    ) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        self.key = key
        super().__init__(self.format())

    def format(self) -> str:
        where = str(self.path) if self.path is not None else "<dialect>"
        if self.key:
            where += f" [{self.key}]"
        return f"error: {self.message}\n  --> {where}"
