"""Namespaced logger factory.

Example:
    >>> from orsonlex.log import get_logger
    >>> get_logger("engine").name
    'orsonlex.engine'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger under the ``orsonlex.`` namespace."""
    if not (name == "orsonlex" or name.startswith("orsonlex.")):
        name = f"orsonlex.{name}"
    return logging.getLogger(name)
