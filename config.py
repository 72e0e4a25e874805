"""Runtime settings and logger setup.

Settings come from the environment:
    BTREE_DEGREE     max branching degree of the tree (default 4)
    BTREE_INT_KEYS   "1"/"true" to parse REPL keys as integers
    BTREE_VALIDATE   "1"/"true" to validate invariants after every write
    BTREE_LOG_LEVEL  logging level name (default WARNING)

Logs go to STDERR only, never STDOUT.
"""

from __future__ import annotations

import os
import sys
import logging
from dataclasses import dataclass

_TRUE_VALUES = ("1", "true", "yes", "on")


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger writing `LEVEL: message` lines to STDERR."""
    logger = logging.getLogger(f"btree.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(os.getenv("BTREE_LOG_LEVEL", "WARNING").upper())
    return logger


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    degree: int = 4
    int_keys: bool = False
    validate_after_write: bool = False

    @staticmethod
    def from_env() -> "Settings":
        raw_degree = os.environ.get("BTREE_DEGREE", "4")
        try:
            degree = int(raw_degree)
        except ValueError:
            raise ValueError(f"BTREE_DEGREE must be an integer, got {raw_degree!r}") from None
        return Settings(
            degree=degree,
            int_keys=_env_flag("BTREE_INT_KEYS"),
            validate_after_write=_env_flag("BTREE_VALIDATE"),
        )
