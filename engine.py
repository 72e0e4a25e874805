# engine.py
import threading
from typing import Any, Dict, Iterator, List, Optional, Tuple

from btree import BTree
from config import Settings, get_logger

_logger = get_logger("engine")


class TreeEngine:
    """Serializes access to one in-memory B-Tree behind a single lock."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Create an empty tree from `settings` (defaults to the environment)."""
        self.settings = settings or Settings.from_env()
        self._lock = threading.Lock()
        self._tree = self._new_tree()

    def _new_tree(self) -> BTree:
        tree = BTree(self.settings.degree)
        if self.settings.validate_after_write:
            tree._ENABLE_VALIDATE_AFTER_WRITE = True
        _logger.debug("new tree: degree=%d", self.settings.degree)
        return tree

    def parse_key(self, raw: str) -> Any:
        """Convert a REPL token into a tree key (int when int_keys is set)."""
        if self.settings.int_keys:
            try:
                return int(raw)
            except ValueError:
                raise ValueError(f"key must be an integer, got {raw!r}") from None
        return raw

    def set(self, key: Any, value: Any) -> None:
        with self._lock:
            self._tree.insert(key, value)

    def get(self, key: Any) -> Optional[Any]:
        """Return the value for a key, or None if missing."""
        with self._lock:
            return self._tree.get(key)

    def delete(self, key: Any) -> bool:
        with self._lock:
            return self._tree.delete(key)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Yield a snapshot of (key, value) pairs in key order."""
        with self._lock:
            snapshot: List[Tuple[Any, Any]] = self._tree.get_sorted_key_values(self._tree.root)
        yield from snapshot

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return self._tree.stats()

    def dump(self, show_values: bool = False) -> str:
        with self._lock:
            return self._tree.dump_structure(show_values=show_values)

    def clear(self) -> None:
        with self._lock:
            self._tree = self._new_tree()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tree)
