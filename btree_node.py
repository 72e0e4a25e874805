# btree_node.py
"""
B-Tree node: one vertex of a multi-way search tree.

Layout:
  - `keys` and `values` are parallel lists, keys strictly increasing
  - `children` holds child nodes; len(children) == len(keys) + 1 for internal
    nodes and 0 for leaves
  - `parent` is a navigational back-link only; the parent owns the child
    through its `children` list, never the other way round

Capacity for max branching degree D:
  - MaxKeys = D - 1
  - MinKeys = ceil(D / 2) - 1   (the root is exempt; any node may dip below
    while a rebalancing step is in progress)
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Any, List, Optional, Tuple

from errors import InvariantViolationError, KeyNotFoundError


class BTreeNode:
    """A B-Tree node holding sorted key/value pairs and child links."""

    __slots__ = ("max_branching_degree", "max_keys", "min_keys", "keys", "values", "children", "parent")

    def __init__(self, max_branching_degree: int, parent: Optional["BTreeNode"] = None) -> None:
        self.max_branching_degree: int = max_branching_degree
        self.max_keys: int = max_branching_degree - 1
        self.min_keys: int = math.ceil(max_branching_degree / 2) - 1
        self.keys: List[Any] = []
        self.values: List[Any] = []
        self.children: List[BTreeNode] = []
        self.parent: Optional[BTreeNode] = parent

    def __repr__(self) -> str:
        kind = "Leaf" if self.is_leaf() else "Internal"
        return f"<{kind} keys={self.keys}>"

    # -------------------- Keys & values --------------------
    @property
    def key_count(self) -> int:
        return len(self.keys)

    @property
    def children_count(self) -> int:
        return len(self.children)

    def index_of_key(self, key: Any) -> int:
        """Return the position of `key` in this node, or -1 if absent."""
        i = bisect_left(self.keys, key)
        if i < len(self.keys) and self.keys[i] == key:
            return i
        return -1

    def contains_key(self, key: Any) -> bool:
        return self.index_of_key(key) >= 0

    def get_key(self, index: int) -> Any:
        return self.keys[index]

    def get_key_value(self, index: int) -> Tuple[Any, Any]:
        return self.keys[index], self.values[index]

    def get_value(self, key: Any) -> Any:
        i = self.index_of_key(key)
        if i < 0:
            raise KeyNotFoundError(f"key {key!r} is not in node {self!r}")
        return self.values[i]

    def set_value(self, key: Any, value: Any) -> None:
        i = self.index_of_key(key)
        if i < 0:
            raise KeyNotFoundError(f"key {key!r} is not in node {self!r}")
        self.values[i] = value

    def insert_key_value(self, key: Any, value: Any) -> int:
        """Insert (key, value) at its sorted position and return that position.

        An existing key keeps its slot and has its value overwritten.
        """
        i = bisect_left(self.keys, key)
        if i < len(self.keys) and self.keys[i] == key:
            self.values[i] = value
            return i
        self.keys.insert(i, key)
        self.values.insert(i, value)
        return i

    def remove_key(self, key: Any) -> Tuple[Any, Any]:
        """Remove `key` and return its (key, value) pair."""
        i = self.index_of_key(key)
        if i < 0:
            raise KeyNotFoundError(f"key {key!r} is not in node {self!r}")
        return self.remove_key_by_index(i)

    def remove_key_by_index(self, index: int) -> Tuple[Any, Any]:
        if not 0 <= index < len(self.keys):
            raise IndexError(f"key index {index} out of range for {self!r}")
        return self.keys.pop(index), self.values.pop(index)

    def get_min_key(self) -> Tuple[Any, Any]:
        if not self.keys:
            raise KeyNotFoundError("empty node has no minimum key")
        return self.keys[0], self.values[0]

    def get_max_key(self) -> Tuple[Any, Any]:
        if not self.keys:
            raise KeyNotFoundError("empty node has no maximum key")
        return self.keys[-1], self.values[-1]

    # -------------------- Children & parent --------------------
    def get_child(self, index: int) -> "BTreeNode":
        if not 0 <= index < len(self.children):
            raise IndexError(f"child index {index} out of range for {self!r}")
        return self.children[index]

    def insert_child(self, index: int, child: "BTreeNode") -> None:
        """Attach `child` at `index` (index == children_count appends)."""
        if not 0 <= index <= len(self.children):
            raise IndexError(f"child index {index} out of range for {self!r}")
        self.children.insert(index, child)
        child.parent = self

    def remove_child_by_index(self, index: int) -> "BTreeNode":
        """Detach and return the child at `index`."""
        if not 0 <= index < len(self.children):
            raise IndexError(f"child index {index} out of range for {self!r}")
        child = self.children.pop(index)
        child.parent = None
        return child

    def get_parent(self) -> Optional["BTreeNode"]:
        return self.parent

    def set_parent(self, parent: Optional["BTreeNode"]) -> None:
        self.parent = parent

    def get_index_at_parent_children(self) -> int:
        """Return i such that parent.children[i] is this node (identity match)."""
        if self.parent is None:
            raise InvariantViolationError(f"{self!r} is a root and has no parent")
        for i, child in enumerate(self.parent.children):
            if child is self:
                return i
        raise InvariantViolationError(f"{self!r} not found among its parent's children")

    def clear(self) -> None:
        """Drop all keys and detach all children."""
        self.keys = []
        self.values = []
        for child in self.children:
            if child.parent is self:
                child.parent = None
        self.children = []

    # -------------------- Predicates --------------------
    def is_leaf(self) -> bool:
        return not self.children

    def is_root(self) -> bool:
        return self.parent is None

    def is_empty(self) -> bool:
        return not self.keys

    def is_min_full(self) -> bool:
        return len(self.keys) == self.min_keys

    def is_max_full(self) -> bool:
        return len(self.keys) == self.max_keys

    def is_under_flown(self) -> bool:
        return len(self.keys) < self.min_keys

    def is_over_flown(self) -> bool:
        return len(self.keys) > self.max_keys
