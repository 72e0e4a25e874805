# btree.py
"""
Classic B-Tree built on BTreeBase.

Insert:
  - descend to a leaf by binary search, insert, then split overflown nodes
    bottom-up, promoting the middle key (the root split grows the tree)
  - an existing key has its value overwritten (last-write-wins)

Delete:
  - a key in a leaf is removed directly
  - a key in an internal node is replaced by its in-order predecessor, which
    is then removed from its leaf
  - underflow is repaired upward: borrow from a sibling with a spare key
    (rotate), otherwise merge with a sibling (join), until a node is no
    longer underflown or the root is reached
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Any, List, Optional, Tuple

from btree_base import BTreeBase
from btree_node import BTreeNode
from config import get_logger
from errors import KeyNotFoundError

_logger = get_logger("btree")


class BTree(BTreeBase):
    """B-Tree over any totally ordered keys."""

    def __init__(self, max_branching_degree: int = 4) -> None:
        super().__init__(max_branching_degree)

    # -------------------- Descent & search --------------------
    def find_leaf_to_insert_key(self, root: BTreeNode, key: Any) -> BTreeNode:
        """Descend root→leaf using binary searches in internal nodes.

        Example: keys = [k0, k1]; children = [c0, c1, c2]
          key < k0        -> c0
          k0 < key < k1   -> c1
          key > k1        -> c2
        """
        node = root
        while not node.is_leaf():
            node = node.children[bisect_left(node.keys, key)]
        return node

    def search(self, root: BTreeNode, key: Any) -> Optional[BTreeNode]:
        node = root
        while True:
            i = bisect_left(node.keys, key)
            if i < node.key_count and node.keys[i] == key:
                return node
            if node.is_leaf():
                return None
            node = node.children[i]

    def get_sorted_key_values(self, node: BTreeNode) -> List[Tuple[Any, Any]]:
        out: List[Tuple[Any, Any]] = []
        self._collect_in_order(node, out)
        return out

    def _collect_in_order(self, node: BTreeNode, out: List[Tuple[Any, Any]]) -> None:
        if node.is_leaf():
            out.extend(zip(node.keys, node.values))
            return
        for i, child in enumerate(node.children):
            self._collect_in_order(child, out)
            if i < node.key_count:
                out.append(node.get_key_value(i))

    # -------------------- Insert --------------------
    def insert_in_leaf(self, leaf: BTreeNode, key: Any, value: Any) -> BTreeNode:
        # Overwrite in place if the key already lives somewhere in the tree.
        holder = self.search(self.root, key)
        if holder is not None:
            holder.set_value(key, value)
            return self.root

        leaf.insert_key_value(key, value)
        self._size += 1

        node: Optional[BTreeNode] = leaf
        while node is not None and node.is_over_flown():
            node = self._split(node)
        return self.root

    def _split(self, node: BTreeNode) -> Optional[BTreeNode]:
        """Split an overflown node and promote its middle key; return the parent.

        before (degree 4, one key too many):
            keys:   [k0, k1, k2, k3]        (mid=2, promote=k2)
            child:  [c0, c1, c2, c3, c4]

        after:
            node.keys  = [k0, k1]   node.child  = [c0, c1, c2]
            promote    =  k2        (goes to parent)
            right.keys = [k3]       right.child = [c3, c4]
        """
        mid = node.key_count // 2
        promote = node.get_key_value(mid)

        right = self.new_node()
        right.keys = node.keys[mid + 1:]
        right.values = node.values[mid + 1:]
        for child in node.children[mid + 1:]:
            right.insert_child(right.children_count, child)

        node.keys = node.keys[:mid]
        node.values = node.values[:mid]
        node.children = node.children[:mid + 1]

        parent = node.get_parent()
        if parent is None:
            # Height increases: a fresh root separates node and right.
            new_root = self.new_node()
            new_root.insert_key_value(*promote)
            new_root.insert_child(0, node)
            new_root.insert_child(1, right)
            self.root = new_root
            _logger.debug("split: new root %r", new_root)
            return None

        # Insert (promote, right) immediately to the right of node in parent.
        pos = node.get_index_at_parent_children()
        parent.insert_key_value(*promote)
        parent.insert_child(pos + 1, right)
        return parent

    # -------------------- Delete --------------------
    def delete_from_node(self, node: BTreeNode, key: Any) -> bool:
        if node.is_leaf():
            node.remove_key(key)
            leaf = node
        else:
            i = node.index_of_key(key)
            if i < 0:
                raise KeyNotFoundError(f"key {key!r} is not in node {node!r}")
            # Predecessor = max of the left subtree; it always sits in a leaf.
            leaf = self.get_max_node(node.get_child(i))
            predecessor = leaf.remove_key_by_index(leaf.key_count - 1)
            node.remove_key_by_index(i)
            node.insert_key_value(*predecessor)

        self._size -= 1
        self._repair_underflow(leaf)
        return True

    def _repair_underflow(self, node: Optional[BTreeNode]) -> None:
        """Rotate or join upward until no node on the path is underflown."""
        while node is not None and not node.is_root() and node.is_under_flown():
            parent = node.get_parent()
            idx = node.get_index_at_parent_children()
            right = parent.children[idx + 1] if idx + 1 < parent.children_count else None
            left = parent.children[idx - 1] if idx > 0 else None

            if right is not None and right.key_count > right.min_keys:
                node = self.rotate_left(node, right, idx)
            elif left is not None and left.key_count > left.min_keys:
                node = self.rotate_right(node, left, idx - 1)
            elif left is not None:
                node = self.join(node, left)
            else:
                # Leftmost child: fold the right sibling into node instead.
                node = self.join(right, node)


class TwoThreeTree(BTree):
    """B-Tree of degree 3: every internal node has 2 or 3 children."""

    def __init__(self) -> None:
        super().__init__(3)


class TwoThreeFourTree(BTree):
    """B-Tree of degree 4: every internal node has 2, 3 or 4 children."""

    def __init__(self) -> None:
        super().__init__(4)
