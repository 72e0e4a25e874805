# red_black_tree.py
"""
Red-black tree: a binary search tree kept balanced by node colors.

Properties (checked by `is_red_black_tree`):
  1. Every node is either red or black.
  2. The root is black (null leaves count as black).
  3. A red node has only black children.
  4. Every path from a node down to a null leaf crosses the same number of
     black nodes.

Only insertion is supported; it keeps height <= 2 log2(n + 1).
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, List, Optional, Tuple

from config import get_logger

_logger = get_logger("red_black")


class Color(IntEnum):
    UNKNOWN = 0
    RED = 1
    BLACK = 2


class BinaryTreeNode:
    """Binary search tree node with a parent back-link."""

    __slots__ = ("key", "value", "left", "right", "parent")

    def __init__(self, key: Any, value: Any) -> None:
        self.key = key
        self.value = value
        self.left: Optional[BinaryTreeNode] = None
        self.right: Optional[BinaryTreeNode] = None
        self.parent: Optional[BinaryTreeNode] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.key!r}>"


class RedBlackTreeNode(BinaryTreeNode):
    __slots__ = ("color",)

    def __init__(self, key: Any, value: Any, color: Color = Color.RED) -> None:
        super().__init__(key, value)
        self.color: Color = color


def _is_red(node: Optional[RedBlackTreeNode]) -> bool:
    return node is not None and node.color == Color.RED


class RedBlackTree:
    def __init__(self) -> None:
        self.root: Optional[RedBlackTreeNode] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: Any) -> bool:
        return self.search(key) is not None

    def search(self, key: Any) -> Optional[RedBlackTreeNode]:
        node = self.root
        while node is not None:
            if key == node.key:
                return node
            node = node.left if key < node.key else node.right
        return None

    def insert(self, key: Any, value: Any) -> RedBlackTreeNode:
        """Insert (key, value), overwriting an existing key. Returns the root.

        Time: O(log n).
        """
        parent = None
        node = self.root
        while node is not None:
            if key == node.key:
                node.value = value
                return self.root
            parent = node
            node = node.left if key < node.key else node.right

        new = RedBlackTreeNode(key, value)
        new.parent = parent
        if parent is None:
            self.root = new
        elif key < parent.key:
            parent.left = new
        else:
            parent.right = new
        self._size += 1
        self._fix_after_insert(new)
        return self.root

    def get_sorted_key_values(self, node: Optional[RedBlackTreeNode] = None) -> List[Tuple[Any, Any]]:
        """In-order (key, value) list of the subtree at `node` (default: root)."""
        out: List[Tuple[Any, Any]] = []
        stack: List[RedBlackTreeNode] = []
        cur = self.root if node is None else node
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            out.append((cur.key, cur.value))
            cur = cur.right
        return out

    # -------------------- Balancing --------------------
    def _fix_after_insert(self, node: RedBlackTreeNode) -> None:
        while _is_red(node.parent):
            parent = node.parent
            grand = parent.parent
            if parent is grand.left:
                uncle = grand.right
                if _is_red(uncle):
                    # Case 1: red uncle -> recolor and move the problem up.
                    parent.color = uncle.color = Color.BLACK
                    grand.color = Color.RED
                    node = grand
                    continue
                if node is parent.right:
                    # Case 2: zig-zag -> straighten into case 3.
                    node = parent
                    self._rotate_left(node)
                    parent = node.parent
                # Case 3: zig-zig -> rotate the grandparent.
                parent.color = Color.BLACK
                grand.color = Color.RED
                self._rotate_right(grand)
            else:
                uncle = grand.left
                if _is_red(uncle):
                    parent.color = uncle.color = Color.BLACK
                    grand.color = Color.RED
                    node = grand
                    continue
                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                    parent = node.parent
                parent.color = Color.BLACK
                grand.color = Color.RED
                self._rotate_left(grand)
        self.root.color = Color.BLACK

    def _rotate_left(self, x: RedBlackTreeNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        self._replace_in_parent(x, y)
        y.left = x
        x.parent = y

    def _rotate_right(self, x: RedBlackTreeNode) -> None:
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x
        self._replace_in_parent(x, y)
        y.right = x
        x.parent = y

    def _replace_in_parent(self, old: RedBlackTreeNode, new: RedBlackTreeNode) -> None:
        new.parent = old.parent
        if old.parent is None:
            self.root = new
        elif old is old.parent.left:
            old.parent.left = new
        else:
            old.parent.right = new


def is_red_black_tree(root: Optional[RedBlackTreeNode]) -> bool:
    """Return True iff the tree at `root` satisfies all red-black properties
    and is a valid binary search tree with consistent parent links."""
    if root is None:
        return True
    if root.color != Color.BLACK or root.parent is not None:
        return False

    def black_height(node: Optional[RedBlackTreeNode], lo: Any, hi: Any) -> int:
        """Return the black height of `node`, or -1 on any violation."""
        if node is None:
            return 1
        if node.color not in (Color.RED, Color.BLACK):
            return -1
        if (lo is not None and not lo < node.key) or (hi is not None and not node.key < hi):
            return -1
        for child in (node.left, node.right):
            if child is not None and child.parent is not node:
                return -1
            if node.color == Color.RED and _is_red(child):
                return -1
        left = black_height(node.left, lo, node.key)
        right = black_height(node.right, node.key, hi)
        if left < 0 or right < 0 or left != right:
            _logger.debug("red-black violation at %r", node)
            return -1
        return left + (1 if node.color == Color.BLACK else 0)

    return black_height(root, None, None) > 0
