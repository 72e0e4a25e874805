# btree_base.py
"""
Generic B-Tree orchestrator.

`BTreeBase` owns the root and the max branching degree, and provides the
policy-independent parts of a B-Tree:
  - build / insert / delete driven through abstract hooks
  - min/max leaf descent
  - the rebalancing primitives rotate_left, rotate_right and join that a
    concrete policy composes to repair underflow after a deletion

Concrete variants implement the hooks (descent, leaf insert with splitting,
node delete with underflow repair, search, in-order listing).

Trees are single-writer: nothing here is safe for concurrent mutation. Wrap
the tree in an external lock (see engine.TreeEngine) when sharing it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from btree_node import BTreeNode
from config import get_logger
from errors import InvalidDegreeError, KeyNotFoundError, check_invariant

_logger = get_logger("base")

KeyValues = Union[Mapping[Any, Any], Iterable[Tuple[Any, Any]]]


class BTreeBase(ABC):
    """Base B-Tree: root ownership, shared traversal and rebalancing primitives.

    Complexity (D = max branching degree, n = number of keys):
      - insert/delete: O(D log_D n)
      - rotate_left/rotate_right/join: O(D), independent of n
    """

    # Set True during testing to check invariants after each write.
    _ENABLE_VALIDATE_AFTER_WRITE = False

    def __init__(self, max_branching_degree: int) -> None:
        # A degree below 3 leaves MinKeys at 0 and the tree degenerates.
        if max_branching_degree < 3:
            raise InvalidDegreeError(f"max branching degree must be >= 3, got {max_branching_degree}")
        self._max_branching_degree: int = max_branching_degree
        self.root: BTreeNode = self.new_node()
        self._size: int = 0

    @property
    def max_branching_degree(self) -> int:
        return self._max_branching_degree

    def new_node(self) -> BTreeNode:
        return BTreeNode(self._max_branching_degree)

    # -------------------- Public API --------------------
    def build(self, key_values: KeyValues) -> BTreeNode:
        """Insert every pair in iteration order and return the root.

        Not atomic: a failure part way leaves the pairs inserted so far.
        Time: O(1) best, O(n log n) average and worst.
        """
        pairs = key_values.items() if isinstance(key_values, Mapping) else key_values
        for key, value in pairs:
            self.insert(key, value)
        return self.root

    def insert(self, key: Any, value: Any) -> BTreeNode:
        """Insert (key, value) and return the root of the tree."""
        # 1) Find the leaf that keeps the order property once `key` lands in it.
        leaf = self.find_leaf_to_insert_key(self.root, key)

        # 2) Insert there; the hook splits and grows the tree as needed.
        self.insert_in_leaf(leaf, key, value)

        if self._ENABLE_VALIDATE_AFTER_WRITE:
            self.validate()
        return self.root

    def delete(self, key: Any) -> bool:
        """Delete `key` if present. Returns True on success, False if absent."""
        node = self.search(self.root, key)
        if node is None:
            _logger.debug("delete: key %r not found", key)
            return False
        try:
            deleted = self.delete_from_node(node, key)
        except KeyNotFoundError:
            _logger.debug("delete: key %r vanished from %r", key, node)
            return False

        if self._ENABLE_VALIDATE_AFTER_WRITE:
            self.validate()
        return deleted

    def get(self, key: Any, default: Any = None) -> Any:
        node = self.search(self.root, key)
        if node is None:
            return default
        return node.get_value(key)

    def __contains__(self, key: Any) -> bool:
        return self.search(self.root, key) is not None

    def __len__(self) -> int:
        return self._size

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Yield (key, value) in ascending key order."""
        yield from self.get_sorted_key_values(self.root)

    def keys(self) -> Iterator[Any]:
        for k, _ in self.items():
            yield k

    def values(self) -> Iterator[Any]:
        for _, v in self.items():
            yield v

    # -------------------- Hooks --------------------
    @abstractmethod
    def insert_in_leaf(self, leaf: BTreeNode, key: Any, value: Any) -> BTreeNode:
        """Insert (key, value) into `leaf`, splitting as the policy requires. Returns the root."""

    @abstractmethod
    def delete_from_node(self, node: BTreeNode, key: Any) -> bool:
        """Remove `key` from `node` and repair any underflow. Returns True on success."""

    @abstractmethod
    def get_sorted_key_values(self, node: BTreeNode) -> List[Tuple[Any, Any]]:
        """Return all (key, value) pairs of the subtree rooted at `node`, in key order."""

    @abstractmethod
    def find_leaf_to_insert_key(self, root: BTreeNode, key: Any) -> BTreeNode:
        """Return the leaf under `root` where a new `key` belongs."""

    @abstractmethod
    def search(self, root: BTreeNode, key: Any) -> Optional[BTreeNode]:
        """Return the node under `root` that holds `key`, or None."""

    # -------------------- Descent helpers --------------------
    def get_max_node(self, node: BTreeNode) -> BTreeNode:
        """Return the leaf holding the maximum key of the subtree at `node`.

        Time: O(1) when `node` is a leaf, O(log n) otherwise.
        """
        while not node.is_leaf():
            node = node.get_child(node.children_count - 1)
        return node

    def get_min_node(self, node: BTreeNode) -> BTreeNode:
        """Return the leaf holding the minimum key of the subtree at `node`."""
        while not node.is_leaf():
            node = node.get_child(0)
        return node

    # -------------------- Rebalancing primitives --------------------
    def rotate_left(self, node: BTreeNode, right_sibling: BTreeNode, separator_index: int) -> Optional[BTreeNode]:
        """Move one key from `right_sibling` into the underflown `node` through their parent.

        `separator_index` is the index in the parent of the key separating
        `node` and `right_sibling`.

            parent:  [ .. s .. ]              parent:  [ .. r0 .. ]
                     /        \\       ->              /         \\
            node: [a]    right: [r0 r1]      node: [a s]    right: [r1]
                              c0^                        ^c0

        Returns the parent so the caller can re-check it for underflow.
        Time: O(D).
        """
        parent = node.get_parent()
        check_invariant(parent is not None and parent is right_sibling.get_parent(),
                        "rotate_left needs two siblings under one parent")
        _logger.debug("rotate left: %r <- %r via separator %d", node, right_sibling, separator_index)

        # 1) Separator moves down into the underflown node.
        node.insert_key_value(*parent.remove_key_by_index(separator_index))

        # 2) The sibling's minimum key becomes the new separator.
        parent.insert_key_value(*right_sibling.get_min_key())

        # 3) Drop that key from the sibling; its first child becomes node's last child.
        right_sibling.remove_key_by_index(0)
        if right_sibling.children_count >= 1:
            node.insert_child(node.children_count, right_sibling.remove_child_by_index(0))

        self._check_rotation(node, right_sibling)
        return parent

    def rotate_right(self, node: BTreeNode, left_sibling: BTreeNode, separator_index: int) -> Optional[BTreeNode]:
        """Move one key from `left_sibling` into the underflown `node` through their parent.

        Mirror image of rotate_left: the sibling's maximum key goes up and
        its last child becomes node's first child.
        """
        parent = node.get_parent()
        check_invariant(parent is not None and parent is left_sibling.get_parent(),
                        "rotate_right needs two siblings under one parent")
        _logger.debug("rotate right: %r -> %r via separator %d", left_sibling, node, separator_index)

        node.insert_key_value(*parent.remove_key_by_index(separator_index))
        parent.insert_key_value(*left_sibling.get_max_key())

        left_sibling.remove_key_by_index(left_sibling.key_count - 1)
        if left_sibling.children_count >= 1:
            node.insert_child(0, left_sibling.remove_child_by_index(left_sibling.children_count - 1))

        self._check_rotation(node, left_sibling)
        return parent

    def join(self, node: BTreeNode, left_sibling: BTreeNode) -> Optional[BTreeNode]:
        """Merge `node` into `left_sibling`, pulling down their separator from the parent.

        `node` is cleared and detached. If the parent is the root and ends up
        empty, `left_sibling` becomes the new root and the tree loses a level.

        Returns the parent (None when the root collapsed), which may now be
        underflown and must be re-checked by the caller.
        Time: O(D).
        """
        parent = node.get_parent()
        check_invariant(parent is not None and parent is left_sibling.get_parent(),
                        "join needs two siblings under one parent")
        _logger.debug("join: %r into %r", node, left_sibling)

        # 1) Pull the separator key down into the left sibling.
        separator_index = left_sibling.get_index_at_parent_children()
        check_invariant(separator_index + 1 < parent.children_count and parent.children[separator_index + 1] is node,
                        "join expects node to be the right neighbour of left_sibling")
        left_sibling.insert_key_value(*parent.remove_key_by_index(separator_index))

        # 2) Disconnect node from the parent.
        parent.remove_child_by_index(separator_index + 1)

        # 3) Move node's keys and children over, keeping their order.
        for key, value in zip(node.keys, node.values):
            left_sibling.insert_key_value(key, value)
        for child in list(node.children):
            left_sibling.insert_child(left_sibling.children_count, child)

        node.clear()

        if parent.is_empty() and parent.is_root():
            # Tree shrinks by one level.
            parent.remove_child_by_index(0)
            left_sibling.set_parent(None)
            self.root = left_sibling
            _logger.debug("join: root collapsed, new root %r", left_sibling)

        return left_sibling.get_parent()

    @staticmethod
    def _check_rotation(receiver: BTreeNode, lender: BTreeNode) -> None:
        # The receiver was short by one key; the lender must still hold its minimum.
        # A lender that had exactly one spare key ends exactly min-full as well.
        check_invariant(receiver.is_min_full(), f"rotation left receiver {receiver!r} not min-full")
        check_invariant(not lender.is_under_flown(), f"rotation left lender {lender!r} underflown")

    # -------------------- Validation & Stats (debug helpers) --------------------
    def validate(self) -> None:
        """Check the B-Tree invariants; raise InvariantViolationError if violated.

        Checks:
          - keys strictly increasing in every node, values aligned with keys
          - MinKeys <= key count <= MaxKeys for every non-root node
          - internal: len(children) == len(keys) + 1, parent links consistent
          - every separator lies strictly between its neighbouring subtrees
          - all leaves at the same depth
        """
        check_invariant(self.root.is_root(), "root has a parent")
        leaf_depths = set()

        def dfs(node: BTreeNode, depth: int) -> Tuple[Any, Any]:
            check_invariant(len(node.keys) == len(node.values), f"{node!r}: keys/values misaligned")
            for a, b in zip(node.keys, node.keys[1:]):
                check_invariant(a < b, f"{node!r}: keys not strictly increasing")
            check_invariant(node.key_count <= node.max_keys, f"{node!r}: more than {node.max_keys} keys")
            if node is not self.root:
                check_invariant(node.key_count >= node.min_keys, f"{node!r}: fewer than {node.min_keys} keys")

            if node.is_leaf():
                leaf_depths.add(depth)
                if not node.keys:
                    return None, None
                return node.keys[0], node.keys[-1]

            check_invariant(node.children_count == node.key_count + 1,
                            f"{node!r}: {node.children_count} children for {node.key_count} keys")
            ranges = []
            for child in node.children:
                check_invariant(child.parent is node, f"{child!r}: stale parent link")
                ranges.append(dfs(child, depth + 1))
            # Example: keys = [k0, k1]; children = [c0, c1, c2]
            #   max(c0) < k0 < min(c1) <= max(c1) < k1 < min(c2)
            for i, k in enumerate(node.keys):
                left_max = ranges[i][1]
                right_min = ranges[i + 1][0]
                check_invariant(left_max is not None and left_max < k, f"{node!r}: separator {k!r} misplaced")
                check_invariant(right_min is not None and k < right_min, f"{node!r}: separator {k!r} misplaced")
            return ranges[0][0], ranges[-1][1]

        dfs(self.root, 0)
        check_invariant(len(leaf_depths) == 1, f"leaves at different depths: {sorted(leaf_depths)}")

    def height(self) -> int:
        """Number of levels (an empty tree still has its root leaf: height 1)."""
        h = 1
        node = self.root
        while not node.is_leaf():
            h += 1
            node = node.children[0]
        return h

    def stats(self) -> Dict[str, Any]:
        """Return simple stats (height, node counts, avg fill)."""
        internal_cnt = 0
        leaf_cnt = 0
        total_keys = 0
        stack: List[BTreeNode] = [self.root]
        while stack:
            cur = stack.pop()
            total_keys += cur.key_count
            if cur.is_leaf():
                leaf_cnt += 1
            else:
                internal_cnt += 1
                stack.extend(cur.children)
        node_cnt = internal_cnt + leaf_cnt
        max_keys = self._max_branching_degree - 1
        return {
            "degree": self._max_branching_degree,
            "height": self.height(),
            "internal_nodes": internal_cnt,
            "leaf_nodes": leaf_cnt,
            "size": self._size,
            "avg_fill_ratio": total_keys / (node_cnt * max_keys) if total_keys else 0.0,
        }

    def dump_structure(self, show_values: bool = False) -> str:
        """Render the tree level by level, e.g.

            BTree(degree=4)
            Level 0: [10 | 20]
            Level 1: [5 | 6 | 7]   [12 | 17]   [30]
        """
        lines = [f"{type(self).__name__}(degree={self._max_branching_degree})"]

        def fmt(n: BTreeNode) -> str:
            if show_values:
                items = [f"{k}:{v}" for k, v in zip(n.keys, n.values)]
            else:
                items = [str(k) for k in n.keys]
            return "[" + " | ".join(items) + "]"

        level: List[BTreeNode] = [self.root]
        depth = 0
        while level:
            lines.append(f"Level {depth}: " + "   ".join(fmt(n) for n in level))
            level = [child for n in level for child in n.children]
            depth += 1
        return "\n".join(lines)
