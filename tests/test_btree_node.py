import pytest

from btree_node import BTreeNode
from errors import InvariantViolationError, KeyNotFoundError


def test_capacity_from_degree():
    assert (BTreeNode(3).min_keys, BTreeNode(3).max_keys) == (1, 2)
    assert (BTreeNode(4).min_keys, BTreeNode(4).max_keys) == (1, 3)
    assert (BTreeNode(5).min_keys, BTreeNode(5).max_keys) == (2, 4)
    assert (BTreeNode(7).min_keys, BTreeNode(7).max_keys) == (3, 6)


def test_insert_keeps_keys_sorted_and_values_aligned():
    node = BTreeNode(6)
    for k in [30, 10, 20, 5]:
        node.insert_key_value(k, f"v{k}")
    assert node.keys == [5, 10, 20, 30]
    assert node.values == ["v5", "v10", "v20", "v30"]
    assert node.get_key_value(2) == (20, "v20")
    assert node.get_key(0) == 5
    assert node.contains_key(30) and not node.contains_key(31)
    assert node.index_of_key(10) == 1 and node.index_of_key(11) == -1
    assert node.get_min_key() == (5, "v5")
    assert node.get_max_key() == (30, "v30")


def test_insert_existing_key_overwrites_value():
    node = BTreeNode(4)
    node.insert_key_value(1, "a")
    assert node.insert_key_value(1, "b") == 0
    assert node.keys == [1]
    assert node.get_value(1) == "b"


def test_remove_key_and_not_found():
    node = BTreeNode(4)
    node.insert_key_value(1, "a")
    node.insert_key_value(2, "b")
    assert node.remove_key(1) == (1, "a")
    assert node.keys == [2]
    with pytest.raises(KeyNotFoundError):
        node.remove_key(1)
    with pytest.raises(KeyError):
        node.get_value(42)
    with pytest.raises(IndexError):
        node.remove_key_by_index(5)


def test_min_max_on_empty_node_raise():
    node = BTreeNode(4)
    with pytest.raises(KeyNotFoundError):
        node.get_min_key()
    with pytest.raises(KeyNotFoundError):
        node.get_max_key()


def test_fullness_predicates():
    node = BTreeNode(4)
    assert node.is_empty()
    assert node.is_under_flown()
    node.insert_key_value(1, None)
    assert node.is_min_full() and not node.is_under_flown()
    node.insert_key_value(2, None)
    node.insert_key_value(3, None)
    assert node.is_max_full() and not node.is_over_flown()
    node.insert_key_value(4, None)
    assert node.is_over_flown()


def test_children_attach_and_detach():
    parent = BTreeNode(4)
    parent.insert_key_value(10, None)
    left, right = BTreeNode(4), BTreeNode(4)
    parent.insert_child(0, left)
    parent.insert_child(1, right)

    assert parent.get_child(1) is right
    assert left.get_parent() is parent
    assert not parent.is_leaf() and left.is_leaf()
    assert parent.is_root() and not right.is_root()
    assert right.get_index_at_parent_children() == 1

    detached = parent.remove_child_by_index(1)
    assert detached is right
    assert right.get_parent() is None
    with pytest.raises(IndexError):
        parent.get_child(1)
    with pytest.raises(IndexError):
        parent.insert_child(5, BTreeNode(4))


def test_index_at_parent_children_for_root_is_an_invariant_error():
    with pytest.raises(InvariantViolationError):
        BTreeNode(4).get_index_at_parent_children()


def test_clear_detaches_children():
    parent = BTreeNode(4)
    parent.insert_key_value(10, None)
    child = BTreeNode(4)
    parent.insert_child(0, child)
    parent.clear()
    assert parent.is_empty() and parent.is_leaf()
    assert child.get_parent() is None
