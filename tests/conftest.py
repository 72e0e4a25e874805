import pytest

from btree import BTree


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("BTREE_DEGREE", "BTREE_INT_KEYS", "BTREE_VALIDATE", "BTREE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_node():
    """Build a node of `tree` holding `keys` (value = str(key)) and `children`."""
    def _make(tree, keys, children=()):
        node = tree.new_node()
        for k in keys:
            node.insert_key_value(k, str(k))
        for i, child in enumerate(children):
            node.insert_child(i, child)
        return node
    return _make


@pytest.fixture
def checked_tree():
    """Factory for trees that validate their invariants after every write."""
    def _make(degree):
        tree = BTree(degree)
        tree._ENABLE_VALIDATE_AFTER_WRITE = True
        return tree
    return _make
