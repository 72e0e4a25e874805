import threading

import pytest

from config import Settings
from engine import TreeEngine
from errors import InvalidDegreeError


def test_set_get_delete():
    kv = TreeEngine(Settings(degree=3, validate_after_write=True))
    kv.set("b", "2")
    kv.set("a", "1")
    kv.set("a", "one")
    assert kv.get("a") == "one"
    assert kv.get("zz") is None
    assert len(kv) == 2
    assert kv.delete("a") is True
    assert kv.delete("a") is False
    assert list(kv.items()) == [("b", "2")]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("BTREE_DEGREE", "5")
    monkeypatch.setenv("BTREE_INT_KEYS", "true")
    monkeypatch.setenv("BTREE_VALIDATE", "1")
    settings = Settings.from_env()
    assert settings == Settings(degree=5, int_keys=True, validate_after_write=True)
    kv = TreeEngine()
    assert kv.stats()["degree"] == 5


def test_bad_degree_from_env(monkeypatch):
    monkeypatch.setenv("BTREE_DEGREE", "four")
    with pytest.raises(ValueError):
        Settings.from_env()
    with pytest.raises(InvalidDegreeError):
        TreeEngine(Settings(degree=2))


def test_int_keys_order_numerically():
    kv = TreeEngine(Settings(degree=4, int_keys=True))
    for raw in ["10", "9", "100"]:
        kv.set(kv.parse_key(raw), raw)
    assert [k for k, _ in kv.items()] == [9, 10, 100]
    with pytest.raises(ValueError):
        kv.parse_key("ten")


def test_clear_and_dump():
    kv = TreeEngine(Settings(degree=3))
    for k in "abc":
        kv.set(k, k.upper())
    assert kv.dump().splitlines()[1] == "Level 0: [b]"
    kv.clear()
    assert len(kv) == 0
    assert kv.stats()["height"] == 1


def test_concurrent_writers_are_serialized():
    kv = TreeEngine(Settings(degree=4))

    def writer(offset):
        for k in range(offset, offset + 200):
            kv.set(k, k)
        for k in range(offset, offset + 200, 2):
            kv.delete(k)

    threads = [threading.Thread(target=writer, args=(i * 1000,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    expected = sorted(k for i in range(4) for k in range(i * 1000 + 1, i * 1000 + 200, 2))
    assert [k for k, _ in kv.items()] == expected
    kv._tree.validate()
