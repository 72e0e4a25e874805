import pytest

from suffix_array import build_suffix_array, find_occurrences


def _naive(text):
    return sorted(range(len(text)), key=lambda i: text[i:])


def test_data_example():
    assert build_suffix_array("data") == [3, 1, 0, 2]


def test_banana():
    assert build_suffix_array("banana") == [5, 3, 1, 0, 4, 2]


def test_empty_and_single_char():
    assert build_suffix_array("") == []
    assert build_suffix_array("x") == [0]


@pytest.mark.parametrize("text", ["aaaa", "mississippi", "abracadabra", "zyxwvu", "abababab"])
def test_matches_naive_sort(text):
    assert build_suffix_array(text) == _naive(text)


def test_find_occurrences():
    text = "banana"
    sa = build_suffix_array(text)
    assert find_occurrences(text, sa, "ana") == [1, 3]
    assert find_occurrences(text, sa, "a") == [1, 3, 5]
    assert find_occurrences(text, sa, "banana") == [0]
    assert find_occurrences(text, sa, "nab") == []
    assert find_occurrences(text, sa, "") == [0, 1, 2, 3, 4, 5]
