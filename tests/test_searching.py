from datetime import date

import pytest

from searching import interpolation_search, ternary_search

VALUES = [1, 3, 10, 14, 25, 27, 34, 78, 90, 90, 120]


# ============================================================================
# TERNARY SEARCH
# ============================================================================

@pytest.mark.parametrize("key, expected", [
    (1, 0), (3, 1), (10, 2), (14, 3), (25, 4), (27, 5), (34, 6), (78, 7),
    (90, 8), (120, 10), (-20, -1), (15, -1), (456, -1),
])
def test_ternary_search(key, expected):
    assert ternary_search(VALUES, key, 0, len(VALUES) - 1) == expected


def test_ternary_search_defaults_and_empty():
    assert ternary_search(VALUES, 34) == 6
    assert ternary_search([], 1) == -1
    assert ternary_search([7, 7, 7, 7, 7], 7) == 0


# ============================================================================
# INTERPOLATION SEARCH
# ============================================================================

def test_interpolation_search_finds_every_value():
    values = list(range(0, 1000, 7))
    for i, v in enumerate(values):
        assert interpolation_search(values, v) == i


def test_interpolation_search_missing_and_out_of_range():
    assert interpolation_search(VALUES, 15) == -1
    assert interpolation_search(VALUES, -5) == -1
    assert interpolation_search(VALUES, 500) == -1
    assert interpolation_search([], 1) == -1


def test_interpolation_search_subrange():
    assert interpolation_search(VALUES, 27, 3, 6) == 5
    assert interpolation_search(VALUES, 3, 3, 6) == -1


def test_interpolation_search_flat_range():
    assert interpolation_search([5, 5, 5], 5) == 0
    assert interpolation_search([5, 5, 5], 6) == -1


def test_interpolation_search_floats():
    values = [0.5, 1.25, 2.0, 3.75, 8.0]
    assert interpolation_search(values, 3.75) == 3


def test_interpolation_search_with_custom_distance():
    days = [date(2024, 1, d) for d in (1, 3, 9, 15, 28)]
    by_days = lambda a, b: float((a - b).days)  # noqa: E731
    assert interpolation_search(days, date(2024, 1, 15), distance=by_days) == 3
    assert interpolation_search(days, date(2024, 1, 16), distance=by_days) == -1
