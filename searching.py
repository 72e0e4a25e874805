"""Search in sorted sequences: interpolation search and ternary search."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

# Real-valued distance between two keys, a - b.
Distance = Callable[[Any, Any], float]


def numeric_distance(a: Any, b: Any) -> float:
    return float(a - b)


def interpolation_search(sorted_list: Sequence[Any], key: Any, start: int = 0,
                         end: Optional[int] = None, distance: Optional[Distance] = None) -> int:
    """
    Find `key` in sorted_list[start..end] (inclusive); return its index or -1.

    Like binary search, but the probe is placed proportionally to where the
    key falls between the values at both ends, so it assumes the values are
    roughly uniformly distributed. `distance(a, b)` must return a - b as a
    float; the default handles numbers.

    Time: O(1) best, O(log log n) average, O(n) worst
    Space: O(1)
    """
    if distance is None:
        distance = numeric_distance
    if end is None:
        end = len(sorted_list) - 1

    while start <= end:
        lo_val, hi_val = sorted_list[start], sorted_list[end]
        # Sorted input: a key outside [lo_val, hi_val] cannot be present.
        if key < lo_val or key > hi_val:
            return -1

        spread = distance(hi_val, lo_val)
        if spread == 0:
            return start if key == lo_val else -1
        probe = start + int(distance(key, lo_val) / spread * (end - start))

        probe_val = sorted_list[probe]
        if key == probe_val:
            return probe
        if key < probe_val:
            end = probe - 1
        else:
            start = probe + 1
    return -1


def ternary_search(sorted_list: Sequence[Any], key: Any, start: int = 0, end: Optional[int] = None) -> int:
    """
    Find the first occurrence of `key` in sorted_list[start..end] (inclusive).
    Splits the range into thirds at each step; returns the index or -1.
    Time: O(log n), Space: O(1)
    """
    if end is None:
        end = len(sorted_list) - 1
    found = -1
    while start <= end:
        third = (end - start) // 3
        m1, m2 = start + third, end - third
        if key < sorted_list[m1]:
            end = m1 - 1
        elif key > sorted_list[m2]:
            start = m2 + 1
        elif key == sorted_list[m1]:
            # Keep looking to the left for an earlier duplicate.
            found = m1
            end = m1 - 1
        elif key > sorted_list[m1] and key < sorted_list[m2]:
            start, end = m1 + 1, m2 - 1
        else:
            # key == sorted_list[m2] and key > sorted_list[m1]
            found = m2
            start, end = m1 + 1, m2 - 1
    return found
