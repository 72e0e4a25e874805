"""
Suffix array: the start indices of all suffixes of a string, in sorted order.

Example: 'data' has suffixes 'data', 'ata', 'ta', 'a', so its suffix array
is [3, 1, 0, 2].
"""

from __future__ import annotations

from typing import List, Tuple

from sorting import merge_sort


def build_suffix_array(text: str) -> List[int]:
    """
    Build the suffix array of `text` by prefix doubling.

    Round k orders suffixes by their first 2k characters, using the pair
    (rank of first k chars, rank of next k chars) as the sort key; ranks are
    refined until all are distinct.

    Time: O(n log² n), Space: O(n)
    """
    n = len(text)
    if n == 0:
        return []

    rank = [ord(c) for c in text]
    suffixes = list(range(n))
    k = 1
    while True:
        def pair(i: int) -> Tuple[int, int]:
            # -1 sorts a suffix that ends inside the window before any longer one.
            return rank[i], rank[i + k] if i + k < n else -1

        suffixes = merge_sort(suffixes, key=pair)

        new_rank = [0] * n
        for j in range(1, n):
            prev, cur = suffixes[j - 1], suffixes[j]
            new_rank[cur] = new_rank[prev] + (1 if pair(prev) < pair(cur) else 0)
        rank = new_rank

        if rank[suffixes[-1]] == n - 1:
            return suffixes
        k *= 2


def find_occurrences(text: str, suffix_array: List[int], pattern: str) -> List[int]:
    """Return the sorted start indices of `pattern` in `text`.

    Binary search for the block of suffixes starting with `pattern`.
    Time: O(m log n) for a pattern of length m.
    """
    if not pattern:
        return list(range(len(text)))
    m = len(pattern)

    lo, hi = 0, len(suffix_array)
    while lo < hi:
        mid = (lo + hi) // 2
        if text[suffix_array[mid]:suffix_array[mid] + m] < pattern:
            lo = mid + 1
        else:
            hi = mid
    first = lo

    hi = len(suffix_array)
    while lo < hi:
        mid = (lo + hi) // 2
        if text[suffix_array[mid]:suffix_array[mid] + m] == pattern:
            lo = mid + 1
        else:
            hi = mid
    return sorted(suffix_array[first:lo])
