"""Comparison sorts: quicksort, heap sort and merge sort."""

from __future__ import annotations

from typing import Any, Callable, List, Optional


def quick_sort(values: List[Any], low: int = 0, high: Optional[int] = None) -> List[Any]:
    """
    Sort values[low..high] (inclusive) in place, ascending; returns `values`.
    Hoare partitioning around the middle element.
    Time: O(n log n) average, O(n²) worst case
    Space: O(log n) average (recursion)
    """
    if high is None:
        high = len(values) - 1
    # Recurse on the smaller side, loop on the larger to bound stack depth.
    while low < high:
        p = partition(values, low, high)
        if p - low < high - p:
            quick_sort(values, low, p)
            low = p + 1
        else:
            quick_sort(values, p + 1, high)
            high = p
    return values


def partition(values: List[Any], low: int, high: int) -> int:
    """Partition values[low..high] and return j such that every element of
    values[low..j] is <= every element of values[j+1..high]."""
    pivot = values[(low + high) // 2]
    i, j = low - 1, high + 1
    while True:
        i += 1
        while values[i] < pivot:
            i += 1
        j -= 1
        while values[j] > pivot:
            j -= 1
        if i >= j:
            return j
        values[i], values[j] = values[j], values[i]


def heap_sort(values: List[Any]) -> List[Any]:
    """
    Heap sort, in place, ascending; returns `values`.
    Time: O(n log n), Space: O(1)
    """
    n = len(values)
    for start in range(n // 2 - 1, -1, -1):
        _sift_down(values, start, n)
    for end in range(n - 1, 0, -1):
        # Max sits at the root; park it after the shrinking heap.
        values[0], values[end] = values[end], values[0]
        _sift_down(values, 0, end)
    return values


def _sift_down(values: List[Any], root: int, size: int) -> None:
    while True:
        largest = root
        left, right = 2 * root + 1, 2 * root + 2
        if left < size and values[left] > values[largest]:
            largest = left
        if right < size and values[right] > values[largest]:
            largest = right
        if largest == root:
            return
        values[root], values[largest] = values[largest], values[root]
        root = largest


def merge_sort(values: List[Any], key: Optional[Callable[[Any], Any]] = None) -> List[Any]:
    """
    Stable merge sort; returns a new list.
    Time: O(n log n), Space: O(n)
    """
    items = list(values)
    if len(items) <= 1:
        return items
    if key is None:
        key = _identity
    mid = len(items) // 2
    return _merge(merge_sort(items[:mid], key), merge_sort(items[mid:], key), key)


def _identity(x: Any) -> Any:
    return x


def _merge(left: List[Any], right: List[Any], key: Callable[[Any], Any]) -> List[Any]:
    out: List[Any] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # `<=` keeps equal elements in their original order.
        if key(left[i]) <= key(right[j]):
            out.append(left[i])
            i += 1
        else:
            out.append(right[j])
            j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out
