"""Splitting index ranges across parallel workers."""

from __future__ import annotations

from typing import List, Tuple


def distribute_range(start: int, end: int, worker_count: int) -> List[Tuple[int, int]]:
    """
    Split [start, end) into contiguous half-open ranges, one per worker.

    With no more items than workers every item gets its own range (some
    workers then get nothing). Otherwise each range holds
    length // worker_count items and the first length % worker_count ranges
    hold one extra.
    """
    if start < 0 or end < start:
        raise ValueError(f"invalid range [{start}, {end})")
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")

    n = end - start
    if n <= worker_count:
        return [(i, i + 1) for i in range(start, end)]

    per_worker, extra = divmod(n, worker_count)
    ranges: List[Tuple[int, int]] = []
    lo = start
    for w in range(worker_count):
        hi = lo + per_worker + (1 if w < extra else 0)
        ranges.append((lo, hi))
        lo = hi
    return ranges
