"""
Half-open interval arithmetic used to derive free time from reservations.

An interval is a ``(start, end)`` pair meaning ``[start, end)``.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

Interval = Tuple[datetime, datetime]


def clamp(interval: Interval, window: Interval) -> Optional[Interval]:
    """Cut ``interval`` down to ``window``; ``None`` when nothing is left."""
    start = max(interval[0], window[0])
    end = min(interval[1], window[1])
    if start >= end:
        return None
    return start, end


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """
    Merge overlapping or touching intervals.

    Sorted by start, then end. An interval whose start is not strictly after
    the current merged end extends it.
    """
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
            continue
        merged.append((start, end))
    return merged


def busy_intervals(window: Interval, reserved: Iterable[Interval]) -> List[Interval]:
    clamped = (clamp(iv, window) for iv in reserved)
    return merge_intervals(iv for iv in clamped if iv is not None)


def free_intervals(window: Interval, reserved: Iterable[Interval]) -> List[Interval]:
    """
    Complement of the reserved intervals inside ``window``.

    Returns the gap before the first busy block, the gaps between blocks and
    the gap after the last one, skipping empty gaps.
    """
    free: List[Interval] = []
    cursor = window[0]
    for start, end in busy_intervals(window, reserved):
        if start > cursor:
            free.append((cursor, start))
        cursor = max(cursor, end)
    if cursor < window[1]:
        free.append((cursor, window[1]))
    return free
