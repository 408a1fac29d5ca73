"""Split a ranked candidate list across the days of a trip."""

from __future__ import annotations

from datetime import datetime, time
from math import ceil
from typing import Dict, List, Sequence, TypeVar

from gardesh.schemas import Moment

T = TypeVar("T")

_SECONDS_PER_DAY = 86400


def _as_datetime(value: Moment) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def trip_day_count(start: Moment, end: Moment) -> int:
    """Return ``ceil(end - start)`` in days, counting a partial day as a whole one.

    Plain dates count from midnight. The result is never negative.
    """

    elapsed = _as_datetime(end) - _as_datetime(start)
    return max(0, ceil(elapsed.total_seconds() / _SECONDS_PER_DAY))


def partition_days(ranked: Sequence[T], day_count: int) -> Dict[int, List[T]]:
    """Cut ``ranked`` into contiguous chunks of ``ceil(N / day_count)`` items.

    Chunk ``i`` goes to day ``i``; days past the last chunk get an empty list.
    """

    if day_count <= 0:
        return {}
    size = ceil(len(ranked) / day_count) if ranked else 0
    days: Dict[int, List[T]] = {}
    for day in range(1, day_count + 1):
        start = (day - 1) * size
        days[day] = list(ranked[start : start + size]) if size else []
    return days


__all__ = ["partition_days", "trip_day_count"]
