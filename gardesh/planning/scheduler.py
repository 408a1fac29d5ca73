"""Greedy single-day scheduler that puts ranked candidates on the clock."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, NamedTuple, Optional, Tuple

from gardesh.core.geo import distance_km, travel_minutes
from gardesh.schemas import (
    Candidate,
    Location,
    PlaceType,
    PriceRange,
    ScheduledItem,
    TimeSlot,
)

DEFAULT_VISIT_MINUTES = 60
LONG_VISIT_MINUTES = 120
STANDARD_VISIT_MINUTES = 90

# Lower bounds (inclusive) of each slot; anything before 05:00 is night.
_SLOT_BOUNDS: Tuple[Tuple[time, TimeSlot], ...] = (
    (time(22, 0), TimeSlot.NIGHT),
    (time(18, 0), TimeSlot.EVENING),
    (time(14, 0), TimeSlot.AFTERNOON),
    (time(12, 0), TimeSlot.NOON),
    (time(5, 0), TimeSlot.MORNING),
)


def time_slot_for(clock: time | datetime) -> TimeSlot:
    """Return the time-of-day label for ``clock``."""

    moment = clock.time() if isinstance(clock, datetime) else clock
    for lower_bound, slot in _SLOT_BOUNDS:
        if moment >= lower_bound:
            return slot
    return TimeSlot.NIGHT


def visit_duration(candidate: Candidate) -> int:
    """Return how many minutes a stop at ``candidate`` takes."""

    if candidate.kind == "restaurant":
        return LONG_VISIT_MINUTES if candidate.price_range == PriceRange.LUXURY else STANDARD_VISIT_MINUTES
    if candidate.kind == "place":
        return LONG_VISIT_MINUTES if candidate.place_type == PlaceType.NATURE else STANDARD_VISIT_MINUTES
    return DEFAULT_VISIT_MINUTES


class _ScheduleState(NamedTuple):
    clock: datetime
    position: Tuple[float, float]
    items: Tuple[ScheduledItem, ...]


def _step(
    state: _ScheduleState,
    candidate: Candidate,
    end: datetime,
    day_number: Optional[int],
) -> Optional[_ScheduleState]:
    """Advance ``state`` past ``candidate``; ``None`` means the window is exhausted."""

    distance = distance_km(state.position[0], state.position[1], candidate.latitude, candidate.longitude)
    minutes = travel_minutes(distance) if distance != 0 else 0
    arrival = state.clock + timedelta(minutes=minutes)
    if arrival >= end:
        return None

    duration = visit_duration(candidate)
    item = ScheduledItem(
        venue=candidate,
        order=len(state.items) + 1,
        day_number=day_number,
        time_slot=time_slot_for(arrival),
        scheduled_time=arrival,
        duration=duration,
        travel_time=minutes,
        distance=distance,
    )
    return _ScheduleState(
        clock=arrival + timedelta(minutes=duration),
        position=(candidate.latitude, candidate.longitude),
        items=state.items + (item,),
    )


def schedule_day(
    candidates: Iterable[Candidate],
    start_time: time,
    end_time: time,
    anchor: Location,
    *,
    day_number: Optional[int] = None,
    on_date: Optional[date] = None,
) -> List[ScheduledItem]:
    """Walk ``candidates`` in order and keep those that start before ``end_time``.

    The walk stops at the first candidate whose arrival would be at or past
    the end of the window; later candidates are not tried.
    """

    day = on_date or date.today()
    end = datetime.combine(day, end_time)
    state = _ScheduleState(
        clock=datetime.combine(day, start_time),
        position=(anchor.latitude, anchor.longitude),
        items=(),
    )
    for candidate in candidates:
        advanced = _step(state, candidate, end, day_number)
        if advanced is None:
            break
        state = advanced
    return list(state.items)


__all__ = [
    "DEFAULT_VISIT_MINUTES",
    "LONG_VISIT_MINUTES",
    "STANDARD_VISIT_MINUTES",
    "schedule_day",
    "time_slot_for",
    "visit_duration",
]
