"""Entry points that turn plan requests into ranked and scheduled stops."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Dict, List, Optional

from gardesh.core.venue_store import VenueStore
from gardesh.planning import tables
from gardesh.planning.enhancer import NoOpEnhancer, RankingEnhancer
from gardesh.planning.partition import partition_days, trip_day_count
from gardesh.planning.ranking import rank_by_preferences, rank_simple
from gardesh.planning.retrieval import retrieve_candidates
from gardesh.planning.scheduler import schedule_day
from gardesh.schemas import (
    Candidate,
    DailyPlanRequest,
    PlanType,
    QuickPlanRequest,
    ScheduledItem,
    TripPlanRequest,
    calendar_date,
)

_LOGGER = logging.getLogger(__name__)


def _log_stage(stage: str, duration: float, count: int) -> None:
    _LOGGER.info("%s stage produced %d items in %.3fs", stage.capitalize(), count, duration)


class TravelPlanner:
    """Generate quick, daily and multi-day plans from a venue store."""

    def __init__(self, store: VenueStore, enhancer: Optional[RankingEnhancer] = None) -> None:
        self.store = store
        self.enhancer: RankingEnhancer = enhancer or NoOpEnhancer()

    def _enhance(self, candidates: List[Candidate], plan_type: PlanType) -> List[Candidate]:
        return self.enhancer.enhance(candidates, {"plan_type": plan_type.value})

    def generate_quick_plan(self, request: QuickPlanRequest) -> List[Candidate]:
        """Return the best few venues near the anchor for a short outing."""

        radius, max_items = tables.QUICK_PLAN_LIMITS[request.available_time]
        start = time.perf_counter()
        candidates = retrieve_candidates(self.store, request.location, radius, request.travel_type)
        _log_stage("retrieval", time.perf_counter() - start, len(candidates))
        if not candidates:
            _LOGGER.warning("No candidates within %.1f km for quick plan", radius)

        ranked = self._enhance(rank_simple(candidates), PlanType.QUICK)
        return ranked[:max_items]

    def generate_daily_plan(self, request: DailyPlanRequest) -> List[ScheduledItem]:
        """Schedule ranked venues into the requested time window."""

        start = time.perf_counter()
        candidates = retrieve_candidates(
            self.store,
            request.location,
            request.search_radius,
            request.travel_type,
            budget=request.budget,
            interests=request.interests,
        )
        _log_stage("retrieval", time.perf_counter() - start, len(candidates))
        if not candidates:
            _LOGGER.warning("No candidates within %.1f km for daily plan", request.search_radius)
            return []

        ranked = self._enhance(rank_simple(candidates), PlanType.DAILY)
        start = time.perf_counter()
        items = schedule_day(
            ranked,
            request.start_time,
            request.end_time,
            request.location,
            on_date=request.plan_date,
        )
        _log_stage("scheduling", time.perf_counter() - start, len(items))
        return items

    def generate_trip_plan(self, request: TripPlanRequest) -> Dict[int, List[ScheduledItem]]:
        """Spread ranked venues over the trip days and schedule each day."""

        start = time.perf_counter()
        candidates = retrieve_candidates(
            self.store,
            request.location,
            request.search_radius,
            request.travel_type,
            budget=request.budget,
            interests=request.interests,
        )
        _log_stage("retrieval", time.perf_counter() - start, len(candidates))
        if not candidates:
            _LOGGER.warning("No candidates within %.1f km for trip plan", request.search_radius)

        ranked = self._enhance(rank_by_preferences(candidates, request.preferences), PlanType.TRIP)
        day_count = trip_day_count(request.start_date, request.end_date)
        first_day = calendar_date(request.start_date)
        chunks = partition_days(ranked, day_count)

        start = time.perf_counter()
        days: Dict[int, List[ScheduledItem]] = {}
        for day_number, chunk in chunks.items():
            days[day_number] = schedule_day(
                chunk,
                tables.TRIP_DAY_START,
                tables.TRIP_DAY_END,
                request.location,
                day_number=day_number,
                on_date=first_day + timedelta(days=day_number - 1),
            )
        _log_stage(
            "scheduling",
            time.perf_counter() - start,
            sum(len(items) for items in days.values()),
        )
        return days


__all__ = ["TravelPlanner"]
