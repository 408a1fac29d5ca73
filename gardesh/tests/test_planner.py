from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Mapping, Sequence

import pytest

from gardesh.core.geo import distance_km
from gardesh.core.venue_store import InMemoryVenueStore
from gardesh.planning.enhancer import NoOpEnhancer, SettingGatedEnhancer
from gardesh.planning.planner import TravelPlanner
from gardesh.schemas import (
    AvailableTime,
    Candidate,
    DailyPlanRequest,
    Location,
    QuickPlanRequest,
    TravelStyle,
    TravelType,
    TripPlanRequest,
)

RAMSAR = Location(latitude=36.90, longitude=50.65, address="Ramsar")


def _place_row(place_id: str, *, rating: float = 4.0, suitable_for: Sequence[str] = ("FAMILY", "FRIENDS")) -> Dict[str, Any]:
    return {
        "id": place_id,
        "name": place_id.title(),
        "latitude": RAMSAR.latitude,
        "longitude": RAMSAR.longitude,
        "rating": rating,
        "place_type": "HISTORICAL",
        "suitable_for": list(suitable_for),
    }


class RecordingEnhancer:
    def __init__(self) -> None:
        self.calls: List[Mapping[str, Any]] = []

    def enhance(self, items: Sequence[Candidate], context: Mapping[str, Any]) -> List[Candidate]:
        self.calls.append(dict(context))
        return list(reversed(items))


def test_quick_plan_scenario_near_ramsar() -> None:
    planner = TravelPlanner(InMemoryVenueStore())

    items = planner.generate_quick_plan(
        QuickPlanRequest(
            location=RAMSAR,
            travel_type=TravelType.FAMILY_WITH_KIDS,
            available_time=AvailableTime.ONE_TO_TWO_HOURS,
        )
    )

    assert 0 < len(items) <= 3
    for item in items:
        assert distance_km(RAMSAR.latitude, RAMSAR.longitude, item.latitude, item.longitude) <= 5.0


def test_quick_plan_caps_items_by_available_time() -> None:
    planner = TravelPlanner(InMemoryVenueStore())

    items = planner.generate_quick_plan(
        QuickPlanRequest(
            location=RAMSAR,
            travel_type=TravelType.FRIENDS,
            available_time=AvailableTime.HALF_DAY,
        )
    )

    assert len(items) == 5
    assert all(item.distance <= 15.0 for item in items)


def test_quick_plan_runs_enhancer_before_truncating() -> None:
    enhancer = RecordingEnhancer()
    store = InMemoryVenueStore(
        restaurants=[],
        places=[_place_row("best", rating=5.0), _place_row("mid", rating=4.0), _place_row("worst", rating=2.0), _place_row("last", rating=1.0)],
        settings={},
    )
    planner = TravelPlanner(store, enhancer=enhancer)

    items = planner.generate_quick_plan(
        QuickPlanRequest(location=RAMSAR, travel_type=TravelType.FRIENDS, available_time=AvailableTime.ONE_TO_TWO_HOURS)
    )

    assert enhancer.calls == [{"plan_type": "QUICK"}]
    assert [item.id for item in items] == ["last", "worst", "mid"]


def test_daily_plan_without_candidates_is_empty() -> None:
    planner = TravelPlanner(InMemoryVenueStore())

    items = planner.generate_daily_plan(
        DailyPlanRequest(
            location=Location(latitude=30.0, longitude=60.0),
            travel_type=TravelType.SOLO,
            start_time=time(9, 0),
            end_time=time(18, 0),
        )
    )

    assert items == []


def test_daily_plan_boundary_window() -> None:
    store = InMemoryVenueStore(restaurants=[], places=[_place_row("square"), _place_row("bazaar")], settings={})
    planner = TravelPlanner(store)

    items = planner.generate_daily_plan(
        DailyPlanRequest(
            location=RAMSAR,
            travel_type=TravelType.FAMILY_ADULTS,
            start_time=time(10, 0),
            end_time=time(10, 30),
            plan_date=date(2024, 6, 1),
        )
    )

    assert len(items) == 1
    assert items[0].scheduled_time == datetime(2024, 6, 1, 10, 0)
    assert items[0].duration == 90


def test_daily_plan_respects_window_with_sample_data() -> None:
    planner = TravelPlanner(InMemoryVenueStore())
    end = time(18, 0)

    items = planner.generate_daily_plan(
        DailyPlanRequest(
            location=RAMSAR,
            travel_type=TravelType.FRIENDS,
            start_time=time(9, 0),
            end_time=end,
            plan_date=date(2024, 6, 1),
        )
    )

    assert items
    assert [item.order for item in items] == list(range(1, len(items) + 1))
    assert all(item.scheduled_time < datetime(2024, 6, 1, 18, 0) for item in items)


def test_trip_plan_partitions_ranked_candidates() -> None:
    rows = [_place_row(f"p{index}", rating=4.9 - index * 0.1) for index in range(10)]
    planner = TravelPlanner(InMemoryVenueStore(restaurants=[], places=rows, settings={}))

    days = planner.generate_trip_plan(
        TripPlanRequest(
            location=RAMSAR,
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 4),
            travel_type=TravelType.FRIENDS,
            travel_style=TravelStyle.BALANCED,
        )
    )

    assert list(days) == [1, 2, 3]
    assert [[item.venue.id for item in days[day]] for day in days] == [
        ["p0", "p1", "p2", "p3"],
        ["p4", "p5", "p6", "p7"],
        ["p8", "p9"],
    ]
    for day_number, items in days.items():
        assert [item.order for item in items] == list(range(1, len(items) + 1))
        assert all(item.day_number == day_number for item in items)
        assert items[0].scheduled_time == datetime(2024, 6, day_number, 9, 0)


def test_trip_plan_counts_a_partial_last_day() -> None:
    rows = [_place_row(f"p{index}", rating=4.9 - index * 0.1) for index in range(10)]
    planner = TravelPlanner(InMemoryVenueStore(restaurants=[], places=rows, settings={}))

    days = planner.generate_trip_plan(
        TripPlanRequest(
            location=RAMSAR,
            start_date="2024-06-01T10:00:00",
            end_date="2024-06-03T12:00:00",
            travel_type=TravelType.FRIENDS,
            travel_style=TravelStyle.BALANCED,
        )
    )

    assert list(days) == [1, 2, 3]
    assert [len(days[day]) for day in days] == [4, 4, 2]
    assert days[3][0].scheduled_time == datetime(2024, 6, 3, 9, 0)


def test_trip_plan_without_candidates_has_empty_days() -> None:
    planner = TravelPlanner(InMemoryVenueStore())

    days = planner.generate_trip_plan(
        TripPlanRequest(
            location=Location(latitude=30.0, longitude=60.0),
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            travel_type=TravelType.SOLO,
            travel_style=TravelStyle.RELAXED,
        )
    )

    assert days == {1: [], 2: []}


def test_noop_enhancer_returns_copy() -> None:
    items: List[Candidate] = []
    assert NoOpEnhancer().enhance(items, {}) == []


def test_setting_gated_enhancer_is_identity(caplog: pytest.LogCaptureFixture) -> None:
    rows = [_place_row("a", rating=5.0), _place_row("b", rating=3.0)]
    without_key = InMemoryVenueStore(restaurants=[], places=rows, settings={})
    with_key = InMemoryVenueStore(restaurants=[], places=rows, settings={"OPENAI_API_KEY": "sk-test"})
    request = QuickPlanRequest(location=RAMSAR, travel_type=TravelType.FRIENDS, available_time=AvailableTime.HALF_DAY)

    baseline = [item.id for item in TravelPlanner(without_key, SettingGatedEnhancer(without_key)).generate_quick_plan(request)]
    with caplog.at_level(logging.INFO, logger="gardesh.planning.enhancer"):
        gated = [item.id for item in TravelPlanner(with_key, SettingGatedEnhancer(with_key)).generate_quick_plan(request)]

    assert baseline == gated == ["a", "b"]
    assert any("no model is wired" in record.getMessage() for record in caplog.records)


def test_setting_gated_enhancer_swallows_setting_errors(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenSettings(InMemoryVenueStore):
        def get_setting(self, key: str):
            raise RuntimeError("settings table missing")

    store = BrokenSettings(restaurants=[], places=[_place_row("only")], settings={})
    enhancer = SettingGatedEnhancer(store)

    with caplog.at_level(logging.ERROR, logger="gardesh.planning.enhancer"):
        result = TravelPlanner(store, enhancer).generate_quick_plan(
            QuickPlanRequest(location=RAMSAR, travel_type=TravelType.FRIENDS, available_time=AvailableTime.HALF_DAY)
        )

    assert [item.id for item in result] == ["only"]
    assert any("Ranking enhancement failed" in record.getMessage() for record in caplog.records)
