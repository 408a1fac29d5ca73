"""Tests for the pure helpers behind the plan, itinerary and map tabs."""

from __future__ import annotations

from datetime import date, datetime, time

from gardesh.schemas import (
    AvailableTime,
    Budget,
    PlanRequest,
    PlanType,
    Restaurant,
    TouristPlace,
    TravelPlan,
    TravelPlanItem,
    TravelStyle,
    TravelType,
)
from gardesh.ui import itinerary, map as plan_map
from gardesh.ui.plan import build_plan_payload


def _plan() -> TravelPlan:
    beach = TouristPlace(id="beach", name="Ramsar Beach", latitude=36.91, longitude=50.66)
    palace = TouristPlace(id="palace", name="Marble Palace", latitude=36.92, longitude=50.64)
    grill = Restaurant(id="grill", name="Sahel Grill", latitude=36.89, longitude=50.67)
    items = [
        TravelPlanItem(id="i1", plan_id="p", order=1, day_number=1, item_type="PLACE", place_id="beach", place=beach),
        TravelPlanItem(
            id="i2", plan_id="p", order=2, day_number=1, item_type="RESTAURANT", restaurant_id="grill", restaurant=grill
        ),
        TravelPlanItem(id="i3", plan_id="p", order=1, day_number=2, item_type="PLACE", place_id="palace", place=palace),
    ]
    return TravelPlan(
        id="p",
        user_id="u",
        plan_type=PlanType.TRIP,
        latitude=36.90,
        longitude=50.65,
        address="Ramsar",
        start_date=date(2024, 6, 1),
        items=items,
    )


def test_quick_payload_drops_unused_fields() -> None:
    payload = build_plan_payload(
        PlanType.QUICK,
        latitude=36.9,
        longitude=50.65,
        address="  Ramsar ",
        travel_type=TravelType.SOLO,
        available_time=AvailableTime.HALF_DAY,
        budget=Budget.LUXURY,
        interests=["beach"],
    )

    assert set(payload) == {"plan_type", "location", "travel_type", "available_time"}
    assert payload["location"]["address"] == "Ramsar"


def test_trip_payload_validates_into_request() -> None:
    payload = build_plan_payload(
        PlanType.TRIP,
        latitude=36.9,
        longitude=50.65,
        travel_type=TravelType.FRIENDS,
        search_radius=30,
        start_date=date(2024, 6, 1),
        end_date=date(2024, 6, 4),
        travel_style=TravelStyle.BALANCED,
        budget=Budget.ANY,
        interests=["beach", "cafe"],
        preferences={"غذا": 3, "BEACH": 0},
    )

    request = PlanRequest.model_validate(payload)

    assert request.budget is None
    assert request.preferences == {"غذا": 3.0}
    assert request.interests == ["beach", "cafe"]
    assert request.end_date == date(2024, 6, 4)


def test_daily_payload_keeps_window() -> None:
    payload = build_plan_payload(
        PlanType.DAILY,
        latitude=36.9,
        longitude=50.65,
        travel_type=TravelType.COUPLE,
        start_time=time(9, 0),
        end_time=time(18, 0),
        start_date=date(2024, 6, 1),
        budget=Budget.MODERATE,
    )

    request = PlanRequest.model_validate(payload)

    assert request.start_time == time(9, 0)
    assert request.end_time == time(18, 0)
    assert request.budget == Budget.MODERATE
    assert "travel_style" not in payload


def test_paths_start_at_anchor_for_each_day() -> None:
    paths = plan_map._collect_paths(_plan())

    assert [path["day_number"] for path in paths] == [1, 2]
    assert paths[0]["path"] == [(50.65, 36.90), (50.66, 36.91), (50.67, 36.89)]
    assert paths[1]["path"] == [(50.65, 36.90), (50.64, 36.92)]


def test_selected_marker_is_highlighted() -> None:
    markers = plan_map._collect_markers(_plan(), selected_item="i2")

    assert [marker.item_id for marker in markers] == ["i1", "i2", "i3"]
    selected = markers[1]
    assert selected.radius > markers[0].radius
    assert selected.title == "2. Sahel Grill"
    assert markers[2].subtitle == "Day 2"


def test_day_filter_options() -> None:
    assert plan_map._day_filter_options(_plan()) == [("All days", None), ("Day 1", 1), ("Day 2", 2)]


def test_itinerary_formatters() -> None:
    assert itinerary._format_minutes(90) == "1 h 30 min"
    assert itinerary._format_minutes(120) == "2 h"
    assert itinerary._format_minutes(45) == "45 min"
    assert itinerary._format_minutes(None) == "0 min"
    assert itinerary._format_cost(0) == "Free"
    assert itinerary._format_cost(1250000) == "1,250,000 IRR"
    assert itinerary._format_distance(2.345) == "2.3 km"
    assert itinerary._format_distance(None) == ""


def test_item_time_range_and_day_label() -> None:
    plan = _plan()
    item = plan.items[0].model_copy(update={"scheduled_time": datetime(2024, 6, 1, 9, 0), "duration": 90})

    assert itinerary._format_time_range(item) == "09:00–10:30"
    assert itinerary._day_label(plan, 2) == "Day 2: Sunday, Jun 02"
    assert itinerary._day_label(plan, None) == "Stops"
    assert itinerary._item_title(item) == "Ramsar Beach"
