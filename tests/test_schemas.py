from datetime import date, datetime, time

import pytest
from pydantic import TypeAdapter, ValidationError

from gardesh.schemas import (
    Candidate,
    Location,
    PlaceCandidate,
    PlanItemType,
    PlanRequest,
    PlanType,
    RestaurantCandidate,
    ScheduledItem,
    SuitableFor,
    TouristPlace,
    TravelPlan,
    TravelPlanItem,
    TravelType,
    calendar_date,
)


def test_plan_request_accepts_camel_case_payloads():
    request = PlanRequest.model_validate(
        {
            "planType": "TRIP",
            "location": {"latitude": 36.9, "longitude": 50.65, "address": "Ramsar"},
            "searchRadius": 30,
            "travelType": "FRIENDS",
            "travelStyle": "BALANCED",
            "startDate": "2024-06-01T00:00:00.000Z",
            "endDate": "2024-06-04",
            "budget": "",
            "interests": None,
            "preferences": None,
        }
    )

    assert request.plan_type == PlanType.TRIP
    assert request.travel_type == TravelType.FRIENDS
    assert request.start_date == datetime(2024, 6, 1, 0, 0)
    assert request.end_date == date(2024, 6, 4)
    assert request.budget is None
    assert request.interests == []
    assert request.preferences == {}


def test_plan_request_rejects_non_positive_radius():
    with pytest.raises(ValidationError):
        PlanRequest.model_validate({"searchRadius": 0})


def test_location_bounds_are_validated():
    with pytest.raises(ValidationError):
        Location(latitude=91, longitude=0)


def test_tourist_place_parses_postgres_array_strings():
    place = TouristPlace.model_validate(
        {
            "id": "p1",
            "name": "Park",
            "latitude": 36.9,
            "longitude": 50.65,
            "suitableFor": "{FAMILY,KIDS}",
            "reviewCount": 7,
        }
    )

    assert place.suitable_for == [SuitableFor.FAMILY, SuitableFor.KIDS]
    assert place.review_count == 7


def test_candidates_are_discriminated_by_kind():
    adapter = TypeAdapter(Candidate)

    restaurant = adapter.validate_python(
        {"kind": "restaurant", "id": "r1", "name": "Grill", "latitude": 1.0, "longitude": 2.0, "price_range": "LUXURY"}
    )
    place = adapter.validate_python(
        {"kind": "place", "id": "p1", "name": "Beach", "latitude": 1.0, "longitude": 2.0, "place_type": "BEACH"}
    )

    assert isinstance(restaurant, RestaurantCandidate)
    assert isinstance(place, PlaceCandidate)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "hotel", "id": "h1", "name": "Inn", "latitude": 1.0, "longitude": 2.0})


def test_scheduled_item_derives_single_venue_reference():
    venue = PlaceCandidate(id="p1", name="Beach", latitude=1.0, longitude=2.0)
    item = ScheduledItem(venue=venue, order=1, duration=90)

    assert item.item_type == PlanItemType.PLACE
    assert item.place_id == "p1"
    assert item.restaurant_id is None


def test_scheduled_item_order_starts_at_one():
    venue = PlaceCandidate(id="p1", name="Beach", latitude=1.0, longitude=2.0)
    with pytest.raises(ValidationError):
        ScheduledItem(venue=venue, order=0, duration=90)


@pytest.mark.parametrize(
    "fields",
    [
        {"item_type": "PLACE", "restaurant_id": "r1", "place_id": "p1"},
        {"item_type": "PLACE"},
        {"item_type": "RESTAURANT", "place_id": "p1"},
    ],
)
def test_plan_item_requires_exactly_one_matching_venue(fields):
    with pytest.raises(ValidationError):
        TravelPlanItem.model_validate({"id": "i1", "plan_id": "plan", "order": 1, **fields})


def test_travel_plan_groups_items_by_day():
    items = [
        TravelPlanItem(id="c", plan_id="p", order=1, day_number=2, item_type="PLACE", place_id="x"),
        TravelPlanItem(id="b", plan_id="p", order=2, day_number=1, item_type="PLACE", place_id="y"),
        TravelPlanItem(id="a", plan_id="p", order=1, day_number=1, item_type="RESTAURANT", restaurant_id="z"),
    ]
    plan = TravelPlan(
        id="p",
        user_id="u",
        plan_type="TRIP",
        latitude=36.9,
        longitude=50.65,
        start_time=time(9, 0),
        items=items,
    )

    assert plan.start_time == "09:00"
    assert {day: [item.id for item in entries] for day, entries in plan.days().items()} == {
        1: ["a", "b"],
        2: ["c"],
    }
    assert [item.id for item in plan.all_items()] == ["a", "b", "c"]


def test_travel_plan_item_accepts_scheduled_time():
    item = TravelPlanItem(
        id="i1",
        plan_id="p",
        order=1,
        item_type="RESTAURANT",
        restaurant_id="r1",
        scheduled_time="2024-06-01T12:30:00",
    )

    assert item.scheduled_time == datetime(2024, 6, 1, 12, 30)
    assert item.venue_name is None


def test_plan_request_keeps_trip_timestamps():
    request = PlanRequest.model_validate(
        {"startDate": "2024-06-01T10:00:00+03:30", "endDate": date(2024, 6, 3)}
    )

    assert request.start_date == datetime(2024, 6, 1, 6, 30)
    assert request.end_date == date(2024, 6, 3)
    assert calendar_date(request.start_date) == date(2024, 6, 1)
    assert calendar_date(request.end_date) == date(2024, 6, 3)
    assert calendar_date(None) is None
