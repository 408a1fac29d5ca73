from __future__ import annotations

from typing import List

import pytest

from gardesh.core.venue_store import InMemoryVenueStore
from gardesh.planning.retrieval import retrieve_candidates, retrieve_places, retrieve_restaurants
from gardesh.schemas import Budget, Location, TravelType

RAMSAR = Location(latitude=36.90, longitude=50.65, address="Ramsar")
RAMSAR_RESTAURANTS = {"ramsar-kuhestan", "ramsar-sahel-cafe", "ramsar-grand-hotel-dining"}


def _ids(candidates) -> set[str]:
    return {candidate.id for candidate in candidates}


@pytest.fixture
def store() -> InMemoryVenueStore:
    return InMemoryVenueStore()


def test_candidates_respect_search_radius(store: InMemoryVenueStore) -> None:
    for radius in (1.0, 5.0, 20.0, 80.0):
        candidates = retrieve_candidates(store, RAMSAR, radius, TravelType.FRIENDS)
        assert all(candidate.distance <= radius for candidate in candidates)


def test_restaurants_are_not_filtered_by_party(store: InMemoryVenueStore) -> None:
    for travel_type in TravelType:
        restaurants = retrieve_restaurants(store, RAMSAR, 5.0, travel_type)
        assert _ids(restaurants) == RAMSAR_RESTAURANTS


def test_places_are_filtered_by_party(store: InMemoryVenueStore) -> None:
    solo = retrieve_places(store, RAMSAR, 20.0, TravelType.SOLO)
    assert _ids(solo) == {"ramsar-palace", "javaherdeh-village"}

    family = retrieve_places(store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS)
    assert _ids(family) == {"ramsar-beach", "ramsar-water-park", "ramsar-palace", "safarud-forest-park"}


@pytest.mark.parametrize(
    "budget, expected",
    [
        (Budget.ECONOMIC, {"ramsar-sahel-cafe"}),
        (Budget.MODERATE, {"ramsar-kuhestan"}),
        (Budget.LUXURY, {"ramsar-grand-hotel-dining"}),
        (Budget.ANY, RAMSAR_RESTAURANTS),
        (None, RAMSAR_RESTAURANTS),
    ],
)
def test_budget_prefilters_restaurants(store: InMemoryVenueStore, budget, expected) -> None:
    restaurants = retrieve_restaurants(store, RAMSAR, 5.0, TravelType.COUPLE, budget=budget)
    assert _ids(restaurants) == expected


def test_place_interest_maps_to_place_types(store: InMemoryVenueStore) -> None:
    candidates = retrieve_candidates(
        store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS, interests=["beach"]
    )
    assert _ids(candidates) == {"ramsar-beach"}

    nature = retrieve_candidates(store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS, interests=["طبیعت"])
    assert _ids(nature) == {"safarud-forest-park"}


def test_restaurant_keyword_admits_every_restaurant_only(store: InMemoryVenueStore) -> None:
    candidates = retrieve_candidates(store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS, interests=["کافه"])
    assert _ids(candidates) == RAMSAR_RESTAURANTS


def test_place_catch_all_admits_every_place(store: InMemoryVenueStore) -> None:
    candidates = retrieve_candidates(store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS, interests=["مکان"])
    assert _ids(candidates) == {"ramsar-beach", "ramsar-water-park", "ramsar-palace", "safarud-forest-park"}


def test_candidates_are_annotated_with_distance_and_travel_time(store: InMemoryVenueStore) -> None:
    places = {place.id: place for place in retrieve_places(store, RAMSAR, 5.0, TravelType.FRIENDS)}

    assert places["ramsar-water-park"].distance == 0
    assert places["ramsar-water-park"].travel_time == 0
    assert places["ramsar-beach"].distance == pytest.approx(1.857, abs=0.01)
    assert places["ramsar-beach"].travel_time == 2


def test_restaurants_come_before_places(store: InMemoryVenueStore) -> None:
    candidates = retrieve_candidates(store, RAMSAR, 5.0, TravelType.FAMILY_WITH_KIDS)
    kinds: List[str] = [candidate.kind for candidate in candidates]
    assert kinds == sorted(kinds, key=lambda kind: 0 if kind == "restaurant" else 1)
    assert len(candidates) == 7


def test_no_venues_in_range_is_empty(store: InMemoryVenueStore) -> None:
    desert = Location(latitude=30.0, longitude=60.0)
    assert retrieve_candidates(store, desert, 20.0, TravelType.SOLO) == []


def test_store_errors_propagate(store: InMemoryVenueStore, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(store, "list_places", broken)

    with pytest.raises(RuntimeError, match="database unavailable"):
        retrieve_candidates(store, RAMSAR, 5.0, TravelType.SOLO)
