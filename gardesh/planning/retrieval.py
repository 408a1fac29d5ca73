"""Candidate retrieval: fetch venues, filter them and annotate distances."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from gardesh.core.geo import distance_km, travel_minutes
from gardesh.core.venue_store import VenueStore
from gardesh.planning import tables
from gardesh.schemas import (
    Budget,
    Candidate,
    Location,
    PlaceCandidate,
    Restaurant,
    RestaurantCandidate,
    TouristPlace,
    TravelType,
)

_LOGGER = logging.getLogger(__name__)


def _restaurant_matches(interests: Sequence[str]) -> bool:
    if not interests:
        return True
    return any(interest in tables.RESTAURANT_INTEREST_KEYWORDS for interest in interests)


def _place_matches(place: TouristPlace, interests: Sequence[str]) -> bool:
    if not interests:
        return True
    for interest in interests:
        if interest in tables.PLACE_INTEREST_KEYWORDS:
            return True
        if place.place_type in tables.INTEREST_PLACE_TYPES.get(interest, ()):
            return True
    return False


def _restaurant_candidate(restaurant: Restaurant, distance: float) -> RestaurantCandidate:
    return RestaurantCandidate(
        id=restaurant.id,
        name=restaurant.name,
        latitude=restaurant.latitude,
        longitude=restaurant.longitude,
        address=restaurant.address,
        rating=restaurant.rating,
        review_count=restaurant.review_count,
        distance=distance,
        travel_time=travel_minutes(distance),
        category=restaurant.category,
        description=restaurant.description,
        price_range=restaurant.price_range,
    )


def _place_candidate(place: TouristPlace, distance: float) -> PlaceCandidate:
    return PlaceCandidate(
        id=place.id,
        name=place.name,
        latitude=place.latitude,
        longitude=place.longitude,
        address=place.address,
        rating=place.rating,
        review_count=place.review_count,
        distance=distance,
        travel_time=travel_minutes(distance),
        category=place.category,
        description=place.description,
        place_type=place.place_type,
        is_free=place.is_free,
        entry_fee=place.entry_fee,
        suitable_for=list(place.suitable_for),
    )


def retrieve_restaurants(
    store: VenueStore,
    anchor: Location,
    radius: float,
    travel_type: TravelType,
    budget: Optional[Budget] = None,
    interests: Iterable[str] = (),
) -> List[RestaurantCandidate]:
    """Return active restaurants within ``radius`` km of ``anchor``.

    Restaurants carry no party tags, so ``travel_type`` does not narrow them.
    """

    wanted = list(interests)
    if not _restaurant_matches(wanted):
        return []

    results: List[RestaurantCandidate] = []
    for restaurant in store.list_restaurants(price_range=tables.price_range_for(budget)):
        distance = distance_km(
            anchor.latitude, anchor.longitude, restaurant.latitude, restaurant.longitude
        )
        if distance > radius:
            continue
        results.append(_restaurant_candidate(restaurant, distance))
    _LOGGER.debug(
        "Retrieved %d restaurants within %.1f km for %s", len(results), radius, travel_type.value
    )
    return results


def retrieve_places(
    store: VenueStore,
    anchor: Location,
    radius: float,
    travel_type: TravelType,
    interests: Iterable[str] = (),
) -> List[PlaceCandidate]:
    """Return active places suited to the party within ``radius`` km of ``anchor``."""

    wanted = list(interests)
    tags = sorted(tables.suitable_for(travel_type), key=lambda tag: tag.value)

    results: List[PlaceCandidate] = []
    for place in store.list_places(suitable_for=tags):
        distance = distance_km(anchor.latitude, anchor.longitude, place.latitude, place.longitude)
        if distance > radius:
            continue
        if not _place_matches(place, wanted):
            continue
        results.append(_place_candidate(place, distance))
    _LOGGER.debug(
        "Retrieved %d places within %.1f km for %s", len(results), radius, travel_type.value
    )
    return results


def retrieve_candidates(
    store: VenueStore,
    anchor: Location,
    radius: float,
    travel_type: TravelType,
    *,
    budget: Optional[Budget] = None,
    interests: Iterable[str] = (),
) -> List[Candidate]:
    """Fetch restaurants and places concurrently; restaurants come first."""

    wanted = list(interests)
    with ThreadPoolExecutor(max_workers=2) as executor:
        restaurants = executor.submit(
            retrieve_restaurants, store, anchor, radius, travel_type, budget, wanted
        )
        places = executor.submit(retrieve_places, store, anchor, radius, travel_type, wanted)
        candidates: List[Candidate] = [*restaurants.result(), *places.result()]
    return candidates


__all__ = ["retrieve_candidates", "retrieve_places", "retrieve_restaurants"]
