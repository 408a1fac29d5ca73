from __future__ import annotations

import pytest

from gardesh.planning.ranking import preference_score, rank_by_preferences, rank_simple
from gardesh.schemas import PlaceCandidate, PlaceType, RestaurantCandidate


def _place(place_id: str, *, rating: float, reviews: int = 0, distance: float = 0.0, place_type: PlaceType = PlaceType.OTHER) -> PlaceCandidate:
    return PlaceCandidate(
        id=place_id,
        name=place_id,
        latitude=36.9,
        longitude=50.65,
        rating=rating,
        review_count=reviews,
        distance=distance,
        place_type=place_type,
    )


def _restaurant(restaurant_id: str, *, rating: float, reviews: int = 0) -> RestaurantCandidate:
    return RestaurantCandidate(
        id=restaurant_id,
        name=restaurant_id,
        latitude=36.9,
        longitude=50.65,
        rating=rating,
        review_count=reviews,
    )


def _ids(candidates) -> list[str]:
    return [candidate.id for candidate in candidates]


def test_clear_rating_gap_wins() -> None:
    ranked = rank_simple([_place("low", rating=4.0, reviews=500), _place("high", rating=4.8)])
    assert _ids(ranked) == ["high", "low"]


def test_close_ratings_fall_back_to_review_count() -> None:
    ranked = rank_simple([_place("rated", rating=4.5, reviews=10), _place("popular", rating=4.2, reviews=100)])
    assert _ids(ranked) == ["popular", "rated"]


def test_review_tie_falls_back_to_distance() -> None:
    ranked = rank_simple(
        [
            _place("far", rating=4.5, reviews=10, distance=3.0),
            _place("near", rating=4.4, reviews=10, distance=1.0),
        ]
    )
    assert _ids(ranked) == ["near", "far"]


def test_full_ties_keep_input_order() -> None:
    candidates = [_place(name, rating=4.0, reviews=5, distance=1.0) for name in ("a", "b", "c")]
    assert _ids(rank_simple(candidates)) == ["a", "b", "c"]


def test_ranking_returns_new_list() -> None:
    candidates = [_place("low", rating=3.0), _place("high", rating=5.0)]
    ranked = rank_simple(candidates)
    assert ranked is not candidates
    assert _ids(candidates) == ["low", "high"]


def test_preference_score_for_restaurants_uses_food_weight() -> None:
    restaurant = _restaurant("kabab", rating=4.0, reviews=10)
    assert preference_score(restaurant, {"غذا": 5}) == pytest.approx(46.0)
    assert preference_score(restaurant, {}) == pytest.approx(41.0)


def test_preference_score_for_places_uses_type_label() -> None:
    forest = _place("forest", rating=4.5, reviews=20, place_type=PlaceType.FOREST)
    assert preference_score(forest, {"طبیعت": 3}) == pytest.approx(50.0)

    other = _place("misc", rating=4.0, place_type=PlaceType.OTHER)
    assert preference_score(other, {"مکان": 7, "طبیعت": 100}) == pytest.approx(47.0)


def test_rank_by_preferences_orders_by_score() -> None:
    beach = _place("beach", rating=4.0, place_type=PlaceType.BEACH)
    museum = _place("museum", rating=4.5, place_type=PlaceType.CULTURAL)
    cafe = _restaurant("cafe", rating=4.2)

    ranked = rank_by_preferences([museum, cafe, beach], {"ساحل": 20, "غذا": 1})

    assert _ids(ranked) == ["beach", "museum", "cafe"]


def test_rank_by_preferences_is_stable_on_ties() -> None:
    candidates = [_place(name, rating=4.0) for name in ("x", "y", "z")]
    assert _ids(rank_by_preferences(candidates, {})) == ["x", "y", "z"]
