"""Constant lookup tables shared by the planner stages."""

from __future__ import annotations

from datetime import time
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from gardesh.schemas import AvailableTime, Budget, PlaceType, PriceRange, SuitableFor, TravelType

TRAVEL_TYPE_SUITABLE_FOR: Mapping[TravelType, FrozenSet[SuitableFor]] = {
    TravelType.SOLO: frozenset({SuitableFor.SOLO}),
    TravelType.COUPLE: frozenset({SuitableFor.COUPLE}),
    TravelType.FAMILY_WITH_KIDS: frozenset({SuitableFor.FAMILY, SuitableFor.KIDS}),
    TravelType.FAMILY_ADULTS: frozenset({SuitableFor.FAMILY}),
    TravelType.FRIENDS: frozenset({SuitableFor.FRIENDS}),
}

# Interests that admit every restaurant.
RESTAURANT_INTEREST_KEYWORDS: FrozenSet[str] = frozenset({"restaurant", "رستوران", "کافه", "غذا"})

# Interests that admit every place regardless of type.
PLACE_INTEREST_KEYWORDS: FrozenSet[str] = frozenset({"place", "مکان"})

_NATURE_TYPES = frozenset(
    {PlaceType.NATURE, PlaceType.FOREST, PlaceType.MOUNTAIN, PlaceType.WATERFALL, PlaceType.PARK}
)
_MUSEUM_TYPES = frozenset({PlaceType.CULTURAL, PlaceType.HISTORICAL})
_ENTERTAINMENT_TYPES = frozenset({PlaceType.ENTERTAINMENT, PlaceType.PARK})

INTEREST_PLACE_TYPES: Mapping[str, FrozenSet[PlaceType]] = {
    "nature": _NATURE_TYPES,
    "طبیعت": _NATURE_TYPES,
    "beach": frozenset({PlaceType.BEACH}),
    "ساحل": frozenset({PlaceType.BEACH}),
    "mountain": frozenset({PlaceType.MOUNTAIN}),
    "کوه": frozenset({PlaceType.MOUNTAIN}),
    "museum": _MUSEUM_TYPES,
    "موزه": _MUSEUM_TYPES,
    "entertainment": _ENTERTAINMENT_TYPES,
    "تفریحی": _ENTERTAINMENT_TYPES,
    "historical": _MUSEUM_TYPES,
    "تاریخی": _MUSEUM_TYPES,
}

FOOD_PREFERENCE_LABEL = "غذا"
DEFAULT_PLACE_PREFERENCE_LABEL = "مکان"

PLACE_TYPE_PREFERENCE_LABEL: Mapping[PlaceType, str] = {
    PlaceType.NATURE: "طبیعت",
    PlaceType.FOREST: "طبیعت",
    PlaceType.WATERFALL: "طبیعت",
    PlaceType.BEACH: "ساحل",
    PlaceType.MOUNTAIN: "کوه",
    PlaceType.HISTORICAL: "تاریخی",
    PlaceType.CULTURAL: "فرهنگی",
    PlaceType.ENTERTAINMENT: "تفریحی",
    PlaceType.PARK: "تفریحی",
    PlaceType.OTHER: DEFAULT_PLACE_PREFERENCE_LABEL,
}

# (search radius in km, maximum number of items)
QUICK_PLAN_LIMITS: Mapping[AvailableTime, Tuple[float, int]] = {
    AvailableTime.ONE_TO_TWO_HOURS: (5.0, 3),
    AvailableTime.HALF_DAY: (15.0, 5),
    AvailableTime.FULL_DAY: (30.0, 7),
}

BUDGET_PRICE_RANGE: Mapping[Budget, Optional[PriceRange]] = {
    Budget.ECONOMIC: PriceRange.BUDGET,
    Budget.MODERATE: PriceRange.MODERATE,
    Budget.LUXURY: PriceRange.LUXURY,
    Budget.ANY: None,
}

PRICE_RANGE_COST: Dict[PriceRange, int] = {
    PriceRange.BUDGET: 200_000,
    PriceRange.MODERATE: 400_000,
    PriceRange.EXPENSIVE: 700_000,
    PriceRange.LUXURY: 1_200_000,
}
DEFAULT_RESTAURANT_COST = 400_000

TRIP_DAY_START = time(9, 0)
TRIP_DAY_END = time(22, 0)


def suitable_for(travel_type: TravelType) -> FrozenSet[SuitableFor]:
    return TRAVEL_TYPE_SUITABLE_FOR.get(travel_type, frozenset())


def price_range_for(budget: Optional[Budget]) -> Optional[PriceRange]:
    """Return the restaurant price tier a budget filters on, if any."""

    if budget is None:
        return None
    return BUDGET_PRICE_RANGE.get(budget)


def preference_label(place_type: PlaceType) -> str:
    return PLACE_TYPE_PREFERENCE_LABEL.get(place_type, DEFAULT_PLACE_PREFERENCE_LABEL)


def restaurant_cost(price_range: Optional[PriceRange]) -> int:
    if price_range is None:
        return DEFAULT_RESTAURANT_COST
    return PRICE_RANGE_COST.get(price_range, DEFAULT_RESTAURANT_COST)


__all__ = [
    "BUDGET_PRICE_RANGE",
    "DEFAULT_PLACE_PREFERENCE_LABEL",
    "DEFAULT_RESTAURANT_COST",
    "FOOD_PREFERENCE_LABEL",
    "INTEREST_PLACE_TYPES",
    "PLACE_INTEREST_KEYWORDS",
    "PLACE_TYPE_PREFERENCE_LABEL",
    "PRICE_RANGE_COST",
    "QUICK_PLAN_LIMITS",
    "RESTAURANT_INTEREST_KEYWORDS",
    "TRAVEL_TYPE_SUITABLE_FOR",
    "TRIP_DAY_END",
    "TRIP_DAY_START",
    "preference_label",
    "price_range_for",
    "restaurant_cost",
    "suitable_for",
]
