"""Read access to restaurants, tourist places and settings."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from gardesh.core import db, venue_stub
from gardesh.schemas import PriceRange, Restaurant, SuitableFor, TouristPlace

_LOGGER = logging.getLogger(__name__)


class VenueStore(Protocol):
    """Data store the planner reads venues from."""

    def list_restaurants(self, price_range: Optional[PriceRange] = None) -> List[Restaurant]:
        ...

    def list_places(self, suitable_for: Sequence[SuitableFor] = ()) -> List[TouristPlace]:
        ...

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        ...

    def get_place(self, place_id: str) -> Optional[TouristPlace]:
        ...

    def get_setting(self, key: str) -> Optional[str]:
        ...


class InMemoryVenueStore:
    """Venue store backed by python lists; seeded with the offline sample data."""

    def __init__(
        self,
        restaurants: Iterable[Restaurant | Mapping[str, Any]] | None = None,
        places: Iterable[TouristPlace | Mapping[str, Any]] | None = None,
        settings: Mapping[str, str] | None = None,
    ) -> None:
        if restaurants is None:
            restaurants = venue_stub.restaurants()
        if places is None:
            places = venue_stub.places()
        self._restaurants: Dict[str, Restaurant] = {}
        for row in restaurants:
            record = row if isinstance(row, Restaurant) else Restaurant.model_validate(row)
            self._restaurants[record.id] = record
        self._places: Dict[str, TouristPlace] = {}
        for row in places:
            record = row if isinstance(row, TouristPlace) else TouristPlace.model_validate(row)
            self._places[record.id] = record
        self._settings: Dict[str, str] = dict(settings if settings is not None else venue_stub.settings())

    def list_restaurants(self, price_range: Optional[PriceRange] = None) -> List[Restaurant]:
        return [
            restaurant.model_copy(deep=True)
            for restaurant in self._restaurants.values()
            if restaurant.is_active and (price_range is None or restaurant.price_range == price_range)
        ]

    def list_places(self, suitable_for: Sequence[SuitableFor] = ()) -> List[TouristPlace]:
        wanted = set(suitable_for)
        return [
            place.model_copy(deep=True)
            for place in self._places.values()
            if place.is_active and (not wanted or wanted.intersection(place.suitable_for))
        ]

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        restaurant = self._restaurants.get(restaurant_id)
        return restaurant.model_copy(deep=True) if restaurant else None

    def get_place(self, place_id: str) -> Optional[TouristPlace]:
        place = self._places.get(place_id)
        return place.model_copy(deep=True) if place else None

    def get_setting(self, key: str) -> Optional[str]:
        return self._settings.get(key)


_RESTAURANT_SELECT = """
    SELECT r.id, r.name, r.address, r.latitude, r.longitude, r.rating,
           r.price_range, r.description, r.is_active,
           c.name AS category,
           (SELECT COUNT(*) FROM reviews rv WHERE rv.restaurant_id = r.id) AS review_count
    FROM restaurants r
    LEFT JOIN categories c ON c.id = r.category_id
"""

_PLACE_SELECT = """
    SELECT p.id, p.name, p.address, p.latitude, p.longitude, p.rating,
           p.place_type, p.suitable_for, p.is_free, p.entry_fee,
           p.description, p.is_active,
           c.name AS category,
           (SELECT COUNT(*) FROM reviews rv WHERE rv.place_id = p.id) AS review_count
    FROM tourist_places p
    LEFT JOIN categories c ON c.id = p.category_id
"""


class PostgresVenueStore:
    """Venue store reading from the application's Postgres database."""

    def __init__(self, dsn: Optional[str] = None) -> None:
        self._dsn = dsn

    def _fetch_all(self, query: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        with db.connection_ctx(self._dsn) as connection:
            with db.dict_cursor(connection) as cursor:
                cursor.execute(query, tuple(params))
                rows = cursor.fetchall() or []
        return [dict(row) for row in rows]

    def list_restaurants(self, price_range: Optional[PriceRange] = None) -> List[Restaurant]:
        query = _RESTAURANT_SELECT + " WHERE r.is_active"
        params: List[Any] = []
        if price_range is not None:
            query += " AND r.price_range = %s"
            params.append(price_range.value)
        rows = self._fetch_all(query, params)
        _LOGGER.debug("Loaded %d active restaurants", len(rows))
        return [Restaurant.model_validate(row) for row in rows]

    def list_places(self, suitable_for: Sequence[SuitableFor] = ()) -> List[TouristPlace]:
        query = _PLACE_SELECT + " WHERE p.is_active"
        params: List[Any] = []
        if suitable_for:
            query += " AND p.suitable_for && %s::text[]"
            params.append([tag.value for tag in suitable_for])
        rows = self._fetch_all(query, params)
        _LOGGER.debug("Loaded %d active places", len(rows))
        return [TouristPlace.model_validate(row) for row in rows]

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        rows = self._fetch_all(_RESTAURANT_SELECT + " WHERE r.id = %s", [restaurant_id])
        return Restaurant.model_validate(rows[0]) if rows else None

    def get_place(self, place_id: str) -> Optional[TouristPlace]:
        rows = self._fetch_all(_PLACE_SELECT + " WHERE p.id = %s", [place_id])
        return TouristPlace.model_validate(rows[0]) if rows else None

    def get_setting(self, key: str) -> Optional[str]:
        rows = self._fetch_all("SELECT value FROM settings WHERE key = %s", [key])
        if not rows:
            return None
        value = rows[0].get("value")
        return str(value) if value else None


__all__ = ["InMemoryVenueStore", "PostgresVenueStore", "VenueStore"]
