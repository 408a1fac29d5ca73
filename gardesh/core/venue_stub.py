"""Offline sample venues along the Caspian coast."""

from __future__ import annotations

import copy
from typing import Dict, Iterable, List, Optional

from gardesh.schemas import Restaurant, TouristPlace


def _restaurant(
    *,
    venue_id: str,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
    price_range: str,
    rating: float,
    reviews: int,
    description: str,
    category: str = "Restaurant",
) -> Dict[str, object]:
    return Restaurant(
        id=venue_id,
        name=name,
        address=address,
        latitude=latitude,
        longitude=longitude,
        price_range=price_range,
        rating=rating,
        review_count=reviews,
        description=description,
        category=category,
    ).model_dump(mode="json")


def _place(
    *,
    venue_id: str,
    name: str,
    address: str,
    latitude: float,
    longitude: float,
    place_type: str,
    suitable_for: Iterable[str],
    rating: float,
    reviews: int,
    entry_fee: Optional[float] = None,
    description: str = "",
    category: str = "Tourist attraction",
) -> Dict[str, object]:
    return TouristPlace(
        id=venue_id,
        name=name,
        address=address,
        latitude=latitude,
        longitude=longitude,
        place_type=place_type,
        suitable_for=list(suitable_for),
        rating=rating,
        review_count=reviews,
        is_free=entry_fee is None,
        entry_fee=entry_fee,
        description=description,
        category=category,
    ).model_dump(mode="json")


_RESTAURANTS: Dict[str, Dict[str, object]] = {
    "ramsar-kuhestan": _restaurant(
        venue_id="ramsar-kuhestan",
        name="Kuhestan Restaurant",
        address="Coastal Road km 5, Ramsar, Mazandaran",
        latitude=36.9025,
        longitude=50.6481,
        price_range="MODERATE",
        rating=4.5,
        reviews=128,
        description="Traditional northern dishes in a quiet mountain-side dining room.",
    ),
    "ramsar-sahel-cafe": _restaurant(
        venue_id="ramsar-sahel-cafe",
        name="Sahel Cafe",
        address="Motahari Street, Ramsar, Mazandaran",
        latitude=36.9105,
        longitude=50.6572,
        price_range="BUDGET",
        rating=4.1,
        reviews=64,
        description="Sea-view cafe with local sweets and tea.",
        category="Cafe",
    ),
    "ramsar-grand-hotel-dining": _restaurant(
        venue_id="ramsar-grand-hotel-dining",
        name="Grand Hotel Dining Hall",
        address="Ramsar Grand Hotel, Ramsar, Mazandaran",
        latitude=36.9030,
        longitude=50.6590,
        price_range="LUXURY",
        rating=4.8,
        reviews=42,
        description="International menu served in the historic hotel's hall.",
    ),
    "anzali-beach-cafe": _restaurant(
        venue_id="anzali-beach-cafe",
        name="Anzali Beach Cafe",
        address="Coastal Boulevard 120, Bandar Anzali, Gilan",
        latitude=37.4717,
        longitude=49.4648,
        price_range="BUDGET",
        rating=4.2,
        reviews=87,
        description="Modern cafe facing the sea with drinks and desserts.",
        category="Cafe",
    ),
    "nowshahr-fisherman": _restaurant(
        venue_id="nowshahr-fisherman",
        name="Fisherman Seafood House",
        address="Coastal Street near the pier, Nowshahr, Mazandaran",
        latitude=36.6481,
        longitude=51.5000,
        price_range="EXPENSIVE",
        rating=4.8,
        reviews=210,
        description="Seafood restaurant with the day's fresh catch.",
    ),
    "lahijan-forest-cafe": _restaurant(
        venue_id="lahijan-forest-cafe",
        name="Forest Cafe",
        address="Forest Road km 8, Lahijan, Gilan",
        latitude=37.2049,
        longitude=50.0094,
        price_range="MODERATE",
        rating=4.3,
        reviews=95,
        description="Open-air cafe in the woods with full breakfast and lunch menus.",
        category="Cafe",
    ),
    "babolsar-villa": _restaurant(
        venue_id="babolsar-villa",
        name="Villa Fine Dining",
        address="Coastal Boulevard, Babolsar, Mazandaran",
        latitude=36.7022,
        longitude=52.6578,
        price_range="LUXURY",
        rating=4.9,
        reviews=56,
        description="Upscale international menu with attentive service.",
    ),
}


_PLACES: Dict[str, Dict[str, object]] = {
    "ramsar-beach": _place(
        venue_id="ramsar-beach",
        name="Ramsar Beach",
        address="Ramsar coastline, Mazandaran",
        latitude=36.9167,
        longitude=50.6500,
        place_type="BEACH",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE", "KIDS"],
        rating=4.7,
        reviews=310,
        description="Long sandy beach below the Alborz foothills.",
    ),
    "ramsar-water-park": _place(
        venue_id="ramsar-water-park",
        name="Ramsar Water Park",
        address="Water Park Road, Ramsar, Mazandaran",
        latitude=36.9000,
        longitude=50.6500,
        place_type="ENTERTAINMENT",
        suitable_for=["FAMILY", "FRIENDS", "KIDS"],
        rating=4.3,
        reviews=150,
        entry_fee=200000,
        description="Slides and pools for all ages.",
    ),
    "ramsar-palace": _place(
        venue_id="ramsar-palace",
        name="Marble Palace Museum",
        address="Motahari Street, Ramsar, Mazandaran",
        latitude=36.9036,
        longitude=50.6606,
        place_type="HISTORICAL",
        suitable_for=["FAMILY", "COUPLE", "SOLO"],
        rating=4.4,
        reviews=205,
        entry_fee=150000,
        description="Former royal summer residence turned museum.",
    ),
    "safarud-forest-park": _place(
        venue_id="safarud-forest-park",
        name="Safarud Forest Park",
        address="Safarud Road, Ramsar, Mazandaran",
        latitude=36.8790,
        longitude=50.6270,
        place_type="NATURE",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE", "KIDS"],
        rating=4.6,
        reviews=98,
        description="Riverside walking trails under old-growth trees.",
    ),
    "javaherdeh-village": _place(
        venue_id="javaherdeh-village",
        name="Javaherdeh Highlands",
        address="Javaherdeh, Ramsar, Mazandaran",
        latitude=36.8586,
        longitude=50.4935,
        place_type="MOUNTAIN",
        suitable_for=["FRIENDS", "SOLO", "COUPLE"],
        rating=4.8,
        reviews=176,
        description="High meadows and a mountain village above the clouds.",
    ),
    "chamkhaleh-beach": _place(
        venue_id="chamkhaleh-beach",
        name="Chamkhaleh Beach",
        address="Chamkhaleh, Langarud, Gilan",
        latitude=37.1833,
        longitude=50.1500,
        place_type="BEACH",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE", "KIDS"],
        rating=4.6,
        reviews=140,
    ),
    "noor-forest-park": _place(
        venue_id="noor-forest-park",
        name="Noor Forest Park",
        address="Noor, Mazandaran",
        latitude=36.5833,
        longitude=52.0167,
        place_type="PARK",
        suitable_for=["FAMILY", "FRIENDS", "KIDS"],
        rating=4.4,
        reviews=120,
        entry_fee=50000,
    ),
    "anzali-lagoon": _place(
        venue_id="anzali-lagoon",
        name="Anzali Lagoon",
        address="Bandar Anzali, Gilan",
        latitude=37.4667,
        longitude=49.4667,
        place_type="NATURE",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE"],
        rating=4.5,
        reviews=260,
        entry_fee=100000,
    ),
    "rudkhan-castle": _place(
        venue_id="rudkhan-castle",
        name="Rudkhan Castle",
        address="Rudkhan Castle Road, Fuman, Gilan",
        latitude=37.0667,
        longitude=49.3167,
        place_type="HISTORICAL",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE"],
        rating=4.6,
        reviews=330,
        entry_fee=80000,
    ),
    "rasht-museum": _place(
        venue_id="rasht-museum",
        name="Rasht Museum",
        address="Imam Street, Rasht, Gilan",
        latitude=37.2808,
        longitude=49.5832,
        place_type="CULTURAL",
        suitable_for=["FAMILY", "FRIENDS", "COUPLE"],
        rating=4.2,
        reviews=75,
        entry_fee=50000,
    ),
}


_SETTINGS: Dict[str, str] = {}


def restaurants() -> List[Dict[str, object]]:
    """Return deep copies of the sample restaurant rows."""

    return [copy.deepcopy(row) for row in _RESTAURANTS.values()]


def places() -> List[Dict[str, object]]:
    """Return deep copies of the sample place rows."""

    return [copy.deepcopy(row) for row in _PLACES.values()]


def settings() -> Dict[str, str]:
    return dict(_SETTINGS)


__all__ = ["places", "restaurants", "settings"]
