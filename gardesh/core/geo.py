"""Great-circle distance and travel-time helpers."""

from __future__ import annotations

from math import asin, cos, floor, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0
AVERAGE_SPEED_KMH = 50.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the haversine distance in kilometres between two coordinates."""

    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    # Rounding noise can push ``a`` a hair above 1 for antipodal points.
    c = 2 * asin(sqrt(min(1.0, a)))
    return EARTH_RADIUS_KM * c


def travel_minutes(distance: float, speed_kmh: float = AVERAGE_SPEED_KMH) -> int:
    """Return whole minutes needed to cover ``distance`` km, rounded half-up."""

    if distance <= 0 or speed_kmh <= 0:
        return 0
    return int(floor((distance / speed_kmh) * 60 + 0.5))


__all__ = ["AVERAGE_SPEED_KMH", "EARTH_RADIUS_KM", "distance_km", "travel_minutes"]
