"""Core utilities for Gardesh."""

from .geo import AVERAGE_SPEED_KMH, distance_km, travel_minutes
from .plan_store import InMemoryPlanStore, PlanStoreError, PostgresPlanStore
from .venue_store import InMemoryVenueStore, PostgresVenueStore

__all__ = [
    "AVERAGE_SPEED_KMH",
    "InMemoryPlanStore",
    "InMemoryVenueStore",
    "PlanStoreError",
    "PostgresPlanStore",
    "PostgresVenueStore",
    "distance_km",
    "travel_minutes",
]
