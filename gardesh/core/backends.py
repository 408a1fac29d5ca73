"""Select venue and plan store implementations from the environment."""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

from gardesh.core.plan_store import InMemoryPlanStore, PlanStore, PostgresPlanStore
from gardesh.core.venue_store import InMemoryVenueStore, PostgresVenueStore, VenueStore

_LOGGER = logging.getLogger(__name__)

STORE_BACKEND = os.getenv("GARDESH_STORE", "memory")
DEFAULT_USER_ID = os.getenv("GARDESH_DEFAULT_USER", "local-user")

_MEMORY_STORES: Optional[Tuple[InMemoryVenueStore, InMemoryPlanStore]] = None


def build_stores(backend: Optional[str] = None) -> Tuple[VenueStore, PlanStore]:
    """Return ``(venue_store, plan_store)`` for the configured backend.

    The in-memory backend is shared across calls so plans survive Streamlit
    reruns within one process.
    """

    global _MEMORY_STORES

    choice = (backend or STORE_BACKEND or "memory").strip().lower()
    if choice == "postgres":
        dsn = os.getenv("DATABASE_URL")
        if not dsn:
            raise RuntimeError("GARDESH_STORE=postgres requires DATABASE_URL to be set")
        return PostgresVenueStore(dsn), PostgresPlanStore(dsn)
    if choice != "memory":
        raise ValueError(f"Unknown store backend: {choice}")

    if _MEMORY_STORES is None:
        _LOGGER.info("Using in-memory venue and plan stores")
        _MEMORY_STORES = (InMemoryVenueStore(), InMemoryPlanStore())
    return _MEMORY_STORES


def reset_memory_stores() -> None:
    """Drop the shared in-memory stores."""

    global _MEMORY_STORES
    _MEMORY_STORES = None


__all__ = ["DEFAULT_USER_ID", "STORE_BACKEND", "build_stores", "reset_memory_stores"]
