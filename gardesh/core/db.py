"""Database helpers for the Postgres-backed venue and plan stores."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

try:  # pragma: no cover - optional dependency
    import psycopg2  # type: ignore[import-not-found]
    from psycopg2.extras import Json, RealDictCursor  # type: ignore[import-not-found]
    from psycopg2.extensions import connection as PGConnection  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - handled gracefully in tests
    psycopg2 = None  # type: ignore[assignment]
    Json = None  # type: ignore[assignment]
    RealDictCursor = None  # type: ignore[assignment]
    PGConnection = Any  # type: ignore[assignment]

PLANS_TABLE_NAME = "travel_plans"
PLAN_ITEMS_TABLE_NAME = "travel_plan_items"


def get_connection(dsn: Optional[str] = None) -> PGConnection:
    """Return a new database connection using the configured DSN."""

    if psycopg2 is None:  # pragma: no cover - dependency missing in lightweight environments
        raise RuntimeError("psycopg2 is not installed; database operations are unavailable")
    connection_dsn = dsn or os.getenv("DATABASE_URL")
    if not connection_dsn:
        raise RuntimeError("No database DSN configured via DATABASE_URL")
    return psycopg2.connect(connection_dsn)


@contextmanager
def connection_ctx(dsn: Optional[str] = None) -> Generator[PGConnection, None, None]:
    """Context manager that yields a database connection and ensures it is closed."""

    connection = get_connection(dsn)
    try:
        yield connection
    finally:
        connection.close()


def dict_cursor(connection: PGConnection):
    """Open a cursor that returns rows as dictionaries when the driver allows it."""

    cursor_kwargs: Dict[str, Any] = {}
    if RealDictCursor is not None:
        cursor_kwargs["cursor_factory"] = RealDictCursor
    return connection.cursor(**cursor_kwargs)


def json_param(value: Any) -> Any:
    """Wrap a python value for a JSONB column."""

    if value is None:
        return None
    return Json(value) if Json is not None else value


def ensure_schema(connection: PGConnection) -> None:
    """Create the plan tables if they do not already exist."""

    with connection.cursor() as cursor:
        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {PLANS_TABLE_NAME} (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                plan_type TEXT NOT NULL,
                title TEXT,
                description TEXT,
                latitude DOUBLE PRECISION NOT NULL,
                longitude DOUBLE PRECISION NOT NULL,
                address TEXT NOT NULL DEFAULT '',
                search_radius DOUBLE PRECISION NOT NULL DEFAULT 5,
                travel_type TEXT,
                available_time TEXT,
                travel_style TEXT,
                start_date DATE,
                end_date DATE,
                start_time TEXT,
                end_time TEXT,
                budget TEXT,
                interests JSONB,
                preferences JSONB,
                status TEXT NOT NULL DEFAULT 'DRAFT',
                is_shared BOOLEAN NOT NULL DEFAULT FALSE,
                total_distance DOUBLE PRECISION,
                total_duration INTEGER,
                estimated_cost DOUBLE PRECISION,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        )
        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {PLAN_ITEMS_TABLE_NAME} (
                id TEXT PRIMARY KEY,
                plan_id TEXT NOT NULL REFERENCES {PLANS_TABLE_NAME}(id) ON DELETE CASCADE,
                "order" INTEGER NOT NULL,
                day_number INTEGER,
                time_slot TEXT,
                scheduled_time TIMESTAMPTZ,
                duration INTEGER NOT NULL DEFAULT 60,
                item_type TEXT NOT NULL,
                restaurant_id TEXT,
                place_id TEXT,
                travel_duration INTEGER,
                distance DOUBLE PRECISION,
                notes TEXT,
                tips TEXT,
                is_completed BOOLEAN NOT NULL DEFAULT FALSE,
                CHECK ((restaurant_id IS NULL) <> (place_id IS NULL))
            )
            """
        )
    connection.commit()


__all__ = [
    "PLANS_TABLE_NAME",
    "PLAN_ITEMS_TABLE_NAME",
    "connection_ctx",
    "dict_cursor",
    "ensure_schema",
    "get_connection",
    "json_param",
]
