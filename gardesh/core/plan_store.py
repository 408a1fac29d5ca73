"""Persistence for travel plans and their items."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Protocol

from gardesh.core import db
from gardesh.schemas import PlanStatus, PlanType, TravelPlan, TravelPlanItem


class PlanStoreError(RuntimeError):
    """Raised when the plan store cannot satisfy a request."""


_PLAN_COLUMNS = (
    "user_id",
    "plan_type",
    "title",
    "description",
    "latitude",
    "longitude",
    "address",
    "search_radius",
    "travel_type",
    "available_time",
    "travel_style",
    "start_date",
    "end_date",
    "start_time",
    "end_time",
    "budget",
    "interests",
    "preferences",
    "status",
    "is_shared",
    "total_distance",
    "total_duration",
    "estimated_cost",
)

_ITEM_COLUMNS = (
    "order",
    "day_number",
    "time_slot",
    "scheduled_time",
    "duration",
    "item_type",
    "restaurant_id",
    "place_id",
    "travel_duration",
    "distance",
    "notes",
    "tips",
    "is_completed",
)

_JSON_COLUMNS = {"interests", "preferences"}


class PlanStore(Protocol):
    """Persistence sink for generated plans."""

    def create_plan(self, fields: Mapping[str, Any]) -> TravelPlan:
        ...

    def create_item(self, plan_id: str, fields: Mapping[str, Any]) -> TravelPlanItem:
        ...

    def update_plan(self, plan_id: str, values: Mapping[str, Any]) -> TravelPlan:
        ...

    def delete_plan(self, plan_id: str) -> None:
        ...

    def get_plan(self, plan_id: str) -> Optional[TravelPlan]:
        ...

    def list_plans(
        self,
        user_id: str,
        *,
        plan_type: Optional[PlanType] = None,
        status: Optional[PlanStatus] = None,
    ) -> List[TravelPlan]:
        ...

    def max_item_order(self, plan_id: str, day_number: Optional[int]) -> int:
        ...

    def get_item(self, plan_id: str, item_id: str) -> Optional[TravelPlanItem]:
        ...

    def update_item(self, plan_id: str, item_id: str, values: Mapping[str, Any]) -> TravelPlanItem:
        ...

    def delete_item(self, plan_id: str, item_id: str) -> None:
        ...


def _storable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value


def _filter_columns(values: Mapping[str, Any], allowed: tuple[str, ...]) -> Dict[str, Any]:
    unknown = set(values) - set(allowed)
    if unknown:
        raise PlanStoreError(f"Unknown columns: {', '.join(sorted(unknown))}")
    return {key: _storable(value) for key, value in values.items()}


class InMemoryPlanStore:
    """Fallback store used when no database is configured."""

    def __init__(self) -> None:
        self._plans: MutableMapping[str, Dict[str, Any]] = {}
        self._items: MutableMapping[str, Dict[str, Dict[str, Any]]] = {}

    def _next_id(self) -> str:
        return str(uuid.uuid4())

    def _compose(self, plan_id: str, *, with_items: bool = True) -> TravelPlan:
        row = dict(self._plans[plan_id])
        items = list(self._items.get(plan_id, {}).values())
        row["item_count"] = len(items)
        if with_items:
            row["items"] = [TravelPlanItem.model_validate(item) for item in items]
        plan = TravelPlan.model_validate(row)
        plan.items.sort(key=lambda item: (item.day_number or 0, item.order))
        return plan

    def create_plan(self, fields: Mapping[str, Any]) -> TravelPlan:
        values = _filter_columns(fields, _PLAN_COLUMNS)
        plan_id = self._next_id()
        now = datetime.now(timezone.utc)
        row: Dict[str, Any] = {"status": PlanStatus.DRAFT.value, "is_shared": False}
        row.update(values)
        row.update({"id": plan_id, "created_at": now, "updated_at": now})
        self._plans[plan_id] = row
        self._items[plan_id] = {}
        return self._compose(plan_id)

    def create_item(self, plan_id: str, fields: Mapping[str, Any]) -> TravelPlanItem:
        if plan_id not in self._plans:
            raise PlanStoreError(f"Unknown plan: {plan_id}")
        values = _filter_columns(fields, _ITEM_COLUMNS)
        row: Dict[str, Any] = {"duration": 60, "is_completed": False}
        row.update(values)
        row.update({"id": self._next_id(), "plan_id": plan_id})
        item = TravelPlanItem.model_validate(row)
        self._items[plan_id][item.id] = row
        return item

    def update_plan(self, plan_id: str, values: Mapping[str, Any]) -> TravelPlan:
        if plan_id not in self._plans:
            raise PlanStoreError(f"Unknown plan: {plan_id}")
        self._plans[plan_id].update(_filter_columns(values, _PLAN_COLUMNS))
        self._plans[plan_id]["updated_at"] = datetime.now(timezone.utc)
        return self._compose(plan_id)

    def delete_plan(self, plan_id: str) -> None:
        self._plans.pop(plan_id, None)
        self._items.pop(plan_id, None)

    def get_plan(self, plan_id: str) -> Optional[TravelPlan]:
        if plan_id not in self._plans:
            return None
        return self._compose(plan_id)

    def list_plans(
        self,
        user_id: str,
        *,
        plan_type: Optional[PlanType] = None,
        status: Optional[PlanStatus] = None,
    ) -> List[TravelPlan]:
        plans: List[TravelPlan] = []
        for plan_id, row in self._plans.items():
            if row.get("user_id") != user_id:
                continue
            if plan_type is not None and row.get("plan_type") != plan_type.value:
                continue
            if status is not None and row.get("status") != status.value:
                continue
            plans.append(self._compose(plan_id, with_items=False))
        return sorted(
            plans,
            key=lambda plan: plan.created_at or datetime.now(timezone.utc),
            reverse=True,
        )

    def max_item_order(self, plan_id: str, day_number: Optional[int]) -> int:
        orders = [
            item["order"]
            for item in self._items.get(plan_id, {}).values()
            if item.get("day_number") == day_number
        ]
        return max(orders, default=0)

    def get_item(self, plan_id: str, item_id: str) -> Optional[TravelPlanItem]:
        row = self._items.get(plan_id, {}).get(item_id)
        return TravelPlanItem.model_validate(row) if row else None

    def update_item(self, plan_id: str, item_id: str, values: Mapping[str, Any]) -> TravelPlanItem:
        row = self._items.get(plan_id, {}).get(item_id)
        if row is None:
            raise PlanStoreError(f"Unknown plan item: {item_id}")
        candidate = dict(row)
        candidate.update(_filter_columns(values, _ITEM_COLUMNS))
        item = TravelPlanItem.model_validate(candidate)
        self._items[plan_id][item_id] = candidate
        return item

    def delete_item(self, plan_id: str, item_id: str) -> None:
        self._items.get(plan_id, {}).pop(item_id, None)


def _quote(column: str) -> str:
    return f'"{column}"'


def _sql_value(column: str, value: Any) -> Any:
    if column in _JSON_COLUMNS:
        return db.json_param(value)
    return value


class PostgresPlanStore:
    """Plan store writing to the ``travel_plans`` and ``travel_plan_items`` tables."""

    def __init__(self, dsn: Optional[str] = None) -> None:
        self._dsn = dsn

    def _execute(self, query: str, params: tuple[Any, ...] = ()) -> List[Dict[str, Any]]:
        with db.connection_ctx(self._dsn) as connection:
            with db.dict_cursor(connection) as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall() if cursor.description else []
            connection.commit()
        return [dict(row) for row in rows or []]

    def _fetch_items(self, plan_id: str) -> List[TravelPlanItem]:
        rows = self._execute(
            f'SELECT * FROM {db.PLAN_ITEMS_TABLE_NAME} WHERE plan_id = %s '
            'ORDER BY day_number ASC NULLS FIRST, "order" ASC',
            (plan_id,),
        )
        return [TravelPlanItem.model_validate(row) for row in rows]

    def create_plan(self, fields: Mapping[str, Any]) -> TravelPlan:
        values = _filter_columns(fields, _PLAN_COLUMNS)
        plan_id = str(uuid.uuid4())
        columns = ["id", *values.keys()]
        placeholders = ", ".join(["%s"] * len(columns))
        params = (plan_id, *(_sql_value(column, value) for column, value in values.items()))
        rows = self._execute(
            f"INSERT INTO {db.PLANS_TABLE_NAME} ({', '.join(_quote(c) for c in columns)}) "
            f"VALUES ({placeholders}) RETURNING *",
            params,
        )
        if not rows:
            raise PlanStoreError("Database did not return plan row on insert")
        return TravelPlan.model_validate(rows[0])

    def create_item(self, plan_id: str, fields: Mapping[str, Any]) -> TravelPlanItem:
        values = _filter_columns(fields, _ITEM_COLUMNS)
        columns = ["id", "plan_id", *values.keys()]
        placeholders = ", ".join(["%s"] * len(columns))
        params = (str(uuid.uuid4()), plan_id, *values.values())
        rows = self._execute(
            f"INSERT INTO {db.PLAN_ITEMS_TABLE_NAME} ({', '.join(_quote(c) for c in columns)}) "
            f"VALUES ({placeholders}) RETURNING *",
            params,
        )
        if not rows:
            raise PlanStoreError("Database did not return item row on insert")
        return TravelPlanItem.model_validate(rows[0])

    def update_plan(self, plan_id: str, values: Mapping[str, Any]) -> TravelPlan:
        updates = _filter_columns(values, _PLAN_COLUMNS)
        assignments = ", ".join(f"{_quote(column)} = %s" for column in updates)
        if assignments:
            assignments += ", "
        params = (*(_sql_value(column, value) for column, value in updates.items()), plan_id)
        rows = self._execute(
            f"UPDATE {db.PLANS_TABLE_NAME} SET {assignments}updated_at = NOW() "
            "WHERE id = %s RETURNING *",
            params,
        )
        if not rows:
            raise PlanStoreError(f"Unknown plan: {plan_id}")
        plan = TravelPlan.model_validate(rows[0])
        plan.items = self._fetch_items(plan_id)
        plan.item_count = len(plan.items)
        return plan

    def delete_plan(self, plan_id: str) -> None:
        self._execute(f"DELETE FROM {db.PLANS_TABLE_NAME} WHERE id = %s", (plan_id,))

    def get_plan(self, plan_id: str) -> Optional[TravelPlan]:
        rows = self._execute(f"SELECT * FROM {db.PLANS_TABLE_NAME} WHERE id = %s", (plan_id,))
        if not rows:
            return None
        plan = TravelPlan.model_validate(rows[0])
        plan.items = self._fetch_items(plan_id)
        plan.item_count = len(plan.items)
        return plan

    def list_plans(
        self,
        user_id: str,
        *,
        plan_type: Optional[PlanType] = None,
        status: Optional[PlanStatus] = None,
    ) -> List[TravelPlan]:
        query = (
            f"SELECT p.*, (SELECT COUNT(*) FROM {db.PLAN_ITEMS_TABLE_NAME} i "
            "WHERE i.plan_id = p.id) AS item_count "
            f"FROM {db.PLANS_TABLE_NAME} p WHERE p.user_id = %s"
        )
        params: List[Any] = [user_id]
        if plan_type is not None:
            query += " AND p.plan_type = %s"
            params.append(plan_type.value)
        if status is not None:
            query += " AND p.status = %s"
            params.append(status.value)
        query += " ORDER BY p.created_at DESC"
        return [TravelPlan.model_validate(row) for row in self._execute(query, tuple(params))]

    def max_item_order(self, plan_id: str, day_number: Optional[int]) -> int:
        rows = self._execute(
            f'SELECT MAX("order") AS max_order FROM {db.PLAN_ITEMS_TABLE_NAME} '
            "WHERE plan_id = %s AND day_number IS NOT DISTINCT FROM %s",
            (plan_id, day_number),
        )
        if not rows or rows[0].get("max_order") is None:
            return 0
        return int(rows[0]["max_order"])

    def get_item(self, plan_id: str, item_id: str) -> Optional[TravelPlanItem]:
        rows = self._execute(
            f"SELECT * FROM {db.PLAN_ITEMS_TABLE_NAME} WHERE plan_id = %s AND id = %s",
            (plan_id, item_id),
        )
        return TravelPlanItem.model_validate(rows[0]) if rows else None

    def update_item(self, plan_id: str, item_id: str, values: Mapping[str, Any]) -> TravelPlanItem:
        updates = _filter_columns(values, _ITEM_COLUMNS)
        if not updates:
            item = self.get_item(plan_id, item_id)
            if item is None:
                raise PlanStoreError(f"Unknown plan item: {item_id}")
            return item
        assignments = ", ".join(f"{_quote(column)} = %s" for column in updates)
        rows = self._execute(
            f"UPDATE {db.PLAN_ITEMS_TABLE_NAME} SET {assignments} "
            "WHERE plan_id = %s AND id = %s RETURNING *",
            (*updates.values(), plan_id, item_id),
        )
        if not rows:
            raise PlanStoreError(f"Unknown plan item: {item_id}")
        return TravelPlanItem.model_validate(rows[0])

    def delete_item(self, plan_id: str, item_id: str) -> None:
        self._execute(
            f"DELETE FROM {db.PLAN_ITEMS_TABLE_NAME} WHERE plan_id = %s AND id = %s",
            (plan_id, item_id),
        )


__all__ = ["InMemoryPlanStore", "PlanStore", "PlanStoreError", "PostgresPlanStore"]
