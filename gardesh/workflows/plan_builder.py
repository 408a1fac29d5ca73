"""Create, persist and manage travel plans built by :class:`TravelPlanner`."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from gardesh.core.plan_store import PlanStore
from gardesh.core.venue_store import VenueStore
from gardesh.planning import tables
from gardesh.planning.planner import TravelPlanner
from gardesh.schemas import (
    Candidate,
    DailyPlanRequest,
    Location,
    PlanItemType,
    PlanRequest,
    PlanStatus,
    PlanType,
    QuickPlanRequest,
    ScheduledItem,
    TimeSlot,
    TravelPlan,
    TravelPlanItem,
    TripPlanRequest,
    calendar_date,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_SEARCH_RADIUS_KM = 5.0
DEFAULT_ITEM_DURATION = 60

NO_ITEMS_MESSAGE = "No places were found in the selected area. Try a larger search radius."
NO_ITEMS_WITH_INTERESTS_MESSAGE = (
    "No places were found in the selected area. "
    "Try a larger search radius or different interests."
)

_UPDATABLE_PLAN_FIELDS = frozenset(
    {"title", "description", "status", "is_shared", "start_date", "end_date", "start_time", "end_time"}
)
_UPDATABLE_ITEM_FIELDS = frozenset(
    {"order", "day_number", "time_slot", "scheduled_time", "duration", "notes", "tips", "is_completed"}
)


class PlanError(RuntimeError):
    """Base error for plan orchestration failures."""


class PlanValidationError(PlanError):
    """Raised when a request is missing a field its plan type needs."""


class NoPlanItemsError(PlanError):
    """Raised when generation produced nothing; the draft plan has been removed."""


class PlanNotFoundError(PlanError):
    """Raised when a plan or plan item does not exist."""


class PlanAccessError(PlanError):
    """Raised when a user may not see or change a plan."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise PlanValidationError(message)


def _validate(request: PlanRequest) -> Location:
    """Check per-type required fields and return the plan anchor."""

    location = request.location
    if request.plan_type is None or location is None:
        raise PlanValidationError("Plan type and location are required.")
    if request.plan_type == PlanType.QUICK:
        _require(
            request.travel_type is not None and request.available_time is not None,
            "Travel type and available time are required for a quick plan.",
        )
    elif request.plan_type == PlanType.DAILY:
        _require(
            request.travel_type is not None
            and request.start_time is not None
            and request.end_time is not None,
            "Travel type and a start and end time are required for a daily plan.",
        )
    elif request.plan_type == PlanType.TRIP:
        _require(
            request.travel_type is not None
            and request.travel_style is not None
            and request.start_date is not None
            and request.end_date is not None,
            "Travel type, travel style and trip dates are required for a trip plan.",
        )
    return location


def _header_fields(request: PlanRequest, location: Location, user_id: str) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "plan_type": request.plan_type,
        "latitude": location.latitude,
        "longitude": location.longitude,
        "address": location.address,
        "search_radius": request.search_radius or DEFAULT_SEARCH_RADIUS_KM,
        "travel_type": request.travel_type,
        "available_time": request.available_time,
        "travel_style": request.travel_style,
        "start_date": calendar_date(request.start_date),
        "end_date": calendar_date(request.end_date),
        "start_time": request.start_time,
        "end_time": request.end_time,
        "budget": request.budget,
        "interests": list(request.interests) if request.interests else None,
        "preferences": dict(request.preferences) if request.preferences else None,
        "status": PlanStatus.DRAFT,
    }


def _venue_columns(venue: Candidate) -> Dict[str, Any]:
    if venue.kind == "restaurant":
        return {"item_type": PlanItemType.RESTAURANT, "restaurant_id": venue.id, "place_id": None}
    return {"item_type": PlanItemType.PLACE, "restaurant_id": None, "place_id": venue.id}


def _quick_item_fields(index: int, candidate: Candidate) -> Dict[str, Any]:
    fields = {
        "order": index + 1,
        "duration": DEFAULT_ITEM_DURATION,
        "distance": candidate.distance or None,
        "notes": candidate.tips,
    }
    fields.update(_venue_columns(candidate))
    return fields


def _scheduled_item_fields(item: ScheduledItem) -> Dict[str, Any]:
    fields = {
        "order": item.order,
        "day_number": item.day_number,
        "time_slot": item.time_slot,
        "scheduled_time": item.scheduled_time,
        "duration": item.duration,
        "travel_duration": item.travel_time or None,
        "distance": item.distance or None,
        "notes": item.venue.tips,
    }
    fields.update(_venue_columns(item.venue))
    return fields


class PlanBuilder:
    """Validate plan requests, run the planner and persist the results."""

    def __init__(
        self,
        planner: TravelPlanner,
        plan_store: PlanStore,
        venue_store: VenueStore,
    ) -> None:
        self.planner = planner
        self.plan_store = plan_store
        self.venue_store = venue_store

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def create_plan(
        self,
        request: Union[PlanRequest, Mapping[str, Any]],
        *,
        user_id: str,
    ) -> TravelPlan:
        """Generate and persist a plan; the returned plan is ``ACTIVE``."""

        if not isinstance(request, PlanRequest):
            request = PlanRequest.model_validate(request)
        location = _validate(request)

        pipeline_start = time.perf_counter()
        draft = self.plan_store.create_plan(_header_fields(request, location, user_id))
        _LOGGER.info("Created draft %s plan %s", draft.plan_type.value, draft.id)

        try:
            item_fields = self._generate(request, location)
            if not item_fields:
                _LOGGER.warning("No items generated for plan %s; draft removed", draft.id)
                message = NO_ITEMS_MESSAGE if request.plan_type == PlanType.QUICK else NO_ITEMS_WITH_INTERESTS_MESSAGE
                raise NoPlanItemsError(message)

            items = [self.plan_store.create_item(draft.id, fields) for fields in item_fields]
            plan = self.plan_store.update_plan(
                draft.id,
                {**self._aggregates(items), "status": PlanStatus.ACTIVE},
            )
        except Exception:
            # Items cascade with the plan.
            self.plan_store.delete_plan(draft.id)
            raise

        _LOGGER.info(
            "Plan %s completed with %d items in %.2fs",
            plan.id,
            len(items),
            time.perf_counter() - pipeline_start,
        )
        return self._attach_venues(plan)

    def _generate(self, request: PlanRequest, location: Location) -> List[Dict[str, Any]]:

        if request.plan_type == PlanType.QUICK:
            candidates = self.planner.generate_quick_plan(
                QuickPlanRequest(
                    location=location,
                    travel_type=request.travel_type,
                    available_time=request.available_time,
                )
            )
            return [_quick_item_fields(index, candidate) for index, candidate in enumerate(candidates)]

        if request.plan_type == PlanType.DAILY:
            scheduled = self.planner.generate_daily_plan(
                DailyPlanRequest(
                    location=location,
                    search_radius=request.search_radius or 20.0,
                    travel_type=request.travel_type,
                    start_time=request.start_time,
                    end_time=request.end_time,
                    budget=request.budget,
                    interests=request.interests,
                    plan_date=calendar_date(request.start_date),
                )
            )
            return [_scheduled_item_fields(item) for item in scheduled]

        days = self.planner.generate_trip_plan(
            TripPlanRequest(
                location=location,
                search_radius=request.search_radius or 30.0,
                start_date=request.start_date,
                end_date=request.end_date,
                travel_type=request.travel_type,
                travel_style=request.travel_style,
                budget=request.budget,
                preferences=request.preferences,
                interests=request.interests,
            )
        )
        fields: List[Dict[str, Any]] = []
        for day_number in sorted(days):
            fields.extend(_scheduled_item_fields(item) for item in days[day_number])
        return fields

    def _aggregates(self, items: Iterable[TravelPlanItem]) -> Dict[str, Any]:
        total_distance = 0.0
        total_duration = 0
        estimated_cost = 0.0
        for item in items:
            total_distance += item.distance or 0.0
            total_duration += (item.duration or 0) + (item.travel_duration or 0)
            if item.restaurant_id:
                restaurant = self.venue_store.get_restaurant(item.restaurant_id)
                if restaurant is not None:
                    estimated_cost += tables.restaurant_cost(restaurant.price_range)
            elif item.place_id:
                place = self.venue_store.get_place(item.place_id)
                if place is not None and not place.is_free and place.entry_fee:
                    estimated_cost += place.entry_fee
        return {
            "total_distance": total_distance,
            "total_duration": total_duration,
            "estimated_cost": estimated_cost,
        }

    def _attach_venues(self, plan: TravelPlan) -> TravelPlan:
        items: List[TravelPlanItem] = []
        for item in plan.all_items():
            if item.restaurant_id:
                item = item.model_copy(update={"restaurant": self.venue_store.get_restaurant(item.restaurant_id)})
            elif item.place_id:
                item = item.model_copy(update={"place": self.venue_store.get_place(item.place_id)})
            items.append(item)
        return plan.model_copy(update={"items": items, "item_count": len(items)})

    # ------------------------------------------------------------------
    # Management
    # ------------------------------------------------------------------
    def _load(self, plan_id: str) -> TravelPlan:
        plan = self.plan_store.get_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(f"Plan {plan_id} was not found.")
        return plan

    def _load_owned(self, plan_id: str, user_id: str) -> TravelPlan:
        plan = self._load(plan_id)
        if plan.user_id != user_id:
            raise PlanAccessError("Only the owner can change this plan.")
        return plan

    def get_plan(self, plan_id: str, user_id: Optional[str]) -> TravelPlan:
        """Return a plan visible to ``user_id`` (its owner, or anyone when shared)."""

        plan = self._load(plan_id)
        if plan.user_id != user_id and not plan.is_shared:
            raise PlanAccessError("You do not have access to this plan.")
        return self._attach_venues(plan)

    def list_plans(
        self,
        user_id: str,
        *,
        plan_type: Optional[PlanType] = None,
        status: Optional[PlanStatus] = None,
    ) -> List[TravelPlan]:
        return self.plan_store.list_plans(user_id, plan_type=plan_type, status=status)

    def update_plan(self, plan_id: str, user_id: str, **changes: Any) -> TravelPlan:
        self._load_owned(plan_id, user_id)
        unknown = set(changes) - _UPDATABLE_PLAN_FIELDS
        if unknown:
            raise PlanValidationError(f"Cannot update plan fields: {', '.join(sorted(unknown))}")
        values = dict(changes)
        if "status" in values and values["status"] is not None:
            values["status"] = PlanStatus(values["status"])
        for key in ("start_date", "end_date"):
            if isinstance(values.get(key), datetime):
                values[key] = values[key].date()
        updated = self.plan_store.update_plan(plan_id, values)
        _LOGGER.info("Updated plan %s fields: %s", plan_id, ", ".join(sorted(values)))
        return self._attach_venues(updated)

    def delete_plan(self, plan_id: str, user_id: str) -> None:
        self._load_owned(plan_id, user_id)
        self.plan_store.delete_plan(plan_id)
        _LOGGER.info("Deleted plan %s", plan_id)

    def add_item(
        self,
        plan_id: str,
        user_id: str,
        *,
        restaurant_id: Optional[str] = None,
        place_id: Optional[str] = None,
        order: Optional[int] = None,
        day_number: Optional[int] = None,
        time_slot: Optional[TimeSlot] = None,
        scheduled_time: Optional[datetime] = None,
        duration: Optional[int] = None,
        notes: Optional[str] = None,
        tips: Optional[str] = None,
    ) -> TravelPlanItem:
        """Append a venue to a plan; ``order`` defaults to the end of its day."""

        self._load_owned(plan_id, user_id)
        if bool(restaurant_id) == bool(place_id):
            raise PlanValidationError("Exactly one of restaurant or place must be given.")
        if order is None:
            order = self.plan_store.max_item_order(plan_id, day_number) + 1
        fields: Dict[str, Any] = {
            "order": order,
            "day_number": day_number,
            "time_slot": time_slot,
            "scheduled_time": scheduled_time,
            "duration": duration or DEFAULT_ITEM_DURATION,
            "item_type": PlanItemType.RESTAURANT if restaurant_id else PlanItemType.PLACE,
            "restaurant_id": restaurant_id,
            "place_id": place_id,
            "notes": notes,
            "tips": tips,
        }
        item = self.plan_store.create_item(plan_id, fields)
        _LOGGER.info("Added item %s to plan %s at position %d", item.id, plan_id, order)
        return item

    def update_item(self, plan_id: str, item_id: str, user_id: str, **changes: Any) -> TravelPlanItem:
        self._load_owned(plan_id, user_id)
        unknown = set(changes) - _UPDATABLE_ITEM_FIELDS
        if unknown:
            raise PlanValidationError(f"Cannot update item fields: {', '.join(sorted(unknown))}")
        if self.plan_store.get_item(plan_id, item_id) is None:
            raise PlanNotFoundError(f"Item {item_id} was not found in plan {plan_id}.")
        return self.plan_store.update_item(plan_id, item_id, changes)

    def remove_item(self, plan_id: str, item_id: str, user_id: str) -> None:
        self._load_owned(plan_id, user_id)
        if self.plan_store.get_item(plan_id, item_id) is None:
            raise PlanNotFoundError(f"Item {item_id} was not found in plan {plan_id}.")
        self.plan_store.delete_item(plan_id, item_id)


__all__ = [
    "DEFAULT_ITEM_DURATION",
    "DEFAULT_SEARCH_RADIUS_KM",
    "NoPlanItemsError",
    "PlanAccessError",
    "PlanBuilder",
    "PlanError",
    "PlanNotFoundError",
    "PlanValidationError",
]
