"""UI helpers for viewing a generated plan."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import streamlit as st

from gardesh.schemas import PlanType, TimeSlot, TravelPlan, TravelPlanItem
from gardesh.ui.plan import _PLAN_ERROR_KEY, _PLAN_KEY, current_user_id, plan_builder

_LOGGER = logging.getLogger(__name__)

SELECTED_ITEM_KEY = "_itinerary_selected_item"

_SLOT_LABELS: Dict[TimeSlot, str] = {
    TimeSlot.MORNING: "Morning",
    TimeSlot.NOON: "Noon",
    TimeSlot.AFTERNOON: "Afternoon",
    TimeSlot.EVENING: "Evening",
    TimeSlot.NIGHT: "Night",
}


def _format_minutes(minutes: Optional[int]) -> str:
    if not minutes:
        return "0 min"
    hours, remainder = divmod(int(minutes), 60)
    if hours and remainder:
        return f"{hours} h {remainder} min"
    if hours:
        return f"{hours} h"
    return f"{remainder} min"


def _format_distance(distance: Optional[float]) -> str:
    if distance is None:
        return ""
    return f"{distance:.1f} km"


def _format_cost(cost: Optional[float]) -> str:
    if not cost:
        return "Free"
    return f"{cost:,.0f} IRR"


def _format_time_range(item: TravelPlanItem) -> str:
    start: Optional[datetime] = item.scheduled_time
    if start is None:
        return ""
    end = start + timedelta(minutes=item.duration or 0)
    return f"{start:%H:%M}–{end:%H:%M}"


def _day_label(plan: TravelPlan, day_number: Optional[int]) -> str:
    if day_number is None:
        return "Stops"
    if plan.start_date:
        day = plan.start_date + timedelta(days=day_number - 1)
        return f"Day {day_number}: {day:%A, %b %d}"
    return f"Day {day_number}"


def _item_title(item: TravelPlanItem) -> str:
    return item.venue_name or item.restaurant_id or item.place_id or "Stop"


def _item_details(item: TravelPlanItem) -> List[str]:
    details: List[str] = []
    time_range = _format_time_range(item)
    if time_range:
        details.append(time_range)
    if item.time_slot:
        details.append(_SLOT_LABELS[item.time_slot])
    details.append(_format_minutes(item.duration))
    if item.travel_duration:
        details.append(f"{_format_minutes(item.travel_duration)} travel")
    distance = _format_distance(item.distance)
    if distance:
        details.append(distance)
    return details


def _plan_heading(plan: TravelPlan) -> str:
    if plan.title:
        return plan.title
    label = {
        PlanType.QUICK: "Quick outing",
        PlanType.DAILY: "Day plan",
        PlanType.TRIP: "Trip",
    }[plan.plan_type]
    return f"{label} near {plan.address}" if plan.address else label


def _toggle_completion(plan: TravelPlan, item: TravelPlanItem) -> None:
    builder = plan_builder()
    try:
        builder.update_item(plan.id, item.id, current_user_id(), is_completed=not item.is_completed)
        st.session_state[_PLAN_KEY] = builder.get_plan(plan.id, current_user_id())
    except Exception as exc:  # noqa: BLE001 - surfaced to the user
        _LOGGER.exception("Unable to update plan item %s", item.id)
        st.error(f"Unable to update the stop: {exc}")


def _render_item(plan: TravelPlan, item: TravelPlanItem) -> None:
    with st.container(border=True):
        cols = st.columns([6, 1])
        marker = "✅ " if item.is_completed else ""
        cols[0].markdown(f"**{item.order}. {marker}{_item_title(item)}**")
        cols[0].caption(" · ".join(_item_details(item)))
        venue = item.restaurant or item.place
        if venue is not None and venue.address:
            cols[0].write(venue.address)
        if item.notes:
            cols[0].write(item.notes)
        label = "Undo" if item.is_completed else "Done"
        if cols[1].button(label, key=f"complete_{item.id}"):
            _toggle_completion(plan, item)
            st.rerun()


def render_itinerary_tab(container) -> None:
    """Render the currently selected plan grouped by day."""

    plan: Optional[TravelPlan] = st.session_state.get(_PLAN_KEY)
    error_message = st.session_state.get(_PLAN_ERROR_KEY)

    with container:
        st.subheader("Itinerary")

        if error_message:
            st.error(error_message)

        if not plan:
            st.info("Build a plan from the Plan tab to see it here.")
            return

        st.markdown(f"### {_plan_heading(plan)}")
        if plan.start_date and plan.end_date:
            st.write(f"Dates: {plan.start_date:%b %d, %Y} – {plan.end_date:%b %d, %Y}")
        if plan.interests:
            st.caption("Interests: " + ", ".join(plan.interests))

        metrics = st.columns(4)
        metrics[0].metric("Stops", len(plan.items))
        metrics[1].metric("Distance", _format_distance(plan.total_distance or 0.0))
        metrics[2].metric("Duration", _format_minutes(plan.total_duration))
        metrics[3].metric("Estimated cost", _format_cost(plan.estimated_cost))

        for day_number, items in plan.days().items():
            st.markdown(f"#### {_day_label(plan, day_number)}")
            for item in items:
                _render_item(plan, item)


__all__ = ["SELECTED_ITEM_KEY", "render_itinerary_tab"]
