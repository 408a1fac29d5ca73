"""Plan tab: request forms for quick, daily and multi-day plans."""

from __future__ import annotations

import logging
from datetime import date, time, timedelta
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import streamlit as st

from gardesh.core.backends import DEFAULT_USER_ID, build_stores
from gardesh.planning import SettingGatedEnhancer, TravelPlanner
from gardesh.planning.tables import FOOD_PREFERENCE_LABEL, PLACE_TYPE_PREFERENCE_LABEL
from gardesh.schemas import (
    AvailableTime,
    Budget,
    PlanType,
    TravelPlan,
    TravelStyle,
    TravelType,
)
from gardesh.workflows import NoPlanItemsError, PlanBuilder, PlanValidationError

_LOGGER = logging.getLogger(__name__)

_BUILDER_KEY = "_plan_builder"
_PLAN_KEY = "travel_plan"
_PLAN_ERROR_KEY = "plan_error"

_PLAN_TYPE_LABELS: Mapping[PlanType, str] = {
    PlanType.QUICK: "Quick outing",
    PlanType.DAILY: "Day plan",
    PlanType.TRIP: "Multi-day trip",
}
_TRAVEL_TYPE_LABELS: Mapping[TravelType, str] = {
    TravelType.SOLO: "Solo",
    TravelType.COUPLE: "Couple",
    TravelType.FAMILY_WITH_KIDS: "Family with kids",
    TravelType.FAMILY_ADULTS: "Family (adults)",
    TravelType.FRIENDS: "Friends",
}
_AVAILABLE_TIME_LABELS: Mapping[AvailableTime, str] = {
    AvailableTime.ONE_TO_TWO_HOURS: "1-2 hours",
    AvailableTime.HALF_DAY: "Half a day",
    AvailableTime.FULL_DAY: "Full day",
}
_TRAVEL_STYLE_LABELS: Mapping[TravelStyle, str] = {
    TravelStyle.RELAXED: "Relaxed",
    TravelStyle.BALANCED: "Balanced",
    TravelStyle.ADVENTUROUS: "Adventurous",
}
_BUDGET_LABELS: Mapping[Budget, str] = {
    Budget.ANY: "Any",
    Budget.ECONOMIC: "Economic",
    Budget.MODERATE: "Moderate",
    Budget.LUXURY: "Luxury",
}

# (interest keyword understood by the planner, label)
_INTEREST_OPTIONS: Sequence[Tuple[str, str]] = (
    ("restaurant", "Restaurants & cafes"),
    ("nature", "Nature"),
    ("beach", "Beach"),
    ("mountain", "Mountain"),
    ("museum", "Museums"),
    ("historical", "Historical sites"),
    ("entertainment", "Entertainment"),
    ("place", "Any attraction"),
)

_DEFAULT_LOCATION = (36.9000, 50.6500, "Ramsar")


def _preference_labels() -> List[str]:
    labels = [FOOD_PREFERENCE_LABEL]
    for label in PLACE_TYPE_PREFERENCE_LABEL.values():
        if label not in labels:
            labels.append(label)
    return labels


def ensure_plan_state() -> None:
    """Initialise the Streamlit session state used by the planner UI."""

    st.session_state.setdefault(_PLAN_KEY, None)
    st.session_state.setdefault(_PLAN_ERROR_KEY, None)


def current_user_id() -> str:
    return str(st.session_state.get("user_id") or DEFAULT_USER_ID)


def plan_builder() -> PlanBuilder:
    """Return the session's :class:`PlanBuilder`, creating it on first use."""

    builder = st.session_state.get(_BUILDER_KEY)
    if not isinstance(builder, PlanBuilder):
        venue_store, plan_store = build_stores()
        planner = TravelPlanner(venue_store, enhancer=SettingGatedEnhancer(venue_store))
        builder = PlanBuilder(planner, plan_store, venue_store)
        st.session_state[_BUILDER_KEY] = builder
    return builder


def build_plan_payload(
    plan_type: PlanType,
    *,
    latitude: float,
    longitude: float,
    address: str = "",
    travel_type: Optional[TravelType] = None,
    available_time: Optional[AvailableTime] = None,
    search_radius: Optional[float] = None,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    travel_style: Optional[TravelStyle] = None,
    budget: Optional[Budget] = None,
    interests: Sequence[str] = (),
    preferences: Optional[Mapping[str, float]] = None,
) -> Dict[str, Any]:
    """Collect form values into a plan request payload, dropping unused fields."""

    payload: Dict[str, Any] = {
        "plan_type": plan_type,
        "location": {"latitude": latitude, "longitude": longitude, "address": address.strip()},
        "travel_type": travel_type,
    }
    if plan_type == PlanType.QUICK:
        payload["available_time"] = available_time
        return payload

    payload["search_radius"] = search_radius
    payload["budget"] = None if budget == Budget.ANY else budget
    payload["interests"] = list(interests)
    if plan_type == PlanType.DAILY:
        payload.update({"start_time": start_time, "end_time": end_time, "start_date": start_date})
    else:
        payload.update(
            {
                "start_date": start_date,
                "end_date": end_date,
                "travel_style": travel_style,
                "preferences": {key: float(value) for key, value in (preferences or {}).items() if value},
            }
        )
    return payload


def _format_plan_error(exc: Exception) -> str:
    if isinstance(exc, (PlanValidationError, NoPlanItemsError)):
        return str(exc)

    base_message = "Unable to create the plan."
    details = str(exc).strip()
    if details:
        lowered = details.lower()
        if "database_url" in lowered or "psycopg2" in lowered:
            return (
                f"{base_message} Configure the database by setting the "
                "DATABASE_URL environment variable, or set GARDESH_STORE=memory."
            )
        return f"{base_message} {details}"
    return f"{base_message} Check your configuration and try again."


def _handle_submit(payload: Mapping[str, Any]) -> Optional[TravelPlan]:
    try:
        with st.spinner("Building your plan…"):
            plan = plan_builder().create_plan(payload, user_id=current_user_id())
    except Exception as exc:  # noqa: BLE001 - surfaced to the user
        friendly_message = _format_plan_error(exc)
        if not isinstance(exc, (PlanValidationError, NoPlanItemsError)):
            _LOGGER.exception("Plan creation failed")
        st.session_state[_PLAN_ERROR_KEY] = friendly_message
        st.error(friendly_message)
        return None

    st.session_state[_PLAN_ERROR_KEY] = None
    st.session_state[_PLAN_KEY] = plan
    st.session_state["_focus_itinerary"] = True
    st.success(f"Plan ready with {len(plan.items)} stops. Check the Itinerary tab for details.")
    return plan


def _select_enum(label: str, labels: Mapping[Any, str], *, key: str, index: int = 0):
    options = list(labels)
    return st.selectbox(label, options, index=index, format_func=lambda value: labels[value], key=key)


def _render_location_inputs(plan_type: PlanType) -> Tuple[float, float, str]:
    default_lat, default_lon, default_address = _DEFAULT_LOCATION
    cols = st.columns(3)
    latitude = cols[0].number_input(
        "Latitude", min_value=-90.0, max_value=90.0, value=default_lat, format="%.4f",
        key=f"{plan_type.value}_lat",
    )
    longitude = cols[1].number_input(
        "Longitude", min_value=-180.0, max_value=180.0, value=default_lon, format="%.4f",
        key=f"{plan_type.value}_lon",
    )
    address = cols[2].text_input("Address", value=default_address, key=f"{plan_type.value}_address")
    return float(latitude), float(longitude), address


def _render_interests(plan_type: PlanType) -> List[str]:
    labels = dict(_INTEREST_OPTIONS)
    return st.multiselect(
        "Interests",
        options=[keyword for keyword, _ in _INTEREST_OPTIONS],
        format_func=lambda keyword: labels[keyword],
        key=f"{plan_type.value}_interests",
        help="Leave empty to consider every restaurant and attraction.",
    )


def _render_quick_form() -> Optional[Dict[str, Any]]:
    with st.form("quick_plan_form"):
        latitude, longitude, address = _render_location_inputs(PlanType.QUICK)
        travel_type = _select_enum("Who is travelling?", _TRAVEL_TYPE_LABELS, key="quick_travel_type")
        available_time = _select_enum("How much time do you have?", _AVAILABLE_TIME_LABELS, key="quick_time")
        submitted = st.form_submit_button("Build quick plan", type="primary")
    if not submitted:
        return None
    return build_plan_payload(
        PlanType.QUICK,
        latitude=latitude,
        longitude=longitude,
        address=address,
        travel_type=travel_type,
        available_time=available_time,
    )


def _render_daily_form() -> Optional[Dict[str, Any]]:
    with st.form("daily_plan_form"):
        latitude, longitude, address = _render_location_inputs(PlanType.DAILY)
        travel_type = _select_enum("Who is travelling?", _TRAVEL_TYPE_LABELS, key="daily_travel_type")
        cols = st.columns(3)
        plan_date = cols[0].date_input("Date", value=date.today(), key="daily_date")
        start_time = cols[1].time_input("Start", value=time(9, 0), key="daily_start")
        end_time = cols[2].time_input("End", value=time(18, 0), key="daily_end")
        search_radius = st.slider("Search radius (km)", 1, 100, 20, key="daily_radius")
        budget = _select_enum("Budget", _BUDGET_LABELS, key="daily_budget")
        interests = _render_interests(PlanType.DAILY)
        submitted = st.form_submit_button("Build day plan", type="primary")
    if not submitted:
        return None
    return build_plan_payload(
        PlanType.DAILY,
        latitude=latitude,
        longitude=longitude,
        address=address,
        travel_type=travel_type,
        search_radius=float(search_radius),
        start_time=start_time,
        end_time=end_time,
        start_date=plan_date,
        budget=budget,
        interests=interests,
    )


def _render_trip_form() -> Optional[Dict[str, Any]]:
    with st.form("trip_plan_form"):
        latitude, longitude, address = _render_location_inputs(PlanType.TRIP)
        cols = st.columns(2)
        with cols[0]:
            travel_type = _select_enum("Who is travelling?", _TRAVEL_TYPE_LABELS, key="trip_travel_type")
        with cols[1]:
            travel_style = _select_enum("Travel style", _TRAVEL_STYLE_LABELS, key="trip_style", index=1)
        date_cols = st.columns(2)
        start_date = date_cols[0].date_input("Start date", value=date.today(), key="trip_start")
        end_date = date_cols[1].date_input("End date", value=date.today() + timedelta(days=3), key="trip_end")
        search_radius = st.slider("Search radius (km)", 1, 200, 30, key="trip_radius")
        budget = _select_enum("Budget", _BUDGET_LABELS, key="trip_budget")
        interests = _render_interests(PlanType.TRIP)
        st.markdown("**Preferences**")
        preferences: Dict[str, float] = {}
        slider_cols = st.columns(4)
        for index, label in enumerate(_preference_labels()):
            preferences[label] = slider_cols[index % 4].slider(label, 0, 10, 0, key=f"trip_pref_{index}")
        submitted = st.form_submit_button("Build trip plan", type="primary")
    if not submitted:
        return None
    if end_date <= start_date:
        st.warning("The end date must be after the start date.")
        return None
    return build_plan_payload(
        PlanType.TRIP,
        latitude=latitude,
        longitude=longitude,
        address=address,
        travel_type=travel_type,
        search_radius=float(search_radius),
        start_date=start_date,
        end_date=end_date,
        travel_style=travel_style,
        budget=budget,
        interests=interests,
        preferences=preferences,
    )


_FORM_RENDERERS = {
    PlanType.QUICK: _render_quick_form,
    PlanType.DAILY: _render_daily_form,
    PlanType.TRIP: _render_trip_form,
}


def render_plan_tab(container) -> None:
    """Render the plan request forms inside the provided container."""

    with container:
        st.subheader("Plan")
        plan_type = st.radio(
            "Plan type",
            options=list(_PLAN_TYPE_LABELS),
            format_func=lambda value: _PLAN_TYPE_LABELS[value],
            horizontal=True,
            key="plan_type_choice",
        )
        payload = _FORM_RENDERERS[plan_type]()
        if payload is not None:
            _handle_submit(payload)


__all__ = [
    "build_plan_payload",
    "current_user_id",
    "ensure_plan_state",
    "plan_builder",
    "render_plan_tab",
]
