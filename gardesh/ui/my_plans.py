"""My plans tab: saved plans with filters, open and delete actions."""

from __future__ import annotations

import logging
from typing import List, Optional

import streamlit as st

from gardesh.schemas import PlanStatus, PlanType, TravelPlan
from gardesh.ui.plan import _PLAN_KEY, current_user_id, plan_builder

_LOGGER = logging.getLogger(__name__)

MY_PLANS_STATUS_KEY = "_my_plans_status"

_ALL = "All"


def _plan_caption(plan: TravelPlan) -> str:
    parts: List[str] = [plan.plan_type.value.title(), plan.status.value.title()]
    if plan.item_count is not None:
        parts.append(f"{plan.item_count} stops")
    if plan.start_date:
        parts.append(f"{plan.start_date:%b %d, %Y}")
    if plan.created_at:
        parts.append(f"created {plan.created_at:%Y-%m-%d %H:%M}")
    return " · ".join(parts)


def _plan_name(plan: TravelPlan) -> str:
    return plan.title or plan.address or f"{plan.plan_type.value.title()} plan"


def _load_plans(plan_type: Optional[PlanType], status: Optional[PlanStatus]) -> List[TravelPlan]:
    try:
        return plan_builder().list_plans(current_user_id(), plan_type=plan_type, status=status)
    except Exception as exc:  # noqa: BLE001 - surfaced to the user
        _LOGGER.exception("Unable to list plans")
        st.error(f"Unable to load your plans: {exc}")
        return []


def _render_plan_row(plan: TravelPlan) -> None:
    with st.container(border=True):
        cols = st.columns([5, 1, 1])
        cols[0].markdown(f"**{_plan_name(plan)}**")
        cols[0].caption(_plan_caption(plan))
        if cols[1].button("Open", key=f"my_plans_open_{plan.id}", use_container_width=True):
            try:
                st.session_state[_PLAN_KEY] = plan_builder().get_plan(plan.id, current_user_id())
            except Exception as exc:  # noqa: BLE001 - surfaced to the user
                st.error(f"Unable to open plan: {exc}")
            else:
                st.session_state["_focus_itinerary"] = True
                st.session_state[MY_PLANS_STATUS_KEY] = f"Opened {_plan_name(plan)}."
                st.rerun()
        if cols[2].button("Delete", key=f"my_plans_delete_{plan.id}", use_container_width=True):
            try:
                plan_builder().delete_plan(plan.id, current_user_id())
            except Exception as exc:  # noqa: BLE001 - surfaced to the user
                st.error(f"Unable to delete plan: {exc}")
            else:
                current = st.session_state.get(_PLAN_KEY)
                if current is not None and current.id == plan.id:
                    st.session_state[_PLAN_KEY] = None
                st.session_state[MY_PLANS_STATUS_KEY] = f"Deleted {_plan_name(plan)}."
                st.rerun()


def render_my_plans_tab(container) -> None:
    """Render the list of the current user's plans."""

    with container:
        st.subheader("My plans")

        status_message = st.session_state.pop(MY_PLANS_STATUS_KEY, None)
        if status_message:
            st.success(status_message)

        cols = st.columns(2)
        type_choice = cols[0].selectbox(
            "Plan type", [_ALL, *[value.value for value in PlanType]], key="my_plans_type"
        )
        status_choice = cols[1].selectbox(
            "Status", [_ALL, *[value.value for value in PlanStatus]], key="my_plans_status"
        )
        plan_type = None if type_choice == _ALL else PlanType(type_choice)
        status = None if status_choice == _ALL else PlanStatus(status_choice)

        plans = _load_plans(plan_type, status)
        if not plans:
            st.info("No plans yet. Build one from the Plan tab to see it here.")
            return

        for plan in plans:
            _render_plan_row(plan)


__all__ = ["MY_PLANS_STATUS_KEY", "render_my_plans_tab"]
