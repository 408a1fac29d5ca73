"""Gardesh Streamlit UI helpers."""

from __future__ import annotations

from .itinerary import SELECTED_ITEM_KEY, render_itinerary_tab
from .map import render_map_tab
from .my_plans import render_my_plans_tab
from .plan import ensure_plan_state, render_plan_tab

__all__ = [
    "ensure_plan_state",
    "render_plan_tab",
    "render_itinerary_tab",
    "render_map_tab",
    "render_my_plans_tab",
    "SELECTED_ITEM_KEY",
]
