"""Streamlit entry point for the Gardesh application."""
from __future__ import annotations

from typing import Sequence

import streamlit as st
from dotenv import load_dotenv

from gardesh.ui import (
    ensure_plan_state,
    render_itinerary_tab,
    render_map_tab,
    render_my_plans_tab,
    render_plan_tab,
)


_TAB_ORDER: Sequence[str] = ("Plan", "Itinerary", "Map", "My plans")


def configure() -> None:
    """Configure global Streamlit settings and load environment variables."""

    load_dotenv()
    st.set_page_config(page_title="Gardesh", layout="wide")


def _resolve_tab_order() -> Sequence[str]:
    """Return the ordered list of tab labels for the current render cycle."""

    default_tab = st.session_state.get("app_active_tab", "Plan")
    focus_itinerary = st.session_state.pop("_focus_itinerary", False)
    if focus_itinerary:
        default_tab = "Itinerary"

    if default_tab not in _TAB_ORDER:
        default_tab = "Plan"

    ordered = [default_tab, *[label for label in _TAB_ORDER if label != default_tab]]
    st.session_state["app_active_tab"] = default_tab
    return ordered


def render() -> None:
    """Render the Gardesh multi-tab shell."""

    ensure_plan_state()

    st.title("🧭 Gardesh")

    ordered_tabs = _resolve_tab_order()
    tab_containers = st.tabs(list(ordered_tabs))
    tab_lookup = {label: container for label, container in zip(ordered_tabs, tab_containers)}

    render_plan_tab(tab_lookup["Plan"])
    render_itinerary_tab(tab_lookup["Itinerary"])
    render_map_tab(tab_lookup["Map"])
    render_my_plans_tab(tab_lookup["My plans"])


if __name__ == "__main__":
    configure()
    render()
