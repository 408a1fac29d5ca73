"""Interactive plan map view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pydeck as pdk
import streamlit as st

from gardesh.schemas import TravelPlan
from gardesh.ui.itinerary import SELECTED_ITEM_KEY
from gardesh.ui.plan import _PLAN_KEY

_MAP_DAY_FILTER_KEY = "_map_day_filter"
_STOP_LAYER_ID = "plan-stops"
_ANCHOR_LAYER_ID = "plan-anchor"
_PATH_LAYER_ID = "plan-path"

_DAY_COLORS: Sequence[Tuple[int, int, int, int]] = (
    (59, 130, 246, 200),   # blue
    (34, 197, 94, 200),    # green
    (249, 115, 22, 200),   # orange
    (217, 70, 239, 200),   # purple
    (234, 179, 8, 200),    # amber
    (14, 165, 233, 200),   # sky
)

_ANCHOR_COLOR: Tuple[int, int, int, int] = (220, 38, 38, 230)
_SELECTED_COLOR: Tuple[int, int, int, int] = (29, 78, 216, 255)


@dataclass
class _Marker:
    position: Tuple[float, float]
    title: str
    subtitle: str
    item_id: str
    day_number: int
    color: Tuple[int, int, int, int]
    radius: int

    def as_dict(self) -> Dict[str, object]:
        longitude, latitude = self.position
        return {
            "id": self.item_id,
            "longitude": longitude,
            "latitude": latitude,
            "color": list(self.color),
            "radius": self.radius,
            "title": self.title,
            "subtitle": self.subtitle,
            "day_number": self.day_number,
        }


def _day_color(day_number: int) -> Tuple[int, int, int, int]:
    return _DAY_COLORS[(day_number - 1) % len(_DAY_COLORS)]


def _collect_markers(plan: TravelPlan, selected_item: Optional[str] = None) -> List[_Marker]:
    markers: List[_Marker] = []
    for day_number, items in plan.days().items():
        day = day_number or 1
        for item in items:
            venue = item.restaurant or item.place
            if venue is None:
                continue
            is_selected = selected_item == item.id
            markers.append(
                _Marker(
                    position=(venue.longitude, venue.latitude),
                    title=f"{item.order}. {venue.name}",
                    subtitle=f"Day {day}" if day_number else "Quick plan",
                    item_id=item.id,
                    day_number=day,
                    color=_SELECTED_COLOR if is_selected else _day_color(day),
                    radius=120 if is_selected else 80,
                )
            )
    return markers


def _collect_paths(plan: TravelPlan) -> List[Dict[str, object]]:
    """One path per day starting at the plan's anchor, following the visit order."""

    anchor = (plan.longitude, plan.latitude)
    paths: List[Dict[str, object]] = []
    for day_number, items in plan.days().items():
        day = day_number or 1
        path: List[Tuple[float, float]] = [anchor]
        for item in items:
            venue = item.restaurant or item.place
            if venue is None:
                continue
            path.append((venue.longitude, venue.latitude))
        if len(path) >= 2:
            paths.append({"path": path, "color": list(_day_color(day)), "day_number": day})
    return paths


def _compute_view_state(plan: TravelPlan, markers: Sequence[_Marker]) -> pdk.ViewState:
    points = [(plan.longitude, plan.latitude), *(marker.position for marker in markers)]
    avg_lon = sum(point[0] for point in points) / len(points)
    avg_lat = sum(point[1] for point in points) / len(points)
    if len(points) <= 2:
        zoom = 13
    elif len(points) <= 6:
        zoom = 12
    else:
        zoom = 10
    return pdk.ViewState(latitude=avg_lat, longitude=avg_lon, zoom=zoom)


def _day_filter_options(plan: TravelPlan) -> List[Tuple[str, Optional[int]]]:
    options: List[Tuple[str, Optional[int]]] = [("All days", None)]
    for day_number in plan.days():
        if day_number is not None:
            options.append((f"Day {day_number}", day_number))
    return options


def _build_deck(plan: TravelPlan, markers: List[_Marker], paths: List[Dict[str, object]]) -> pdk.Deck:
    layers = [
        pdk.Layer(
            "ScatterplotLayer",
            data=[
                {
                    "longitude": plan.longitude,
                    "latitude": plan.latitude,
                    "title": plan.address or "Start",
                    "subtitle": "Starting point",
                }
            ],
            id=_ANCHOR_LAYER_ID,
            get_position="[longitude, latitude]",
            get_fill_color=list(_ANCHOR_COLOR),
            get_radius=100,
            radius_units="meters",
            pickable=True,
        )
    ]
    if markers:
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                data=[marker.as_dict() for marker in markers],
                id=_STOP_LAYER_ID,
                get_position="[longitude, latitude]",
                get_fill_color="color",
                get_line_color="color",
                get_radius="radius",
                radius_units="meters",
                pickable=True,
                stroked=True,
            )
        )
    if paths:
        layers.append(
            pdk.Layer(
                "PathLayer",
                data=paths,
                id=_PATH_LAYER_ID,
                get_path="path",
                get_color="color",
                get_width=4,
                width_min_pixels=2,
            )
        )

    tooltip = {
        "html": "<b>{title}</b><br/>{subtitle}",
        "style": {"backgroundColor": "#111", "color": "white"},
    }
    return pdk.Deck(
        map_style="https://basemaps.cartocdn.com/gl/positron-gl-style/style.json",
        layers=layers,
        initial_view_state=_compute_view_state(plan, markers),
        tooltip=tooltip,
    )


def _selected_item_from_state(state) -> Optional[str]:
    if not state:
        return None
    selection = getattr(state, "selection", None)
    if not selection and isinstance(state, dict):
        selection = state.get("selection")
    if not selection:
        return None
    objects = selection.get("objects") if isinstance(selection, dict) else getattr(selection, "objects", None)
    if not objects:
        return None
    layer_objects = objects.get(_STOP_LAYER_ID)
    if not layer_objects:
        return None
    first = layer_objects[0]
    selected = first.get("object", first) if isinstance(first, dict) else None
    if not isinstance(selected, dict):
        return None
    return selected.get("id")


def render_map_tab(container) -> None:
    """Render the plan map tab."""

    plan: TravelPlan | None = st.session_state.get(_PLAN_KEY)

    with container:
        st.subheader("Map")

        if not plan or not plan.items:
            st.info("Build a plan to explore it on the map.")
            return

        options = _day_filter_options(plan)
        labels = [label for label, _ in options]
        choice = st.radio("Show", labels, horizontal=True, key=_MAP_DAY_FILTER_KEY)
        day_filter = dict(options).get(choice)

        selected_item = st.session_state.get(SELECTED_ITEM_KEY)
        markers = [
            marker
            for marker in _collect_markers(plan, selected_item)
            if day_filter is None or marker.day_number == day_filter
        ]
        if not markers:
            st.warning("No stops with coordinates for the selected day.")
            return
        paths = [
            path for path in _collect_paths(plan) if day_filter is None or path["day_number"] == day_filter
        ]

        state = st.pydeck_chart(
            _build_deck(plan, markers, paths),
            selection_mode="single-object",
            on_select="rerun",
            key="plan_map",
        )
        new_selection = _selected_item_from_state(state)
        if new_selection and new_selection != selected_item:
            st.session_state[SELECTED_ITEM_KEY] = new_selection
            selected_item = new_selection

        selected_marker = next((marker for marker in markers if marker.item_id == selected_item), None)
        if selected_marker:
            st.caption(f"Selected: {selected_marker.title} · {selected_marker.subtitle}")


__all__ = ["render_map_tab"]
