"""Planner engine: retrieval, ranking, scheduling and trip partitioning."""

from .enhancer import NoOpEnhancer, RankingEnhancer, SettingGatedEnhancer
from .partition import partition_days, trip_day_count
from .planner import TravelPlanner
from .ranking import preference_score, rank_by_preferences, rank_simple
from .retrieval import retrieve_candidates, retrieve_places, retrieve_restaurants
from .scheduler import schedule_day, time_slot_for, visit_duration

__all__ = [
    "NoOpEnhancer",
    "RankingEnhancer",
    "SettingGatedEnhancer",
    "TravelPlanner",
    "partition_days",
    "preference_score",
    "rank_by_preferences",
    "rank_simple",
    "retrieve_candidates",
    "retrieve_places",
    "retrieve_restaurants",
    "schedule_day",
    "time_slot_for",
    "trip_day_count",
    "visit_duration",
]
