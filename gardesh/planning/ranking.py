"""Candidate ranking strategies."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Mapping, Sequence, List

from gardesh.planning import tables
from gardesh.schemas import Candidate

RATING_TIE_MARGIN = 0.5


def _compare(left: Candidate, right: Candidate) -> int:
    if abs(left.rating - right.rating) > RATING_TIE_MARGIN:
        return -1 if left.rating > right.rating else 1
    if left.review_count != right.review_count:
        return -1 if left.review_count > right.review_count else 1
    if left.distance != right.distance:
        return -1 if left.distance < right.distance else 1
    return 0


def rank_simple(candidates: Sequence[Candidate]) -> List[Candidate]:
    """Order by rating, then review count, then proximity.

    Ratings within half a star of each other count as a tie, so the
    comparison is not transitive; the result follows Python's stable sort
    over the given order.
    """

    return sorted(candidates, key=cmp_to_key(_compare))


def preference_score(candidate: Candidate, preferences: Mapping[str, float]) -> float:
    if candidate.kind == "restaurant":
        label = tables.FOOD_PREFERENCE_LABEL
    else:
        label = tables.preference_label(candidate.place_type)
    weight = preferences.get(label, 0.0) or 0.0
    return weight + candidate.rating * 10 + candidate.review_count * 0.1


def rank_by_preferences(
    candidates: Sequence[Candidate], preferences: Mapping[str, float]
) -> List[Candidate]:
    """Order by descending preference score, keeping input order on ties."""

    return sorted(candidates, key=lambda candidate: -preference_score(candidate, preferences))


__all__ = ["RATING_TIE_MARGIN", "preference_score", "rank_by_preferences", "rank_simple"]
