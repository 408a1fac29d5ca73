"""Workflow entry points for building and managing travel plans."""

from .plan_builder import (
    NoPlanItemsError,
    PlanAccessError,
    PlanBuilder,
    PlanError,
    PlanNotFoundError,
    PlanValidationError,
)

__all__ = [
    "NoPlanItemsError",
    "PlanAccessError",
    "PlanBuilder",
    "PlanError",
    "PlanNotFoundError",
    "PlanValidationError",
]
