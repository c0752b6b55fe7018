"""GOAP planner data models."""

from goap_planner.models.action import Action
from goap_planner.models.effect import Effect, EffectOperation
from goap_planner.models.goal import Goal
from goap_planner.models.plan import Plan
from goap_planner.models.planner import PlannerConfig
from goap_planner.models.requirement import (
    Comparator,
    Comparison,
    Requirement,
    compare,
)
from goap_planner.models.value import (
    DECIMAL_SCALE,
    TypedValue,
    ValueKind,
)

__all__ = [
    "Action",
    "Comparator",
    "Comparison",
    "DECIMAL_SCALE",
    "Effect",
    "EffectOperation",
    "Goal",
    "Plan",
    "PlannerConfig",
    "Requirement",
    "TypedValue",
    "ValueKind",
    "compare",
]
