"""
Remaining-cost estimate for the planner.

Each unmet goal requirement gets a distance measured in action steps:
1 when some action sets the variable (whatever its current kind, or if it
is missing), otherwise the numeric gap normalized by the largest change one
action can make to that variable. The step bound is the larger of the worst single distance
and the summed distances spread over the most goal requirements any one
action touches; it is then priced at the cheapest action's cost.

Every action lowers each distance by at most one step and the step bound by
at most one, so the estimate is admissible and consistent. A requirement no
action can fix is infinitely far away, letting the search drop that state.
"""

import math
from typing import Dict, List, Optional, Sequence

from goap_planner.models.action import Action
from goap_planner.models.effect import EffectOperation
from goap_planner.models.goal import Goal
from goap_planner.models.requirement import Comparator, Comparison, Requirement, compare
from goap_planner.models.value import TypedValue


class VariableReach:
    """How far the candidate actions can move one goal variable per step."""

    def __init__(self):
        self.settable = False
        self.max_increase = 0
        self.max_decrease = 0

    def absorb(self, action: Action, variable: str) -> None:
        increase = decrease = 0
        for effect in action.effects:
            if effect.variable != variable:
                continue
            if effect.operation is EffectOperation.SET:
                self.settable = True
                continue
            if not effect.value.kind.numeric:
                continue
            delta = effect.value.raw
            if effect.operation is EffectOperation.SUBTRACT:
                delta = -delta
            if delta > 0:
                increase += delta
            else:
                decrease -= delta
        self.max_increase = max(self.max_increase, increase)
        self.max_decrease = max(self.max_decrease, decrease)


class ActionProfile:
    """Per-call summary of the candidate actions relative to one goal."""

    def __init__(self, goal: Goal, actions: Sequence[Action]):
        variables = {r.variable for r in goal.requirements}
        self.reach: Dict[str, VariableReach] = {v: VariableReach() for v in variables}
        self.min_cost = min((a.cost for a in actions), default=0.0)
        self.max_requirements_touched = 0

        for action in actions:
            touched = {e.variable for e in action.effects} & variables
            for variable in touched:
                self.reach[variable].absorb(action, variable)
            count = sum(1 for r in goal.requirements if r.variable in touched)
            self.max_requirements_touched = max(self.max_requirements_touched, count)


def requirement_distance(
    requirement: Requirement,
    value: Optional[TypedValue],
    reach: VariableReach,
) -> float:
    """Lower bound on the action steps needed to satisfy one requirement."""
    outcome = compare(requirement, value)
    if outcome is Comparison.SATISFIED:
        return 0
    if outcome is Comparison.TYPE_MISMATCH:
        # Only SET can change a variable's kind
        return 1 if reach.settable else math.inf
    if reach.settable:
        return 1
    if value is None or not value.kind.numeric:
        return math.inf

    gap = requirement.expected.raw - value.raw
    if requirement.comparator is Comparator.EQUAL and gap < 0:
        step = reach.max_decrease
        gap = -gap
    else:
        step = reach.max_increase
    if step <= 0:
        return math.inf
    return -(-gap // step)


def estimate(goal: Goal, state, profile: ActionProfile) -> float:
    """Heuristic cost-to-go h(state) for the A* search."""
    distances: List[float] = [
        requirement_distance(r, state.get(r.variable), profile.reach[r.variable])
        for r in goal.requirements
    ]
    if not distances:
        return 0.0
    if any(math.isinf(d) for d in distances):
        return math.inf

    spread = max(profile.max_requirements_touched, 1)
    steps = max(max(distances), -(-sum(distances) // spread))
    return steps * profile.min_cost
