"""
Planner — least-cost action sequencing by A* search over World States.

Behavioral Contract:
- Accepts an initial WorldState, a Goal and a list of candidate Actions
- Returns the minimum-total-cost Plan, or raises NoPlanFoundError /
  SearchLimitExceededError; never returns a partial plan
- Drops (and records) edges whose effects cannot be type-applied
- Holds no mutable state between calls; each call owns its open/closed sets
- Identical inputs always produce the identical Plan
"""

import heapq
import itertools
import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from goap_planner.errors import (
    IncompatibleStateError,
    NoPlanFoundError,
    SearchLimitExceededError,
    StateError,
)
from goap_planner.models.action import Action
from goap_planner.models.goal import Goal
from goap_planner.models.plan import Plan
from goap_planner.models.planner import PlannerConfig
from goap_planner.planner.heuristic import ActionProfile, estimate
from goap_planner.utils.logging import configure_logging
from goap_planner.world_state.state import WorldState

logger = logging.getLogger(__name__)

# (f, -g, last action name, insertion order, state)
_OpenEntry = Tuple[float, float, str, int, WorldState]


class Planner:
    """
    Stateless GOAP planner.

    Open-set ordering is f = g + h, then higher g (nodes nearer the goal),
    then the name of the action that produced the node, then insertion order.
    Ties in f always go to the deeper node, never the shallower one.
    Zero-cost cycles terminate through the best-g table and closed set.
    """

    def __init__(self, config: Optional[PlannerConfig] = None):
        self.config = config or PlannerConfig()
        if self.config.verbosity is not None:
            configure_logging(self.config.verbosity, log_file=self.config.log_file)

    def plan(
        self,
        initial_state: WorldState,
        goal: Goal,
        actions: Sequence[Action],
    ) -> Plan:
        """Find the cheapest sequence of actions that satisfies the goal."""
        actions = list(actions)
        profile = ActionProfile(goal, actions)
        limit = self.config.max_expansions

        start_h = self._heuristic(goal, initial_state, profile)
        if start_h is None:
            logger.info("Goal '%s' unreachable from initial state", goal.name)
            raise NoPlanFoundError(goal.name)

        best_g: Dict[WorldState, float] = {initial_state: 0.0}
        came_from: Dict[WorldState, Tuple[WorldState, Action]] = {}
        closed: Dict[WorldState, float] = {}
        dropped: List[IncompatibleStateError] = []
        order = itertools.count()
        open_set: List[_OpenEntry] = [(start_h, -0.0, "", next(order), initial_state)]
        expanded = 0

        while open_set:
            _, neg_g, _, _, state = heapq.heappop(open_set)
            g = -neg_g
            if g > best_g[state] or closed.get(state, math.inf) <= g:
                continue  # Stale entry

            if goal.is_satisfied(state):
                plan = self._reconstruct(came_from, state, expanded)
                logger.info(
                    "Plan for goal '%s' found: %d action(s), cost %.3f, %d node(s) expanded",
                    goal.name, len(plan.actions), plan.cost, expanded,
                )
                return plan

            if limit is not None and expanded >= limit:
                logger.info(
                    "Search for goal '%s' hit the %d expansion limit", goal.name, limit
                )
                raise SearchLimitExceededError(goal.name, limit)

            closed[state] = g
            expanded += 1

            for action in actions:
                if not action.can_execute(state):
                    continue
                try:
                    successor = action.apply(state)
                except StateError as exc:
                    edge = IncompatibleStateError(action.name, exc.variable, exc)
                    logger.debug("Dropping edge: %s", edge)
                    dropped.append(edge)
                    continue

                tentative_g = g + action.cost
                if tentative_g >= best_g.get(successor, math.inf):
                    continue
                h = self._heuristic(goal, successor, profile)
                if h is None:
                    logger.debug(
                        "Pruning state reached by '%s': goal unreachable", action.name
                    )
                    continue

                best_g[successor] = tentative_g
                came_from[successor] = (state, action)
                heapq.heappush(
                    open_set,
                    (tentative_g + h, -tentative_g, action.name, next(order), successor),
                )

        logger.info(
            "No plan for goal '%s' after %d expansion(s), %d edge(s) dropped",
            goal.name, expanded, len(dropped),
        )
        raise NoPlanFoundError(goal.name, expanded, dropped)

    def _heuristic(
        self, goal: Goal, state: WorldState, profile: ActionProfile
    ) -> Optional[float]:
        """h(state), or None when the state is provably a dead end."""
        h = estimate(goal, state, profile)
        if math.isinf(h):
            return None if self.config.prune_unreachable else 0.0
        return h

    def _reconstruct(
        self,
        came_from: Dict[WorldState, Tuple[WorldState, Action]],
        state: WorldState,
        expanded: int,
    ) -> Plan:
        """Walk back-pointers from the goal state to the initial state."""
        steps: List[Action] = []
        while state in came_from:
            state, action = came_from[state]
            steps.append(action)
        steps.reverse()

        cost = 0.0
        for action in steps:
            cost += action.cost
        return Plan(actions=steps, cost=cost, nodes_expanded=expanded)
