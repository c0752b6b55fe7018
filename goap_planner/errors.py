"""
Planner error families.

StateError — raised by World State reads and effect application.
PlannerError — terminal outcomes of a single Planner.plan() call, plus the
per-edge IncompatibleStateError record the search collects when an action
cannot be type-applied to a state.

Behavioral Contract:
- StateErrors from direct caller queries propagate unchanged
- StateErrors raised inside the search are downgraded to IncompatibleStateError
  and the offending edge is dropped
- NoPlanFoundError / SearchLimitExceededError always end the plan() call
"""

from typing import List, Optional


class StateError(Exception):
    """Base class for failures reading or transforming a World State."""

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message)
        self.variable = variable


class MissingVariableError(StateError):
    """Raised when a typed read targets a variable the state does not hold."""

    def __init__(self, variable: str):
        super().__init__(f"State variable '{variable}' not found", variable)


class TypeMismatchError(StateError):
    """Raised when a stored variant differs from the requested/expected one."""

    def __init__(self, variable: Optional[str], expected: str, actual: str):
        target = f"State variable '{variable}'" if variable else "Value"
        super().__init__(
            f"{target}: expected {expected}, got {actual}", variable
        )
        self.expected = expected
        self.actual = actual


class InvalidOperationError(StateError):
    """Raised when a numeric-only operation meets a boolean or text value."""

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message, variable)


class InvalidDecimalError(StateError):
    """Raised for NaN/infinite decimal sources or scaled-integer overflow."""

    def __init__(self, message: str, variable: Optional[str] = None):
        super().__init__(message, variable)


class PlannerError(Exception):
    """Base class for planner outcomes other than a found plan."""
    pass


class IncompatibleStateError(PlannerError):
    """
    An action's effects could not be type-applied to a state during expansion.

    The search records these and drops the edge; it is only ever raised to a
    caller as part of a NoPlanFoundError's dropped_edges list.
    """

    def __init__(self, action: str, variable: Optional[str], cause: StateError):
        super().__init__(
            f"Action '{action}' is incompatible with state "
            f"at variable '{variable}': {cause}"
        )
        self.action = action
        self.variable = variable
        self.cause = cause


class NoPlanFoundError(PlannerError):
    """The reachable search space was exhausted without satisfying the goal."""

    def __init__(
        self,
        goal: str,
        nodes_expanded: int = 0,
        dropped_edges: Optional[List[IncompatibleStateError]] = None,
    ):
        message = f"No plan found for goal '{goal}'"
        if dropped_edges:
            message += f" ({len(dropped_edges)} incompatible edge(s) dropped)"
        super().__init__(message)
        self.goal = goal
        self.nodes_expanded = nodes_expanded
        self.dropped_edges = list(dropped_edges or [])


class SearchLimitExceededError(PlannerError):
    """The node-expansion budget ran out before the search finished."""

    def __init__(self, goal: str, limit: int):
        super().__init__(
            f"Search for goal '{goal}' exceeded the limit of {limit} expansions"
        )
        self.goal = goal
        self.limit = limit
