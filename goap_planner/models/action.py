"""Action — a candidate edge in the planner's search graph."""

from typing import TYPE_CHECKING, List

from pydantic import BaseModel, Field

from goap_planner.models.effect import Effect
from goap_planner.models.requirement import Requirement

if TYPE_CHECKING:
    from goap_planner.world_state.state import WorldState


class Action(BaseModel):
    """
    Something an agent can do: applicable when every precondition holds,
    producing a successor state by applying its effects in list order.
    """

    name: str                                           # Unique within one plan() call
    cost: float = Field(default=1.0, ge=0, allow_inf_nan=False)
    preconditions: List[Requirement] = []
    effects: List[Effect] = []

    def can_execute(self, state: "WorldState") -> bool:
        """True if the state satisfies every precondition."""
        return state.satisfies(self.preconditions)

    def apply(self, state: "WorldState") -> "WorldState":
        """Return the successor state. The given state is left untouched."""
        return state.apply(self.effects)

    def describe(self) -> str:
        lines = [f"Action '{self.name}' (cost: {self.cost:.1f})"]
        if self.preconditions:
            lines.append("  Preconditions:")
            lines.extend(f"    - {r}" for r in self.preconditions)
        if self.effects:
            lines.append("  Effects:")
            lines.extend(f"    - {e}" for e in self.effects)
        return "\n".join(lines)
