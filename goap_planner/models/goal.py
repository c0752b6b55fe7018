"""Goal — the set of requirements a plan must bring about."""

from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, Field

from goap_planner.models.requirement import Requirement

if TYPE_CHECKING:
    from goap_planner.world_state.state import WorldState


class Goal(BaseModel):
    """A named desired condition on the world."""

    name: str
    requirements: List[Requirement]
    # Informational only; callers ranking several goals may use it, the planner does not.
    priority: Optional[int] = Field(default=None, ge=1, le=100)

    def is_satisfied(self, state: "WorldState") -> bool:
        return state.satisfies(self.requirements)

    def unmet(self, state: "WorldState") -> List[Requirement]:
        """Requirements the state does not currently satisfy."""
        return [r for r in self.requirements if not r.is_met(state)]
