"""Plan — the planner's successful result."""

from typing import List

from pydantic import BaseModel, Field

from goap_planner.models.action import Action


class Plan(BaseModel):
    """Ordered actions leading from the initial state to the goal."""

    actions: List[Action] = []              # References to the caller's actions
    cost: float = Field(default=0.0, ge=0)
    nodes_expanded: int = 0

    @property
    def action_names(self) -> List[str]:
        return [a.name for a in self.actions]

    @property
    def is_empty(self) -> bool:
        return not self.actions

    def describe(self) -> str:
        lines = [f"Plan (total cost: {self.cost:.1f}):"]
        for i, action in enumerate(self.actions, start=1):
            lines.append(f"Step {i}: {action.name} (cost: {action.cost:.1f})")
        return "\n".join(lines)
