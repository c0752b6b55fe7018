"""Planner configuration."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlannerConfig(BaseModel):
    """Configuration for the Planner. Immutable so planners stay stateless."""

    model_config = ConfigDict(frozen=True)

    max_expansions: Optional[int] = Field(default=100_000, ge=1)   # None = unbounded
    prune_unreachable: bool = True
    # When set, the Planner configures the goap_planner logger on construction
    verbosity: Optional[int] = Field(default=None, ge=0)
    log_file: Optional[str] = None
