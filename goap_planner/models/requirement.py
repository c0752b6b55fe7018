"""Requirement — one (variable, comparator, expected value) condition."""

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from goap_planner.models.value import TypedValue, ValueKind

if TYPE_CHECKING:
    from goap_planner.world_state.state import WorldState


class Comparator(str, Enum):
    EQUAL = "equal"         # Booleans, text, or exact numeric match
    AT_LEAST = "at_least"   # actual >= expected (numeric only)


class Comparison(str, Enum):
    SATISFIED = "satisfied"
    UNSATISFIED = "unsatisfied"
    TYPE_MISMATCH = "type_mismatch"


def default_comparator(kind: ValueKind) -> Comparator:
    return Comparator.AT_LEAST if kind.numeric else Comparator.EQUAL


class Requirement(BaseModel):
    """
    A condition on a single state variable.

    The comparator defaults by variant: numerics use AT_LEAST (ties satisfy),
    booleans and text use EQUAL. AT_LEAST on a non-numeric value is rejected.
    """

    model_config = ConfigDict(frozen=True)

    variable: str
    comparator: Comparator
    expected: TypedValue

    @model_validator(mode="before")
    @classmethod
    def _coerce_expected(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        expected = data.get("expected")
        if isinstance(expected, dict):
            expected = TypedValue.model_validate(expected)
        elif expected is not None:
            expected = TypedValue.of(expected)
        data["expected"] = expected
        if data.get("comparator") is None and expected is not None:
            data["comparator"] = default_comparator(expected.kind)
        return data

    @model_validator(mode="after")
    def _check_comparator(self) -> "Requirement":
        if self.comparator is Comparator.AT_LEAST and not self.expected.kind.numeric:
            raise ValueError(
                f"Comparator at_least does not apply to {self.expected.kind.value} "
                f"requirement on '{self.variable}'"
            )
        return self

    def evaluate(self, state: "WorldState") -> Comparison:
        return compare(self, state.get(self.variable))

    def is_met(self, state: "WorldState") -> bool:
        return self.evaluate(state) is Comparison.SATISFIED

    def __str__(self) -> str:
        symbol = ">=" if self.comparator is Comparator.AT_LEAST else "=="
        return f"{self.variable} {symbol} {self.expected}"


def compare(requirement: Requirement, value: Optional[TypedValue]) -> Comparison:
    """
    Evaluate one requirement against a stored value.

    A missing value is simply unsatisfied; a value of another kind is a
    TYPE_MISMATCH, never a coercion.
    """
    if value is None:
        return Comparison.UNSATISFIED
    expected = requirement.expected
    if value.kind != expected.kind:
        return Comparison.TYPE_MISMATCH

    if requirement.comparator is Comparator.AT_LEAST:
        met = value.raw >= expected.raw
    else:
        met = value.raw == expected.raw
    return Comparison.SATISFIED if met else Comparison.UNSATISFIED
