"""Effect — one (variable, operation, value) state transformation."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from goap_planner.errors import InvalidOperationError, MissingVariableError
from goap_planner.models.value import TypedValue


class EffectOperation(str, Enum):
    SET = "set"             # Replace or insert
    ADD = "add"             # Numeric only
    SUBTRACT = "subtract"   # Numeric only


class Effect(BaseModel):
    """A single change an action makes to a World State."""

    model_config = ConfigDict(frozen=True)

    variable: str
    operation: EffectOperation = EffectOperation.SET
    value: TypedValue

    @model_validator(mode="before")
    @classmethod
    def _coerce_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and "value" in data:
            data = dict(data)
            value = data["value"]
            if isinstance(value, dict):
                data["value"] = TypedValue.model_validate(value)
            else:
                data["value"] = TypedValue.of(value)
        return data

    @model_validator(mode="after")
    def _check_operand(self) -> "Effect":
        if self.operation is not EffectOperation.SET and not self.value.kind.numeric:
            raise InvalidOperationError(
                f"Cannot {self.operation.value} a {self.value.kind.value} value "
                f"to '{self.variable}'",
                self.variable,
            )
        return self

    def apply_to(self, current: Optional[TypedValue]) -> TypedValue:
        """
        Compute the variable's next value from its current one.

        SET replaces or inserts whatever is stored, of any kind. ADD/SUBTRACT
        need an existing numeric value of the operand's kind.
        """
        if self.operation is EffectOperation.SET:
            return self.value

        if current is None:
            raise MissingVariableError(self.variable)
        if not current.kind.numeric:
            raise InvalidOperationError(
                f"Cannot {self.operation.value} on {current.kind.value} "
                f"variable '{self.variable}'",
                self.variable,
            )
        if self.operation is EffectOperation.ADD:
            return current.add(self.value, variable=self.variable)
        return current.subtract(self.value, variable=self.variable)

    def __str__(self) -> str:
        if self.operation is EffectOperation.SET:
            return f"Set {self.variable} to {self.value}"
        if self.operation is EffectOperation.ADD:
            return f"Add {self.value} to {self.variable}"
        return f"Subtract {self.value} from {self.variable}"
