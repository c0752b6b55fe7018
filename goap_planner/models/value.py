"""Typed Value — the atomic unit stored in a World State."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, model_validator

from goap_planner.errors import (
    InvalidDecimalError,
    InvalidOperationError,
    TypeMismatchError,
)

DECIMAL_PLACES = 3
DECIMAL_SCALE = 10 ** DECIMAL_PLACES
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class ValueKind(str, Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DECIMAL = "decimal"     # Fixed-point, raw holds value x DECIMAL_SCALE
    TEXT = "text"

    @property
    def numeric(self) -> bool:
        return self in (ValueKind.INTEGER, ValueKind.DECIMAL)


_RAW_TYPES = {
    ValueKind.BOOLEAN: bool,
    ValueKind.INTEGER: int,
    ValueKind.DECIMAL: int,
    ValueKind.TEXT: str,
}


def _in_int64(raw: int) -> bool:
    return INT64_MIN <= raw <= INT64_MAX


def to_scaled(value: Union[float, int, str, Decimal]) -> int:
    """
    Convert a decimal source into its scaled-integer form.

    Rounds half away from zero at the third place, reading floats through
    their shortest repr so 1.005 scales to 1005 rather than 1004.
    """
    if isinstance(value, bool):
        raise InvalidDecimalError("Cannot build a decimal from a boolean")
    try:
        exact = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidDecimalError(f"'{value}' is not a decimal number")
    if not exact.is_finite():
        raise InvalidDecimalError(f"Decimal source must be finite, got {value}")

    scaled = int((exact * DECIMAL_SCALE).to_integral_value(rounding=ROUND_HALF_UP))
    if not _in_int64(scaled):
        raise InvalidDecimalError(f"Decimal {value} overflows the scaled 64-bit range")
    return scaled


class TypedValue(BaseModel):
    """
    Closed variant over boolean, integer, fixed-point decimal and text.

    Frozen and hashable so it can sit inside search-graph node identities.
    Values of different kinds never compare equal, even when their raw
    payloads do (True vs 1).
    """

    model_config = ConfigDict(frozen=True)

    kind: ValueKind
    raw: Union[StrictBool, StrictInt, StrictStr]

    @model_validator(mode="after")
    def _check_variant(self) -> "TypedValue":
        expected = _RAW_TYPES[self.kind]
        if type(self.raw) is not expected:
            raise ValueError(
                f"{self.kind.value} value needs a {expected.__name__} payload, "
                f"got {type(self.raw).__name__}"
            )
        if self.kind.numeric and not _in_int64(self.raw):
            raise ValueError(f"{self.kind.value} payload {self.raw} is outside 64-bit range")
        return self

    # --- Construction ---

    @classmethod
    def boolean(cls, value: bool) -> "TypedValue":
        return cls(kind=ValueKind.BOOLEAN, raw=value)

    @classmethod
    def integer(cls, value: int) -> "TypedValue":
        return cls(kind=ValueKind.INTEGER, raw=value)

    @classmethod
    def decimal(cls, value: Union[float, int, str, Decimal]) -> "TypedValue":
        """Build a decimal, rejecting NaN, infinities and scaled overflow."""
        return cls(kind=ValueKind.DECIMAL, raw=to_scaled(value))

    @classmethod
    def decimal_scaled(cls, scaled: int) -> "TypedValue":
        """Build a decimal directly from its scaled-integer form."""
        if isinstance(scaled, bool) or not isinstance(scaled, int):
            raise InvalidDecimalError(f"Scaled decimal must be an integer, got {scaled!r}")
        if not _in_int64(scaled):
            raise InvalidDecimalError(f"Scaled decimal {scaled} overflows 64-bit range")
        return cls(kind=ValueKind.DECIMAL, raw=scaled)

    @classmethod
    def text(cls, value: str) -> "TypedValue":
        return cls(kind=ValueKind.TEXT, raw=value)

    @classmethod
    def of(cls, value: Any) -> "TypedValue":
        """Wrap a plain Python value; enum members are stored by their value."""
        if isinstance(value, TypedValue):
            return value
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, (float, Decimal)):
            return cls.decimal(value)
        if isinstance(value, str):
            return cls.text(value)
        raise TypeError(f"Cannot store {type(value).__name__} as a state value")

    # --- Arithmetic (scaled-integer, never floating point) ---

    def add(self, other: "TypedValue", variable: Optional[str] = None) -> "TypedValue":
        return self._combine(other, 1, "add", variable)

    def subtract(self, other: "TypedValue", variable: Optional[str] = None) -> "TypedValue":
        return self._combine(other, -1, "subtract", variable)

    def __add__(self, other: "TypedValue") -> "TypedValue":
        return self.add(other)

    def __sub__(self, other: "TypedValue") -> "TypedValue":
        return self.subtract(other)

    def _combine(
        self, other: "TypedValue", sign: int, verb: str, variable: Optional[str]
    ) -> "TypedValue":
        for operand in (self, other):
            if not operand.kind.numeric:
                raise InvalidOperationError(
                    f"Cannot {verb} with a {operand.kind.value} value", variable
                )
        if self.kind != other.kind:
            raise TypeMismatchError(variable, self.kind.value, other.kind.value)

        result = self.raw + sign * other.raw
        if not _in_int64(result):
            if self.kind is ValueKind.DECIMAL:
                raise InvalidDecimalError(f"Decimal {verb} overflowed", variable)
            raise InvalidOperationError(f"Integer {verb} overflowed", variable)
        return TypedValue(kind=self.kind, raw=result)

    def distance(self, other: "TypedValue") -> int:
        """Absolute raw gap for numerics; 0/1 for booleans and text."""
        if self.kind != other.kind:
            raise TypeMismatchError(None, self.kind.value, other.kind.value)
        if self.kind.numeric:
            return abs(self.raw - other.raw)
        return 0 if self.raw == other.raw else 1

    # --- Accessors ---

    def as_bool(self) -> Optional[bool]:
        return self.raw if self.kind is ValueKind.BOOLEAN else None

    def as_int(self) -> Optional[int]:
        return self.raw if self.kind is ValueKind.INTEGER else None

    def as_decimal(self) -> Optional[Decimal]:
        if self.kind is not ValueKind.DECIMAL:
            return None
        return Decimal(self.raw).scaleb(-DECIMAL_PLACES)

    def as_float(self) -> Optional[float]:
        if self.kind is not ValueKind.DECIMAL:
            return None
        return self.raw / DECIMAL_SCALE

    def as_text(self) -> Optional[str]:
        return self.raw if self.kind is ValueKind.TEXT else None

    def as_python(self) -> Union[bool, int, float, str]:
        if self.kind is ValueKind.DECIMAL:
            return self.as_float()
        return self.raw

    def __str__(self) -> str:
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.raw else "false"
        if self.kind is ValueKind.DECIMAL:
            return f"{self.as_decimal():.{DECIMAL_PLACES}f}"
        return str(self.raw)
