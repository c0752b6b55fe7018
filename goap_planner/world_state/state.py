"""
World State — immutable mapping from variable name to Typed Value.

Used as the planner's search-graph node: every expansion step derives a
new WorldState from a parent via apply(); parents are never mutated.

Behavioral Contract:
- get() treats absence as None, never an error
- get_typed() raises MissingVariableError / TypeMismatchError
- apply() returns a new state or raises a StateError; the receiver is unchanged
- satisfies() never raises
- Equality and hash depend only on the name -> value pairs, not insertion order
"""

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from goap_planner.errors import MissingVariableError, TypeMismatchError
from goap_planner.models.effect import Effect
from goap_planner.models.requirement import Comparison, Requirement, compare
from goap_planner.models.value import TypedValue, ValueKind


class WorldState:
    """A snapshot of the world as typed variables."""

    __slots__ = ("_values", "_hash")

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        converted: Dict[str, TypedValue] = {}
        for name, value in (values or {}).items():
            if not isinstance(name, str):
                raise TypeError(f"State variable names must be strings, got {name!r}")
            converted[name] = TypedValue.of(value)
        self._values = converted
        self._hash: Optional[int] = None

    @classmethod
    def _wrap(cls, values: Dict[str, TypedValue]) -> "WorldState":
        """Adopt an already-typed dict without copying or converting."""
        state = cls.__new__(cls)
        state._values = values
        state._hash = None
        return state

    # --- Reads ---

    def get(self, name: str) -> Optional[TypedValue]:
        return self._values.get(name)

    def get_typed(self, name: str, expected: ValueKind) -> TypedValue:
        """Read a variable that must exist and hold the expected kind."""
        value = self._values.get(name)
        if value is None:
            raise MissingVariableError(name)
        if value.kind != expected:
            raise TypeMismatchError(name, expected.value, value.kind.value)
        return value

    def satisfies(self, requirements: Iterable[Requirement]) -> bool:
        """True if every requirement holds; missing or mismatched variables fail."""
        return all(
            compare(r, self._values.get(r.variable)) is Comparison.SATISFIED
            for r in requirements
        )

    # --- Derivations ---

    def apply(self, effects: Iterable[Effect]) -> "WorldState":
        """
        Apply effects in order, each seeing the result of the previous ones.
        Raises the first StateError encountered; no partial state escapes.
        """
        values = dict(self._values)
        for effect in effects:
            values[effect.variable] = effect.apply_to(values.get(effect.variable))
        return WorldState._wrap(values)

    def with_value(self, name: str, value: Any) -> "WorldState":
        values = dict(self._values)
        values[name] = TypedValue.of(value)
        return WorldState._wrap(values)

    def merge(self, other: "WorldState") -> "WorldState":
        """New state holding both; other's variables win on conflict."""
        values = dict(self._values)
        values.update(other._values)
        return WorldState._wrap(values)

    # --- Snapshots ---

    def as_python(self) -> Dict[str, Any]:
        return {name: value.as_python() for name, value in self._values.items()}

    def to_snapshot(self) -> Dict[str, dict]:
        """JSON-safe form; decimals keep their scaled-integer payload."""
        return {
            name: value.model_dump(mode="json")
            for name, value in sorted(self._values.items())
        }

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, dict]) -> "WorldState":
        return cls._wrap({
            name: TypedValue.model_validate(data)
            for name, data in snapshot.items()
        })

    def describe(self) -> str:
        if not self._values:
            return "empty state"
        lines = ["State:"]
        lines.extend(f"  - {name}: {value}" for name, value in sorted(self._values.items()))
        return "\n".join(lines)

    # --- Mapping protocol and identity ---

    def items(self) -> Iterator[Tuple[str, TypedValue]]:
        return iter(self._values.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __getitem__(self, name: str) -> TypedValue:
        return self._values[name]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldState):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._values.items()))
        return self._hash

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in sorted(self._values.items()))
        return f"WorldState({inner})"
