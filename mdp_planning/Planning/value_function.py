"""Value function storage and initializers."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, ItemsView, KeysView, Optional

State = Any
StateKey = Hashable


class ValueInitializer(ABC):
    """Seeds the value of a newly discovered state."""

    @abstractmethod
    def value(self, state: State) -> float:
        pass


class ConstantValueFunction(ValueInitializer):
    """Every state starts with the same value."""

    def __init__(self, value: float = 0.0):
        self.constant = float(value)

    def value(self, state: State) -> float:
        return self.constant


class FunctionValueInitializer(ValueInitializer):
    """Wraps a plain callable state -> float."""

    def __init__(self, fn: Callable[[State], float]):
        self.fn = fn

    def value(self, state: State) -> float:
        return float(self.fn(state))


class ValueFunctionStore:
    """
    Mapping StateKey -> value estimate.

    Holds exactly the discovered non-terminal states. Reachability inserts
    entries (keeping the raw state so backups can query the model); evaluation
    updates them in place. Entries are only removed by clear().
    """

    def __init__(self):
        self._values: Dict[StateKey, float] = {}
        self._states: Dict[StateKey, State] = {}

    def __contains__(self, key: StateKey) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def contains(self, key: StateKey) -> bool:
        return key in self._values

    def get(self, key: StateKey, default: float = 0.0) -> float:
        return self._values.get(key, default)

    def put(self, key: StateKey, value: float) -> None:
        self._values[key] = value

    def add(self, key: StateKey, state: State, value: float) -> None:
        """Insert a newly discovered state with its initial value."""
        self._values[key] = value
        self._states[key] = state

    def state(self, key: StateKey) -> Optional[State]:
        """Raw state recorded for a key."""
        return self._states.get(key)

    def keys(self) -> KeysView:
        return self._values.keys()

    def items(self) -> ItemsView:
        return self._values.items()

    def as_dict(self) -> Dict[StateKey, float]:
        return dict(self._values)

    def copy(self) -> "ValueFunctionStore":
        """Snapshot of the current values (raw states are shared)."""
        other = ValueFunctionStore()
        other._values = dict(self._values)
        other._states = dict(self._states)
        return other

    def clear(self) -> None:
        self._values.clear()
        self._states.clear()
