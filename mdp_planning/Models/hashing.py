"""State identity: mapping raw states to canonical hashable keys."""

from abc import ABC, abstractmethod
from typing import Any, Hashable

import numpy as np

State = Any
StateKey = Hashable


class HashableStateFactory(ABC):
    """Maps a raw state to a canonical key.

    Two states with the same key are treated as identical for value function
    and policy purposes.
    """

    @abstractmethod
    def key(self, state: State) -> StateKey:
        """Return the canonical key of a state."""
        pass


class IdentityHashing(HashableStateFactory):
    """Uses the state object itself as its key (state must be hashable)."""

    def key(self, state: State) -> StateKey:
        return state


class SimpleHashableStateFactory(HashableStateFactory):
    """
    Canonicalises container states into nested tuples.

    lists / tuples  -> tuple of canonical items
    dicts           -> ("dict", sorted tuple of (key, canonical value) pairs)
    sets            -> ("set", sorted tuple of canonical items)
    numpy arrays    -> ("ndarray", shape, flat values)

    Dicts, sets and arrays carry a kind tag so they never share a key with
    a plain sequence. Anything else is returned unchanged and must already
    be hashable.
    """

    def key(self, state: State) -> StateKey:
        return self._canonical(state)

    def _canonical(self, obj):
        if isinstance(obj, np.ndarray):
            return ("ndarray", obj.shape, tuple(obj.ravel().tolist()))
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, (list, tuple)):
            return tuple(self._canonical(o) for o in obj)
        if isinstance(obj, dict):
            return ("dict", tuple(sorted(
                ((k, self._canonical(v)) for k, v in obj.items()),
                key=lambda kv: repr(kv[0])
            )))
        if isinstance(obj, (set, frozenset)):
            return ("set", tuple(sorted((self._canonical(o) for o in obj), key=repr)))
        return obj
