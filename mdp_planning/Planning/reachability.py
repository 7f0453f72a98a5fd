"""Reachability analysis over a transition model.

Both functions here assume a finite reachable state space; on an unbounded
one the breadth-first traversal does not terminate.
"""

from collections import deque
from typing import Any, List, Optional

from ..Models.hashing import HashableStateFactory
from ..Models.model import FullModel, TransitionProb
from .errors import NonStochasticModelError
from .value_function import ValueFunctionStore, ValueInitializer

State = Any
Action = Any


def full_transitions(model, state: State, action: Action) -> List[TransitionProb]:
    """Full outcome distribution for (state, action), or NonStochasticModelError."""
    if not isinstance(model, FullModel):
        raise NonStochasticModelError(
            f"{type(model).__name__} cannot enumerate transition distributions; "
            "a FullModel is required for exact dynamic programming."
        )
    return model.transitions(state, action)


class ReachabilityExplorer:
    """
    Breadth-first discovery of the states reachable from an initial state.

    Newly found non-terminal states are inserted into the value function with
    the initializer's value. Terminal states are neither stored nor expanded.
    """

    def __init__(
        self,
        model,
        hashing: HashableStateFactory,
        value_function: ValueFunctionStore,
        value_initializer: ValueInitializer,
        verbose: bool = False,
    ):
        self.model = model
        self.hashing = hashing
        self.value_function = value_function
        self.value_initializer = value_initializer
        self.verbose = verbose
        self.complete = False

    def invalidate(self) -> None:
        """Force the next explore() call to traverse again."""
        self.complete = False

    def explore(self, initial_state: State) -> bool:
        """
        Discover every state reachable from initial_state.

        Returns True if a traversal was performed, False if the reachable set
        is already complete and already contains initial_state.
        """
        initial_key = self.hashing.key(initial_state)
        if initial_key in self.value_function and self.complete:
            return False

        if self.verbose:
            print("Starting reachability analysis")

        frontier = deque([(initial_key, initial_state)])
        seen = {initial_key}

        while frontier:
            key, state = frontier.popleft()

            # already expanded
            if key in self.value_function:
                continue

            if self.model.terminal(state):
                continue

            self.value_function.add(key, state, self.value_initializer.value(state))

            for action in self.model.applicable_actions(state):
                for tp in full_transitions(self.model, state, action):
                    next_key = self.hashing.key(tp.state)
                    if next_key not in seen and next_key not in self.value_function:
                        seen.add(next_key)
                        frontier.append((next_key, tp.state))

        if self.verbose:
            print(f"Finished reachability analysis; # states: {len(self.value_function)}")

        self.complete = True
        return True


def get_reachable_states(
    initial_state: State,
    model,
    hashing: HashableStateFactory,
    max_states: Optional[int] = None,
) -> List[State]:
    """
    List every state reachable from initial_state, terminals included.

    Parameters
    ----------
    initial_state : any
        Source state
    model : FullModel
        Transition model to traverse
    hashing : HashableStateFactory
        Canonical state keys used to detect revisits
    max_states : int, optional
        Raise ValueError if more than this many states are found

    Returns
    -------
    list
        Reachable states in breadth-first discovery order
    """
    first = hashing.key(initial_state)
    frontier = deque([initial_state])
    seen = {first}
    found = []

    while frontier:
        state = frontier.popleft()
        found.append(state)
        if max_states is not None and len(found) > max_states:
            raise ValueError(f"More than {max_states} reachable states.")
        if model.terminal(state):
            continue
        for action in model.applicable_actions(state):
            for tp in full_transitions(model, state, action):
                key = hashing.key(tp.state)
                if key not in seen:
                    seen.add(key)
                    frontier.append(tp.state)

    return found
