"""Dynamic programming backup primitives shared by the planners."""

from typing import Any, List, Optional, Tuple

from ..Models.hashing import HashableStateFactory, IdentityHashing
from ..Policies.policy import EnumerablePolicy
from .reachability import full_transitions
from .value_function import ConstantValueFunction, ValueFunctionStore, ValueInitializer

State = Any
Action = Any
StateKey = Any


class DynamicProgramming:
    """
    Value function over discovered states plus Bellman backups.

    Action values are computed on demand from the model and the current
    value function; they are never cached.
    """

    def __init__(
        self,
        model,
        gamma: float,
        hashing: Optional[HashableStateFactory] = None,
        value_initializer: Optional[ValueInitializer] = None,
        verbose: bool = False,
    ):
        if not 0.0 <= gamma <= 1.0:
            raise ValueError(f"gamma must be in [0, 1], got {gamma}")
        self.model = model
        self.gamma = gamma
        self.hashing = hashing if hashing is not None else IdentityHashing()
        self.value_initializer = (
            value_initializer if value_initializer is not None else ConstantValueFunction(0.0)
        )
        self.verbose = verbose
        self.value_function = ValueFunctionStore()

    # ============================================================
    # Values
    # ============================================================

    def value(self, state: State) -> float:
        """V(s): 0 for terminal states, else the stored (or initial) value."""
        if self.model.terminal(state):
            return 0.0
        key = self.hashing.key(state)
        if key in self.value_function:
            return self.value_function.get(key)
        return self.value_initializer.value(state)

    def q_value(self, state: State, action: Action) -> float:
        """Q(s, a) = sum over outcomes of p * (r + gamma * V(s'))."""
        q = 0.0
        for tp in full_transitions(self.model, state, action):
            q += tp.p * (tp.reward + self.gamma * self.value(tp.state))
        return q

    def q_values(self, state: State) -> List[Tuple[Action, float]]:
        """(action, Q(s, a)) for every applicable action; [] for terminal states."""
        if self.model.terminal(state):
            return []
        return [(a, self.q_value(state, a)) for a in self.model.applicable_actions(state)]

    # ============================================================
    # Backups
    # ============================================================

    def perform_fixed_policy_bellman_update(
        self, key: StateKey, policy: EnumerablePolicy
    ) -> float:
        """
        Set V(s) to the expected action value under policy and return it.

        A state where the policy selects nothing keeps its current value.
        """
        state = self.value_function.state(key)
        dist = policy.action_distribution(state)
        if not dist:
            return self.value_function.get(key)
        v = 0.0
        for action, p in dist:
            v += p * self.q_value(state, action)
        self.value_function.put(key, v)
        return v

    def perform_bellman_update(self, key: StateKey) -> float:
        """Set V(s) to max_a Q(s, a) and return it."""
        state = self.value_function.state(key)
        q_values = self.q_values(state)
        if not q_values:
            return self.value_function.get(key)
        v = max(q for _, q in q_values)
        self.value_function.put(key, v)
        return v

    def get_copy_of_value_function(self) -> "DynamicProgramming":
        """Planner sharing this model but holding a snapshot of the current values."""
        dp = DynamicProgramming(
            self.model, self.gamma, self.hashing, self.value_initializer
        )
        dp.value_function = self.value_function.copy()
        return dp

    def reset_solver(self) -> None:
        """Forget all state values."""
        self.value_function.clear()
