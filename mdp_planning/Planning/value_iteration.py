"""Value iteration over the states reachable from an initial state."""

from typing import Any, Optional

import numpy as np

from ..Models.hashing import HashableStateFactory
from ..Policies.policy import GreedyQPolicy
from .dynamic_programming import DynamicProgramming
from .errors import UnreadyPlannerError
from .reachability import ReachabilityExplorer
from .value_function import ValueInitializer

State = Any


class ValueIteration(DynamicProgramming):
    """In-place Bellman optimality sweeps until the value change is below max_delta."""

    def __init__(
        self,
        model,
        gamma: float,
        hashing: Optional[HashableStateFactory] = None,
        max_delta: float = 1e-3,
        max_iterations: int = 1000,
        value_initializer: Optional[ValueInitializer] = None,
        rng: Optional[np.random.Generator] = None,
        verbose: bool = False,
    ):
        super().__init__(model, gamma, hashing, value_initializer, verbose)
        if max_delta < 0:
            raise ValueError("max_delta must be non-negative")
        if max_iterations < 0:
            raise ValueError("max_iterations must be non-negative")
        self.max_delta = max_delta
        self.max_iterations = max_iterations
        self.rng = rng
        self.explorer = ReachabilityExplorer(
            model, self.hashing, self.value_function, self.value_initializer, verbose
        )
        self.total_iterations = 0

    def perform_reachability_from(self, state: State) -> bool:
        return self.explorer.explore(state)

    def recompute_reachable_states(self) -> None:
        self.explorer.invalidate()

    def run_vi(self) -> int:
        """Sweep until converged; returns the number of sweeps."""
        if not self.explorer.complete:
            raise UnreadyPlannerError(
                "Cannot run value iteration until the reachable states have been found."
            )
        keys = list(self.value_function.keys())
        sweeps = 0
        while keys and sweeps < self.max_iterations:
            delta = 0.0
            for key in keys:
                v = self.value_function.get(key)
                new_v = self.perform_bellman_update(key)
                delta = max(abs(new_v - v), delta)
            sweeps += 1
            if delta < self.max_delta:
                break
        if self.verbose:
            print(f"Passes: {sweeps}")
        self.total_iterations += sweeps
        return sweeps

    def plan_from_state(self, initial_state: State) -> GreedyQPolicy:
        """Run value iteration if new states were found; return the greedy policy."""
        if self.perform_reachability_from(initial_state):
            self.run_vi()
        return GreedyQPolicy(self, self.rng)

    def reset_solver(self) -> None:
        super().reset_solver()
        self.explorer.invalidate()
        self.total_iterations = 0
