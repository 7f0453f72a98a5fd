"""Modified policy iteration over the states reachable from an initial state."""

from typing import Any, List, Optional

import numpy as np

from ..Models.hashing import HashableStateFactory
from ..Policies.policy import EnumerablePolicy, GreedyQPolicy
from .dynamic_programming import DynamicProgramming
from .errors import UnreadyPlannerError
from .observers import PlanningObserver
from .reachability import ReachabilityExplorer
from .value_function import ValueInitializer

State = Any


class PolicyIteration(DynamicProgramming):
    """
    Policy iteration with capped policy evaluation.

    Each policy iteration runs up to max_evaluation_iterations in-place
    sweeps of fixed-policy Bellman backups, then replaces the evaluative
    policy with the greedy policy over a snapshot of the updated values.
    Planning stops when an evaluation pass changes no value by more than
    max_pi_delta or after max_policy_iterations iterations. Setting
    max_evaluation_iterations to 1 gives value iteration; a large cap with a
    tight max_eval_delta gives classic policy iteration.

    Not thread safe: callers must serialise access to an instance.
    """

    def __init__(
        self,
        model,
        gamma: float,
        hashing: Optional[HashableStateFactory] = None,
        max_pi_delta: float = 1e-3,
        max_eval_delta: Optional[float] = None,
        max_evaluation_iterations: int = 100,
        max_policy_iterations: int = 100,
        value_initializer: Optional[ValueInitializer] = None,
        rng: Optional[np.random.Generator] = None,
        verbose: bool = False,
    ):
        """
        Parameters
        ----------
        model : FullModel
            Transition model; must enumerate outcome distributions
        gamma : float
            Discount factor in [0, 1]
        hashing : HashableStateFactory, optional
            State identity; defaults to using states as their own keys
        max_pi_delta : float
            Planning stops once an evaluation pass changes values by less
        max_eval_delta : float, optional
            An evaluation pass stops once a sweep changes values by less
            (defaults to max_pi_delta)
        max_evaluation_iterations : int
            Cap on sweeps per evaluation pass
        max_policy_iterations : int
            Cap on policy iterations per planning call
        value_initializer : ValueInitializer, optional
            Initial value of newly discovered states (defaults to 0)
        rng : numpy Generator, optional
            Tie-breaking source for the greedy policies produced
        verbose : bool
            Print progress
        """
        super().__init__(model, gamma, hashing, value_initializer, verbose)

        if max_eval_delta is None:
            max_eval_delta = max_pi_delta
        if max_pi_delta < 0 or max_eval_delta < 0:
            raise ValueError("max_pi_delta and max_eval_delta must be non-negative")
        if max_evaluation_iterations < 0 or max_policy_iterations < 0:
            raise ValueError("iteration caps must be non-negative")

        self.max_pi_delta = max_pi_delta
        self.max_eval_delta = max_eval_delta
        self.max_evaluation_iterations = max_evaluation_iterations
        self.max_policy_iterations = max_policy_iterations
        self.rng = rng

        self.explorer = ReachabilityExplorer(
            model, self.hashing, self.value_function, self.value_initializer, verbose
        )
        self.evaluative_policy: EnumerablePolicy = GreedyQPolicy(
            self.get_copy_of_value_function(), rng
        )
        self.observers: List[PlanningObserver] = []

        self._has_run_planning = False
        self._total_policy_iterations = 0
        self._total_value_iterations = 0

    @classmethod
    def from_config(
        cls,
        model,
        config,
        hashing: Optional[HashableStateFactory] = None,
        value_initializer: Optional[ValueInitializer] = None,
    ) -> "PolicyIteration":
        """Build from a PlannerConfig."""
        return cls(
            model,
            config.gamma,
            hashing,
            max_pi_delta=config.max_pi_delta,
            max_eval_delta=config.max_eval_delta,
            max_evaluation_iterations=config.max_evaluation_iterations,
            max_policy_iterations=config.max_policy_iterations,
            value_initializer=value_initializer,
            rng=np.random.default_rng(config.seed),
            verbose=config.verbose,
        )

    # ============================================================
    # Accessors
    # ============================================================

    @property
    def found_reachable_states(self) -> bool:
        return self.explorer.complete

    @property
    def has_run_planning(self) -> bool:
        return self._has_run_planning

    @property
    def total_policy_iterations(self) -> int:
        return self._total_policy_iterations

    @property
    def total_value_iterations(self) -> int:
        return self._total_value_iterations

    def set_policy_to_evaluate(self, policy: EnumerablePolicy) -> None:
        """Policy evaluated by the first iteration of the next planning run."""
        self.evaluative_policy = policy

    def get_computed_policy(self) -> EnumerablePolicy:
        """Last computed policy (or the initial policy if planning never ran)."""
        return self.evaluative_policy

    def add_observer(self, observer: PlanningObserver) -> None:
        self.observers.append(observer)

    def recompute_reachable_states(self) -> None:
        """Make the next plan_from_state call redo reachability analysis."""
        self.explorer.invalidate()

    # ============================================================
    # Planning
    # ============================================================

    def perform_reachability_from(self, state: State) -> bool:
        """
        Discover the states reachable from state.

        Returns True if a traversal was performed, False if all states
        reachable from state were already known.
        """
        return self.explorer.explore(state)

    def evaluate_policy(self) -> float:
        """
        Evaluate the current evaluative policy.

        Returns the largest single-sweep value change over all sweeps.
        """
        if not self.found_reachable_states:
            raise UnreadyPlannerError(
                "Cannot evaluate a policy until the reachable states have been found. "
                "Call plan_from_state (or perform_reachability_from) first."
            )

        keys = list(self.value_function.keys())
        max_change = 0.0
        delta = 0.0
        sweeps = 0
        # nothing to sweep when every reachable state is terminal
        while keys and sweeps < self.max_evaluation_iterations:
            delta = 0.0
            # in place: later backups in a sweep see earlier updates
            for key in keys:
                v = self.value_function.get(key)
                new_v = self.perform_fixed_policy_bellman_update(key, self.evaluative_policy)
                delta = max(abs(new_v - v), delta)
            sweeps += 1
            max_change = max(delta, max_change)
            if delta < self.max_eval_delta:
                break

        if self.verbose:
            print(f"Iterations in inner VI for policy eval: {sweeps}")

        for observer in self.observers:
            observer.observe(GreedyQPolicy(self, self.rng), sweeps, delta)

        self._total_value_iterations += sweeps
        return max_change

    def plan_from_state(self, initial_state: State) -> GreedyQPolicy:
        """
        Plan from initial_state and return the greedy policy.

        Repeated calls with an already planned state and an unchanged model
        return the previously computed policy without further iterations.
        """
        iterations = 0
        if self.perform_reachability_from(initial_state) or not self._has_run_planning:
            while True:
                delta = self.evaluate_policy()
                iterations += 1
                self.evaluative_policy = GreedyQPolicy(
                    self.get_copy_of_value_function(), self.rng
                )
                if self.verbose:
                    print(f"PI [{iterations}] delta: {delta}")
                if delta <= self.max_pi_delta or iterations >= self.max_policy_iterations:
                    break

            self._has_run_planning = True

        if self.verbose:
            print(f"Total policy iterations: {iterations}")
        self._total_policy_iterations += iterations

        return self.evaluative_policy

    def reset_solver(self) -> None:
        """Forget stored values and reachable states; zero the counters."""
        super().reset_solver()
        self.explorer.invalidate()
        self._has_run_planning = False
        self._total_value_iterations = 0
        self._total_policy_iterations = 0
