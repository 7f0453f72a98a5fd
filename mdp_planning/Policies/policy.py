"""Policies that can enumerate their action selection distribution.

A planner evaluates an EnumerablePolicy by summing action values weighted by
the policy's selection probabilities, so every policy here exposes
action_distribution(state) in addition to sampling.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from ..Models.hashing import HashableStateFactory, IdentityHashing

State = Any
Action = Any

# Q-values closer than this are treated as tied
TIE_TOLERANCE = 1e-12


class EnumerablePolicy(ABC):
    """Base class for policies with an explicit action distribution."""

    rng: Optional[np.random.Generator] = None

    @abstractmethod
    def action_distribution(self, state: State) -> List[Tuple[Action, float]]:
        """Return (action, probability) pairs summing to 1, or [] if undefined."""
        pass

    def is_defined_for(self, state: State) -> bool:
        """Whether the policy selects any action in this state."""
        return len(self.action_distribution(state)) > 0

    def sample_action(self, state: State) -> Action:
        """Draw an action from action_distribution(state)."""
        dist = self.action_distribution(state)
        if not dist:
            raise ValueError(f"Policy is undefined for state {state!r}")
        if len(dist) == 1:
            return dist[0][0]
        if self.rng is None:
            self.rng = np.random.default_rng()
        probs = np.array([p for _, p in dist], dtype=float)
        idx = self.rng.choice(len(dist), p=probs / probs.sum())
        return dist[idx][0]


class GreedyQPolicy(EnumerablePolicy):
    """
    Greedy policy over a Q-value source.

    q_source must provide q_values(state) -> list of (action, q). The
    distribution is uniform over the maximising actions, so sampling breaks
    ties uniformly at random. Nothing is cached: Q-values are recomputed from
    q_source on every call.
    """

    def __init__(self, q_source, rng: Optional[np.random.Generator] = None):
        self.q_source = q_source
        self.rng = rng

    def greedy_actions(self, state: State) -> List[Action]:
        """All actions whose Q-value equals the maximum."""
        q_values = self.q_source.q_values(state)
        if not q_values:
            return []
        max_q = max(q for _, q in q_values)
        return [a for a, q in q_values if abs(q - max_q) <= TIE_TOLERANCE]

    def action_distribution(self, state: State) -> List[Tuple[Action, float]]:
        best = self.greedy_actions(state)
        if not best:
            return []
        p = 1.0 / len(best)
        return [(a, p) for a in best]

    def sample_action(self, state: State) -> Action:
        best = self.greedy_actions(state)
        if not best:
            raise ValueError(f"Policy is undefined for state {state!r}")
        if len(best) == 1:
            return best[0]
        if self.rng is None:
            self.rng = np.random.default_rng()
        return best[self.rng.integers(len(best))]


class UniformRandomPolicy(EnumerablePolicy):
    """Selects uniformly among the model's applicable actions."""

    def __init__(self, model, rng: Optional[np.random.Generator] = None):
        self.model = model
        self.rng = rng

    def action_distribution(self, state: State) -> List[Tuple[Action, float]]:
        if self.model.terminal(state):
            return []
        actions = self.model.applicable_actions(state)
        if not actions:
            return []
        p = 1.0 / len(actions)
        return [(a, p) for a in actions]


class TabularPolicy(EnumerablePolicy):
    """
    Explicit policy table.

    mapping values may be a single action (deterministic) or a dict
    {action -> probability}. Lookups go through the hashing factory so that
    semantically equal states share an entry.
    """

    def __init__(
        self,
        mapping: Dict[State, Any],
        hashing: Optional[HashableStateFactory] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.hashing = hashing if hashing is not None else IdentityHashing()
        self.rng = rng
        self.table: Dict[Any, List[Tuple[Action, float]]] = {}
        for s, choice in mapping.items():
            self.set_action(s, choice)

    def set_action(self, state: State, choice: Any) -> None:
        """Set the action (or {action -> probability} dict) for a state."""
        if isinstance(choice, dict):
            total = sum(choice.values())
            if total <= 0:
                raise ValueError(f"Action probabilities for {state!r} must sum to > 0")
            dist = [(a, p / total) for a, p in choice.items() if p > 0]
        else:
            dist = [(choice, 1.0)]
        self.table[self.hashing.key(state)] = dist

    def action_distribution(self, state: State) -> List[Tuple[Action, float]]:
        return list(self.table.get(self.hashing.key(state), []))
