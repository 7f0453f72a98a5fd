"""Policy rollouts and episode statistics."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import numpy as np


@dataclass
class Episode:
    """
    One trajectory through the model.

    states has one more entry than actions and rewards: states[t + 1] is the
    result of taking actions[t] in states[t].
    """
    states: List[Any] = field(default_factory=list)
    actions: List[Any] = field(default_factory=list)
    rewards: List[float] = field(default_factory=list)

    @property
    def num_steps(self) -> int:
        return len(self.actions)

    def discounted_return(self, gamma: float) -> float:
        """sum_t gamma^t * r_t"""
        total = 0.0
        discount = 1.0
        for r in self.rewards:
            total += discount * r
            discount *= gamma
        return total

    def action_sequence_string(self) -> str:
        return "; ".join(str(a) for a in self.actions)


def evaluate_behavior(
    policy,
    model,
    initial_state: Any,
    max_steps: int = 1000,
) -> Episode:
    """Roll policy forward with model.sample until terminal, undefined, or max_steps.

    Parameters
    ----------
    policy : EnumerablePolicy
        Policy to follow
    model : SampleModel
        Generative model used to draw successors
    initial_state : any
        Start state
    max_steps : int
        Maximum number of actions

    Returns
    -------
    Episode
        The generated trajectory
    """
    episode = Episode(states=[initial_state])
    state = initial_state
    for _ in range(max_steps):
        if model.terminal(state) or not policy.is_defined_for(state):
            break
        action = policy.sample_action(state)
        state, reward = model.sample(state, action)
        episode.actions.append(action)
        episode.rewards.append(reward)
        episode.states.append(state)
    return episode


def average_discounted_return(
    policy,
    model,
    initial_state: Any,
    gamma: float,
    num_episodes: int = 100,
    max_steps: int = 1000,
) -> float:
    """Monte Carlo estimate of the policy's discounted return from initial_state."""
    if num_episodes <= 0:
        raise ValueError("num_episodes must be positive")
    returns = [
        evaluate_behavior(policy, model, initial_state, max_steps).discounted_return(gamma)
        for _ in range(num_episodes)
    ]
    return float(np.mean(returns))
