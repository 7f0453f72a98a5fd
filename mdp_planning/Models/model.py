"""Transition model interfaces consumed by the planners."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np

State = Any
Action = Any


@dataclass
class TransitionProb:
    """One outcome of taking an action: P(state | s, a) and its expected reward."""
    p: float
    state: State
    reward: float = 0.0


class SampleModel(ABC):
    """
    Generative transition model.

    Can only draw single successors; planners that need exact expectations
    require a FullModel.
    """

    @abstractmethod
    def terminal(self, state: State) -> bool:
        """Whether the state is terminal (implicit value 0, never expanded)."""
        pass

    @abstractmethod
    def applicable_actions(self, state: State) -> List[Action]:
        """Actions enabled in the state."""
        pass

    @abstractmethod
    def sample(self, state: State, action: Action) -> Tuple[State, float]:
        """Sample (next_state, reward) for taking action in state."""
        pass


class FullModel(SampleModel):
    """Transition model that can enumerate the full outcome distribution."""

    rng: Optional[np.random.Generator] = None

    @abstractmethod
    def transitions(self, state: State, action: Action) -> List[TransitionProb]:
        """
        Return every outcome of taking action in state.

        Probabilities sum to 1 over the returned outcomes.
        """
        pass

    def sample(self, state: State, action: Action) -> Tuple[State, float]:
        """Sample an outcome by enumerating transitions."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        outcomes = self.transitions(state, action)
        if not outcomes:
            raise ValueError(f"No outcomes for action {action!r} in state {state!r}")
        roll = self.rng.random()
        cumulative = 0.0
        for tp in outcomes:
            cumulative += tp.p
            if roll < cumulative:
                return tp.state, tp.reward
        # Floating point slack: fall back to the last outcome
        last = outcomes[-1]
        return last.state, last.reward
