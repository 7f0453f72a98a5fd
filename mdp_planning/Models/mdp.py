"""Markov Decision Process model."""

from dataclasses import dataclass, field
from typing import Dict, Tuple, List, Hashable, Set, Optional
import warnings

import numpy as np

from .model import FullModel, TransitionProb

State = Hashable
Action = Hashable


@dataclass
class MDP:
    """
    Markov Decision Process.

    states: list of all states
    actions: mapping from state -> list of enabled actions
    P: mapping (s, a) -> {s' -> P(s' | s, a)}
    R: mapping (s, a, s') -> reward (missing entries are 0)
    terminals: states where episodes end
    """
    states: List[State]
    actions: Dict[State, List[Action]]
    P: Dict[Tuple[State, Action], Dict[State, float]]
    R: Dict[Tuple[State, Action, State], float] = field(default_factory=dict)
    terminals: Set[State] = field(default_factory=set)


def mdp_check_distributions(mdp: MDP, tol: float = 1e-9) -> bool:
    """Check that every transition row is a probability distribution."""
    for s in mdp.states:
        if s in mdp.terminals:
            continue
        for a in mdp.actions.get(s, []):
            row = mdp.P.get((s, a))
            if row is None:
                raise ValueError(f"Missing transition row for ({s!r}, {a!r}).")
            if any(p < 0 for p in row.values()):
                raise ValueError(f"Negative probability in row ({s!r}, {a!r}).")
            total = sum(row.values())
            if abs(total - 1.0) > tol:
                raise ValueError(
                    f"Transition row ({s!r}, {a!r}) sums to {total}, expected 1."
                )
    return True


class TabularModel(FullModel):
    """FullModel backed by an explicit MDP."""

    def __init__(self, mdp: MDP, rng: Optional[np.random.Generator] = None):
        self.mdp = mdp
        self.rng = rng

    def terminal(self, state: State) -> bool:
        return state in self.mdp.terminals

    def applicable_actions(self, state: State) -> List[Action]:
        return list(self.mdp.actions.get(state, []))

    def transitions(self, state: State, action: Action) -> List[TransitionProb]:
        row = self.mdp.P.get((state, action), {})
        outcomes = [
            TransitionProb(p, s2, self.mdp.R.get((state, action, s2), 0.0))
            for s2, p in row.items()
            if p > 0
        ]
        total = sum(tp.p for tp in outcomes)
        if outcomes and abs(total - 1.0) > 1e-6:
            warnings.warn(
                f"Transition row ({state!r}, {action!r}) sums to {total}.",
                RuntimeWarning
            )
        return outcomes
