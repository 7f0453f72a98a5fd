"""Observers notified after each policy evaluation pass.

Observers run synchronously on the planning thread and must not call back
into the planner.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from ..Policies.policy import GreedyQPolicy


class PlanningObserver(ABC):
    """Callback invoked once per completed evaluation pass."""

    @abstractmethod
    def observe(self, policy: GreedyQPolicy, sweeps: int, last_delta: float) -> None:
        """
        Parameters
        ----------
        policy : GreedyQPolicy
            Greedy policy over the planner's live value function
        sweeps : int
            Number of evaluation sweeps in this pass
        last_delta : float
            Maximum value change in the final sweep
        """
        pass


@dataclass
class EvaluationRecord:
    """One evaluation pass as seen by an observer."""
    sweeps: int
    last_delta: float
    num_states: int


@dataclass
class ConvergenceTrace(PlanningObserver):
    """Records sweep counts and deltas for every evaluation pass."""
    records: List[EvaluationRecord] = field(default_factory=list)

    def observe(self, policy: GreedyQPolicy, sweeps: int, last_delta: float) -> None:
        num_states = len(policy.q_source.value_function)
        self.records.append(EvaluationRecord(sweeps, last_delta, num_states))

    @property
    def deltas(self) -> List[float]:
        return [r.last_delta for r in self.records]

    @property
    def total_sweeps(self) -> int:
        return sum(r.sweeps for r in self.records)

    def __str__(self) -> str:
        if not self.records:
            return "ConvergenceTrace: No data"
        lines = [
            "Convergence Trace",
            "=" * 40,
            f"Evaluation passes: {len(self.records)}",
            f"Total sweeps: {self.total_sweeps}",
            f"Final delta: {self.records[-1].last_delta:.6g}",
        ]
        return "\n".join(lines)


class PrintObserver(PlanningObserver):
    """Prints a line per evaluation pass."""

    def __init__(self, prefix: str = "PE"):
        self.prefix = prefix
        self.passes = 0

    def observe(self, policy: GreedyQPolicy, sweeps: int, last_delta: float) -> None:
        self.passes += 1
        print(f"{self.prefix} [{self.passes}] sweeps: {sweeps}, delta: {last_delta:.6g}")
