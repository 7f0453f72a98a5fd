"""Base configuration classes for planning experiments."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class PlannerConfig:
    """Policy iteration parameters."""

    gamma: float = 0.99

    # Planning stops once an evaluation pass changes values by less
    max_pi_delta: float = 1e-3
    # An evaluation pass stops once a sweep changes values by less
    max_eval_delta: Optional[float] = None

    max_evaluation_iterations: int = 100
    max_policy_iterations: int = 100

    # Greedy tie-breaking seed
    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if self.max_eval_delta is None:
            self.max_eval_delta = self.max_pi_delta


@dataclass
class PlanningExperimentConfig:
    """Configuration for planning experiments on a case study."""

    # Case study
    case_study_name: str
    # Returns (model, initial_state)
    build_domain_fn: Callable

    planner: PlannerConfig = field(default_factory=PlannerConfig)

    # Policy rollouts after planning
    num_rollouts: int = 100
    rollout_length: int = 200

    # Also solve with value iteration and compare values
    compare_value_iteration: bool = True

    # Output
    results_path: str = "./data/planning_results.json"
    figures_dir: Optional[str] = None

    # Optional build_domain kwargs
    domain_kwargs: dict = None

    def __post_init__(self):
        if self.domain_kwargs is None:
            self.domain_kwargs = {}
