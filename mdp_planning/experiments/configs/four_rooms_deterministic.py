"""Four rooms GridWorld with deterministic moves and a -1 step cost."""

from .base_config import PlannerConfig, PlanningExperimentConfig
from ...CaseStudies.GridWorld import build_four_rooms


config = PlanningExperimentConfig(
    case_study_name="four_rooms",
    build_domain_fn=build_four_rooms,
    planner=PlannerConfig(
        gamma=0.99,
        max_pi_delta=1e-3,
        max_evaluation_iterations=50,
        max_policy_iterations=50,
        seed=42,
    ),
    num_rollouts=10,
    rollout_length=200,
    results_path="./data/four_rooms_deterministic.json",
    domain_kwargs={"success_prob": 1.0, "reward": "uniform"},
)
