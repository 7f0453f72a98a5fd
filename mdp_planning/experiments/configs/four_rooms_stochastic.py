"""Four rooms GridWorld with slippery moves and wall penalties."""

from .base_config import PlannerConfig, PlanningExperimentConfig
from ...CaseStudies.GridWorld import build_four_rooms


config = PlanningExperimentConfig(
    case_study_name="four_rooms_slippery",
    build_domain_fn=build_four_rooms,
    planner=PlannerConfig(
        gamma=0.9,
        max_pi_delta=0.1,
        max_evaluation_iterations=20,
        max_policy_iterations=100,
        seed=42,
    ),
    num_rollouts=200,
    rollout_length=500,
    results_path="./data/four_rooms_stochastic.json",
    figures_dir="./images/four_rooms_stochastic",
    domain_kwargs={"success_prob": 0.75, "reward": "wall"},
)
