"""Planning experiment runner.

Solves a case study with policy iteration, optionally cross-checks the values
against value iteration, rolls the resulting policy out, and saves results.

Usage:
    python -m mdp_planning.experiments.run_planning_experiment <config_module>

Example:
    python -m mdp_planning.experiments.run_planning_experiment configs.four_rooms_stochastic
"""

import os
import sys
import time
import importlib

import numpy as np

from .experiment_io import build_metadata, save_experiment_results

from ..Planning import PolicyIteration, ValueIteration, ConvergenceTrace
from ..Evaluation import evaluate_behavior


# ============================================================
# Helpers
# ============================================================

def max_value_gap(pi: PolicyIteration, vi: ValueIteration) -> float:
    """Largest |V_pi(s) - V_vi(s)| over states known to both planners."""
    gaps = [
        abs(v - vi.value_function.get(key))
        for key, v in pi.value_function.items()
        if key in vi.value_function
    ]
    return max(gaps) if gaps else 0.0


def rollout_summary(policy, model, initial_state, gamma, num_rollouts, rollout_length):
    """Discounted return and episode length statistics over rollouts."""
    returns = []
    lengths = []
    reached = 0
    for _ in range(num_rollouts):
        episode = evaluate_behavior(policy, model, initial_state, rollout_length)
        returns.append(episode.discounted_return(gamma))
        lengths.append(episode.num_steps)
        if model.terminal(episode.states[-1]):
            reached += 1
    return {
        "mean_return": float(np.mean(returns)) if returns else 0.0,
        "std_return": float(np.std(returns)) if returns else 0.0,
        "mean_length": float(np.mean(lengths)) if lengths else 0.0,
        "terminal_rate": reached / num_rollouts if num_rollouts else 0.0,
    }


def run_experiment(config):
    """Run one planning experiment and return (summary, tidy_rows, planner, trace)."""
    model, initial_state = config.build_domain_fn(**config.domain_kwargs)

    planner = PolicyIteration.from_config(model, config.planner)
    trace = ConvergenceTrace()
    planner.add_observer(trace)

    t0 = time.time()
    policy = planner.plan_from_state(initial_state)
    planning_time = time.time() - t0

    summary = {
        "num_states": len(planner.value_function),
        "policy_iterations": planner.total_policy_iterations,
        "value_iterations": planner.total_value_iterations,
        "planning_time_s": planning_time,
        "initial_value": planner.value(initial_state),
        "final_delta": trace.deltas[-1] if trace.records else None,
    }

    if config.compare_value_iteration:
        vi = ValueIteration(
            model,
            config.planner.gamma,
            planner.hashing,
            max_delta=config.planner.max_eval_delta,
            max_iterations=10 * max(1, config.planner.max_evaluation_iterations),
        )
        vi.plan_from_state(initial_state)
        summary["vi_iterations"] = vi.total_iterations
        summary["vi_initial_value"] = vi.value(initial_state)
        summary["max_value_gap"] = max_value_gap(planner, vi)

    if config.num_rollouts > 0:
        summary["rollouts"] = rollout_summary(
            policy, model, initial_state, config.planner.gamma,
            config.num_rollouts, config.rollout_length,
        )

    tidy_rows = [
        {"pass": i + 1, "sweeps": r.sweeps, "last_delta": r.last_delta, "num_states": r.num_states}
        for i, r in enumerate(trace.records)
    ]
    return summary, tidy_rows, planner, trace


def print_report(summary, case_study_name):
    print("\n" + "=" * 70)
    print(f"RESULTS: {case_study_name.upper()}")
    print("=" * 70)
    print(f"  Reachable states:   {summary['num_states']}")
    print(f"  Policy iterations:  {summary['policy_iterations']}")
    print(f"  Evaluation sweeps:  {summary['value_iterations']}")
    print(f"  V(initial):         {summary['initial_value']:.4f}")
    if "max_value_gap" in summary:
        print(f"  VI V(initial):      {summary['vi_initial_value']:.4f}")
        print(f"  Max |V_PI - V_VI|:  {summary['max_value_gap']:.4g}")
    if "rollouts" in summary:
        r = summary["rollouts"]
        print(f"  Mean return:        {r['mean_return']:.4f} (std {r['std_return']:.4f})")
        print(f"  Mean length:        {r['mean_length']:.1f}")
        print(f"  Terminal rate:      {r['terminal_rate']:.2%}")


def try_plot(planner, trace, model, config):
    """Save value function and convergence figures for grid domains."""
    if not config.figures_dir:
        return
    if not hasattr(model, "cells"):
        print("Skipping plots: domain is not a grid")
        return

    from ..CaseStudies.GridWorld import value_grid, policy_grid
    from ..Evaluation import plot_value_function, plot_convergence

    os.makedirs(config.figures_dir, exist_ok=True)
    policy = planner.get_computed_policy()
    plot_value_function(
        value_grid(model, planner.value),
        policy_grid(model, policy),
        title=f"{config.case_study_name} values",
        save_path=os.path.join(config.figures_dir, "values.png"),
        show=False,
    )
    plot_convergence(
        trace,
        save_path=os.path.join(config.figures_dir, "convergence.png"),
        show=False,
    )


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m mdp_planning.experiments.run_planning_experiment <config_module>")
        print("Example: python -m mdp_planning.experiments.run_planning_experiment configs.four_rooms_stochastic")
        sys.exit(1)

    config_module_name = sys.argv[1]
    try:
        config_module = importlib.import_module(f".{config_module_name}", package="mdp_planning.experiments")
    except ImportError as e:
        print(f"Error loading config: {e}")
        sys.exit(1)
    config = config_module.config

    print("=" * 70)
    print(f"PLANNING EXPERIMENT: {config.case_study_name.upper()}")
    print(f"gamma: {config.planner.gamma}, max_pi_delta: {config.planner.max_pi_delta}, "
          f"max_eval_delta: {config.planner.max_eval_delta}")
    print(f"Evaluation cap: {config.planner.max_evaluation_iterations}, "
          f"policy iteration cap: {config.planner.max_policy_iterations}, seed: {config.planner.seed}")
    print("=" * 70)

    summary, tidy_rows, planner, trace = run_experiment(config)
    print_report(summary, config.case_study_name)

    metadata = build_metadata(config)
    save_experiment_results(config.results_path, summary, metadata, tidy_rows)
    print(f"\nResults saved to {config.results_path}")

    try_plot(planner, trace, planner.model, config)

    print("\n" + "=" * 70)
    print("EXPERIMENT COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    main()
