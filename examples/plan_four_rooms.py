"""Example: Plan in the four rooms GridWorld with policy iteration.

This script demonstrates:
1. Building the four rooms GridWorld with slippery moves
2. Planning with PolicyIteration and tracking convergence
3. Re-planning after the dynamics change
4. Rolling out the greedy policy
"""

import numpy as np

from mdp_planning.CaseStudies.GridWorld import build_four_rooms
from mdp_planning.Planning import PolicyIteration, ConvergenceTrace, PrintObserver
from mdp_planning.Evaluation import evaluate_behavior


def main():
    print("=" * 60)
    print("Four Rooms Policy Iteration")
    print("=" * 60)

    world, start = build_four_rooms(success_prob=0.75, reward="wall")

    planner = PolicyIteration(
        world,
        gamma=0.9,
        max_pi_delta=0.1,
        max_evaluation_iterations=20,
        max_policy_iterations=100,
        rng=np.random.default_rng(0),
        verbose=True,
    )
    trace = ConvergenceTrace()
    planner.add_observer(trace)
    planner.add_observer(PrintObserver())

    policy = planner.plan_from_state(start)
    print(f"\n{trace}")
    print(f"V({start}) = {planner.value(start):.3f}")

    episode = evaluate_behavior(policy, world, start, max_steps=500)
    print(f"\nRollout: {episode.num_steps} steps, "
          f"discounted return {episode.discounted_return(planner.gamma):.3f}")
    print(f"Actions: {episode.action_sequence_string()}")

    # Make the moves deterministic and plan again on the same planner
    print("\nSwitching to deterministic moves...")
    world.success_prob = 1.0
    planner.recompute_reachable_states()
    policy = planner.plan_from_state(start)
    print(f"V({start}) = {planner.value(start):.3f}")
    print(f"Total policy iterations: {planner.total_policy_iterations}")
    print(f"Total evaluation sweeps: {planner.total_value_iterations}")


if __name__ == "__main__":
    main()
