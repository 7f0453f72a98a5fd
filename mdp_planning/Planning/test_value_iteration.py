"""Tests for ValueIteration."""

import pytest

from mdp_planning.Planning import ValueIteration, UnreadyPlannerError
from mdp_planning.CaseStudies.GridWorld import GridWorld, goal_reward


def test_run_before_reachability_raises():
    world = GridWorld(3, 3, goal=(2, 2))
    with pytest.raises(UnreadyPlannerError):
        ValueIteration(world, 0.9).run_vi()


def test_goal_reward_values():
    world = GridWorld(3, 1, goal=(2, 0), reward_fn=goal_reward((2, 0), value=1.0))
    vi = ValueIteration(world, 0.5, max_delta=1e-12)
    policy = vi.plan_from_state((0, 0))

    assert vi.value((1, 0)) == pytest.approx(1.0)
    assert vi.value((0, 0)) == pytest.approx(0.5)
    assert policy.action_distribution((0, 0)) == [("east", 1.0)]


def test_plan_twice_does_not_rerun():
    world = GridWorld(3, 3, goal=(2, 2))
    vi = ValueIteration(world, 0.9, max_delta=1e-6)
    vi.plan_from_state((0, 0))
    sweeps = vi.total_iterations
    vi.plan_from_state((0, 0))
    assert vi.total_iterations == sweeps

    vi.reset_solver()
    assert vi.total_iterations == 0
    assert len(vi.value_function) == 0


def test_terminal_start_runs_no_sweeps():
    world = GridWorld(3, 3, goal=(2, 2))
    vi = ValueIteration(world, 0.9, max_delta=0.0, max_iterations=50)
    vi.plan_from_state((2, 2))
    assert vi.total_iterations == 0
