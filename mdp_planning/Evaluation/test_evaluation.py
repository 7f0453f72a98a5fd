"""Tests for rollouts and plotting."""

import warnings

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from mdp_planning.Evaluation import (
    Episode,
    evaluate_behavior,
    average_discounted_return,
    plot_value_function,
    plot_convergence,
)
from mdp_planning.Planning import PolicyIteration, ConvergenceTrace
from mdp_planning.Policies import TabularPolicy
from mdp_planning.CaseStudies.GridWorld import (
    GridWorld,
    build_four_rooms,
    value_grid,
    policy_grid,
)


def test_discounted_return():
    episode = Episode(states=[0, 1, 2, 3], actions=["a", "a", "a"], rewards=[1.0, 2.0, 4.0])
    assert episode.num_steps == 3
    assert episode.discounted_return(1.0) == 7.0
    assert episode.discounted_return(0.5) == pytest.approx(1.0 + 1.0 + 1.0)
    assert episode.action_sequence_string() == "a; a; a"


def test_rollout_stops_at_terminal():
    world = GridWorld(3, 1, goal=(2, 0))
    policy = TabularPolicy({(0, 0): "east", (1, 0): "east"})
    episode = evaluate_behavior(policy, world, (0, 0), max_steps=10)
    assert episode.states == [(0, 0), (1, 0), (2, 0)]
    assert episode.rewards == [-1.0, -1.0]


def test_rollout_stops_where_policy_undefined():
    world = GridWorld(3, 1, goal=(2, 0))
    policy = TabularPolicy({(0, 0): "east"})
    episode = evaluate_behavior(policy, world, (0, 0), max_steps=10)
    assert episode.states == [(0, 0), (1, 0)]


def test_rollout_respects_max_steps():
    world = GridWorld(3, 1, goal=(2, 0))
    policy = TabularPolicy({(0, 0): "west"})
    episode = evaluate_behavior(policy, world, (0, 0), max_steps=5)
    assert episode.num_steps == 5
    assert episode.states[-1] == (0, 0)


def test_planned_policy_follows_shortest_path():
    world, start = build_four_rooms(success_prob=1.0, reward="uniform")
    planner = PolicyIteration(world, 0.9, max_pi_delta=1e-6, max_evaluation_iterations=1000,
                              rng=np.random.default_rng(0))
    policy = planner.plan_from_state(start)

    episode = evaluate_behavior(policy, world, start, max_steps=100)
    assert episode.num_steps == 20
    assert episode.states[-1] == world.goal
    assert episode.discounted_return(0.9) == pytest.approx(planner.value(start), abs=1e-3)


def test_average_discounted_return_matches_value():
    world = GridWorld(3, 3, goal=(2, 2), success_prob=0.9, rng=np.random.default_rng(1))
    planner = PolicyIteration(world, 0.9, max_pi_delta=1e-8, max_evaluation_iterations=1000,
                              rng=np.random.default_rng(2))
    policy = planner.plan_from_state((0, 0))
    estimate = average_discounted_return(policy, world, (0, 0), 0.9, num_episodes=2000)
    assert estimate == pytest.approx(planner.value((0, 0)), abs=0.15)

    with pytest.raises(ValueError):
        average_discounted_return(policy, world, (0, 0), 0.9, num_episodes=0)


def test_plots_save(tmp_path):
    world, start = build_four_rooms(success_prob=0.8, reward="goal")
    planner = PolicyIteration(world, 0.9, max_pi_delta=1e-2, max_evaluation_iterations=20)
    trace = ConvergenceTrace()
    planner.add_observer(trace)
    policy = planner.plan_from_state(start)

    values_path = tmp_path / "values.png"
    plot_value_function(
        value_grid(world, planner.value),
        policy_grid(world, policy),
        save_path=str(values_path),
        show=False,
    )
    assert values_path.exists()

    convergence_path = tmp_path / "convergence.png"
    plot_convergence(trace, save_path=str(convergence_path), show=False)
    assert convergence_path.exists()


def test_plot_convergence_empty(capsys):
    plot_convergence(ConvergenceTrace(), show=False)
    assert "No evaluation passes" in capsys.readouterr().out


def test_value_plot_masks_walls_without_warnings(tmp_path):
    values = np.array([[0.0, np.nan], [1.0, 2.0]])
    path = tmp_path / "masked.png"
    with warnings.catch_warnings():
        warnings.simplefilter("error", PendingDeprecationWarning)
        plot_value_function(values, {(0, 0): ["north"]}, save_path=str(path), show=False)
    assert path.exists()
