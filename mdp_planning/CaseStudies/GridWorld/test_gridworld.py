"""Tests for the GridWorld case study."""

import numpy as np
import pytest

from mdp_planning.CaseStudies.GridWorld import (
    GridWorld,
    build_four_rooms,
    four_rooms_walls,
    goal_reward,
    uniform_cost_reward,
    WallPenaltyReward,
    value_grid,
    policy_grid,
    NORTH,
    SOUTH,
    EAST,
    WEST,
)


def test_four_rooms_map():
    walls = four_rooms_walls()
    assert len(walls) == 17
    # doorways
    for cell in [(1, 5), (5, 1), (5, 8), (8, 4)]:
        assert cell not in walls
    world, start = build_four_rooms()
    assert start == (0, 0)
    assert len(world.cells()) == 121 - 17


def test_deterministic_moves():
    world = GridWorld(3, 3, walls={(1, 1)})
    assert world.move((0, 0), NORTH) == (0, 1)
    assert world.move((0, 0), SOUTH) == (0, 0)
    assert world.move((0, 1), EAST) == (0, 1)
    assert world.move((2, 2), EAST) == (2, 2)
    assert world.move((2, 2), WEST) == (1, 2)

    outcomes = world.transitions((0, 0), EAST)
    assert len(outcomes) == 1
    assert outcomes[0].state == (1, 0)
    assert outcomes[0].p == 1.0


def test_slippery_moves_merge_outcomes():
    world = GridWorld(3, 3, success_prob=0.7)
    outcomes = {tp.state: tp.p for tp in world.transitions((0, 0), NORTH)}
    assert sum(outcomes.values()) == pytest.approx(1.0)
    assert outcomes[(0, 1)] == pytest.approx(0.7)
    assert outcomes[(1, 0)] == pytest.approx(0.1)
    # south and west both bump into the edge
    assert outcomes[(0, 0)] == pytest.approx(0.2)


def test_goal_is_terminal():
    world = GridWorld(3, 3, goal=(2, 2))
    assert world.terminal((2, 2))
    assert not world.terminal((0, 0))


def test_reward_functions():
    assert uniform_cost_reward((0, 0), EAST, (1, 0)) == -1.0

    reward = goal_reward((1, 0), value=5.0)
    assert reward((0, 0), EAST, (1, 0)) == 5.0
    assert reward((0, 0), NORTH, (0, 1)) == 0.0

    wall = WallPenaltyReward((2, 2))
    assert wall((2, 1), NORTH, (2, 2)) == 1000.0
    assert wall((0, 0), SOUTH, (0, 0)) == -100.0
    assert wall((0, 0), NORTH, (0, 1)) == -1.0


def test_transition_rewards_follow_reward_fn():
    world = GridWorld(2, 1, goal=(1, 0), success_prob=1.0, reward_fn=WallPenaltyReward((1, 0)))
    assert world.transitions((0, 0), EAST)[0].reward == 1000.0
    assert world.transitions((0, 0), WEST)[0].reward == -100.0


def test_invalid_arguments():
    with pytest.raises(ValueError):
        GridWorld(3, 3, success_prob=1.5)
    with pytest.raises(ValueError):
        build_four_rooms(reward="unknown")


def test_grid_views():
    world = GridWorld(2, 2, walls={(1, 0)}, goal=(1, 1))
    grid = value_grid(world, lambda cell: float(cell[0] + 10 * cell[1]))
    assert grid.shape == (2, 2)
    assert np.isnan(grid[0, 1])
    assert grid[1, 0] == 10.0

    class Always:
        def action_distribution(self, state):
            return [(NORTH, 1.0)]

    actions = policy_grid(world, Always())
    assert set(actions) == {(0, 0), (0, 1)}
    assert actions[(0, 0)] == [NORTH]
