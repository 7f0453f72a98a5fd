"""GridWorld case study: slippery grid navigation with a four rooms map."""

from .gridworld import (
    GridWorld,
    build_four_rooms,
    four_rooms_walls,
    uniform_cost_reward,
    goal_reward,
    WallPenaltyReward,
    value_grid,
    policy_grid,
    DIRECTIONS,
    NORTH,
    SOUTH,
    EAST,
    WEST,
)

__all__ = [
    'GridWorld',
    'build_four_rooms',
    'four_rooms_walls',
    'uniform_cost_reward',
    'goal_reward',
    'WallPenaltyReward',
    'value_grid',
    'policy_grid',
    'DIRECTIONS',
    'NORTH',
    'SOUTH',
    'EAST',
    'WEST',
]
