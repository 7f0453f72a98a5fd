"""GridWorld case study: navigation on a grid with walls and slippery moves."""

from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

import numpy as np

from ...Models.model import FullModel, TransitionProb

Cell = Tuple[int, int]

NORTH = "north"
SOUTH = "south"
EAST = "east"
WEST = "west"

DIRECTIONS: Dict[str, Cell] = {
    NORTH: (0, 1),
    SOUTH: (0, -1),
    EAST: (1, 0),
    WEST: (-1, 0),
}

RewardFn = Callable[[Cell, str, Cell], float]


# ============================================================
# Reward functions
# ============================================================

def uniform_cost_reward(state: Cell, action: str, next_state: Cell) -> float:
    """-1 for every step."""
    return -1.0


def goal_reward(goal: Cell, value: float = 10.0, step: float = 0.0) -> RewardFn:
    """Reward value on entering goal, step otherwise."""
    def reward(state: Cell, action: str, next_state: Cell) -> float:
        return value if next_state == goal else step
    return reward


class WallPenaltyReward:
    """+1000 at the goal, -100 for bumping into a wall, -1 otherwise."""

    def __init__(self, goal: Cell, goal_value: float = 1000.0, bump: float = -100.0, step: float = -1.0):
        self.goal = goal
        self.goal_value = goal_value
        self.bump = bump
        self.step = step

    def __call__(self, state: Cell, action: str, next_state: Cell) -> float:
        if next_state == self.goal:
            return self.goal_value
        # agent did not move, so it hit a wall
        if next_state == state:
            return self.bump
        return self.step


# ============================================================
# Maps
# ============================================================

def four_rooms_walls() -> Set[Cell]:
    """Walls of the classic 11x11 four rooms map."""
    walls: Set[Cell] = set()

    def horizontal(x_start: int, x_end: int, y: int):
        walls.update((x, y) for x in range(x_start, x_end + 1))

    def vertical(y_start: int, y_end: int, x: int):
        walls.update((x, y) for y in range(y_start, y_end + 1))

    horizontal(0, 0, 5)
    horizontal(2, 4, 5)
    horizontal(6, 7, 4)
    horizontal(9, 10, 4)
    vertical(0, 0, 5)
    vertical(2, 7, 5)
    vertical(9, 10, 5)
    return walls


# ============================================================
# Model
# ============================================================

class GridWorld(FullModel):
    """
    Grid navigation with slippery moves.

    States are (x, y) cells. The intended direction is taken with probability
    success_prob, otherwise one of the other three directions uniformly.
    Moves off the grid or into a wall leave the agent where it is. The goal
    cell is terminal.
    """

    def __init__(
        self,
        width: int,
        height: int,
        walls: Iterable[Cell] = (),
        goal: Optional[Cell] = None,
        success_prob: float = 1.0,
        reward_fn: RewardFn = uniform_cost_reward,
        rng: Optional[np.random.Generator] = None,
    ):
        if not 0.0 <= success_prob <= 1.0:
            raise ValueError(f"success_prob must be in [0, 1], got {success_prob}")
        self.width = width
        self.height = height
        self.walls = set(walls)
        self.goal = goal
        self.success_prob = success_prob
        self.reward_fn = reward_fn
        self.rng = rng

    def cells(self) -> List[Cell]:
        """All non-wall cells."""
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in self.walls
        ]

    def blocked(self, cell: Cell) -> bool:
        x, y = cell
        return not (0 <= x < self.width and 0 <= y < self.height) or cell in self.walls

    def move(self, state: Cell, direction: str) -> Cell:
        dx, dy = DIRECTIONS[direction]
        target = (state[0] + dx, state[1] + dy)
        return state if self.blocked(target) else target

    def terminal(self, state: Cell) -> bool:
        return state == self.goal

    def applicable_actions(self, state: Cell) -> List[str]:
        return list(DIRECTIONS)

    def transitions(self, state: Cell, action: str) -> List[TransitionProb]:
        slip = (1.0 - self.success_prob) / (len(DIRECTIONS) - 1)
        probs: Dict[Cell, float] = {}
        for direction in DIRECTIONS:
            p = self.success_prob if direction == action else slip
            if p <= 0.0:
                continue
            next_state = self.move(state, direction)
            probs[next_state] = probs.get(next_state, 0.0) + p
        return [
            TransitionProb(p, s2, self.reward_fn(state, action, s2))
            for s2, p in probs.items()
        ]


def build_four_rooms(
    success_prob: float = 1.0,
    reward: str = "uniform",
    start: Cell = (0, 0),
    goal: Cell = (10, 10),
    rng: Optional[np.random.Generator] = None,
) -> Tuple[GridWorld, Cell]:
    """
    Four rooms GridWorld and its start cell.

    Parameters
    ----------
    success_prob : float
        Probability the intended move is executed
    reward : str
        "uniform" (-1 per step), "goal" (+10 at goal) or "wall" (WallPenaltyReward)
    start, goal : tuple
        Start and goal cells
    """
    if reward == "uniform":
        reward_fn = uniform_cost_reward
    elif reward == "goal":
        reward_fn = goal_reward(goal)
    elif reward == "wall":
        reward_fn = WallPenaltyReward(goal)
    else:
        raise ValueError(f"Unknown reward: {reward}")

    world = GridWorld(11, 11, four_rooms_walls(), goal, success_prob, reward_fn, rng)
    return world, start


# ============================================================
# Grid views
# ============================================================

def value_grid(world: GridWorld, value_fn: Callable[[Cell], float]) -> np.ndarray:
    """(height, width) array of values; walls are NaN."""
    grid = np.full((world.height, world.width), np.nan)
    for x, y in world.cells():
        grid[y, x] = value_fn((x, y))
    return grid


def policy_grid(world: GridWorld, policy) -> Dict[Cell, List[str]]:
    """Greedy actions per non-terminal cell for an EnumerablePolicy."""
    return {
        cell: [a for a, _ in policy.action_distribution(cell)]
        for cell in world.cells()
        if not world.terminal(cell)
    }
