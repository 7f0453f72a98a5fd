"""Policy rollouts and plots."""

from .rollout import Episode, evaluate_behavior, average_discounted_return
from .visualization import plot_value_function, plot_convergence

__all__ = [
    'Episode',
    'evaluate_behavior',
    'average_discounted_return',
    'plot_value_function',
    'plot_convergence',
]
