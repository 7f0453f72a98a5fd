"""Policies over MDP states."""

from .policy import (
    EnumerablePolicy,
    GreedyQPolicy,
    UniformRandomPolicy,
    TabularPolicy,
)

__all__ = [
    'EnumerablePolicy',
    'GreedyQPolicy',
    'UniformRandomPolicy',
    'TabularPolicy',
]
