"""Example domains for the planners."""

from . import GridWorld

__all__ = ['GridWorld']
