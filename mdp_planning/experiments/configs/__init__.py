"""Experiment configurations."""

from .base_config import PlannerConfig, PlanningExperimentConfig

__all__ = ['PlannerConfig', 'PlanningExperimentConfig']
