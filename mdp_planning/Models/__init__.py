"""State identity, transition models, and explicit MDPs."""

from .hashing import HashableStateFactory, IdentityHashing, SimpleHashableStateFactory
from .model import TransitionProb, SampleModel, FullModel
from .mdp import MDP, TabularModel, mdp_check_distributions

__all__ = [
    'HashableStateFactory', 'IdentityHashing', 'SimpleHashableStateFactory',
    'TransitionProb', 'SampleModel', 'FullModel',
    'MDP', 'TabularModel', 'mdp_check_distributions',
]
