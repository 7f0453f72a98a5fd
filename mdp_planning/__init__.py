"""
MDP Planning Library

Model-based planning for Markov decision processes: reachability analysis
over a transition model followed by dynamic-programming policy iteration.

Modules:
- Models: State hashing, transition model interfaces, tabular MDPs
- Planning: Value function store, reachability, policy / value iteration
- Policies: Enumerable and greedy policies
- Evaluation: Policy rollouts and value function plots
- CaseStudies: Example domains (GridWorld)
"""

from . import Models
from . import Policies
from . import Planning
from . import Evaluation
from . import CaseStudies

__all__ = ['Models', 'Policies', 'Planning', 'Evaluation', 'CaseStudies']
__version__ = '0.1.0'
