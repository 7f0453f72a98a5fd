"""Dynamic programming planners for fully specified MDP models."""

from .errors import UnreadyPlannerError, NonStochasticModelError
from .value_function import (
    ValueFunctionStore,
    ValueInitializer,
    ConstantValueFunction,
    FunctionValueInitializer,
)
from .reachability import ReachabilityExplorer, get_reachable_states, full_transitions
from .dynamic_programming import DynamicProgramming
from .observers import PlanningObserver, ConvergenceTrace, EvaluationRecord, PrintObserver
from .policy_iteration import PolicyIteration
from .value_iteration import ValueIteration

__all__ = [
    'UnreadyPlannerError',
    'NonStochasticModelError',
    'ValueFunctionStore',
    'ValueInitializer',
    'ConstantValueFunction',
    'FunctionValueInitializer',
    'ReachabilityExplorer',
    'get_reachable_states',
    'full_transitions',
    'DynamicProgramming',
    'PlanningObserver',
    'ConvergenceTrace',
    'EvaluationRecord',
    'PrintObserver',
    'PolicyIteration',
    'ValueIteration',
]
