"""Errors raised by the planners."""


class UnreadyPlannerError(RuntimeError):
    """Policy evaluation was requested before the reachable states were found."""


class NonStochasticModelError(TypeError):
    """The transition model cannot enumerate full outcome distributions."""
