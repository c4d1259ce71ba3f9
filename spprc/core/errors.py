"""
Errors raised by the SPPRC core.

Only configuration problems and internal defects are exceptions. An
infeasible instance or a truncated search is a normal outcome and is
reported through the result status instead (see spprc.pricing.base).
"""


class SPPRCError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SPPRCError, ValueError):
    """
    Invalid input detected before a run starts.

    Raised for:
    - a resource window with min_value > max_value
    - a consumption vector, baseline or cost override whose length does
      not match the number of resource windows
    - negative arc consumption
    - unknown source/sink node
    - invalid labeling configuration values
    """


class InvariantViolation(SPPRCError, RuntimeError):
    """
    An internal invariant was broken during a run.

    This signals a defect, not a property of the input. The run is
    aborted instead of returning a possibly wrong path.
    """
