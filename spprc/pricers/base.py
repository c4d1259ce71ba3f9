"""
Pricing subproblem boundary for column generation.

A master problem hands the current dual prices to a pricing subproblem
and receives a candidate column: its coefficient pattern and its reduced
cost. Any object with a matching solve() method is a pricing subproblem;
implementations are independent types picked at the call site:

- SPPRCPricer: resource-constrained shortest path over a Network
- KnapsackPricer: unbounded knapsack DP (cutting stock)

Usage:
------
    >>> pricer: PricingSubproblem = KnapsackPricer([3, 5], capacity=10)
    >>> result = pricer.solve([0.4, 0.7])
    >>> if result.has_negative_reduced_cost:
    ...     master.add_column(result.pattern)
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np

from spprc.config import config
from spprc.core.errors import ConfigurationError
from spprc.pricing.base import SolveStatus


@dataclass
class PricingResult:
    """
    Column proposed by a pricing subproblem.

    Attributes:
        status: Outcome of the underlying solve
        pattern: Column coefficients, one per master row (None if no column)
        reduced_cost: Reduced cost of the column (None if no column)
        details: Solver-specific result (e.g. the SPPRCResult)
    """
    status: SolveStatus
    pattern: Optional[np.ndarray] = None
    reduced_cost: Optional[float] = None
    details: Any = None

    @property
    def has_column(self) -> bool:
        return self.pattern is not None and self.reduced_cost is not None

    @property
    def has_negative_reduced_cost(self) -> bool:
        """Check if the column improves the master (beyond tolerance)."""
        if self.reduced_cost is None:
            return False
        return self.reduced_cost < -config.get_tolerance("reduced_cost")

    def __repr__(self) -> str:
        rc_str = f", rc={self.reduced_cost:.6f}" if self.reduced_cost is not None else ""
        return f"PricingResult({self.status.name}{rc_str})"


@runtime_checkable
class PricingSubproblem(Protocol):
    """
    Capability of producing a column for given dual prices.
    """

    def solve(self, duals: Sequence[float]) -> PricingResult:
        """
        Find a column of minimum reduced cost.

        Args:
            duals: Dual price per master row

        Returns:
            PricingResult with the pattern and its reduced cost
        """
        ...


def as_dual_vector(duals: Sequence[float], size: int) -> np.ndarray:
    """
    Convert duals to a float vector of the expected length.

    Raises:
        ConfigurationError: If the length does not match
    """
    vector = np.asarray(duals, dtype=float)
    if vector.ndim != 1 or vector.shape[0] != size:
        raise ConfigurationError(
            f"Expected {size} dual values, got shape {vector.shape}"
        )
    return vector
