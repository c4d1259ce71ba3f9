"""
Knapsack pricing subproblem for cutting stock.

For roll capacity W, item widths w_i and duals pi_i, the pricing problem
is the unbounded knapsack

    max  sum_i pi_i * x_i
    s.t. sum_i w_i * x_i <= W,  x_i >= 0 integer

solved by dynamic programming over the capacity. A cutting pattern has
cost 1 (one roll), so its reduced cost is 1 - sum_i pi_i * x_i.
"""

from collections.abc import Sequence

import numpy as np

from spprc.core.errors import ConfigurationError
from spprc.pricers.base import PricingResult, as_dual_vector
from spprc.pricing.base import SolveStatus


class KnapsackPricer:
    """
    Unbounded knapsack DP pricer.

    Args:
        widths: Positive integer width of each item (one master row each)
        capacity: Roll capacity (non-negative integer)

    Example:
        >>> pricer = KnapsackPricer([3, 5], capacity=10)
        >>> result = pricer.solve([0.4, 0.7])
        >>> result.pattern.tolist(), round(result.reduced_cost, 6)
        ([0, 2], -0.4)
    """

    def __init__(self, widths: Sequence[int], capacity: int):
        self.widths = np.asarray(widths, dtype=int)
        self.capacity = int(capacity)

        if self.widths.ndim != 1:
            raise ConfigurationError("widths must be a flat sequence")
        if np.any(self.widths <= 0):
            raise ConfigurationError(f"Item widths must be positive, got {list(widths)}")
        if self.capacity < 0:
            raise ConfigurationError(f"Capacity must be >= 0, got {capacity}")

    @property
    def num_items(self) -> int:
        return int(self.widths.shape[0])

    def _solve_dp(self, duals: np.ndarray) -> np.ndarray:
        """
        Run the DP and backtrack the best pattern.

        Returns:
            Item counts of the best pattern (all zeros if nothing pays)
        """
        W = self.capacity
        n = self.num_items

        # dp[w] = best dual value of a pattern of total width <= w
        dp = np.zeros(W + 1)
        choice = np.full(W + 1, -1, dtype=int)

        for w in range(1, W + 1):
            for i in range(n):
                width = self.widths[i]
                if width <= w:
                    value = dp[w - width] + duals[i]
                    if value > dp[w]:
                        dp[w] = value
                        choice[w] = i

        # Smallest width reaching the best value
        best_width = 0
        best_value = 0.0
        for w in range(1, W + 1):
            if dp[w] > best_value:
                best_value = dp[w]
                best_width = w

        pattern = np.zeros(n, dtype=int)
        w = best_width
        while w > 0 and choice[w] >= 0:
            i = choice[w]
            pattern[i] += 1
            w -= self.widths[i]

        return pattern

    def solve(self, duals: Sequence[float]) -> PricingResult:
        """
        Find the cutting pattern of minimum reduced cost.

        Args:
            duals: Dual price per item

        Returns:
            PricingResult with item counts as pattern
        """
        pi = as_dual_vector(duals, self.num_items)
        pattern = self._solve_dp(pi)
        reduced_cost = 1.0 - float(pi @ pattern)
        return PricingResult(
            status=SolveStatus.OPTIMAL,
            pattern=pattern,
            reduced_cost=reduced_cost,
        )

    def __repr__(self) -> str:
        return f"KnapsackPricer(items={self.num_items}, capacity={self.capacity})"
