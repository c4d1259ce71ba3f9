"""
Pricers module - pricing subproblems for a column-generation master.

This module provides:
- PricingSubproblem: Protocol of anything with solve(duals) -> PricingResult
- PricingResult: Proposed column (pattern and reduced cost)
- SPPRCPricer: Resource-constrained shortest path pricer
- KnapsackPricer: Unbounded knapsack pricer for cutting stock
"""

from spprc.pricers.base import PricingResult, PricingSubproblem, as_dual_vector
from spprc.pricers.knapsack import KnapsackPricer
from spprc.pricers.spprc_pricer import SPPRCPricer

__all__ = [
    'PricingSubproblem',
    'PricingResult',
    'as_dual_vector',
    'SPPRCPricer',
    'KnapsackPricer',
]
