"""
SPPRC pricing subproblem.

Each resource dimension of the network doubles as a master row: the
coefficient of a path column in row i is the path's total consumption
in dimension i. For duals pi, the reduced cost of an arc is

    rc(arc) = arc.cost - sum_i pi_i * arc.consumption[i]

and the reduced cost of a path is the sum over its arcs. The labeling
algorithm is run with these arc costs as an override; the network itself
is never modified.
"""

import logging
from collections.abc import Sequence
from typing import Optional

import numpy as np

from spprc.core.network import Network
from spprc.core.resource import ResourceWindow
from spprc.pricers.base import PricingResult, as_dual_vector
from spprc.pricing.base import LabelingConfig
from spprc.pricing.labeling import LabelingAlgorithm

logger = logging.getLogger(__name__)


class SPPRCPricer:
    """
    Pricing subproblem solved by the label-correcting SPPRC engine.

    Example:
        >>> pricer = SPPRCPricer(network, windows, source=s, sink=t)
        >>> result = pricer.solve([0.5])
        >>> result.pattern, result.reduced_cost
    """

    def __init__(
        self,
        network: Network,
        windows: Sequence[ResourceWindow],
        source: int,
        sink: int,
        config: Optional[LabelingConfig] = None,
        baseline: Optional[Sequence[float]] = None,
    ):
        self.network = network
        self.windows = tuple(windows)
        self.source = source
        self.sink = sink
        self.config = config
        self.baseline = baseline

        n_res = network.num_resources
        self._costs = np.array([arc.cost for arc in network.arcs], dtype=float)
        self._consumption = np.zeros((network.num_arcs, n_res))
        for arc in network.arcs:
            self._consumption[arc.index, :] = arc.consumption

        # Validates windows, source, sink and baseline
        LabelingAlgorithm(network, self.windows, config).create_run(source, sink, baseline)

    def reduced_costs(self, duals: Sequence[float]) -> np.ndarray:
        """Reduced cost of every arc, indexed by arc index."""
        pi = as_dual_vector(duals, self.network.num_resources)
        return self._costs - self._consumption @ pi

    def solve(self, duals: Sequence[float]) -> PricingResult:
        """
        Find the path of minimum reduced cost.

        Args:
            duals: Dual price per resource dimension

        Returns:
            PricingResult whose pattern is the path's total consumption
        """
        arc_costs = self.reduced_costs(duals)
        algorithm = LabelingAlgorithm(self.network, self.windows, self.config, arc_costs)
        result = algorithm.solve(self.source, self.sink, self.baseline)

        if not result.has_path:
            logger.debug("SPPRC pricing found no column: %r", result)
            return PricingResult(status=result.status, details=result)

        pattern = self._consumption[list(result.arcs), :].sum(axis=0)
        logger.debug("SPPRC pricing column rc=%.6f", result.cost)
        return PricingResult(
            status=result.status,
            pattern=pattern,
            reduced_cost=result.cost,
            details=result,
        )

    def __repr__(self) -> str:
        return f"SPPRCPricer({self.source}->{self.sink}, {self.network!r})"
