"""
Pricing module - label-correcting SPPRC engine.

This module provides:
- Label / LabelArena: Immutable partial paths and their per-run storage
- LabelStore: Per-node set of pairwise non-dominating labels
- LabelExtender: Extension of a label along an arc
- LabelingAlgorithm / LabelingRun: The propagation scheduler
- PathReconstructor: Unwinds the best sink label into a path
- LabelingConfig, SPPRCResult, SolveStatus: Configuration and results

Usage:
------
    >>> from spprc.core import Network, ResourceWindow
    >>> from spprc.pricing import LabelingAlgorithm
    >>> solver = LabelingAlgorithm(network, [ResourceWindow(0.0, 10.0)])
    >>> result = solver.solve(source, sink)
    >>> if result.is_optimal:
    ...     print(result.path, result.cost)

Dominance:
---------
Label L1 dominates L2 at the same node if:
- L1.cost <= L2.cost
- L1.resources[i] <= L2.resources[i] for every dimension i
- L1.visited ⊆ L2.visited (only when visits are tracked)

Dominated labels can be discarded without losing the optimal path.
"""

from spprc.pricing.base import (
    LabelingConfig,
    PathStep,
    RunState,
    SolveStatus,
    SPPRCResult,
)
from spprc.pricing.extension import LabelExtender
from spprc.pricing.label import Label, LabelArena, best_label, dominates
from spprc.pricing.labeling import LabelingAlgorithm, LabelingRun
from spprc.pricing.path import PathReconstructor, path_arcs, path_nodes
from spprc.pricing.store import LabelStore

__all__ = [
    # Labels
    'Label',
    'LabelArena',
    'dominates',
    'best_label',
    'LabelStore',

    # Algorithm
    'LabelExtender',
    'LabelingAlgorithm',
    'LabelingRun',
    'PathReconstructor',
    'path_nodes',
    'path_arcs',

    # Config and results
    'LabelingConfig',
    'RunState',
    'SolveStatus',
    'SPPRCResult',
    'PathStep',
]
