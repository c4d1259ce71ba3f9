"""
spprc: Shortest Path Problem with Resource Constraints

A label-correcting SPPRC engine for column-generation pricing, with
additive and calendar resources, dominance pruning, a budget guard and
path reconstruction.
"""

__version__ = "0.1.0"

# Configuration
from spprc.config import config, configure_logging

# Core classes
from spprc.core.arc import Arc
from spprc.core.errors import ConfigurationError, InvariantViolation, SPPRCError
from spprc.core.network import Network
from spprc.core.node import Node
from spprc.core.resource import (
    ClipToWindow,
    NodeEntryPolicy,
    ResetAtNodes,
    ResourceKind,
    ResourceWindow,
    WaitUntilOpen,
)

# Pricing subproblems
from spprc.pricers import KnapsackPricer, PricingResult, PricingSubproblem, SPPRCPricer

# Labeling algorithm
from spprc.pricing import (
    Label,
    LabelingAlgorithm,
    LabelingConfig,
    SolveStatus,
    SPPRCResult,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "config",
    "configure_logging",
    # Core classes
    "ResourceKind",
    "ResourceWindow",
    "NodeEntryPolicy",
    "WaitUntilOpen",
    "ResetAtNodes",
    "ClipToWindow",
    "Node",
    "Arc",
    "Network",
    # Errors
    "SPPRCError",
    "ConfigurationError",
    "InvariantViolation",
    # Labeling
    "Label",
    "LabelingAlgorithm",
    "LabelingConfig",
    "SolveStatus",
    "SPPRCResult",
    # Pricing subproblems
    "PricingSubproblem",
    "PricingResult",
    "SPPRCPricer",
    "KnapsackPricer",
]
