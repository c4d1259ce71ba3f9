"""
Core module - graph and resource data structures for SPPRC.

Components:
----------
- ResourceWindow / ResourceKind: Per-dimension feasibility bounds
- NodeEntryPolicy: Calendar resource updates on node entry
- Node, Arc, Network: The static graph shared by all runs
- ConfigurationError, InvariantViolation: Error types
"""

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
    feasible,
    make_policy,
)

__all__ = [
    # Resources
    "ResourceKind",
    "ResourceWindow",
    "feasible",
    "NodeEntryPolicy",
    "WaitUntilOpen",
    "ResetAtNodes",
    "ClipToWindow",
    "make_policy",
    # Graph
    "Node",
    "Arc",
    "Network",
    # Errors
    "SPPRCError",
    "ConfigurationError",
    "InvariantViolation",
]
