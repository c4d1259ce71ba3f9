"""
Resource module - feasibility windows and node-entry policies for SPPRC.

In the Shortest Path Problem with Resource Constraints (SPPRC), a resource
is a numeric quantity that:
1. Has a baseline value at the source node
2. Is updated when a path traverses an arc
3. Must stay inside a [min, max] window at every node of the path
4. Takes part in dominance (less is better in every dimension)

This module provides:
- ResourceKind: ADDITIVE or CALENDAR
- ResourceWindow: The per-dimension [min, max] bound
- feasible(): The window test over a whole resource vector
- NodeEntryPolicy: Abstract base for calendar updates on node entry
- WaitUntilOpen, ResetAtNodes, ClipToWindow: Built-in policies

Design Notes:
------------
- Resources are positional: dimension i of every vector corresponds to
  windows[i] and to arc.consumption[i]
- Additive resources only ever grow along a path (load, distance)
- Calendar resources describe the value observed at a node visit
  (time of day). After the additive step, the policy registered for the
  dimension on the Network may clip or replace the value
- Windows are immutable and shared read-only by all runs
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from spprc.core.errors import ConfigurationError

if TYPE_CHECKING:
    from spprc.core.node import Node


class ResourceKind(Enum):
    """
    How a resource dimension evolves along a path.

    Types:
        ADDITIVE: Accumulates monotonically (load, distance, count)
        CALENDAR: Value observed at each node visit; may be clipped or
                  reset on node entry (time of day with waiting)
    """
    ADDITIVE = auto()
    CALENDAR = auto()


@dataclass(frozen=True)
class ResourceWindow:
    """
    Feasibility bound for one resource dimension.

    Attributes:
        min_value: Smallest feasible value (inclusive)
        max_value: Largest feasible value (inclusive)
        kind: ADDITIVE or CALENDAR (see ResourceKind)
        name: Optional human-readable name (for summaries and logs)

    Example:
        >>> load = ResourceWindow(0.0, 50.0, name="load")
        >>> clock = ResourceWindow(0.0, 24.0, ResourceKind.CALENDAR, "time")
        >>> load.contains(12.0)
        True

    Raises:
        ConfigurationError: If min_value > max_value
    """
    min_value: float = 0.0
    max_value: float = float('inf')
    kind: ResourceKind = ResourceKind.ADDITIVE
    name: Optional[str] = None

    def __post_init__(self):
        if self.min_value > self.max_value:
            raise ConfigurationError(
                f"Resource window {self.label!r} has min {self.min_value} "
                f"greater than max {self.max_value}"
            )

    @property
    def label(self) -> str:
        """Name for messages (falls back to the bounds)."""
        return self.name or f"[{self.min_value}, {self.max_value}]"

    @property
    def is_calendar(self) -> bool:
        return self.kind == ResourceKind.CALENDAR

    def contains(self, value: float) -> bool:
        """Check min_value <= value <= max_value."""
        return self.min_value <= value <= self.max_value

    def __repr__(self) -> str:
        kind_str = f", {self.kind.name}" if self.kind != ResourceKind.ADDITIVE else ""
        name_str = f"'{self.name}', " if self.name else ""
        return f"ResourceWindow({name_str}[{self.min_value}, {self.max_value}]{kind_str})"


def feasible(resources: Sequence[float], windows: Sequence[ResourceWindow]) -> bool:
    """
    Check a resource vector against the windows, dimension by dimension.

    Args:
        resources: Resource vector of length R
        windows: The R resource windows

    Returns:
        True iff every dimension lies inside its window
    """
    for value, window in zip(resources, windows):
        if not window.min_value <= value <= window.max_value:
            return False
    return True


def validate_vector(
    values: Sequence[float],
    windows: Sequence[ResourceWindow],
    what: str,
) -> tuple[float, ...]:
    """
    Check that a vector has one entry per resource window.

    Args:
        values: The vector to check
        windows: The resource windows
        what: Description used in the error message

    Returns:
        The vector as a tuple of floats

    Raises:
        ConfigurationError: On a length mismatch
    """
    if len(values) != len(windows):
        raise ConfigurationError(
            f"{what} has {len(values)} dimensions, expected {len(windows)}"
        )
    return tuple(float(v) for v in values)


# =============================================================================
# Node-entry policies (calendar resources)
# =============================================================================


class NodeEntryPolicy(ABC):
    """
    Update applied to a calendar resource when a path enters a node.

    The policy runs after the arc consumption has been added and before
    the feasibility check. The Network stores one policy per calendar
    dimension; additive dimensions are never passed to a policy.

    Methods to Implement:
        apply(value, window, node): New value, or None if the arrival is
            infeasible at this node
    """

    @abstractmethod
    def apply(
        self,
        value: float,
        window: ResourceWindow,
        node: 'Node',
    ) -> Optional[float]:
        """
        Compute the resource value after entering a node.

        Args:
            value: Value after adding the arc consumption
            window: The dimension's global window
            node: The node being entered

        Returns:
            Adjusted value, or None if the node cannot be entered
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class WaitUntilOpen(NodeEntryPolicy):
    """
    Time-window policy: wait when early, reject when late.

    Reads the node's time_window = (earliest, latest) attribute. Arriving
    before earliest moves the value up to earliest; arriving after latest
    makes the extension infeasible. Nodes without a window are unaffected.
    """

    def __init__(self, attribute: str = 'time_window'):
        self.attribute = attribute

    def apply(self, value: float, window: ResourceWindow, node: 'Node') -> Optional[float]:
        time_window = node.get_attribute(self.attribute, None)
        if time_window is None:
            return value

        earliest, latest = time_window
        if value > latest:
            return None
        return max(value, earliest)

    def __repr__(self) -> str:
        return f"WaitUntilOpen(attribute='{self.attribute}')"


class ResetAtNodes(NodeEntryPolicy):
    """
    Replace the value on entering selected nodes.

    Models resources that restart at certain nodes, e.g. duty time after
    an overnight rest.

    Attributes:
        value: Value assigned on entry
        nodes: Node indices where the reset happens (None = every node)
    """

    def __init__(self, value: float = 0.0, nodes: Optional[Iterable[int]] = None):
        self.value = float(value)
        self.nodes = frozenset(nodes) if nodes is not None else None

    def apply(self, value: float, window: ResourceWindow, node: 'Node') -> Optional[float]:
        if self.nodes is None or node.index in self.nodes:
            return self.value
        return value

    def __repr__(self) -> str:
        nodes_str = f", nodes={sorted(self.nodes)}" if self.nodes is not None else ""
        return f"ResetAtNodes(value={self.value}{nodes_str})"


class ClipToWindow(NodeEntryPolicy):
    """
    Clamp values below the window's lower bound up to min_value.

    Upper-bound violations are left to the feasibility check.
    """

    def apply(self, value: float, window: ResourceWindow, node: 'Node') -> Optional[float]:
        return max(value, window.min_value)


def make_policy(policy_type: str, **kwargs) -> NodeEntryPolicy:
    """
    Factory function to create node-entry policies by type name.

    Args:
        policy_type: One of "wait", "reset", "clip"
        **kwargs: Arguments passed to the policy constructor

    Returns:
        NodeEntryPolicy instance

    Example:
        >>> rest = make_policy("reset", value=0.0, nodes=[4, 7])
    """
    types = {
        "wait": WaitUntilOpen,
        "reset": ResetAtNodes,
        "clip": ClipToWindow,
    }

    if policy_type not in types:
        raise ConfigurationError(
            f"Unknown policy type '{policy_type}'. "
            f"Available types: {list(types.keys())}"
        )

    return types[policy_type](**kwargs)
