"""
Node module - represents nodes of the SPPRC graph.

Nodes are addressed by their integer index everywhere in the algorithm
(label stores, active queue, paths). The name is for humans; attributes
carry graph-supplied data read by node-entry policies, most commonly a
time_window for calendar resources.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Node:
    """
    A node in the network.

    Attributes:
        index: Unique integer identifier (position in Network.nodes)
        name: Human-readable name (e.g., "S", "depot", "customer_7")
        attributes: Flexible dictionary for additional data

    Common Attributes:
        - time_window: Tuple[float, float] - (earliest, latest) visit time,
          read by WaitUntilOpen

    Example:
        >>> node = Node(index=3, name="C3", attributes={"time_window": (8.0, 12.0)})
        >>> node.time_window
        (8.0, 12.0)

    Note:
        The index is assigned by the Network when adding nodes.
    """
    index: int
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)

    def get_attribute(self, key: str, default: Any = None) -> Any:
        """
        Get an attribute value with a default.

        Args:
            key: Attribute name
            default: Value to return if attribute not found

        Returns:
            The attribute value or default
        """
        return self.attributes.get(key, default)

    @property
    def time_window(self) -> Optional[tuple[float, float]]:
        """Get time window if set, else None."""
        return self.attributes.get('time_window')

    def __hash__(self) -> int:
        return hash(self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.index == other.index

    def __lt__(self, other: 'Node') -> bool:
        return self.index < other.index

    def __repr__(self) -> str:
        return f"Node({self.index}, '{self.name}')"
