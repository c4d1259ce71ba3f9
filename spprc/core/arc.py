"""
Arc module - represents arcs (directed edges) of the SPPRC graph.

Arcs connect nodes and carry:
1. Cost (contribution to the objective; a reduced cost when pricing)
2. Resource consumption, one non-negative value per resource dimension
3. Additional attributes (labels, external ids, ...)

Design Notes:
------------
- Arcs store source/target as node indices (int)
- Consumption is a positional tuple aligned with the resource windows
- Arcs are frozen: the graph is shared read-only across runs
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Arc:
    """
    A directed arc of the network.

    Attributes:
        index: Unique integer identifier (position in Network.arcs)
        source: Index of the tail node
        target: Index of the head node
        cost: Cost of traversing this arc
        consumption: Resource consumption per dimension
        attributes: Flexible dictionary for additional data

    Example:
        >>> arc = Arc(index=0, source=0, target=1, cost=1.0, consumption=(2.0,))
        >>> arc.get_consumption(0)
        2.0
    """
    index: int
    source: int
    target: int
    cost: float
    consumption: tuple[float, ...] = ()
    attributes: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not isinstance(self.consumption, tuple):
            object.__setattr__(self, 'consumption', tuple(self.consumption))

    @property
    def num_resources(self) -> int:
        """Length of the consumption vector."""
        return len(self.consumption)

    def get_consumption(self, dimension: int, default: float = 0.0) -> float:
        """
        Get consumption for one resource dimension.

        Args:
            dimension: Resource dimension index
            default: Value to return if the dimension is out of range

        Returns:
            Consumption value
        """
        if 0 <= dimension < len(self.consumption):
            return self.consumption[dimension]
        return default

    def get_attribute(self, key: str, default: Any = None) -> Any:
        """Get an attribute value with a default."""
        return self.attributes.get(key, default)

    def __hash__(self) -> int:
        return hash(self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arc):
            return NotImplemented
        return self.index == other.index

    def __repr__(self) -> str:
        return f"Arc({self.index}, {self.source}->{self.target}, cost={self.cost})"
