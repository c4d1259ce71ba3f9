"""
Network module - the graph structure for SPPRC.

The Network holds all nodes and arcs and provides the access patterns the
labeling algorithm needs: outgoing arcs per node, node lookup by name,
and the graph-supplied node-entry policies for calendar resources.

This module provides:
- Network: The main graph class with add/get methods

Design Notes:
------------
- Nodes and arcs are stored in lists, indexed by their index attribute
- Adjacency is stored as arc indices per node, in insertion order, so the
  labeling algorithm visits arcs deterministically
- The number of resource dimensions is fixed at construction; every arc
  is checked against it when added
- Once built, a Network is read-only for the algorithm and can be shared
  by concurrent runs
"""

import logging
from collections.abc import Iterator, Sequence
from typing import Optional

import networkx as nx

from spprc.core.arc import Arc
from spprc.core.errors import ConfigurationError
from spprc.core.node import Node
from spprc.core.resource import NodeEntryPolicy

logger = logging.getLogger(__name__)


class Network:
    """
    Directed graph with resource-consuming arcs.

    Attributes:
        num_resources: Number of resource dimensions R
        nodes: List of all nodes (indexed by node.index)
        arcs: List of all arcs (indexed by arc.index)

    Example:
        >>> network = Network(num_resources=1)
        >>> s = network.add_node("S")
        >>> t = network.add_node("T")
        >>> network.add_arc(s, t, cost=1.0, consumption=[2.0])
        0
        >>> [arc.target for arc in network.outgoing_arcs(s)]
        [1]

    Note:
        Node and arc indices are assigned automatically and should not
        be modified after creation.
    """

    def __init__(self, num_resources: int):
        """
        Create an empty network.

        Args:
            num_resources: Number of resource dimensions every arc carries

        Raises:
            ConfigurationError: If num_resources is negative
        """
        if num_resources < 0:
            raise ConfigurationError(
                f"num_resources must be non-negative, got {num_resources}"
            )
        self._num_resources = num_resources

        # Storage
        self._nodes: list[Node] = []
        self._arcs: list[Arc] = []

        # Adjacency lists (node index -> list of arc indices)
        self._outgoing: list[list[int]] = []
        self._incoming: list[list[int]] = []

        # Name to index mapping for lookup
        self._node_name_to_index: dict[str, int] = {}

        # Calendar policies (resource dimension -> policy)
        self._entry_policies: dict[int, NodeEntryPolicy] = {}

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def num_resources(self) -> int:
        """Number of resource dimensions."""
        return self._num_resources

    @property
    def num_nodes(self) -> int:
        """Number of nodes in the network."""
        return len(self._nodes)

    @property
    def num_arcs(self) -> int:
        """Number of arcs in the network."""
        return len(self._arcs)

    @property
    def nodes(self) -> list[Node]:
        """List of all nodes (read-only view)."""
        return self._nodes

    @property
    def arcs(self) -> list[Arc]:
        """List of all arcs (read-only view)."""
        return self._arcs

    @property
    def entry_policies(self) -> dict[int, NodeEntryPolicy]:
        """Node-entry policies by resource dimension (copy)."""
        return dict(self._entry_policies)

    # =========================================================================
    # Node Operations
    # =========================================================================

    def add_node(self, name: str, **attributes) -> int:
        """
        Add a node to the network.

        Args:
            name: Unique name for the node
            **attributes: Additional node attributes (e.g. time_window)

        Returns:
            Index of the newly created node

        Raises:
            ValueError: If a node with this name already exists
        """
        if name in self._node_name_to_index:
            raise ValueError(f"Node with name '{name}' already exists")

        index = len(self._nodes)
        self._nodes.append(Node(index=index, name=name, attributes=dict(attributes)))
        self._outgoing.append([])
        self._incoming.append([])
        self._node_name_to_index[name] = index

        return index

    def get_node(self, index: int) -> Node:
        """
        Get a node by index.

        Raises:
            IndexError: If index is out of bounds
        """
        return self._nodes[index]

    def get_node_by_name(self, name: str) -> Optional[Node]:
        """Get a node by name, or None if not found."""
        index = self._node_name_to_index.get(name)
        if index is None:
            return None
        return self._nodes[index]

    def get_node_index(self, name: str) -> Optional[int]:
        """Get node index by name, or None if not found."""
        return self._node_name_to_index.get(name)

    def has_node(self, index: int) -> bool:
        """Check whether a node index exists."""
        return 0 <= index < len(self._nodes)

    # =========================================================================
    # Arc Operations
    # =========================================================================

    def add_arc(
        self,
        source: int,
        target: int,
        cost: float,
        consumption: Optional[Sequence[float]] = None,
        **attributes
    ) -> int:
        """
        Add an arc to the network.

        Args:
            source: Index of source node
            target: Index of target node
            cost: Cost of the arc (may be negative, e.g. a reduced cost)
            consumption: One non-negative value per resource dimension
                         (default: all zeros)
            **attributes: Additional arc attributes

        Returns:
            Index of the newly created arc

        Raises:
            IndexError: If source or target node doesn't exist
            ConfigurationError: If the consumption vector has the wrong
                length or a negative entry
        """
        if not self.has_node(source):
            raise IndexError(f"Source node index {source} out of bounds")
        if not self.has_node(target):
            raise IndexError(f"Target node index {target} out of bounds")

        if consumption is None:
            consumption = (0.0,) * self._num_resources
        consumption = tuple(float(c) for c in consumption)

        if len(consumption) != self._num_resources:
            raise ConfigurationError(
                f"Arc {source}->{target} has {len(consumption)} consumption "
                f"values, network has {self._num_resources} resources"
            )
        for dimension, value in enumerate(consumption):
            if value < 0:
                raise ConfigurationError(
                    f"Arc {source}->{target} has negative consumption {value} "
                    f"on resource {dimension}"
                )

        index = len(self._arcs)
        arc = Arc(
            index=index,
            source=source,
            target=target,
            cost=float(cost),
            consumption=consumption,
            attributes=dict(attributes),
        )
        self._arcs.append(arc)

        self._outgoing[source].append(index)
        self._incoming[target].append(index)

        return index

    def get_arc(self, index: int) -> Arc:
        """
        Get an arc by index.

        Raises:
            IndexError: If index is out of bounds
        """
        return self._arcs[index]

    def find_arc(self, source: int, target: int) -> Optional[Arc]:
        """
        Find the first arc from source to target.

        In a multigraph several arcs may connect the same pair; the one
        added first is returned.

        Returns:
            The arc, or None if the nodes are not adjacent
        """
        for arc_index in self._outgoing[source]:
            arc = self._arcs[arc_index]
            if arc.target == target:
                return arc
        return None

    # =========================================================================
    # Calendar Policies
    # =========================================================================

    def set_entry_policy(self, dimension: int, policy: NodeEntryPolicy) -> None:
        """
        Register the node-entry policy of a calendar resource dimension.

        The policy only takes effect when the dimension's window is of
        kind CALENDAR.

        Raises:
            ConfigurationError: If the dimension does not exist
        """
        if not 0 <= dimension < self._num_resources:
            raise ConfigurationError(
                f"Resource dimension {dimension} out of range "
                f"(network has {self._num_resources} resources)"
            )
        if dimension in self._entry_policies:
            logger.debug(
                "Replacing entry policy %r of dimension %d with %r",
                self._entry_policies[dimension], dimension, policy,
            )
        self._entry_policies[dimension] = policy

    def get_entry_policy(self, dimension: int) -> Optional[NodeEntryPolicy]:
        """Get the policy of a dimension, or None."""
        return self._entry_policies.get(dimension)

    # =========================================================================
    # Traversal Operations
    # =========================================================================

    def outgoing_arcs(self, node: int) -> Iterator[Arc]:
        """
        Iterate over outgoing arcs from a node.

        This is the primary traversal method used in SPPRC.
        """
        for arc_index in self._outgoing[node]:
            yield self._arcs[arc_index]

    def incoming_arcs(self, node: int) -> Iterator[Arc]:
        """Iterate over incoming arcs to a node."""
        for arc_index in self._incoming[node]:
            yield self._arcs[arc_index]

    def neighbors(self, node: int) -> Iterator[int]:
        """Iterate over successor node indices."""
        for arc_index in self._outgoing[node]:
            yield self._arcs[arc_index].target

    # =========================================================================
    # Graph Structure
    # =========================================================================

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Convert to a NetworkX MultiDiGraph.

        Nodes are the node indices (with name and attributes as data),
        edges are keyed by arc index and carry cost and consumption.

        Returns:
            The NetworkX graph
        """
        graph = nx.MultiDiGraph(num_resources=self._num_resources)
        for node in self._nodes:
            graph.add_node(node.index, name=node.name, **node.attributes)
        for arc in self._arcs:
            graph.add_edge(
                arc.source,
                arc.target,
                key=arc.index,
                cost=arc.cost,
                consumption=arc.consumption,
            )
        return graph

    def is_acyclic(self) -> bool:
        """Check whether the network is a DAG."""
        return nx.is_directed_acyclic_graph(self.to_networkx())

    def topological_order(self) -> list[int]:
        """
        Node indices in a topological order.

        Ties are broken by node index so the order is reproducible.

        Raises:
            networkx.NetworkXUnfeasible: If the network has a cycle
        """
        return list(nx.lexicographical_topological_sort(self.to_networkx()))

    def validate(self) -> list[str]:
        """
        Validate the network structure.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for i, node in enumerate(self._nodes):
            if node.index != i:
                errors.append(f"Node at position {i} has index {node.index}")

        for i, arc in enumerate(self._arcs):
            if arc.index != i:
                errors.append(f"Arc at position {i} has index {arc.index}")
            if not self.has_node(arc.source):
                errors.append(f"Arc {i} has invalid source {arc.source}")
            if not self.has_node(arc.target):
                errors.append(f"Arc {i} has invalid target {arc.target}")
            if len(arc.consumption) != self._num_resources:
                errors.append(
                    f"Arc {i} has {len(arc.consumption)} consumption values"
                )

        return errors

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            f"Network: {self.num_nodes} nodes, {self.num_arcs} arcs, "
            f"{self._num_resources} resources",
        ]
        if self._entry_policies:
            lines.append("  Entry policies: " + ", ".join(
                f"{dim}={policy!r}" for dim, policy in sorted(self._entry_policies.items())
            ))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Network(nodes={self.num_nodes}, arcs={self.num_arcs}, "
            f"resources={self._num_resources})"
        )
