"""
Extension operator: build the candidate label obtained by traversing one arc.

Extension of label L along arc (u, v):
    cost'         = L.cost + cost(arc)
    resources'[i] = L.resources[i] + arc.consumption[i]
                    then, for CALENDAR dimensions, the node-entry policy
                    registered on the network for dimension i
    predecessor'  = L.label_id
    node'         = v

A candidate that violates a window, a node-entry policy or the visit
restriction is discarded here and never reaches a label store.
"""

from collections.abc import Sequence
from typing import Optional

from spprc.core.arc import Arc
from spprc.core.errors import ConfigurationError
from spprc.core.network import Network
from spprc.core.resource import NodeEntryPolicy, ResourceWindow, feasible
from spprc.pricing.base import LabelingConfig
from spprc.pricing.label import Label, LabelArena


class LabelExtender:
    """
    Extends labels along arcs for one network and set of windows.

    The extender is read-only after construction and holds no per-run
    state; new labels are registered in the arena passed to extend().

    Attributes:
        network: The graph
        windows: Resource windows, one per dimension
        config: Labeling configuration (visit tracking)
    """

    def __init__(
        self,
        network: Network,
        windows: Sequence[ResourceWindow],
        config: Optional[LabelingConfig] = None,
        arc_costs: Optional[Sequence[float]] = None,
    ):
        """
        Create an extender.

        Args:
            network: The graph
            windows: Resource windows (length must match network.num_resources)
            config: Labeling configuration
            arc_costs: Optional per-arc cost override indexed by arc index,
                       e.g. reduced costs for the current duals

        Raises:
            ConfigurationError: On a dimension or length mismatch
        """
        if len(windows) != network.num_resources:
            raise ConfigurationError(
                f"{len(windows)} resource windows given, network has "
                f"{network.num_resources} resources"
            )
        if arc_costs is not None and len(arc_costs) != network.num_arcs:
            raise ConfigurationError(
                f"{len(arc_costs)} arc costs given, network has {network.num_arcs} arcs"
            )

        self.network = network
        self.windows = tuple(windows)
        self.config = config or LabelingConfig()
        self._arc_costs = (
            tuple(float(c) for c in arc_costs) if arc_costs is not None else None
        )

        # Policies only apply to calendar dimensions
        self._policies: list[tuple[int, NodeEntryPolicy]] = [
            (dimension, policy)
            for dimension, policy in sorted(network.entry_policies.items())
            if self.windows[dimension].is_calendar
        ]

    @property
    def has_calendar_policies(self) -> bool:
        """True if some calendar dimension has a node-entry policy."""
        return bool(self._policies)

    def arc_cost(self, arc: Arc) -> float:
        """Cost used for an arc (override if given, else arc.cost)."""
        if self._arc_costs is not None:
            return self._arc_costs[arc.index]
        return arc.cost

    def extend(self, label: Label, arc: Arc, arena: LabelArena) -> Optional[Label]:
        """
        Extend a label along an arc.

        Args:
            label: The label to extend (at arc.source)
            arc: The arc to traverse
            arena: Arena of the current run

        Returns:
            New label at arc.target, or None if the extension is infeasible
        """
        resources = [
            value + consumption
            for value, consumption in zip(label.resources, arc.consumption)
        ]

        if self._policies:
            target_node = self.network.get_node(arc.target)
            for dimension, policy in self._policies:
                new_value = policy.apply(
                    resources[dimension], self.windows[dimension], target_node
                )
                if new_value is None:
                    return None
                resources[dimension] = new_value

        if not feasible(resources, self.windows):
            return None

        visited = self._extend_visited(label, arc.target)
        if visited is False:
            return None

        return arena.create(
            node=arc.target,
            cost=label.cost + self.arc_cost(arc),
            resources=resources,
            predecessor=label.label_id,
            arc_index=arc.index,
            visited=visited,
        )

    def initial_visited(self, source: int) -> Optional[frozenset[int]]:
        """Visited set of the source label."""
        if not self.config.tracks_visits:
            return None
        return frozenset({source})

    def _extend_visited(self, label: Label, target: int):
        """
        Visited set after entering target.

        Returns:
            The new set, None when tracking is off, or False when target
            was already visited
        """
        if label.visited is None:
            return None

        if target in label.visited:
            return False

        if self.config.elementary or self.config.ng_neighborhoods is None:
            return label.visited | {target}

        neighborhood = self.config.ng_neighborhoods.get(target, frozenset())
        return (label.visited & neighborhood) | {target}
