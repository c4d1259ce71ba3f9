"""
Label module for the SPPRC labeling algorithm.

A label represents a partial path from the source to some node. Each
label tracks:
- The node it sits at
- The cost so far
- The resource vector at that node
- Its predecessor (by label id) and the arc used to reach it
- Optionally, the set of visited nodes (elementary / ng-route tracking)

Design Notes:
------------
- Labels are immutable once created; extension always builds a new one
- Predecessors are stable integer ids into the run's LabelArena, not
  object references. The arena is append-only and lives for the whole
  run, so pruning a label from a node store never breaks a chain
- Dominance is checked on cost and on every resource dimension
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Optional

from spprc.core.errors import InvariantViolation


@dataclass(frozen=True)
class Label:
    """
    A label representing a partial path in SPPRC.

    Attributes:
        label_id: Stable id, equal to the label's position in the arena
        node: Index of the node this label is at
        cost: Total cost of the path so far
        resources: Resource vector (one value per dimension)
        predecessor: Id of the previous label (None for the source label)
        arc_index: Index of the arc used to reach this label
        visited: Visited node set when elementarity/ng tracking is on

    Example:
        >>> source = Label(label_id=0, node=0, cost=0.0, resources=(0.0,))
        >>> nxt = Label(label_id=1, node=2, cost=1.0, resources=(2.0,),
        ...             predecessor=0, arc_index=0)
        >>> dominates(source, source)
        True
    """
    label_id: int
    node: int
    cost: float
    resources: tuple[float, ...]
    predecessor: Optional[int] = None
    arc_index: Optional[int] = None
    visited: Optional[frozenset[int]] = None

    def __post_init__(self):
        if not isinstance(self.resources, tuple):
            object.__setattr__(self, 'resources', tuple(self.resources))
        if self.visited is not None and not isinstance(self.visited, frozenset):
            object.__setattr__(self, 'visited', frozenset(self.visited))

    @property
    def is_source_label(self) -> bool:
        """Check if this is the source label (no predecessor)."""
        return self.predecessor is None

    def sort_key(self) -> tuple[float, tuple[float, ...]]:
        """Ordering used to pick the best sink label: cost, then resources."""
        return (self.cost, self.resources)

    def __repr__(self) -> str:
        res_str = ", ".join(f"{r:g}" for r in self.resources)
        return (
            f"Label(#{self.label_id}, node={self.node}, "
            f"cost={self.cost:.4f}, res=({res_str}))"
        )


def dominates(a: Label, b: Label) -> bool:
    """
    Check if label a dominates label b.

    a dominates b if:
    1. a.cost <= b.cost
    2. a.resources[i] <= b.resources[i] for every dimension i
    3. a.visited is a subset of b.visited, when both track visits
       (fewer visited nodes leave more extension options)

    The relation is reflexive and transitive. Labels at different nodes
    are never compared by the algorithm; callers are responsible for that.

    Args:
        a: Potentially dominating label
        b: Potentially dominated label

    Returns:
        True if a dominates b
    """
    if a.cost > b.cost:
        return False

    for value_a, value_b in zip(a.resources, b.resources):
        if value_a > value_b:
            return False

    if a.visited is not None and b.visited is not None:
        if not a.visited.issubset(b.visited):
            return False

    return True


def best_label(labels: Iterable[Label]) -> Optional[Label]:
    """
    Select the best label: lowest cost, then lexicographically smallest
    resource vector, then lowest id.

    Returns:
        The best label, or None if there are none
    """
    best = None
    for label in labels:
        if best is None or (label.sort_key(), label.label_id) < (best.sort_key(), best.label_id):
            best = label
    return best


class LabelArena:
    """
    Append-only storage of every label created during one run.

    The arena owns the labels; node stores only hold the surviving ones.
    A label's id is its position here, so predecessor lookups are O(1)
    and remain valid until the run is discarded.
    """

    def __init__(self):
        self._labels: list[Label] = []

    def create(
        self,
        node: int,
        cost: float,
        resources: Sequence[float],
        predecessor: Optional[int] = None,
        arc_index: Optional[int] = None,
        visited: Optional[frozenset[int]] = None,
    ) -> Label:
        """
        Create and register a new label.

        Returns:
            The new label with the next free id
        """
        label = Label(
            label_id=len(self._labels),
            node=node,
            cost=cost,
            resources=tuple(resources),
            predecessor=predecessor,
            arc_index=arc_index,
            visited=visited,
        )
        self._labels.append(label)
        return label

    def get(self, label_id: int) -> Label:
        """
        Resolve a label id.

        Raises:
            InvariantViolation: If the id was never issued by this arena
        """
        if not 0 <= label_id < len(self._labels):
            raise InvariantViolation(
                f"Label id {label_id} does not belong to this run "
                f"({len(self._labels)} labels created)"
            )
        return self._labels[label_id]

    def __contains__(self, label_id: object) -> bool:
        return isinstance(label_id, int) and 0 <= label_id < len(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels)

    def __repr__(self) -> str:
        return f"LabelArena(labels={len(self._labels)})"
