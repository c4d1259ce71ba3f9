"""
Per-node label store enforcing the non-domination invariant.

At every point in time the labels held by a store are pairwise
non-dominating. The invariant is restored on every insertion by the
check-then-insert-then-prune sequence in LabelStore.try_insert.
"""

from collections.abc import Iterator, Sequence
from typing import Any

from spprc.core.errors import InvariantViolation
from spprc.core.resource import ResourceWindow, feasible
from spprc.pricing.label import Label, dominates


class LabelStore:
    """
    Container for the surviving labels at one node.

    Labels removed by dominance leave the store but stay in the run's
    LabelArena, so predecessor chains through them remain valid.

    Attributes:
        node: Index of the node this store belongs to
        windows: Resource windows used for the feasibility check
    """

    def __init__(self, node: int, windows: Sequence[ResourceWindow]):
        """
        Create an empty store.

        Args:
            node: Node index
            windows: The run's resource windows
        """
        self.node = node
        self.windows = windows
        self._labels: list[Label] = []
        self._ids: set[int] = set()

        # Statistics
        self._num_offered: int = 0
        self._num_inserted: int = 0
        self._num_infeasible: int = 0
        self._num_rejected: int = 0
        self._num_removed: int = 0

    @property
    def labels(self) -> list[Label]:
        """Surviving labels in insertion order (copy)."""
        return list(self._labels)

    @property
    def num_inserted(self) -> int:
        """Labels accepted by try_insert."""
        return self._num_inserted

    @property
    def num_rejected(self) -> int:
        """Labels refused because an existing label dominates them."""
        return self._num_rejected

    @property
    def num_removed(self) -> int:
        """Labels pruned because a newer label dominates them."""
        return self._num_removed

    def seed(self, label: Label) -> None:
        """
        Place the source label into an empty store.

        The source label bypasses the feasibility check; it is the
        baseline the caller supplied.

        Raises:
            InvariantViolation: If the store is not empty or the label
                belongs to another node
        """
        if self._labels:
            raise InvariantViolation(f"Store of node {self.node} seeded twice")
        if label.node != self.node:
            raise InvariantViolation(
                f"Label at node {label.node} seeded into store of node {self.node}"
            )
        self._labels.append(label)
        self._ids.add(label.label_id)

    def try_insert(self, candidate: Label) -> bool:
        """
        Offer a candidate label to the store.

        Sequence:
        1. Reject if the candidate violates a resource window
        2. Reject if any surviving label dominates the candidate
           (an identical label already present wins)
        3. Insert, then drop every prior survivor the candidate dominates
        4. Report whether the candidate was inserted

        Args:
            candidate: Label at this store's node

        Returns:
            True if the candidate was inserted

        Raises:
            InvariantViolation: If the candidate belongs to another node
        """
        if candidate.node != self.node:
            raise InvariantViolation(
                f"Label at node {candidate.node} offered to store of node {self.node}"
            )
        self._num_offered += 1

        if not feasible(candidate.resources, self.windows):
            self._num_infeasible += 1
            return False

        for existing in self._labels:
            if dominates(existing, candidate):
                self._num_rejected += 1
                return False

        survivors = []
        for existing in self._labels:
            if dominates(candidate, existing):
                self._ids.discard(existing.label_id)
                self._num_removed += 1
            else:
                survivors.append(existing)
        survivors.append(candidate)
        self._labels = survivors
        self._ids.add(candidate.label_id)
        self._num_inserted += 1

        return True

    def is_non_dominated(self) -> bool:
        """Check the invariant: no surviving label dominates another."""
        for i, a in enumerate(self._labels):
            for j, b in enumerate(self._labels):
                if i != j and dominates(a, b):
                    return False
        return True

    def statistics(self) -> dict[str, Any]:
        """Counters for this store."""
        return {
            'labels': len(self._labels),
            'offered': self._num_offered,
            'inserted': self._num_inserted,
            'infeasible': self._num_infeasible,
            'rejected': self._num_rejected,
            'removed': self._num_removed,
        }

    def __contains__(self, label: object) -> bool:
        """True if the label currently survives in this store."""
        return isinstance(label, Label) and label.label_id in self._ids

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(list(self._labels))

    def __bool__(self) -> bool:
        return bool(self._labels)

    def __repr__(self) -> str:
        return f"LabelStore(node={self.node}, labels={len(self._labels)})"
