"""
Path reconstruction from sink labels.

The best sink label is unwound through its predecessor ids back to the
source label, producing the ordered node sequence, arc sequence and the
cumulative cost/resources at every node.

Any inconsistency in the chain (an id the arena never issued, an arc that
does not connect predecessor and successor, a loop in the chain) is an
internal defect and raises InvariantViolation.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from spprc.core.errors import InvariantViolation
from spprc.core.network import Network
from spprc.pricing.base import PathStep
from spprc.pricing.label import Label, LabelArena, best_label


class PathReconstructor:
    """
    Unwinds labels of one run into source-to-sink paths.

    Attributes:
        network: The graph the run was performed on
        arena: The run's label arena
    """

    def __init__(self, network: Network, arena: LabelArena):
        self.network = network
        self.arena = arena

    def select(self, labels: Iterable[Label]) -> Optional[Label]:
        """
        Pick the best label: lowest cost, then smallest resource vector.

        Returns:
            The best label, or None if there is none
        """
        return best_label(labels)

    def reconstruct(self, label: Label, source: Optional[int] = None) -> tuple[PathStep, ...]:
        """
        Walk predecessor links from label back to the source label.

        Args:
            label: Label to unwind (usually the best sink label)
            source: Expected source node (checked if given)

        Returns:
            Path steps in source-to-sink order

        Raises:
            InvariantViolation: If the predecessor chain is broken
        """
        steps = []
        current = label
        limit = len(self.arena)

        while True:
            if self.arena.get(current.label_id) is not current:
                raise InvariantViolation(
                    f"Label #{current.label_id} is not owned by this run's arena"
                )

            steps.append(PathStep(
                node=current.node,
                arc_index=current.arc_index,
                cost=current.cost,
                resources=current.resources,
            ))

            if current.predecessor is None:
                break

            if len(steps) > limit:
                raise InvariantViolation(
                    f"Predecessor chain of label #{label.label_id} loops"
                )

            predecessor = self.arena.get(current.predecessor)
            self._check_link(predecessor, current)
            current = predecessor

        if current.arc_index is not None:
            raise InvariantViolation(
                f"Source label #{current.label_id} has an incoming arc"
            )
        if source is not None and current.node != source:
            raise InvariantViolation(
                f"Path of label #{label.label_id} starts at node {current.node}, "
                f"expected source {source}"
            )

        steps.reverse()
        return tuple(steps)

    def _check_link(self, predecessor: Label, successor: Label) -> None:
        """Verify that successor was obtained from predecessor along its arc."""
        if successor.arc_index is None:
            raise InvariantViolation(
                f"Label #{successor.label_id} has a predecessor but no arc"
            )
        if not 0 <= successor.arc_index < self.network.num_arcs:
            raise InvariantViolation(
                f"Label #{successor.label_id} refers to unknown arc {successor.arc_index}"
            )
        arc = self.network.get_arc(successor.arc_index)
        if arc.source != predecessor.node or arc.target != successor.node:
            raise InvariantViolation(
                f"Arc {arc.index} ({arc.source}->{arc.target}) does not link "
                f"label #{predecessor.label_id} at node {predecessor.node} to "
                f"label #{successor.label_id} at node {successor.node}"
            )


def path_nodes(steps: Sequence[PathStep]) -> tuple[int, ...]:
    """Node sequence of a reconstructed path."""
    return tuple(step.node for step in steps)


def path_arcs(steps: Sequence[PathStep]) -> tuple[int, ...]:
    """Arc sequence of a reconstructed path (source step has no arc)."""
    return tuple(step.arc_index for step in steps if step.arc_index is not None)
