"""
Configuration and result types of the SPPRC labeling algorithm.

An SPPRC run ends in one of three ways, all reported as values:
- OPTIMAL: a best feasible source-sink path was found and proven
- INFEASIBLE: the run converged with no label at the sink
- BUDGET_EXCEEDED: the budget guard stopped the search; the answer is
  unknown (an incumbent path may still be attached, unproven)

Only configuration problems and internal defects raise (see
spprc.core.errors).
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from spprc.core.errors import ConfigurationError


class RunState(Enum):
    """
    Global state of the propagation scheduler.
    """
    RUNNING = auto()          # Active nodes remain
    CONVERGED = auto()        # Fixpoint reached, no active node
    BUDGET_EXCEEDED = auto()  # Stopped by max_insertions / max_steps


class SolveStatus(Enum):
    """
    Outcome of an SPPRC solve.
    """
    OPTIMAL = auto()          # Best path found and proven
    INFEASIBLE = auto()       # Proven: no feasible path to the sink
    BUDGET_EXCEEDED = auto()  # Search truncated, answer unknown


@dataclass
class LabelingConfig:
    """
    Configuration of one labeling run.

    Attributes:
        max_insertions: Maximum accepted label insertions, source label
                        excluded (0 = unlimited)
        max_steps: Maximum node pops of the scheduler (0 = unlimited)
        elementary: Forbid revisiting any node on a path
        ng_neighborhoods: ng-route relaxation, node -> neighbourhood. A
                          path only remembers visited nodes that lie in
                          the neighbourhood of the node it enters, so
                          short cycles are forbidden while the visited
                          sets stay small. Ignored when elementary is True
        topological_pass: Use a single pass in topological order when all
                          resources are additive and the network is a DAG
    """
    max_insertions: int = 0  # 0 = unlimited
    max_steps: int = 0       # 0 = unlimited
    elementary: bool = False
    ng_neighborhoods: Optional[Mapping[int, Iterable[int]]] = None
    topological_pass: bool = True

    def __post_init__(self):
        if self.max_insertions < 0:
            raise ConfigurationError(
                f"max_insertions must be >= 0, got {self.max_insertions}"
            )
        if self.max_steps < 0:
            raise ConfigurationError(f"max_steps must be >= 0, got {self.max_steps}")
        if self.ng_neighborhoods is not None:
            self.ng_neighborhoods = {
                int(node): frozenset(neighborhood)
                for node, neighborhood in self.ng_neighborhoods.items()
            }

    @property
    def tracks_visits(self) -> bool:
        """True if labels carry a visited set."""
        return self.elementary or self.ng_neighborhoods is not None

    @property
    def has_budget(self) -> bool:
        return self.max_insertions > 0 or self.max_steps > 0


@dataclass(frozen=True)
class PathStep:
    """
    One node of a reconstructed path with cumulative values.

    Attributes:
        node: Node index
        arc_index: Arc used to enter the node (None at the source)
        cost: Cumulative cost on arrival
        resources: Resource vector on arrival
    """
    node: int
    arc_index: Optional[int]
    cost: float
    resources: tuple[float, ...]


@dataclass
class SPPRCResult:
    """
    Result of an SPPRC solve.

    Attributes:
        status: Solve outcome
        path: Node indices from source to sink (empty if none)
        arcs: Arc indices along the path (empty if none)
        cost: Total path cost (None if no path)
        resources: Resource vector at the sink (None if no path)
        steps: Per-node cumulative cost and resources
        num_labels_created: Labels created (arena size, source included)
        num_labels_inserted: Candidate labels accepted by a store
        num_labels_removed: Stored labels pruned by a newer label
        num_steps: Node pops of the scheduler
        solve_time: Wall-clock time of the run in seconds

    For BUDGET_EXCEEDED, path/cost/resources describe the best sink label
    found before the stop, if any. That path is feasible but not proven
    optimal.
    """
    status: SolveStatus
    path: tuple[int, ...] = ()
    arcs: tuple[int, ...] = ()
    cost: Optional[float] = None
    resources: Optional[tuple[float, ...]] = None
    steps: tuple[PathStep, ...] = ()
    num_labels_created: int = 0
    num_labels_inserted: int = 0
    num_labels_removed: int = 0
    num_steps: int = 0
    solve_time: float = 0.0
    statistics: dict[str, float] = field(default_factory=dict)

    @property
    def is_optimal(self) -> bool:
        return self.status == SolveStatus.OPTIMAL

    @property
    def is_infeasible(self) -> bool:
        return self.status == SolveStatus.INFEASIBLE

    @property
    def is_truncated(self) -> bool:
        """True if the budget guard stopped the run."""
        return self.status == SolveStatus.BUDGET_EXCEEDED

    @property
    def has_path(self) -> bool:
        return bool(self.path)

    def summary(self) -> str:
        """Return a human-readable summary."""
        lines = [
            "SPPRCResult:",
            f"  Status: {self.status.name}",
        ]

        if self.has_path:
            lines.append(f"  Path: {' -> '.join(str(n) for n in self.path)}")
            lines.append(f"  Cost: {self.cost:.6f}")
            lines.append(f"  Resources: {self.resources}")

        lines.extend([
            f"  Labels created: {self.num_labels_created}",
            f"  Labels inserted: {self.num_labels_inserted}",
            f"  Labels removed: {self.num_labels_removed}",
            f"  Scheduler steps: {self.num_steps}",
            f"  Solve time: {self.solve_time:.3f}s",
        ])

        return "\n".join(lines)

    def __repr__(self) -> str:
        cost_str = f", cost={self.cost:.4f}" if self.cost is not None else ""
        return f"SPPRCResult({self.status.name}, path={list(self.path)}{cost_str})"
