"""
Label-correcting algorithm for SPPRC (Shortest Path Problem with Resource
Constraints).

Algorithm Overview:
------------------
1. Create the zero label at the source with the baseline resources and
   mark the source active
2. While some node is active:
   a. Pop the oldest active node u (FIFO)
   b. Extend every surviving, not yet extended label at u along every
      outgoing arc (u, v)
   c. Offer each candidate to the label store of v; if it is inserted,
      mark v active (a node is never queued twice)
3. At the fixpoint, select the best sink label and unwind its
   predecessor chain into a path

Re-activation:
-------------
Calendar resources may be clipped or reset on node entry, so labels
reaching a node later can still be better than earlier ones. Nodes are
therefore re-activated whenever one of their stores changes and the run
only stops at the fixpoint. When all resources are additive and the
network is acyclic, one pass in topological order reaches the same
fixpoint with less work and is used instead.

Budget guard:
------------
max_insertions bounds accepted insertions (the source label excluded),
max_steps bounds node pops. Exceeding either ends the run in
BUDGET_EXCEEDED, which the result reports separately from INFEASIBLE.

References:
----------
- Irnich, S., & Desaulniers, G. (2005). Shortest path problems with resource
  constraints. In Column generation (pp. 33-65). Springer.
"""

import logging
import time
from collections import deque
from collections.abc import Sequence
from typing import Any, Optional

from spprc.config import config as global_config
from spprc.core.errors import ConfigurationError
from spprc.core.network import Network
from spprc.core.resource import ResourceWindow, feasible, validate_vector
from spprc.pricing.base import (
    LabelingConfig,
    RunState,
    SolveStatus,
    SPPRCResult,
)
from spprc.pricing.extension import LabelExtender
from spprc.pricing.label import Label, LabelArena
from spprc.pricing.path import PathReconstructor, path_arcs, path_nodes
from spprc.pricing.store import LabelStore

logger = logging.getLogger(__name__)


class LabelingRun:
    """
    Mutable state of a single SPPRC run.

    A run owns its label arena, the per-node label stores and the active
    queue. It is created by LabelingAlgorithm.create_run() and must not
    be shared between threads; the network and windows it reads are
    shared read-only.

    Attributes:
        source: Source node index
        sink: Sink node index
        state: Current RunState
    """

    def __init__(
        self,
        extender: LabelExtender,
        source: int,
        sink: int,
        baseline: tuple[float, ...],
    ):
        self._extender = extender
        self._network = extender.network
        self._windows = extender.windows
        self._config = extender.config
        self.source = source
        self.sink = sink

        self._arena = LabelArena()
        self._stores: dict[int, LabelStore] = {}
        self._queue: deque[int] = deque()
        self._active: set[int] = set()
        self._extended: set[int] = set()

        self._num_insertions = 0
        self._num_steps = 0
        self._start_time = time.time()
        self._end_time: Optional[float] = None

        self.state = RunState.RUNNING

        if not feasible(baseline, self._windows):
            logger.warning(
                "Baseline %s at source %d lies outside the resource windows",
                baseline, source,
            )

        source_label = self._arena.create(
            node=source,
            cost=0.0,
            resources=baseline,
            visited=extender.initial_visited(source),
        )
        self.store(source).seed(source_label)
        self._activate(source)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def arena(self) -> LabelArena:
        """Every label created in this run."""
        return self._arena

    @property
    def stores(self) -> dict[int, LabelStore]:
        """Label stores of the nodes reached so far (copy)."""
        return dict(self._stores)

    @property
    def num_insertions(self) -> int:
        """Accepted insertions, source label excluded."""
        return self._num_insertions

    @property
    def num_steps(self) -> int:
        """Nodes popped from the active queue."""
        return self._num_steps

    @property
    def is_finished(self) -> bool:
        return self.state != RunState.RUNNING

    def store(self, node: int) -> LabelStore:
        """Label store of a node (created on first access)."""
        store = self._stores.get(node)
        if store is None:
            store = LabelStore(node, self._windows)
            self._stores[node] = store
        return store

    def labels_at(self, node: int) -> list[Label]:
        """Surviving labels at a node."""
        store = self._stores.get(node)
        return store.labels if store is not None else []

    # =========================================================================
    # Scheduling
    # =========================================================================

    def _activate(self, node: int) -> None:
        if node not in self._active:
            self._active.add(node)
            self._queue.append(node)

    def _budget_exceeded(self, reason: str) -> None:
        self.state = RunState.BUDGET_EXCEEDED
        logger.warning(
            "SPPRC run %d->%d stopped: %s (insertions=%d, steps=%d)",
            self.source, self.sink, reason, self._num_insertions, self._num_steps,
        )

    def step(self) -> bool:
        """
        Process one active node.

        Returns:
            True if the run is still RUNNING afterwards
        """
        if self.state != RunState.RUNNING:
            return False

        if not self._queue:
            self.state = RunState.CONVERGED
            return False

        max_steps = self._config.max_steps
        if max_steps > 0 and self._num_steps >= max_steps:
            self._budget_exceeded(f"max_steps={max_steps} reached")
            return False

        node = self._queue.popleft()
        self._active.discard(node)
        self._process(node, activate=True)

        if self.state == RunState.RUNNING and not self._queue:
            self.state = RunState.CONVERGED
        return self.state == RunState.RUNNING

    def run(self) -> RunState:
        """
        Iterate until the fixpoint or the budget guard.

        Returns:
            Final RunState (CONVERGED or BUDGET_EXCEEDED)
        """
        while self.step():
            pass
        self._end_time = time.time()
        return self.state

    def run_topological(self, order: Sequence[int]) -> RunState:
        """
        Single pass over the nodes in topological order.

        Only valid on an acyclic network without calendar policies: every
        label of a node then exists before the node is processed.

        Args:
            order: Node indices in topological order

        Returns:
            Final RunState (CONVERGED or BUDGET_EXCEEDED)
        """
        self._queue.clear()
        self._active.clear()
        max_steps = self._config.max_steps

        for node in order:
            if node not in self._stores:
                continue  # unreachable so far
            if max_steps > 0 and self._num_steps >= max_steps:
                self._budget_exceeded(f"max_steps={max_steps} reached")
                break
            self._process(node, activate=False)
            if self.state != RunState.RUNNING:
                break
        else:
            self.state = RunState.CONVERGED

        self._end_time = time.time()
        return self.state

    def _process(self, node: int, activate: bool) -> None:
        """Extend the new labels of a node along all its outgoing arcs."""
        self._num_steps += 1
        store = self._stores[node]
        pending = [label for label in store.labels if label.label_id not in self._extended]
        self._extended.update(label.label_id for label in pending)

        max_insertions = self._config.max_insertions

        for arc in self._network.outgoing_arcs(node):
            target_store = None
            for label in pending:
                # A self-loop may prune labels of this node mid-step
                if label not in store:
                    continue

                candidate = self._extender.extend(label, arc, self._arena)
                if candidate is None:
                    continue

                if target_store is None:
                    target_store = self.store(arc.target)
                if not target_store.try_insert(candidate):
                    continue

                self._num_insertions += 1
                if max_insertions > 0 and self._num_insertions > max_insertions:
                    self._budget_exceeded(f"max_insertions={max_insertions} exceeded")
                    return

                if activate:
                    self._activate(arc.target)

    # =========================================================================
    # Results
    # =========================================================================

    def result(self) -> SPPRCResult:
        """
        Build the result of the run.

        At CONVERGED the best sink label is optimal (or the sink was not
        reached: INFEASIBLE). At BUDGET_EXCEEDED the best sink label so
        far, if any, is reported as an unproven incumbent.

        Raises:
            InvariantViolation: If the sink label's predecessor chain is broken
        """
        if self.state == RunState.RUNNING:
            raise RuntimeError("Run has not finished; call run() first")

        reconstructor = PathReconstructor(self._network, self._arena)
        best = reconstructor.select(self.labels_at(self.sink))
        stats = self.statistics()

        if self.state == RunState.BUDGET_EXCEEDED:
            status = SolveStatus.BUDGET_EXCEEDED
        elif best is None:
            status = SolveStatus.INFEASIBLE
        else:
            status = SolveStatus.OPTIMAL

        result = SPPRCResult(
            status=status,
            num_labels_created=stats['labels_created'],
            num_labels_inserted=stats['labels_inserted'],
            num_labels_removed=stats['labels_removed'],
            num_steps=self._num_steps,
            solve_time=stats['solve_time'],
            statistics=stats,
        )

        if best is not None:
            steps = reconstructor.reconstruct(best, source=self.source)
            result.steps = steps
            result.path = path_nodes(steps)
            result.arcs = path_arcs(steps)
            result.cost = best.cost
            result.resources = best.resources

        return result

    def statistics(self) -> dict[str, Any]:
        """
        Statistics about the run.

        Returns:
            Dictionary with statistics
        """
        labels_per_node = [len(store) for store in self._stores.values()]
        end_time = self._end_time if self._end_time is not None else time.time()
        return {
            'labels_created': len(self._arena),
            'labels_inserted': sum(s.num_inserted for s in self._stores.values()),
            'labels_rejected': sum(s.num_rejected for s in self._stores.values()),
            'labels_removed': sum(s.num_removed for s in self._stores.values()),
            'labels_alive': sum(labels_per_node),
            'max_labels_at_node': max(labels_per_node) if labels_per_node else 0,
            'nodes_reached': len(self._stores),
            'steps': self._num_steps,
            'solve_time': end_time - self._start_time,
        }

    def __repr__(self) -> str:
        return (
            f"LabelingRun({self.source}->{self.sink}, {self.state.name}, "
            f"labels={len(self._arena)})"
        )


class LabelingAlgorithm:
    """
    Label-correcting SPPRC solver over a fixed network and windows.

    The algorithm object holds only read-only data (network, windows,
    configuration, optional arc cost override). Each call to solve() or
    create_run() gets its own LabelingRun, so one algorithm can serve
    several source/sink pairs, including from concurrent callers.

    Example:
        >>> network = Network(num_resources=1)
        >>> s, t = network.add_node("S"), network.add_node("T")
        >>> network.add_arc(s, t, cost=1.0, consumption=[2.0])
        0
        >>> solver = LabelingAlgorithm(network, [ResourceWindow(0.0, 10.0)])
        >>> result = solver.solve(s, t)
        >>> result.path, result.cost
        ((0, 1), 1.0)
    """

    def __init__(
        self,
        network: Network,
        windows: Sequence[ResourceWindow],
        config: Optional[LabelingConfig] = None,
        arc_costs: Optional[Sequence[float]] = None,
    ):
        """
        Initialize the labeling algorithm.

        Args:
            network: The graph (read-only during runs)
            windows: One resource window per network resource dimension
            config: Labeling configuration; the global default budget is
                    used when omitted
            arc_costs: Optional per-arc cost override (e.g. reduced costs)

        Raises:
            ConfigurationError: On any dimension mismatch
        """
        if config is None:
            config = LabelingConfig(
                max_insertions=global_config.default_max_insertions,
                max_steps=global_config.default_max_steps,
            )

        errors = network.validate()
        if errors:
            raise ConfigurationError("Invalid network: " + "; ".join(errors))

        self._network = network
        self._config = config
        self._extender = LabelExtender(network, windows, config, arc_costs)

        self._topological_order: Optional[list[int]] = None
        if config.topological_pass and not self._extender.has_calendar_policies:
            if network.is_acyclic():
                self._topological_order = network.topological_order()

    @property
    def network(self) -> Network:
        return self._network

    @property
    def windows(self) -> tuple[ResourceWindow, ...]:
        return self._extender.windows

    @property
    def config(self) -> LabelingConfig:
        return self._config

    @property
    def uses_topological_pass(self) -> bool:
        """True if runs use the single topological pass."""
        return self._topological_order is not None

    def create_run(
        self,
        source: int,
        sink: int,
        baseline: Optional[Sequence[float]] = None,
    ) -> LabelingRun:
        """
        Create a fresh run with its own label stores.

        Args:
            source: Source node index
            sink: Sink node index
            baseline: Resource vector of the source label (default zeros)

        Raises:
            ConfigurationError: On unknown nodes or a baseline of wrong length
        """
        for role, node in (("source", source), ("sink", sink)):
            if not self._network.has_node(node):
                raise ConfigurationError(f"Unknown {role} node {node}")

        if baseline is None:
            baseline = (0.0,) * len(self.windows)
        baseline = validate_vector(baseline, self.windows, "Baseline vector")

        return LabelingRun(self._extender, source, sink, baseline)

    def solve(
        self,
        source: int,
        sink: int,
        baseline: Optional[Sequence[float]] = None,
    ) -> SPPRCResult:
        """
        Find the minimum-cost resource-feasible path from source to sink.

        Args:
            source: Source node index
            sink: Sink node index
            baseline: Resource vector at the source (default zeros)

        Returns:
            SPPRCResult with status OPTIMAL, INFEASIBLE or BUDGET_EXCEEDED

        Raises:
            ConfigurationError: On invalid input
            InvariantViolation: On an internal defect
        """
        run = self.create_run(source, sink, baseline)
        logger.debug(
            "Solving SPPRC %d->%d on %r (%s)",
            source, sink, self._network,
            "topological pass" if self.uses_topological_pass else "label-correcting",
        )

        if self._topological_order is not None:
            run.run_topological(self._topological_order)
        else:
            run.run()

        result = run.result()
        logger.debug("SPPRC %d->%d finished: %r", source, sink, result)
        return result

    def __repr__(self) -> str:
        return f"LabelingAlgorithm(network={self._network!r}, resources={len(self.windows)})"
