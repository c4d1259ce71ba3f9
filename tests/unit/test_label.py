"""
Tests for labels, dominance, the label arena and per-node label stores.
"""

import itertools
import random

import pytest

from spprc.core import InvariantViolation, ResourceWindow
from spprc.pricing import Label, LabelArena, LabelStore, best_label, dominates


def make_label(label_id, cost, resources, node=0, visited=None):
    return Label(
        label_id=label_id,
        node=node,
        cost=cost,
        resources=tuple(resources),
        visited=visited,
    )


# =============================================================================
# Dominance Tests
# =============================================================================


class TestDominance:
    """Tests for the dominance relation."""

    def test_better_on_all_counts(self):
        a = make_label(0, 1.0, (2.0, 3.0))
        b = make_label(1, 2.0, (2.0, 4.0))
        assert dominates(a, b)
        assert not dominates(b, a)

    def test_incomparable(self):
        a = make_label(0, 1.0, (5.0,))
        b = make_label(1, 2.0, (3.0,))
        assert not dominates(a, b)
        assert not dominates(b, a)

    def test_identical_labels_dominate_each_other(self):
        a = make_label(0, 1.0, (2.0,))
        b = make_label(1, 1.0, (2.0,))
        assert dominates(a, b)
        assert dominates(b, a)

    def test_visited_subset_required(self):
        a = make_label(0, 1.0, (1.0,), visited={0, 2})
        b = make_label(1, 1.0, (1.0,), visited={0, 1, 2})
        assert dominates(a, b)
        assert not dominates(b, a)

    def test_visited_ignored_without_tracking(self):
        a = make_label(0, 1.0, (1.0,), visited={0, 5})
        b = make_label(1, 1.0, (1.0,))
        assert dominates(a, b)

    def test_reflexive_and_transitive_on_samples(self):
        rng = random.Random(7)
        labels = [
            make_label(
                i,
                rng.choice([0.0, 1.0, 2.0]),
                (rng.choice([0.0, 1.0, 2.0]), rng.choice([0.0, 1.0])),
                visited=frozenset(rng.sample(range(4), rng.randint(0, 3))),
            )
            for i in range(25)
        ]

        for label in labels:
            assert dominates(label, label)

        for a, b, c in itertools.product(labels, repeat=3):
            if dominates(a, b) and dominates(b, c):
                assert dominates(a, c)


class TestBestLabel:
    """Tests for best label selection."""

    def test_lowest_cost_wins(self):
        labels = [make_label(0, 3.0, (1.0,)), make_label(1, 2.0, (9.0,))]
        assert best_label(labels).label_id == 1

    def test_tie_broken_by_resources_then_id(self):
        labels = [
            make_label(0, 2.0, (4.0,)),
            make_label(1, 2.0, (3.0,)),
            make_label(2, 2.0, (3.0,)),
        ]
        assert best_label(labels).label_id == 1

    def test_empty(self):
        assert best_label([]) is None


# =============================================================================
# Arena Tests
# =============================================================================


class TestLabelArena:
    """Tests for the append-only label arena."""

    def test_ids_are_positions(self):
        arena = LabelArena()
        first = arena.create(node=0, cost=0.0, resources=[0.0])
        second = arena.create(node=1, cost=1.0, resources=[2.0], predecessor=0, arc_index=0)
        assert (first.label_id, second.label_id) == (0, 1)
        assert arena.get(1) is second
        assert len(arena) == 2
        assert 1 in arena and 2 not in arena

    def test_resources_stored_as_tuple(self):
        arena = LabelArena()
        label = arena.create(node=0, cost=0.0, resources=[1, 2])
        assert label.resources == (1, 2)

    def test_unknown_id(self):
        arena = LabelArena()
        arena.create(node=0, cost=0.0, resources=[])
        with pytest.raises(InvariantViolation):
            arena.get(3)
        with pytest.raises(InvariantViolation):
            arena.get(-1)


# =============================================================================
# Store Tests
# =============================================================================


class TestLabelStore:
    """Tests for LabelStore: check, insert, prune."""

    @pytest.fixture
    def store(self):
        return LabelStore(node=0, windows=[ResourceWindow(0.0, 10.0)])

    def test_insert_into_empty_store(self, store):
        assert store.try_insert(make_label(0, 1.0, (1.0,)))
        assert len(store) == 1

    def test_dominated_candidate_rejected(self, store):
        store.try_insert(make_label(0, 1.0, (1.0,)))
        assert not store.try_insert(make_label(1, 2.0, (2.0,)))
        assert store.num_rejected == 1
        assert [label.label_id for label in store] == [0]

    def test_dominating_candidate_prunes(self, store):
        store.try_insert(make_label(0, 2.0, (2.0,)))
        store.try_insert(make_label(1, 3.0, (1.0,)))
        assert store.try_insert(make_label(2, 1.0, (1.0,)))
        assert [label.label_id for label in store] == [2]
        assert store.num_removed == 2

    def test_first_of_duplicates_kept(self, store):
        first = make_label(0, 1.0, (1.0,))
        store.try_insert(first)
        assert not store.try_insert(make_label(1, 1.0, (1.0,)))
        assert store.labels == [first]

    def test_infeasible_candidate_rejected(self, store):
        assert not store.try_insert(make_label(0, 0.0, (11.0,)))
        assert len(store) == 0
        assert store.statistics()['infeasible'] == 1

    def test_incomparable_labels_coexist(self, store):
        store.try_insert(make_label(0, 1.0, (5.0,)))
        store.try_insert(make_label(1, 2.0, (3.0,)))
        store.try_insert(make_label(2, 3.0, (1.0,)))
        assert len(store) == 3
        assert store.is_non_dominated()

    def test_wrong_node(self, store):
        with pytest.raises(InvariantViolation):
            store.try_insert(make_label(0, 1.0, (1.0,), node=4))

    def test_membership_follows_pruning(self, store):
        old = make_label(0, 2.0, (2.0,))
        store.try_insert(old)
        assert old in store
        store.try_insert(make_label(1, 1.0, (1.0,)))
        assert old not in store

    def test_seed_skips_feasibility(self, store):
        source = make_label(0, 0.0, (-5.0,))
        store.seed(source)
        assert source in store
        with pytest.raises(InvariantViolation):
            store.seed(make_label(1, 0.0, (0.0,)))

    def test_invariant_holds_after_random_offers(self):
        rng = random.Random(11)
        store = LabelStore(node=0, windows=[ResourceWindow(0.0, 5.0), ResourceWindow(0.0, 5.0)])
        for i in range(200):
            store.try_insert(make_label(
                i,
                float(rng.randint(-3, 6)),
                (float(rng.randint(0, 6)), float(rng.randint(0, 6))),
            ))
            assert store.is_non_dominated()
