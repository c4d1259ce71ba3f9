"""
Tests for the graph module (Node, Arc, Network).
"""

import networkx as nx
import pytest

from spprc.core import Arc, ConfigurationError, Network, Node, WaitUntilOpen


class TestNode:
    """Tests for Node."""

    def test_time_window_attribute(self):
        node = Node(index=2, name="C", attributes={"time_window": (1.0, 3.0)})
        assert node.time_window == (1.0, 3.0)
        assert node.get_attribute("missing", 7) == 7

    def test_equality_by_index(self):
        assert Node(index=1, name="a") == Node(index=1, name="b")
        assert Node(index=1, name="a") < Node(index=2, name="a")


class TestArc:
    """Tests for Arc."""

    def test_consumption_converted_to_tuple(self):
        arc = Arc(index=0, source=0, target=1, cost=1.0, consumption=[2.0, 3.0])
        assert arc.consumption == (2.0, 3.0)
        assert arc.num_resources == 2

    def test_get_consumption_default(self):
        arc = Arc(index=0, source=0, target=1, cost=1.0, consumption=(2.0,))
        assert arc.get_consumption(0) == 2.0
        assert arc.get_consumption(5, default=-1.0) == -1.0


class TestNetworkConstruction:
    """Tests for building a Network."""

    def test_indices_assigned_in_order(self, diamond_network):
        assert diamond_network.num_nodes == 4
        assert diamond_network.num_arcs == 4
        assert diamond_network.get_node_index("T") == 3
        assert diamond_network.get_node_by_name("2").index == 2
        assert diamond_network.get_node_by_name("missing") is None

    def test_duplicate_node_name(self):
        network = Network(num_resources=0)
        network.add_node("S")
        with pytest.raises(ValueError):
            network.add_node("S")

    def test_negative_num_resources(self):
        with pytest.raises(ConfigurationError):
            Network(num_resources=-1)

    def test_default_consumption_is_zero(self):
        network = Network(num_resources=2)
        s, t = network.add_node("S"), network.add_node("T")
        arc = network.get_arc(network.add_arc(s, t, cost=3.0))
        assert arc.consumption == (0.0, 0.0)

    def test_arc_to_unknown_node(self):
        network = Network(num_resources=1)
        s = network.add_node("S")
        with pytest.raises(IndexError):
            network.add_arc(s, 5, cost=1.0, consumption=[1.0])

    def test_consumption_length_mismatch(self):
        network = Network(num_resources=2)
        s, t = network.add_node("S"), network.add_node("T")
        with pytest.raises(ConfigurationError):
            network.add_arc(s, t, cost=1.0, consumption=[1.0])

    def test_negative_consumption_rejected(self):
        network = Network(num_resources=1)
        s, t = network.add_node("S"), network.add_node("T")
        with pytest.raises(ConfigurationError):
            network.add_arc(s, t, cost=1.0, consumption=[-0.5])

    def test_negative_cost_allowed(self):
        network = Network(num_resources=1)
        s, t = network.add_node("S"), network.add_node("T")
        arc = network.get_arc(network.add_arc(s, t, cost=-4.0, consumption=[1.0]))
        assert arc.cost == -4.0

    def test_validate_clean_network(self, diamond_network):
        assert diamond_network.validate() == []


class TestNetworkTraversal:
    """Tests for adjacency access."""

    def test_outgoing_in_insertion_order(self, diamond_network):
        arcs = list(diamond_network.outgoing_arcs(0))
        assert [arc.index for arc in arcs] == [0, 2]
        assert list(diamond_network.neighbors(0)) == [1, 2]

    def test_incoming(self, diamond_network):
        assert [arc.source for arc in diamond_network.incoming_arcs(3)] == [1, 2]

    def test_find_arc(self, diamond_network):
        assert diamond_network.find_arc(2, 3).index == 3
        assert diamond_network.find_arc(3, 0) is None

    def test_parallel_arcs(self):
        network = Network(num_resources=1)
        s, t = network.add_node("S"), network.add_node("T")
        first = network.add_arc(s, t, cost=1.0, consumption=[1.0])
        network.add_arc(s, t, cost=2.0, consumption=[0.0])
        assert network.find_arc(s, t).index == first
        assert len(list(network.outgoing_arcs(s))) == 2


class TestNetworkStructure:
    """Tests for the networkx export and DAG helpers."""

    def test_to_networkx(self, diamond_network):
        graph = diamond_network.to_networkx()
        assert isinstance(graph, nx.MultiDiGraph)
        assert graph.number_of_nodes() == 4
        assert graph.number_of_edges() == 4
        assert graph.nodes[3]["name"] == "T"
        assert graph.edges[0, 1, 0]["consumption"] == (2.0,)

    def test_acyclic_and_order(self, diamond_network):
        assert diamond_network.is_acyclic()
        order = diamond_network.topological_order()
        assert order[0] == 0
        assert order[-1] == 3

    def test_cycle_detected(self, diamond_network):
        diamond_network.add_arc(3, 0, cost=1.0, consumption=[1.0])
        assert not diamond_network.is_acyclic()


class TestEntryPolicies:
    """Tests for graph-supplied node-entry policies."""

    def test_set_and_get(self):
        network = Network(num_resources=2)
        policy = WaitUntilOpen()
        network.set_entry_policy(1, policy)
        assert network.get_entry_policy(1) is policy
        assert network.get_entry_policy(0) is None

    def test_entry_policies_is_a_copy(self):
        network = Network(num_resources=1)
        network.set_entry_policy(0, WaitUntilOpen())
        network.entry_policies.clear()
        assert network.get_entry_policy(0) is not None

    def test_dimension_out_of_range(self):
        network = Network(num_resources=1)
        with pytest.raises(ConfigurationError):
            network.set_entry_policy(1, WaitUntilOpen())

    def test_summary_lists_policies(self):
        network = Network(num_resources=1)
        network.set_entry_policy(0, WaitUntilOpen())
        assert "WaitUntilOpen" in network.summary()
