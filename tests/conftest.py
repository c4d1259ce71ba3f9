"""
Shared pytest fixtures for spprc tests.
"""

import pytest

from spprc.core import Network, ResourceKind, ResourceWindow, WaitUntilOpen


def pytest_configure(config):
    """Add custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


def build_diamond_network(with_sink_arcs: bool = True) -> Network:
    r"""
    Four-node diamond with one resource.

    Network structure:
        S (0) --> 1 (1) --> T (3)
           \----> 2 (2) --/

    Arcs (cost, consumption):
        0: S -> 1, (1, 2)
        1: 1 -> T, (1, 3)   [only if with_sink_arcs]
        2: S -> 2, (5, 1)
        3: 2 -> T, (1, 1)   [only if with_sink_arcs]
    """
    network = Network(num_resources=1)
    s = network.add_node("S")
    n1 = network.add_node("1")
    n2 = network.add_node("2")
    t = network.add_node("T")

    network.add_arc(s, n1, cost=1.0, consumption=[2.0])
    if with_sink_arcs:
        network.add_arc(n1, t, cost=1.0, consumption=[3.0])
    network.add_arc(s, n2, cost=5.0, consumption=[1.0])
    if with_sink_arcs:
        network.add_arc(n2, t, cost=1.0, consumption=[1.0])

    return network


@pytest.fixture
def diamond_network():
    """Diamond network S->{1,2}->T with one resource."""
    return build_diamond_network()


@pytest.fixture
def wide_window():
    """Resource window [0, 10]."""
    return [ResourceWindow(0.0, 10.0, name="res")]


@pytest.fixture
def tight_window():
    """Resource window [0, 4]."""
    return [ResourceWindow(0.0, 4.0, name="res")]


@pytest.fixture
def disconnected_network():
    """Diamond network without the arcs into T."""
    return build_diamond_network(with_sink_arcs=False)


@pytest.fixture
def time_window_network():
    r"""
    Network with a calendar time resource and node time windows.

    Network structure (cost, travel time):
        S (0) --(10, 1)--> A (1) --(0, 1)--> T (3)
           \---(1, 1)----> B (2) --(0, 1)--/

    A opens at 0, B opens at 5 and closes at 6, T closes at 7.
    Waiting at B pushes arrival at T to 6.
    """
    network = Network(num_resources=1)
    s = network.add_node("S", time_window=(0.0, 0.0))
    a = network.add_node("A", time_window=(0.0, 10.0))
    b = network.add_node("B", time_window=(5.0, 6.0))
    t = network.add_node("T", time_window=(0.0, 7.0))

    network.add_arc(s, a, cost=10.0, consumption=[1.0])
    network.add_arc(s, b, cost=1.0, consumption=[1.0])
    network.add_arc(a, t, cost=0.0, consumption=[1.0])
    network.add_arc(b, t, cost=0.0, consumption=[1.0])

    network.set_entry_policy(0, WaitUntilOpen())
    return network


@pytest.fixture
def time_windows():
    """Calendar time window [0, 24]."""
    return [ResourceWindow(0.0, 24.0, ResourceKind.CALENDAR, "time")]
