"""Tests for network modules."""

import pytest

from value_network.network.graph import Network, NodeIndexError
from value_network.network.random_source import NumpyRandomSource


class ScriptedRandomSource:
    """Replays fixed samples; falls back to the mean, zero and ``low``."""

    def __init__(self, normals=None, poissons=None, picks=None):
        self.normals = list(normals or [])
        self.poissons = list(poissons or [])
        self.picks = list(picks or [])
        self.uniform_calls = []

    def normal(self, mean, stddev):
        return self.normals.pop(0) if self.normals else mean

    def poisson(self, rate):
        return self.poissons.pop(0) if self.poissons else 0

    def uniform_int(self, low, high):
        self.uniform_calls.append((low, high))
        return self.picks.pop(0) if self.picks else low


def assert_well_formed(network):
    """Symmetric, no self-loops, no duplicates, degree below size."""
    n = network.size()
    for a in range(n):
        neighbors = network.neighbors(a)
        assert a not in neighbors
        assert len(neighbors) == len(set(neighbors))
        assert len(neighbors) <= max(0, n - 1)
        for b in neighbors:
            assert 0 <= b < n
            assert a in network.neighbors(b)


class TestNodeValues:
    """Tests for node and value storage."""

    @pytest.fixture
    def network(self):
        net = Network(random_source=ScriptedRandomSource(normals=[0.5, -1.0, 2.0]))
        net.resize(3)
        return net

    def test_new_network_is_empty(self):
        network = Network(seed=1)

        assert network.size() == 0
        assert network.values == []
        assert network.link_count == 0

    def test_resize_draws_standard_normal_values(self, network):
        assert network.size() == 3
        assert network.values == [0.5, -1.0, 2.0]
        assert network.value(1) == -1.0

    def test_resize_discards_links(self, network):
        network.add_link(0, 1)
        network.resize(4)

        assert network.size() == 4
        assert len(network.values) == 4
        assert network.link_count == 0
        assert all(network.degree(i) == 0 for i in range(4))

    def test_resize_to_zero(self, network):
        network.resize(0)

        assert network.size() == 0
        assert network.sorted_values() == []

    def test_resize_negative_raises(self, network):
        with pytest.raises(ValueError):
            network.resize(-1)

    def test_value_out_of_range(self, network):
        with pytest.raises(IndexError, match="5"):
            network.value(5)

    def test_negative_index_out_of_range(self, network):
        with pytest.raises(NodeIndexError):
            network.value(-1)

    def test_node_index_error_attributes(self, network):
        with pytest.raises(NodeIndexError) as excinfo:
            network.degree(5)

        assert excinfo.value.index == 5
        assert excinfo.value.size == 3
        assert "5" in str(excinfo.value)

    def test_set_values_shorter_input(self):
        network = Network(random_source=ScriptedRandomSource(normals=[9.0] * 5))
        network.resize(5)

        copied = network.set_values([1, 2, 3])

        assert copied == 3
        assert network.values == [1.0, 2.0, 3.0, 9.0, 9.0]

    def test_set_values_longer_input(self, network):
        copied = network.set_values([1, 2, 3, 4, 5, 6])

        assert copied == 3
        assert network.values == [1.0, 2.0, 3.0]

    def test_sorted_values_decreasing(self, network):
        assert network.sorted_values() == [2.0, 0.5, -1.0]
        # Store is left untouched
        assert network.values == [0.5, -1.0, 2.0]

    def test_sorted_values_is_permutation(self):
        network = Network(seed=3)
        network.resize(40)

        result = network.sorted_values()

        assert sorted(result) == sorted(network.values)
        assert all(x >= y for x, y in zip(result, result[1:]))

    def test_values_property_is_a_copy(self, network):
        values = network.values
        values[0] = 100.0

        assert network.value(0) == 0.5


class TestLinks:
    """Tests for link storage and neighbor queries."""

    @pytest.fixture
    def network(self):
        net = Network(random_source=ScriptedRandomSource())
        net.resize(5)
        return net

    def test_add_link_once(self, network):
        assert network.add_link(0, 3) is True
        assert network.add_link(0, 3) is False

        assert network.degree(0) == 1
        assert network.degree(3) == 1
        assert network.link_count == 1

    def test_add_link_reverse_duplicate(self, network):
        network.add_link(1, 2)

        assert network.add_link(2, 1) is False
        assert network.degree(1) == 1

    def test_self_loop_rejected(self, network):
        assert network.add_link(2, 2) is False
        assert network.degree(2) == 0

    def test_out_of_range_link_rejected(self, network):
        assert network.add_link(0, 5) is False
        assert network.add_link(7, 1) is False
        assert network.add_link(-1, 1) is False
        assert network.link_count == 0

    def test_degree_out_of_range(self, network):
        with pytest.raises(IndexError, match="5"):
            network.degree(5)

    def test_neighbors_in_insertion_order(self, network):
        network.add_link(2, 4)
        network.add_link(2, 0)
        network.add_link(3, 2)

        assert network.neighbors(2) == [4, 0, 3]
        assert network.neighbors(0) == [2]

    def test_neighbors_out_of_range(self, network):
        with pytest.raises(NodeIndexError):
            network.neighbors(5)

    def test_possible_neighbors(self, network):
        network.add_link(2, 4)
        network.add_link(2, 0)

        assert network.possible_neighbors(2) == [1, 3]
        assert network.possible_neighbors(1) == [0, 2, 3, 4]

    def test_possible_neighbors_out_of_range(self, network):
        with pytest.raises(NodeIndexError):
            network.possible_neighbors(9)

    def test_neighbors_and_candidates_partition_nodes(self, network):
        network.add_link(0, 1)
        network.add_link(0, 4)
        network.add_link(3, 1)

        for n in range(network.size()):
            neighbors = set(network.neighbors(n))
            candidates = set(network.possible_neighbors(n))
            others = set(range(network.size())) - {n}

            assert neighbors.isdisjoint(candidates)
            assert neighbors | candidates == others

    def test_has_link(self, network):
        network.add_link(1, 3)

        assert network.has_link(1, 3)
        assert network.has_link(3, 1)
        assert not network.has_link(1, 2)
        assert not network.has_link(1, 10)

    def test_links_iterates_each_edge_once(self, network):
        network.add_link(3, 1)
        network.add_link(0, 4)
        network.add_link(0, 2)

        assert list(network.links()) == [(0, 4), (0, 2), (1, 3)]

    def test_clear_links_keeps_values(self, network):
        network.set_values([1, 2, 3, 4, 5])
        network.add_link(0, 1)

        network.clear_links()

        assert network.link_count == 0
        assert network.values == [1.0, 2.0, 3.0, 4.0, 5.0]


class TestRandomConnect:
    """Tests for the randomized connection algorithm."""

    def test_scripted_connection(self):
        source = ScriptedRandomSource(poissons=[2, 0, 1, 5])
        network = Network(random_source=source)
        network.resize(4)

        total = network.random_connect(1.5)

        assert total == 5
        assert network.neighbors(0) == [1, 3, 2]
        assert network.neighbors(1) == [0, 3]
        assert network.neighbors(2) == [0, 3]
        assert network.neighbors(3) == [0, 1, 2]
        assert network.link_count == 5
        # Pool shrinks by one after every pick
        assert source.uniform_calls == [(0, 2), (0, 1), (0, 2), (0, 1), (0, 0)]

    def test_earlier_nodes_gain_links_from_later_ones(self):
        source = ScriptedRandomSource(poissons=[1, 0, 0, 3])
        network = Network(random_source=source)
        network.resize(4)

        total = network.random_connect(1.0)

        # Node 0 asked for one link but ends up with two
        assert total == 4
        assert network.degree(0) == 2
        assert network.degree(3) == 3

    def test_draws_capped_by_available_nodes(self):
        source = ScriptedRandomSource(poissons=[10, 10, 10])
        network = Network(random_source=source)
        network.resize(3)

        total = network.random_connect(10.0)

        assert total == 3
        assert all(network.degree(i) == 2 for i in range(3))
        assert_well_formed(network)

    def test_uses_picked_candidates(self):
        source = ScriptedRandomSource(poissons=[1], picks=[2])
        network = Network(random_source=source)
        network.resize(4)

        network.random_connect(1.0)

        assert network.neighbors(0) == [3]

    def test_zero_mean_degree_adds_nothing(self):
        network = Network(seed=5)
        network.resize(30)

        assert network.random_connect(0) == 0
        assert network.link_count == 0

    def test_negative_mean_degree_raises(self):
        network = Network(seed=5)
        network.resize(10)
        network.add_link(0, 1)

        with pytest.raises(ValueError):
            network.random_connect(-1.0)

        assert network.has_link(0, 1)

    def test_rebuild_replaces_previous_links(self):
        network = Network(seed=11)
        network.resize(25)

        network.random_connect(8.0)
        dense = network.link_count
        network.random_connect(0.0)

        assert dense > 0
        assert network.link_count == 0

    def test_connect_empty_network(self):
        network = Network(seed=2)

        assert network.random_connect(3.0) == 0

    @pytest.mark.parametrize("size,mean_degree", [(1, 2.0), (2, 5.0), (10, 3.0), (60, 4.0), (15, 30.0)])
    def test_invariants_hold(self, size, mean_degree):
        network = Network(seed=42)
        network.resize(size)

        total = network.random_connect(mean_degree)

        assert_well_formed(network)
        assert network.link_count == total

    def test_average_degree_near_target(self):
        network = Network(seed=7)
        network.resize(400)

        network.random_connect(3.0)

        avg = 2 * network.link_count / network.size()
        # Each node requests about 3 links and also receives about 3
        assert 4.5 < avg < 7.5

    def test_same_seed_same_network(self):
        first = Network.create_random(50, 4.0, seed=123)
        second = Network.create_random(50, 4.0, seed=123)

        assert first.values == second.values
        assert list(first.links()) == list(second.links())

    def test_different_seeds_differ(self):
        first = Network.create_random(50, 4.0, seed=1)
        second = Network.create_random(50, 4.0, seed=2)

        assert first.values != second.values

    def test_seed_and_source_together_rejected(self):
        with pytest.raises(ValueError):
            Network(random_source=ScriptedRandomSource(), seed=1)

        with pytest.raises(ValueError):
            Network.create_random(5, 1.0, seed=1, random_source=NumpyRandomSource(seed=1))

    def test_create_random(self):
        network = Network.create_random(20, 2.0, seed=9)

        assert network.size() == 20
        assert len(network) == 20
        assert_well_formed(network)
        assert repr(network) == f"Network(nodes=20, links={network.link_count})"


class TestNumpyRandomSource:
    """Tests for the numpy-backed random source."""

    def test_returns_python_types(self):
        source = NumpyRandomSource(seed=0)

        assert type(source.normal(0.0, 1.0)) is float
        assert type(source.poisson(2.0)) is int
        assert type(source.uniform_int(0, 3)) is int

    def test_uniform_int_is_inclusive(self):
        source = NumpyRandomSource(seed=0)

        draws = {source.uniform_int(2, 5) for _ in range(1000)}

        assert draws == {2, 3, 4, 5}

    def test_uniform_int_single_value(self):
        source = NumpyRandomSource(seed=0)

        assert source.uniform_int(4, 4) == 4

    def test_uniform_int_empty_range_raises(self):
        source = NumpyRandomSource(seed=0)

        with pytest.raises(ValueError):
            source.uniform_int(3, 2)

    def test_poisson_zero_rate(self):
        source = NumpyRandomSource(seed=0)

        assert all(source.poisson(0.0) == 0 for _ in range(100))

    def test_seeded_sources_repeat(self):
        a = NumpyRandomSource(seed=99)
        b = NumpyRandomSource(seed=99)

        assert [a.normal(0.0, 1.0) for _ in range(5)] == [b.normal(0.0, 1.0) for _ in range(5)]

    def test_spawned_sources_are_independent(self):
        first, second = NumpyRandomSource(seed=8).spawn(2)

        assert first.normal(0.0, 1.0) != second.normal(0.0, 1.0)

    def test_spawn_is_reproducible(self):
        a = NumpyRandomSource(seed=8).spawn(1)[0]
        b = NumpyRandomSource(seed=8).spawn(1)[0]

        assert a.poisson(4.0) == b.poisson(4.0)

    def test_networks_share_nothing_across_sources(self):
        left, right = NumpyRandomSource(seed=4).spawn(2)

        net_a = Network(random_source=left)
        net_b = Network(random_source=right)
        net_a.resize(10)
        net_b.resize(10)

        assert net_a.values != net_b.values
