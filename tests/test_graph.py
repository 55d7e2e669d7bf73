"""Tests for graph.py"""

import pytest

from graph import Graph


class TestConstruction:
    def test_add_node_is_idempotent(self):
        graph = Graph()
        graph.add_node(1)
        graph.add_edge(1, 1)
        graph.add_node(1)
        assert len(graph) == 1
        assert graph.neighbours(1) == [1]

    def test_nodes_iterate_in_id_order(self):
        graph = Graph()
        for node_id in (5, 1, 3):
            graph.add_node(node_id)
        assert [node.node_id for node in graph.nodes()] == [1, 3, 5]
        assert graph.node_ids() == [1, 3, 5]

    def test_edge_to_unknown_node_raises(self):
        graph = Graph()
        graph.add_node(1)
        with pytest.raises(KeyError):
            graph.add_edge(1, 2)
        with pytest.raises(KeyError):
            graph.neighbours(2)

    def test_from_edges_directed(self):
        graph = Graph.from_edges([(1, 2), (2, 3)], nodes=[9])
        assert graph.get_adjacency() == {1: [2], 2: [3], 3: [], 9: []}
        assert graph.edge_count() == 2

    def test_from_edges_undirected(self):
        graph = Graph.from_edges([(1, 2), (2, 3)], directed=False)
        assert graph.get_adjacency() == {1: [2], 2: [1, 3], 3: [2]}

    def test_remove_edge_and_node(self):
        graph = Graph.from_edges([(1, 2), (2, 3), (3, 1)])
        graph.remove_edge(1, 2)
        assert graph.neighbours(1) == []
        graph.remove_node(3)
        assert 3 not in graph
        assert graph.get_adjacency() == {1: [], 2: []}


class TestTraversal:
    def test_dfs_and_bfs_order(self):
        graph = Graph.from_edges([(1, 2), (1, 3), (2, 4), (3, 4)])
        assert graph.dfs_order(1) == [1, 2, 4, 3]
        assert graph.bfs_order(1) == [1, 2, 3, 4]

    def test_reachable_from(self):
        graph = Graph.from_edges([(1, 2), (2, 3), (4, 1)])
        assert graph.reachable_from(1) == {1, 2, 3}
        assert graph.reachable_from(3) == {3}

    def test_connected_components_ignore_direction(self):
        graph = Graph.from_edges([(1, 2), (3, 2), (4, 5)], nodes=[6])
        assert graph.connected_components() == [{1, 2, 3}, {4, 5}, {6}]

    def test_transitive_closure(self):
        closure = Graph.from_edges([(1, 2), (2, 3)]).transitive_closure()
        assert closure.get_adjacency() == {1: [1, 2, 3], 2: [2, 3], 3: [3]}
