"""
Adjacency-List Graph with Integer Node Handles

Nodes are stored in an arena keyed by integer id and refer to their
neighbours by id, never by object reference. The same structure backs
directed and undirected graphs; an undirected edge is simply stored in
both directions.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set, Tuple

logger = logging.getLogger(__name__)


@dataclass
class GraphNode:
    """Node in the graph."""
    node_id: int
    neighbours: List[int] = field(default_factory=list)


class Graph:
    """
    Graph over integer node ids with ordered neighbour lists.

    Nodes iterate in ascending id order, so every traversal built on top of
    this class is deterministic for a given sequence of add_edge calls.
    Disconnected components are allowed.
    """

    def __init__(self):
        self._nodes: Dict[int, GraphNode] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int]], directed: bool = True,
                   nodes: Iterable[int] = ()) -> "Graph":
        """
        Build a graph from an edge list.

        Args:
            edges: (src, dest) pairs; endpoints are created on demand
            directed: Store each edge once (True) or in both directions (False)
            nodes: Extra isolated node ids to include

        Returns:
            New Graph
        """
        graph = cls()
        for node_id in nodes:
            graph.add_node(node_id)
        for src, dest in edges:
            graph.add_node(src)
            graph.add_node(dest)
            if directed:
                graph.add_edge(src, dest)
            else:
                graph.add_undirected_edge(src, dest)
        return graph

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def add_node(self, node_id: int) -> GraphNode:
        """Add a node if absent; existing nodes are left untouched."""
        if node_id not in self._nodes:
            self._nodes[node_id] = GraphNode(node_id)
        return self._nodes[node_id]

    def _require(self, node_id: int) -> GraphNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"Unknown node {node_id}") from None

    def add_edge(self, src: int, dest: int):
        """Add a directed edge src -> dest. Both endpoints must exist."""
        source = self._require(src)
        self._require(dest)
        source.neighbours.append(dest)

    def add_undirected_edge(self, a: int, b: int):
        """Add an undirected edge, stored as a -> b and b -> a."""
        self.add_edge(a, b)
        if a != b:
            self.add_edge(b, a)

    def remove_edge(self, src: int, dest: int):
        """Remove one directed edge src -> dest, if present."""
        neighbours = self._require(src).neighbours
        if dest in neighbours:
            neighbours.remove(dest)

    def remove_node(self, node_id: int):
        """Remove a node together with every edge pointing at it."""
        self._require(node_id)
        del self._nodes[node_id]
        for node in self._nodes.values():
            node.neighbours[:] = [n for n in node.neighbours if n != node_id]

    def nodes(self) -> Iterator[GraphNode]:
        """Iterate over nodes in ascending id order."""
        for node_id in sorted(self._nodes):
            yield self._nodes[node_id]

    def node_ids(self) -> List[int]:
        return sorted(self._nodes)

    def neighbours(self, node_id: int) -> List[int]:
        return list(self._require(node_id).neighbours)

    def edge_count(self) -> int:
        return sum(len(node.neighbours) for node in self._nodes.values())

    def get_adjacency(self) -> Dict[int, List[int]]:
        """Get adjacency list representation of the graph."""
        return {node.node_id: list(node.neighbours) for node in self.nodes()}

    def dfs_order(self, start: int) -> List[int]:
        """Depth-first visiting order from start (neighbours in stored order)."""
        self._require(start)
        order = []
        visited = set()
        stack = [start]
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            order.append(node_id)
            # Reversed so the first neighbour is explored first
            for neighbour in reversed(self._nodes[node_id].neighbours):
                if neighbour not in visited:
                    stack.append(neighbour)
        return order

    def bfs_order(self, start: int) -> List[int]:
        """Breadth-first visiting order from start."""
        self._require(start)
        order = []
        visited = {start}
        queue = deque([start])
        while queue:
            node_id = queue.popleft()
            order.append(node_id)
            for neighbour in self._nodes[node_id].neighbours:
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)
        return order

    def reachable_from(self, start: int) -> Set[int]:
        return set(self.bfs_order(start))

    def connected_components(self) -> List[Set[int]]:
        """
        Components of the graph with edge direction ignored.

        Returns:
            List of node-id sets, ordered by their smallest id
        """
        undirected: Dict[int, Set[int]] = {node_id: set() for node_id in self._nodes}
        for node in self._nodes.values():
            for neighbour in node.neighbours:
                undirected[node.node_id].add(neighbour)
                undirected[neighbour].add(node.node_id)

        seen: Set[int] = set()
        components = []
        for node_id in sorted(undirected):
            if node_id in seen:
                continue
            component = set()
            queue = deque([node_id])
            while queue:
                current = queue.popleft()
                if current in seen:
                    continue
                seen.add(current)
                component.add(current)
                queue.extend(undirected[current] - seen)
            components.append(component)

        logger.debug(f"Found {len(components)} connected components")
        return components

    def transitive_closure(self) -> "Graph":
        """Graph with an edge u -> v for every v reachable from u (u included)."""
        closure = Graph()
        for node_id in self.node_ids():
            closure.add_node(node_id)
        for node_id in self.node_ids():
            for reachable in sorted(self.reachable_from(node_id)):
                closure.add_edge(node_id, reachable)
        return closure
