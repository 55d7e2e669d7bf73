"""
Union-Find (Disjoint Set) Cycle Detection for Undirected Edge Lists

Edges are processed in input order. The first edge whose endpoints already
share a representative closes a cycle.

The baseline DisjointSet does neither path compression nor union by rank,
so find() is O(V) worst case and a full scan is O(E * V). Both optimisations
can be switched on; they change the cost, never the answer.
"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence, Set

logger = logging.getLogger(__name__)

ROOT = -1


class Edge(NamedTuple):
    """Undirected edge between two vertex indices."""
    src: int
    dest: int


class DisjointSet:
    """
    Disjoint sets over the vertices 0..size-1.

    parent[i] == -1 marks i as the representative of its own set.

    Example:
        >>> ds = DisjointSet(4)
        >>> ds.union(0, 1)
        1
        >>> ds.connected(0, 1)
        True
        >>> ds.connected(0, 3)
        False
    """

    def __init__(self, size: int, path_compression: bool = False, union_by_rank: bool = False):
        if size < 0:
            raise ValueError(f"Vertex count must be non-negative, got {size}")
        self.size = size
        self.path_compression = path_compression
        self.union_by_rank = union_by_rank
        self.parent: List[int] = [ROOT] * size
        self.rank: List[int] = [0] * size

    def __len__(self) -> int:
        return self.size

    def _check(self, element: int):
        if not 0 <= element < self.size:
            raise IndexError(f"Vertex {element} outside [0, {self.size - 1}]")

    def find(self, element: int) -> int:
        """
        Find the representative of the set containing element.

        With path_compression, every vertex on the chased chain is pointed
        directly at the representative.
        """
        self._check(element)

        root = element
        while self.parent[root] != ROOT:
            root = self.parent[root]

        if self.path_compression:
            current = element
            while current != root and self.parent[current] != root:
                next_node = self.parent[current]
                self.parent[current] = root
                current = next_node

        return root

    def union(self, x: int, y: int) -> int:
        """
        Merge the sets containing x and y.

        Returns the representative of the merged set.
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return root_x

        if not self.union_by_rank:
            self.parent[root_x] = root_y
            return root_y

        # Attach the shallower tree under the deeper one
        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
            return root_y
        if self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
            return root_x
        self.parent[root_y] = root_x
        self.rank[root_x] += 1
        return root_x

    def connected(self, x: int, y: int) -> bool:
        """Check if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def sets(self) -> Dict[int, Set[int]]:
        """
        Get all disjoint sets.

        Returns:
            Mapping from each representative to its members
        """
        groups: Dict[int, Set[int]] = {}
        for element in range(self.size):
            groups.setdefault(self.find(element), set()).add(element)
        return groups


def find_cycle_edge(vertex_count: int, edges: Iterable[Sequence[int]],
                    path_compression: bool = False, union_by_rank: bool = False) -> Optional[Edge]:
    """
    Find the first edge that closes a cycle.

    Args:
        vertex_count: Number of vertices (indices 0..vertex_count-1)
        edges: (src, dest) pairs in processing order
        path_compression: Enable path compression in find()
        union_by_rank: Enable union by rank

    Returns:
        The first cycle-closing Edge, or None if the edges form a forest
    """
    disjoint_set = DisjointSet(vertex_count, path_compression, union_by_rank)

    processed = 0
    for src, dest in edges:
        edge = Edge(src, dest)
        x = disjoint_set.find(edge.src)
        y = disjoint_set.find(edge.dest)
        processed += 1
        if x == y:
            logger.info(f"Edge {edge.src}-{edge.dest} closes a cycle (after {processed} edges)")
            return edge
        disjoint_set.union(x, y)

    logger.debug(f"No cycle in {processed} edges over {vertex_count} vertices")
    return None


def has_cycle(vertex_count: int, edges: Iterable[Sequence[int]], **options) -> bool:
    """Check whether an undirected edge list contains a cycle."""
    return find_cycle_edge(vertex_count, edges, **options) is not None
