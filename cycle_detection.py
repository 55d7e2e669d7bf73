"""
DFS Cycle Detection over Adjacency-List Graphs

This module provides:
- Directed cycle detection (three-color DFS, or the single visited-set walk)
- Undirected cycle detection (visited-set walk that ignores the edge back
  to the immediate predecessor)
- Enumeration of the back-edge cycles found by one DFS pass
- Topological ordering of DAGs

All traversals are iterative with an explicit stack, and each call owns a
fresh TraversalContext, so nothing is shared between calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Set, Tuple

from graph import Graph

logger = logging.getLogger(__name__)

THREE_COLOR = "three_color"
VISITED = "visited"
DIRECTED_STRATEGIES = (THREE_COLOR, VISITED)

# Predecessor of a component root in the undirected walk
NO_PREDECESSOR = None


class CycleError(ValueError):
    """Raised when an operation needs a DAG but the graph has a cycle."""

    def __init__(self, cycle: List[int]):
        self.cycle = cycle
        super().__init__(f"Graph contains a cycle: {' -> '.join(map(str, cycle + cycle[:1]))}")


@dataclass
class TraversalContext:
    """Working state of one DFS: visited nodes plus the active path."""
    visited: Set[int] = field(default_factory=set)
    on_path: Set[int] = field(default_factory=set)
    path: List[int] = field(default_factory=list)
    cycles: List[List[int]] = field(default_factory=list)

    def enter(self, node_id: int):
        self.visited.add(node_id)
        self.on_path.add(node_id)
        self.path.append(node_id)

    def leave(self, node_id: int):
        self.on_path.discard(node_id)
        self.path.pop()

    def cycle_from(self, node_id: int) -> List[int]:
        """Nodes of the active path from node_id to the current node."""
        return self.path[self.path.index(node_id):]


def _walk_directed(graph: Graph, root: int, context: TraversalContext,
                   closes_cycle: Callable[[int], bool], stop_at_first: bool = True,
                   on_finish: Optional[Callable[[int], None]] = None) -> bool:
    """
    Iterative DFS from root over directed edges.

    Args:
        graph: Graph to walk
        root: Unvisited start node
        context: Shared traversal state for this detection run
        closes_cycle: Predicate on a neighbour id; True means the edge closes a cycle
        stop_at_first: Return as soon as one cycle is recorded
        on_finish: Called with each node id once all its descendants are done

    Returns:
        True if at least one cycle was recorded during this walk
    """
    found = False
    context.enter(root)
    stack: List[Tuple[int, Iterator[int]]] = [(root, iter(graph.neighbours(root)))]

    while stack:
        node_id, neighbours = stack[-1]
        descended = False
        for neighbour in neighbours:
            if closes_cycle(neighbour):
                found = True
                context.cycles.append(
                    context.cycle_from(neighbour) if neighbour in context.on_path
                    else list(context.path)
                )
                if stop_at_first:
                    return True
                continue
            if neighbour not in context.visited:
                context.enter(neighbour)
                stack.append((neighbour, iter(graph.neighbours(neighbour))))
                descended = True
                break
        if not descended:
            stack.pop()
            context.leave(node_id)
            if on_finish is not None:
                on_finish(node_id)

    return found


def _walk_undirected(graph: Graph, root: int, context: TraversalContext,
                     closes_cycle: Callable[[int], bool], stop_at_first: bool = True) -> bool:
    """
    Iterative DFS from root that skips the tree edge back to the predecessor.

    Only one adjacency entry pointing at the predecessor is skipped, so a
    duplicated edge u-v still closes the two-node cycle [u, v].
    """
    found = False
    context.enter(root)
    stack = [[root, NO_PREDECESSOR, iter(graph.neighbours(root))]]

    while stack:
        frame = stack[-1]
        node_id, _, neighbours = frame
        descended = False
        for neighbour in neighbours:
            if frame[1] is not NO_PREDECESSOR and neighbour == frame[1]:
                frame[1] = NO_PREDECESSOR
                continue
            if closes_cycle(neighbour):
                found = True
                context.cycles.append(
                    context.cycle_from(neighbour) if neighbour in context.on_path
                    else list(context.path)
                )
                if stop_at_first:
                    return True
                continue
            if neighbour not in context.visited:
                context.enter(neighbour)
                stack.append([neighbour, node_id, iter(graph.neighbours(neighbour))])
                descended = True
                break
        if not descended:
            stack.pop()
            context.leave(node_id)

    return found


def has_cycle_directed(graph: Graph, strategy: str = THREE_COLOR) -> bool:
    """
    Check a directed graph for cycles.

    Every node is tried as a root, so disconnected components are covered.

    Args:
        graph: Directed graph
        strategy: "three_color" reports a cycle only for an edge back onto the
            active DFS path. "visited" reports one for any edge reaching an
            already visited node; it can flag converging paths (A->B, A->C,
            B->D, C->D) that contain no cycle.

    Returns:
        True if a cycle was detected
    """
    if strategy not in DIRECTED_STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}'. Expected one of {DIRECTED_STRATEGIES}.")

    context = TraversalContext()
    if strategy == THREE_COLOR:
        closes_cycle = context.on_path.__contains__
    else:
        closes_cycle = context.visited.__contains__

    for node in graph.nodes():
        if node.node_id in context.visited:
            continue
        if _walk_directed(graph, node.node_id, context, closes_cycle):
            logger.info(f"Directed cycle detected ({strategy}): {context.cycles[0]}")
            return True

    logger.debug(f"No directed cycle in {len(graph)} nodes ({strategy})")
    return False


def has_cycle_undirected(graph: Graph) -> bool:
    """
    Check an undirected graph for cycles.

    A visited neighbour closes a cycle unless it is the tree edge the walk
    just came along. A second edge to the predecessor is a cycle, so a
    duplicated edge counts. The predecessor resets for every component root.
    """
    context = TraversalContext()
    for node in graph.nodes():
        if node.node_id in context.visited:
            continue
        if _walk_undirected(graph, node.node_id, context, context.visited.__contains__):
            logger.info(f"Undirected cycle detected: {context.cycles[0]}")
            return True

    logger.debug(f"No undirected cycle in {len(graph)} nodes")
    return False


def find_cycles_directed(graph: Graph) -> List[List[int]]:
    """
    List the cycle closed by every back edge of one full DFS pass.

    Returns:
        Cycles as node lists in path order, e.g. [0, 1, 2] for 0->1->2->0
    """
    context = TraversalContext()
    for node in graph.nodes():
        if node.node_id not in context.visited:
            _walk_directed(graph, node.node_id, context, context.on_path.__contains__,
                           stop_at_first=False)

    logger.info(f"Found {len(context.cycles)} directed cycles")
    return context.cycles


def find_cycles_undirected(graph: Graph) -> List[List[int]]:
    """
    List the cycle closed by every back edge of one undirected DFS pass.

    A duplicated edge u-v is listed as the two-node cycle [u, v].
    """
    context = TraversalContext()
    for node in graph.nodes():
        if node.node_id not in context.visited:
            _walk_undirected(graph, node.node_id, context, context.on_path.__contains__,
                             stop_at_first=False)

    logger.info(f"Found {len(context.cycles)} undirected cycles")
    return context.cycles


def topological_sort(graph: Graph) -> List[int]:
    """
    Order the nodes of a DAG so every edge points forward.

    Uses reverse DFS finishing order.

    Raises:
        CycleError: If the graph has a cycle
    """
    context = TraversalContext()
    finished: List[int] = []

    for node in graph.nodes():
        if node.node_id in context.visited:
            continue
        if _walk_directed(graph, node.node_id, context, context.on_path.__contains__,
                          on_finish=finished.append):
            raise CycleError(context.cycles[0])

    finished.reverse()
    return finished
