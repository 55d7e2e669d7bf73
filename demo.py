"""
Demo Runner - Range queries and cycle detection on small sample inputs

Usage:
    python demo.py --mode all
    python demo.py --mode segment-tree --config config.yaml
    python demo.py --mode dependencies
"""

import argparse
import logging
import time
from typing import Dict, List, Optional

from config import configure_logging, load_config
from cycle_detection import (
    CycleError,
    find_cycles_directed,
    find_cycles_undirected,
    has_cycle_directed,
    has_cycle_undirected,
    topological_sort,
)
from dependency_cycles import build_packages, find_cycle_start, find_cyclic_dependency
from graph import Graph
from segment_tree import LazySegmentTree
from union_find import find_cycle_edge

logger = logging.getLogger(__name__)

MODES = ['segment-tree', 'graph-cycles', 'union-find', 'dependencies', 'topo-sort', 'all']


def _banner(title: str):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def demo_segment_tree(config: Dict) -> List[int]:
    """Build a lazy segment tree, apply the configured updates, run the queries."""
    _banner("Lazy Segment Tree: range add / range sum")

    section = config['demo']
    tree = LazySegmentTree(section['array'])
    print(f"Array: {tree.to_list()}")

    results = []
    for left, right in section['queries']:
        results.append(tree.query_range_sum(left, right))
        print(f"  sum[{left}..{right}] = {results[-1]}")

    for left, right, delta in section['updates']:
        start_time = time.time()
        tree.update_range(left, right, delta)
        print(f"Update [{left}..{right}] += {delta} ({(time.time() - start_time) * 1e6:.1f}µs)")

    for left, right in section['queries']:
        results.append(tree.query_range_sum(left, right))
        print(f"  sum[{left}..{right}] = {results[-1]}")

    print(f"Array after updates: {tree.to_list()}")
    print(f"Stats: {tree.stats()}")
    return results


def demo_graph_cycles(config: Dict) -> Dict[str, object]:
    """DFS cycle detection on directed and undirected sample graphs."""
    _banner("DFS Cycle Detection")
    strategy = config['cycle_detection']['directed_strategy']

    cyclic = Graph.from_edges([(1, 2), (2, 3), (3, 1), (3, 4), (4, 5), (5, 6), (6, 4)])
    acyclic = Graph.from_edges([(1, 2), (2, 3)])
    multi = Graph.from_edges([(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3), (4, 0)])
    undirected = Graph.from_edges(
        [(1, 2), (2, 3), (3, 4), (4, 6), (4, 7), (5, 6), (3, 5), (7, 8),
         (6, 10), (5, 9), (10, 9), (10, 11), (11, 12), (11, 13), (12, 13)],
        directed=False,
    )
    tree = Graph.from_edges([(1, 2), (1, 3), (3, 4)], directed=False)

    results = {
        'directed_cyclic': has_cycle_directed(cyclic, strategy),
        'directed_acyclic': has_cycle_directed(acyclic, strategy),
        'directed_cycles': find_cycles_directed(multi),
        'undirected_cyclic': has_cycle_undirected(undirected),
        'undirected_tree': has_cycle_undirected(tree),
        'undirected_cycles': find_cycles_undirected(undirected),
    }

    print(f"Directed strategy: {strategy}")
    print(f"  1->2->3->1, 4->5->6->4 has cycle: {results['directed_cyclic']}")
    print(f"  1->2->3 has cycle: {results['directed_acyclic']}")
    print(f"  Back-edge cycles: {results['directed_cycles']}")
    print("Undirected")
    print(f"  13-vertex sample has cycle: {results['undirected_cyclic']}")
    print(f"  Tree 1-2, 1-3, 3-4 has cycle: {results['undirected_tree']}")
    print(f"  Back-edge cycles: {results['undirected_cycles']}")
    return results


def demo_union_find(config: Dict) -> Dict[str, object]:
    """Union-Find cycle detection over explicit edge lists."""
    _banner("Union-Find Cycle Detection")
    section = config['union_find']
    options = {
        'path_compression': bool(section.get('path_compression', False)),
        'union_by_rank': bool(section.get('union_by_rank', False)),
    }

    samples = {
        'triangle': (3, [(0, 1), (1, 2), (0, 2)]),
        'path': (3, [(0, 1), (1, 2)]),
    }
    results = {}
    for name, (vertex_count, edges) in samples.items():
        edge = find_cycle_edge(vertex_count, edges, **options)
        results[name] = edge
        verdict = f"cycle closed by {edge.src}-{edge.dest}" if edge else "no cycle"
        print(f"  {name} {edges}: {verdict}")
    return results


def demo_dependencies(config: Dict) -> Dict[str, Optional[str]]:
    """Cyclic dependency detection in a small package graph."""
    _banner("Cyclic Dependency Detection")
    method = config['dependencies']['method']

    packages = build_packages({
        'A': ['B'],
        'B': ['C'],
        'C': ['D', 'E'],
        'D': ['B'],
    })
    clean = build_packages({'A': ['B'], 'B': ['C']})

    results = {
        'chain': find_cycle_start(packages['A'], method),
        'dfs': find_cyclic_dependency(packages['A']),
        'clean': find_cycle_start(clean['A'], method),
    }
    print(f"  A->B->C->D->B ({method}): cycle starts at {results['chain'] or 'nothing found'}")
    print(f"  Full DFS: cycle re-enters at {results['dfs'] or 'nothing found'}")
    print(f"  A->B->C ({method}): {results['clean'] or 'nothing found'}")
    return results


def demo_topological_sort(config: Dict) -> List[int]:
    """Topological ordering of a DAG, and the error raised for a cyclic graph."""
    _banner("Topological Sort")

    dag = Graph.from_edges([(5, 2), (5, 0), (4, 0), (4, 1), (2, 3), (3, 1)])
    order = topological_sort(dag)
    print(f"  Order: {order}")

    try:
        topological_sort(Graph.from_edges([(1, 2), (2, 1)]))
    except CycleError as exc:
        print(f"  Cyclic input rejected: {exc}")
    return order


DEMOS = {
    'segment-tree': demo_segment_tree,
    'graph-cycles': demo_graph_cycles,
    'union-find': demo_union_find,
    'dependencies': demo_dependencies,
    'topo-sort': demo_topological_sort,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Range query and cycle detection demos')
    parser.add_argument('--mode', choices=MODES, default='all',
                        help='Which demo to run')
    parser.add_argument('--config', type=str,
                        help='Path to a YAML config file (default: ./config.yaml if present)')
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        parser.error(str(exc))
    configure_logging(config)

    selected = list(DEMOS) if args.mode == 'all' else [args.mode]
    logger.info(f"Running demos: {', '.join(selected)}")
    for mode in selected:
        DEMOS[mode](config)

    print("\n" + "=" * 60)
    print("All demos completed")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
