"""
Cyclic Dependency Detection with Tortoise-and-Hare Pointers

Each package names a set of dependencies. The pointer algorithms follow a
single successor per step (the dependency with the smallest name), so they
detect cycles on that one followed chain using O(1) extra memory:

- Brent: the hare moves one step per iteration; the tortoise jumps to the
  hare whenever the step count reaches a power of two
- Floyd: the hare moves two steps per iteration, the tortoise one

find_cyclic_dependency() instead explores every dependency with a DFS and
reports the package where the first cycle re-enters.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Successor = Callable[[T], Optional[T]]


@dataclass(eq=False, repr=False)
class PackageNode:
    """Package in a dependency graph. Compared and hashed by identity."""
    name: str
    dependencies: Set["PackageNode"] = field(default_factory=set)

    def __repr__(self):
        deps = sorted(dep.name for dep in self.dependencies)
        return f"PackageNode(name='{self.name}', dependencies={deps})"

    def add_dependency(self, dependency: "PackageNode"):
        self.dependencies.add(dependency)

    def next_dependency(self) -> Optional["PackageNode"]:
        """The single dependency followed by the pointer walks (smallest name)."""
        if not self.dependencies:
            return None
        return min(self.dependencies, key=lambda dep: dep.name)


def build_packages(mapping: Dict[str, Iterable[str]]) -> Dict[str, PackageNode]:
    """
    Create packages and wire their dependencies.

    Args:
        mapping: {package_name: [dependency_names]}; names that appear only
            as dependencies become packages without dependencies

    Returns:
        {name: PackageNode}
    """
    packages: Dict[str, PackageNode] = {}

    def get_or_create(name: str) -> PackageNode:
        if name not in packages:
            packages[name] = PackageNode(name)
        return packages[name]

    for name, dependencies in mapping.items():
        package = get_or_create(name)
        for dependency in dependencies or ():
            package.add_dependency(get_or_create(dependency))

    logger.debug(f"Built {len(packages)} packages")
    return packages


def brent_cycle_start(origin: Optional[T], successor: Successor) -> Optional[T]:
    """
    Locate the first node of the cycle reached from origin (Brent).

    Args:
        origin: Start of the chain, or None for an empty chain
        successor: Returns the next node, or None at the end of the chain

    Returns:
        First node on the cycle, or None if the chain terminates
    """
    if origin is None:
        return None

    power = length = 1
    tortoise = origin
    hare = successor(origin)
    while hare is not None and tortoise != hare:
        if power == length:
            tortoise = hare
            power *= 2
            length = 0
        hare = successor(hare)
        length += 1

    if hare is None:
        return None

    # length is now the cycle length: start the hare that far ahead
    tortoise = hare = origin
    for _ in range(length):
        hare = successor(hare)

    while tortoise != hare:
        tortoise = successor(tortoise)
        hare = successor(hare)
    return tortoise


def floyd_cycle_start(origin: Optional[T], successor: Successor) -> Optional[T]:
    """Locate the first node of the cycle reached from origin (Floyd)."""
    if origin is None:
        return None

    tortoise = hare = origin
    while True:
        step = successor(hare)
        if step is None:
            return None
        hare = successor(step)
        if hare is None:
            return None
        tortoise = successor(tortoise)
        if tortoise == hare:
            break

    tortoise = origin
    while tortoise != hare:
        tortoise = successor(tortoise)
        hare = successor(hare)
    return tortoise


METHODS = {
    'brent': brent_cycle_start,
    'floyd': floyd_cycle_start,
}


def find_cycle_start(origin: Optional[PackageNode], method: str = 'brent') -> Optional[str]:
    """
    Name of the first package on the cycle of the followed dependency chain.

    Args:
        origin: Package to start from; None is treated as an empty chain
        method: 'brent' or 'floyd'

    Returns:
        Package name, or None if the followed chain has no cycle
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method '{method}'. Expected one of {sorted(METHODS)}.")

    start = METHODS[method](origin, PackageNode.next_dependency)
    if start is None:
        logger.debug(f"No cyclic dependency reachable from {origin.name if origin else None}")
        return None

    logger.info(f"Cyclic dependency starting at '{start.name}' ({method})")
    return start.name


def has_dependency_cycle(origin: Optional[PackageNode], method: str = 'brent') -> bool:
    return find_cycle_start(origin, method) is not None


def find_cyclic_dependency(origin: Optional[PackageNode]) -> Optional[str]:
    """
    DFS over all dependencies reachable from origin.

    Dependencies are explored in name order. Returns the name of the package
    that the first back edge points to (where the cycle re-enters), or None.
    """
    if origin is None:
        return None

    def ordered(package: PackageNode) -> Iterable[PackageNode]:
        return iter(sorted(package.dependencies, key=lambda dep: dep.name))

    visited: Set[PackageNode] = {origin}
    on_path: Set[PackageNode] = {origin}
    stack: List[Tuple[PackageNode, Iterable[PackageNode]]] = [(origin, ordered(origin))]

    while stack:
        package, dependencies = stack[-1]
        for dependency in dependencies:
            if dependency in on_path:
                logger.info(f"Cycle: '{package.name}' depends back on '{dependency.name}'")
                return dependency.name
            if dependency not in visited:
                visited.add(dependency)
                on_path.add(dependency)
                stack.append((dependency, ordered(dependency)))
                break
        else:
            stack.pop()
            on_path.discard(package)

    return None
