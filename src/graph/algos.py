"""Graph algorithms for module dependency graphs."""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

from resolve.errors import CyclicDependencyError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from graph.model import DependencyGraph


class _DfsState:
    """Mutable state container for the cycle search."""

    def __init__(self) -> None:
        self.finished: set[str] = set()
        self.stack: list[str] = []
        self.stack_index: dict[str, int] = {}

    def push(self, node: str) -> None:
        self.stack_index[node] = len(self.stack)
        self.stack.append(node)

    def pop(self) -> None:
        node = self.stack.pop()
        del self.stack_index[node]
        self.finished.add(node)


def _search_from(
    root: str, graph: DependencyGraph, state: _DfsState
) -> list[str] | None:
    """Depth-first search from ``root``; return the first cycle met, if any."""
    state.push(root)
    pending: list[Iterator[str]] = [iter(graph.dependencies(root))]

    while pending:
        for dependency in pending[-1]:
            if dependency in state.stack_index:
                return [*state.stack[state.stack_index[dependency] :], dependency]
            if dependency not in state.finished:
                state.push(dependency)
                pending.append(iter(graph.dependencies(dependency)))
                break
        else:
            pending.pop()
            state.pop()

    return None


def find_cycle(graph: DependencyGraph) -> list[str] | None:
    """Find the first dependency cycle in the graph.

    Modules are visited in input order and dependencies in declared order,
    so the same input always yields the same cycle.

    Returns:
        The cycle as module names returning to its first element
        (e.g. ``["A", "B", "A"]``), or ``None`` if the graph is acyclic.
    """
    state = _DfsState()
    for node in graph.nodes:
        if node in state.finished:
            continue
        cycle = _search_from(node, graph, state)
        if cycle is not None:
            return cycle
    return None


def check_acyclic(graph: DependencyGraph) -> None:
    """Raise ``CyclicDependencyError`` if the graph contains a cycle."""
    cycle = find_cycle(graph)
    if cycle is not None:
        raise CyclicDependencyError(cycle)


def _dependents(graph: DependencyGraph) -> dict[str, list[str]]:
    dependents: dict[str, list[str]] = {name: [] for name in graph.nodes}
    for source, target in graph.edge_pairs():
        dependents[target].append(source)
    return dependents


def topological_order(graph: DependencyGraph) -> list[str]:
    """Order modules so every dependency precedes its dependents.

    Modules with no ordering constraint between them are emitted by
    ascending name, which makes the result independent of input order.
    """
    remaining = {name: len(graph.edges[name]) for name in graph.nodes}
    dependents = _dependents(graph)

    ready = [name for name, count in remaining.items() if count == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        name = heapq.heappop(ready)
        order.append(name)
        for dependent in dependents[name]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, dependent)

    if len(order) != len(graph):
        check_acyclic(graph)
        msg = "Topological sort left modules unordered in an acyclic graph."
        raise RuntimeError(msg)
    return order


def ready_sets(graph: DependencyGraph) -> list[list[str]]:
    """Group modules into waves that can be built in parallel.

    Every module's dependencies live in strictly earlier waves. Each wave is
    sorted by name.
    """
    remaining = {name: len(graph.edges[name]) for name in graph.nodes}
    dependents = _dependents(graph)

    waves: list[list[str]] = []
    wave = sorted(name for name, count in remaining.items() if count == 0)
    placed = 0
    while wave:
        waves.append(wave)
        placed += len(wave)
        unlocked: list[str] = []
        for name in wave:
            for dependent in dependents[name]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    unlocked.append(dependent)
        wave = sorted(unlocked)

    if placed != len(graph):
        check_acyclic(graph)
        msg = "Wave planning left modules unplaced in an acyclic graph."
        raise RuntimeError(msg)
    return waves


def public_closures(
    graph: DependencyGraph, order: Sequence[str] | None = None
) -> dict[str, frozenset[str]]:
    """Compute every module's transitive closure over public edges only.

    Args:
        graph: An acyclic dependency graph.
        order: A build order for ``graph``; computed when omitted.

    Returns:
        Mapping of module name to the modules it re-exports. Leaf modules map
        to the empty set.
    """
    if order is None:
        order = topological_order(graph)

    closures: dict[str, frozenset[str]] = {}
    for name in order:
        closure: set[str] = set()
        for dependency in graph.public_dependencies(name):
            closure.add(dependency)
            closure.update(closures[dependency])
        closures[name] = frozenset(closure)
    return closures


def visible_dependencies(
    graph: DependencyGraph, closures: dict[str, frozenset[str]]
) -> dict[str, frozenset[str]]:
    """Compute what each module compiles against.

    That is its direct dependencies, public or private, plus everything
    those dependencies re-export.
    """
    visible: dict[str, frozenset[str]] = {}
    for name in graph.nodes:
        seen: set[str] = set()
        for dependency in graph.dependencies(name):
            seen.add(dependency)
            seen.update(closures[dependency])
        visible[name] = frozenset(seen)
    return visible


def find_path(
    graph: DependencyGraph, source: str, predicate: Callable[[str], bool]
) -> list[str] | None:
    """Return the first dependency path from ``source`` to a matching module.

    The search is depth-first in declared dependency order and never matches
    ``source`` itself. The graph must be acyclic.
    """
    visited: set[str] = set()
    path = [source]
    pending: list[Iterator[str]] = [iter(graph.dependencies(source))]

    while pending:
        for dependency in pending[-1]:
            if dependency in visited:
                continue
            visited.add(dependency)
            path.append(dependency)
            if predicate(dependency):
                return path
            pending.append(iter(graph.dependencies(dependency)))
            break
        else:
            pending.pop()
            path.pop()

    return None


__all__ = [
    "check_acyclic",
    "find_cycle",
    "find_path",
    "public_closures",
    "ready_sets",
    "topological_order",
    "visible_dependencies",
]
