"""Module kind layering and violation detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.descriptors import ModuleKind
from graph.algos import find_path
from resolve.errors import InvalidLayeringError

if TYPE_CHECKING:
    from graph.model import DependencyGraph
    from rules.config import LayeringConfig


def build_allowed_kinds(
    layering: LayeringConfig | None = None,
) -> dict[ModuleKind, set[ModuleKind]]:
    """Build a mapping of kind -> set of kinds it may depend on.

    Configured rules override the defaults per kind; a later rule for the
    same kind replaces an earlier one.
    """
    from rules.config import LayeringConfig

    allowed: dict[ModuleKind, set[ModuleKind]] = {
        rule.from_kind: set(rule.to) for rule in LayeringConfig().rules
    }
    if layering is not None:
        for rule in layering.rules:
            allowed[rule.from_kind] = set(rule.to)
    return allowed


def is_violation(
    from_kind: ModuleKind,
    to_kind: ModuleKind,
    allowed_kinds: dict[ModuleKind, set[ModuleKind]],
) -> bool:
    """Check if a dependency from one kind to another is a violation."""
    if from_kind not in allowed_kinds:
        return False
    return to_kind not in allowed_kinds[from_kind]


def _violation(graph: DependencyGraph, path: list[str]) -> InvalidLayeringError:
    source, target = path[0], path[-1]
    return InvalidLayeringError(
        source,
        target,
        graph.descriptor(source).kind.value,
        graph.descriptor(target).kind.value,
        path=path,
    )


def find_layering_violation(
    graph: DependencyGraph, layering: LayeringConfig | None = None
) -> InvalidLayeringError | None:
    """Return the first kind-layering violation in an acyclic graph.

    Direct edges are checked first, so a violation is reported at the edge
    that introduces it whenever one exists. Modules are scanned by name and
    dependencies in declared order.
    """
    allowed_kinds = build_allowed_kinds(layering)
    names = sorted(graph.nodes)

    for name in names:
        kind = graph.descriptor(name).kind
        for dependency in graph.dependencies(name):
            if is_violation(kind, graph.descriptor(dependency).kind, allowed_kinds):
                return _violation(graph, [name, dependency])

    for name in names:
        kind = graph.descriptor(name).kind
        path = find_path(
            graph,
            name,
            lambda dep, kind=kind: is_violation(
                kind, graph.descriptor(dep).kind, allowed_kinds
            ),
        )
        if path is not None:
            return _violation(graph, path)

    return None


def check_layering(
    graph: DependencyGraph, layering: LayeringConfig | None = None
) -> None:
    """Raise ``InvalidLayeringError`` for the first layering violation."""
    violation = find_layering_violation(graph, layering)
    if violation is not None:
        raise violation
