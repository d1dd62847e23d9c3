"""Dependency graph construction from module descriptors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from artifacts.models.artifacts.descriptors import ModuleDescriptor, Visibility
from resolve.errors import DuplicateEdgeError, DuplicateModuleError, UnknownModuleError

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable


@dataclass(frozen=True)
class DependencyEdge:
    source: str
    target: str
    visibility: Visibility

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC


@dataclass(frozen=True)
class DependencyGraph:
    """Immutable module graph.

    ``modules`` keeps the input order of descriptors and ``edges`` keeps each
    module's dependencies in declared order (public list, then private list).
    Traversals that must be deterministic rely on both orders.
    """

    modules: Mapping[str, ModuleDescriptor]
    edges: Mapping[str, tuple[DependencyEdge, ...]]

    @property
    def nodes(self) -> tuple[str, ...]:
        return tuple(self.modules)

    def __len__(self) -> int:
        return len(self.modules)

    def __contains__(self, name: object) -> bool:
        return name in self.modules

    def descriptor(self, name: str) -> ModuleDescriptor:
        return self.modules[name]

    def dependencies(self, name: str) -> tuple[str, ...]:
        return tuple(edge.target for edge in self.edges[name])

    def public_dependencies(self, name: str) -> tuple[str, ...]:
        return tuple(edge.target for edge in self.edges[name] if edge.is_public)

    def iter_edges(self) -> Iterable[DependencyEdge]:
        for name in self.modules:
            yield from self.edges[name]

    def edge_pairs(self) -> list[tuple[str, str]]:
        return [(edge.source, edge.target) for edge in self.iter_edges()]


def _index_descriptors(
    descriptors: Iterable[ModuleDescriptor] | Mapping[str, ModuleDescriptor],
) -> dict[str, ModuleDescriptor]:
    if isinstance(descriptors, Mapping):
        for key, descriptor in descriptors.items():
            if key != descriptor.name:
                msg = (
                    f"Descriptor mapping key {key!r} does not match module name "
                    f"{descriptor.name!r}"
                )
                raise ValueError(msg)
        descriptors = descriptors.values()

    indexed: dict[str, ModuleDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.name in indexed:
            raise DuplicateModuleError(descriptor.name)
        indexed[descriptor.name] = descriptor
    return indexed


def _edges_for(
    descriptor: ModuleDescriptor,
    known: Mapping[str, ModuleDescriptor],
    excluded: Collection[str],
) -> tuple[DependencyEdge, ...]:
    private = set(descriptor.private_dependencies)
    for dependency in descriptor.public_dependencies:
        if dependency in private:
            raise DuplicateEdgeError(descriptor.name, dependency)

    edges: list[DependencyEdge] = []
    for dependency, visibility in descriptor.dependencies():
        if dependency not in known:
            raise UnknownModuleError(
                descriptor.name, dependency, excluded=dependency in excluded
            )
        edges.append(DependencyEdge(descriptor.name, dependency, visibility))
    return tuple(edges)


def build_dependency_graph(
    descriptors: Iterable[ModuleDescriptor] | Mapping[str, ModuleDescriptor],
    *,
    excluded: Collection[str] = (),
) -> DependencyGraph:
    """Build a dependency graph from module descriptors.

    Args:
        descriptors: Descriptors to assemble, either as an iterable or as a
            mapping from module name to descriptor.
        excluded: Names of modules left out by the build environment. A
            dependency on one of these is reported as excluded rather than
            unknown.

    Returns:
        The immutable graph.

    Raises:
        DuplicateModuleError: Two descriptors share a name.
        DuplicateEdgeError: A dependency is declared both public and private.
        UnknownModuleError: A dependency has no descriptor.
    """
    modules = _index_descriptors(descriptors)
    edges = {
        name: _edges_for(descriptor, modules, excluded)
        for name, descriptor in modules.items()
    }
    return DependencyGraph(
        modules=MappingProxyType(modules),
        edges=MappingProxyType(edges),
    )


__all__ = ["DependencyEdge", "DependencyGraph", "build_dependency_graph"]
