"""Precompiled-header and toolchain compatibility checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.descriptors import PchPolicy
from resolve.errors import IncompatiblePCHPolicyError, ToolchainVersionSkewError

if TYPE_CHECKING:
    from artifacts.models.artifacts.environment import BuildEnvironment
    from graph.model import DependencyGraph


def is_pch_compatible(module_policy: PchPolicy, dependency_policy: PchPolicy) -> bool:
    """A module requiring explicit or shared PCHs cannot use a PCH-less module."""
    if module_policy is PchPolicy.EXPLICIT_OR_SHARED_REQUIRED:
        return dependency_policy is not PchPolicy.NONE
    return True


def check_pch_policies(graph: DependencyGraph) -> None:
    """Raise ``IncompatiblePCHPolicyError`` for the first incompatible edge."""
    for name in sorted(graph.nodes):
        policy = graph.descriptor(name).pch_policy
        for dependency in graph.dependencies(name):
            dependency_policy = graph.descriptor(dependency).pch_policy
            if not is_pch_compatible(policy, dependency_policy):
                raise IncompatiblePCHPolicyError(
                    name, dependency, policy.value, dependency_policy.value
                )


def check_toolchain_versions(
    graph: DependencyGraph, environment: BuildEnvironment | None = None
) -> None:
    """Raise ``ToolchainVersionSkewError`` when a dependency is newer.

    Checking direct edges covers transitive dependencies too: along any
    dependency path the versions are non-increasing, so a newer transitive
    dependency always shows up as a newer direct dependency somewhere on the
    path. The environment ceiling, when set, applies to every module.
    """
    ceiling = environment.max_toolchain_version if environment else None
    names = sorted(graph.nodes)

    if ceiling is not None:
        for name in names:
            version = graph.descriptor(name).toolchain_version
            if version > ceiling:
                raise ToolchainVersionSkewError(None, name, ceiling, version)

    for name in names:
        version = graph.descriptor(name).toolchain_version
        for dependency in graph.dependencies(name):
            dependency_version = graph.descriptor(dependency).toolchain_version
            if dependency_version > version:
                raise ToolchainVersionSkewError(
                    name, dependency, version, dependency_version
                )


def check_policies(
    graph: DependencyGraph, environment: BuildEnvironment | None = None
) -> None:
    """Run every policy check on an acyclic graph."""
    check_pch_policies(graph)
    check_toolchain_versions(graph, environment)


__all__ = [
    "check_pch_policies",
    "check_policies",
    "check_toolchain_versions",
    "is_pch_compatible",
]
