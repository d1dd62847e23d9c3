"""Dependency graph construction and traversal."""

from graph.algos import (
    check_acyclic,
    find_cycle,
    find_path,
    public_closures,
    ready_sets,
    topological_order,
    visible_dependencies,
)
from graph.model import DependencyEdge, DependencyGraph, build_dependency_graph

__all__ = [
    "DependencyEdge",
    "DependencyGraph",
    "build_dependency_graph",
    "check_acyclic",
    "find_cycle",
    "find_path",
    "public_closures",
    "ready_sets",
    "topological_order",
    "visible_dependencies",
]
