from __future__ import annotations

import pytest

from artifacts.models.artifacts.descriptors import ModuleDescriptor
from graph.algos import (
    check_acyclic,
    find_cycle,
    find_path,
    public_closures,
    ready_sets,
    topological_order,
    visible_dependencies,
)
from graph.model import DependencyGraph, build_dependency_graph
from resolve.errors import CyclicDependencyError


def _graph(layout: dict[str, tuple[list[str], list[str]]]) -> DependencyGraph:
    """Build a graph from ``name -> (public, private)`` in insertion order."""
    return build_dependency_graph(
        [
            ModuleDescriptor(
                name=name, public_dependencies=public, private_dependencies=private
            )
            for name, (public, private) in layout.items()
        ]
    )


def _is_cycle_in(graph: DependencyGraph, cycle: list[str]) -> bool:
    if len(cycle) < 2 or cycle[0] != cycle[-1]:
        return False
    return all(
        target in graph.dependencies(source)
        for source, target in zip(cycle, cycle[1:])
    )


# Cycle detection


def test_empty_graph_is_acyclic() -> None:
    assert find_cycle(_graph({})) is None


def test_graph_without_edges_is_acyclic() -> None:
    assert find_cycle(_graph({"A": ([], []), "B": ([], [])})) is None


def test_two_module_cycle_reported_from_first_input_module() -> None:
    graph = _graph({"A": (["B"], []), "B": (["A"], [])})

    assert find_cycle(graph) == ["A", "B", "A"]


def test_self_dependency_is_a_cycle() -> None:
    assert find_cycle(_graph({"A": ([], ["A"])})) == ["A", "A"]


def test_cycle_through_private_edges_is_detected() -> None:
    graph = _graph({"A": ([], ["B"]), "B": ([], ["C"]), "C": (["A"], [])})

    assert find_cycle(graph) == ["A", "B", "C", "A"]


def test_reported_cycle_excludes_acyclic_prefix() -> None:
    graph = _graph(
        {
            "Entry": (["A"], []),
            "A": (["B"], []),
            "B": (["C"], []),
            "C": (["A"], []),
        }
    )

    cycle = find_cycle(graph)

    assert cycle == ["A", "B", "C", "A"]
    assert _is_cycle_in(graph, cycle)


def test_cycle_choice_follows_declared_dependency_order() -> None:
    graph = _graph(
        {
            "A": (["C", "B"], []),
            "B": (["A"], []),
            "C": (["A"], []),
        }
    )

    assert find_cycle(graph) == ["A", "C", "A"]


def test_cycle_search_is_repeatable() -> None:
    graph = _graph({"A": (["B"], []), "B": (["C"], []), "C": (["B"], [])})

    assert find_cycle(graph) == find_cycle(graph) == ["B", "C", "B"]


def test_diamond_is_not_a_cycle() -> None:
    graph = _graph(
        {
            "Top": (["Left", "Right"], []),
            "Left": (["Base"], []),
            "Right": (["Base"], []),
            "Base": ([], []),
        }
    )

    assert find_cycle(graph) is None
    check_acyclic(graph)


def test_check_acyclic_raises_with_cycle() -> None:
    with pytest.raises(CyclicDependencyError) as exc_info:
        check_acyclic(_graph({"A": (["B"], []), "B": (["A"], [])}))

    assert exc_info.value.cycle == ("A", "B", "A")


def test_long_chain_does_not_hit_recursion_limit() -> None:
    layout = {f"M{i:05d}": ([f"M{i + 1:05d}"], []) for i in range(5000)}
    layout["M05000"] = ([], [])

    graph = _graph(layout)

    assert find_cycle(graph) is None
    assert topological_order(graph)[0] == "M05000"


# Build order


def test_topological_order_places_dependencies_first() -> None:
    graph = _graph(
        {
            "Game": (["Engine"], ["Core"]),
            "Engine": (["Core"], []),
            "Core": ([], []),
        }
    )

    assert topological_order(graph) == ["Core", "Engine", "Game"]


def test_topological_order_breaks_ties_by_name() -> None:
    graph = _graph(
        {
            "Zeta": ([], []),
            "Alpha": ([], []),
            "Mid": (["Zeta"], []),
        }
    )

    assert topological_order(graph) == ["Alpha", "Zeta", "Mid"]


def test_topological_order_is_lexicographically_smallest() -> None:
    graph = _graph(
        {
            "B": ([], []),
            "D": ([], []),
            "C": (["D"], []),
            "A": (["D"], []),
        }
    )

    assert topological_order(graph) == ["B", "D", "A", "C"]


def test_topological_order_raises_on_cycle() -> None:
    with pytest.raises(CyclicDependencyError):
        topological_order(_graph({"A": (["B"], []), "B": (["A"], [])}))


def test_ready_sets_group_independent_modules() -> None:
    graph = _graph(
        {
            "Tests": ([], ["Game", "Editor"]),
            "Editor": (["Engine"], []),
            "Game": (["Engine"], []),
            "Engine": (["Core"], []),
            "Core": ([], []),
            "Tools": ([], []),
        }
    )

    assert ready_sets(graph) == [
        ["Core", "Tools"],
        ["Engine"],
        ["Editor", "Game"],
        ["Tests"],
    ]


def test_ready_sets_empty_graph() -> None:
    assert ready_sets(_graph({})) == []


def test_ready_sets_raise_on_cycle() -> None:
    with pytest.raises(CyclicDependencyError):
        ready_sets(_graph({"A": (["A"], [])}))


# Visibility


def test_public_closure_follows_public_chains() -> None:
    graph = _graph({"A": (["B"], []), "B": (["C"], []), "C": ([], [])})

    closures = public_closures(graph)

    assert closures["A"] == {"B", "C"}
    assert closures["B"] == {"C"}
    assert closures["C"] == frozenset()


def test_public_closure_stops_at_private_edge() -> None:
    graph = _graph({"A": (["B"], []), "B": ([], ["C"]), "C": ([], [])})

    closures = public_closures(graph)

    assert closures["A"] == {"B"}
    assert closures["B"] == frozenset()


def test_private_dependency_is_not_reexported_even_if_it_is_public_below() -> None:
    graph = _graph({"A": ([], ["B"]), "B": (["C"], []), "C": ([], [])})

    assert public_closures(graph)["A"] == frozenset()


def test_public_closure_is_idempotent() -> None:
    graph = _graph(
        {
            "Top": (["Left", "Right"], []),
            "Left": (["Base"], []),
            "Right": ([], ["Base"]),
            "Base": ([], []),
        }
    )

    first = public_closures(graph)
    second = public_closures(graph, topological_order(graph))

    assert first == second
    assert first["Top"] == {"Left", "Right", "Base"}


def test_visible_dependencies_include_private_deps_and_their_reexports() -> None:
    graph = _graph(
        {
            "Game": ([], ["Engine"]),
            "Engine": (["Core"], ["Internal"]),
            "Core": ([], []),
            "Internal": ([], []),
        }
    )

    visible = visible_dependencies(graph, public_closures(graph))

    assert visible["Game"] == {"Engine", "Core"}
    assert visible["Engine"] == {"Core", "Internal"}


# Paths


def test_find_path_returns_first_path_in_declared_order() -> None:
    graph = _graph(
        {
            "A": (["B", "C"], []),
            "B": (["D"], []),
            "C": (["D"], []),
            "D": ([], []),
        }
    )

    assert find_path(graph, "A", lambda name: name == "D") == ["A", "B", "D"]


def test_find_path_never_matches_source() -> None:
    graph = _graph({"A": ([], [])})

    assert find_path(graph, "A", lambda name: True) is None
