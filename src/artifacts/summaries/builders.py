"""Summary builders for build plans."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from artifacts.models.artifacts.plan import PlanSummary
    from graph.model import DependencyGraph


def compute_fan_stats(
    edges: list[tuple[str, str]],
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute fan-in and fan-out statistics from edges."""
    fan_in: dict[str, int] = {}
    fan_out: dict[str, int] = {}

    for source, target in edges:
        fan_out[source] = fan_out.get(source, 0) + 1
        fan_in[target] = fan_in.get(target, 0) + 1

    return fan_in, fan_out


def compute_plan_summary(graph: DependencyGraph, *, top_n: int = 10) -> PlanSummary:
    """Summarize the graph: sizes, fan statistics and most depended-on modules."""
    from artifacts.models.artifacts.plan import PlanSummary

    edges = sorted(graph.edge_pairs())
    fan_in, fan_out = compute_fan_stats(edges)
    top_modules = sorted(fan_in, key=lambda m: (-fan_in[m], m))[:top_n]

    return PlanSummary(
        node_count=len(graph),
        edge_count=len(edges),
        public_edge_count=sum(1 for edge in graph.iter_edges() if edge.is_public),
        fan_in=dict(sorted(fan_in.items())),
        fan_out=dict(sorted(fan_out.items())),
        top_modules=top_modules,
    )
