"""Dependency edgelist generator for modplan artifacts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.artifacts import DEPS_EDGELIST, format_edge

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.plan import BuildPlan

logger = logging.getLogger(__name__)


def plan_edges(plan: BuildPlan) -> list[tuple[str, str, str]]:
    """Return every declared edge of a plan as sorted (source, target, visibility)."""
    edges: list[tuple[str, str, str]] = []
    for name, module in plan.modules.items():
        edges.extend((name, dep, "public") for dep in module.public_dependencies)
        edges.extend((name, dep, "private") for dep in module.private_dependencies)
    return sorted(edges)


class DepsGenerator:
    """Generator for the dependency edgelist artifact."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "deps"

    def generate(self, plan: BuildPlan, out_dir: Path) -> str:
        """Write deps.edgelist, one ``source -> target [visibility]`` per line."""
        out_dir.mkdir(parents=True, exist_ok=True)

        edges = plan_edges(plan)
        edgelist_path = out_dir / DEPS_EDGELIST
        with edgelist_path.open("w", encoding="utf-8") as f:
            for source, target, visibility in edges:
                f.write(format_edge(source, target, visibility) + "\n")

        logger.debug("Wrote %d edges to %s", len(edges), edgelist_path)
        return DEPS_EDGELIST


__all__ = ["DEPS_EDGELIST", "DepsGenerator", "plan_edges"]
