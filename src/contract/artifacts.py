"""Build plan artifact contract definitions.

This module defines the stable boundary between the planner and the tools
that consume its output (compiler drivers, packagers).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Artifact schema version for build plan artifacts.
PLAN_SCHEMA_VERSION = 1

# Artifact filename constants (stable contract identifiers).
BUILD_PLAN_JSON = "build_plan.json"
DEPS_EDGELIST = "deps.edgelist"

# Edgelist line format: "{source} -> {target} [{visibility}]"
EDGELIST_LINE = re.compile(
    r"^(?P<source>\S+) -> (?P<target>\S+) \[(?P<visibility>public|private)\]$"
)


@dataclass(frozen=True)
class PlanArtifactSpec:
    """Specification for a build plan artifact."""

    filename: str
    format: str
    required_fields_note: str


def format_edge(source: str, target: str, visibility: str) -> str:
    """Render one dependency edge as an edgelist line (without newline)."""
    return f"{source} -> {target} [{visibility}]"


PLAN_ARTIFACT_SPECS: dict[str, PlanArtifactSpec] = {
    "build_plan": PlanArtifactSpec(
        filename=BUILD_PLAN_JSON,
        format="json",
        required_fields_note="BuildPlan fields required by contract.",
    ),
    "deps_edgelist": PlanArtifactSpec(
        filename=DEPS_EDGELIST,
        format="edgelist",
        required_fields_note="Dependency edges (source, target, visibility).",
    ),
}
