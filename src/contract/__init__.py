"""Stable contract surface for modplan build plan artifacts.

Treat these exports as the authoritative boundary between the planner and
the tools that consume its plans.
"""

from contract.artifacts import (
    BUILD_PLAN_JSON,
    DEPS_EDGELIST,
    PLAN_ARTIFACT_SPECS,
    PLAN_SCHEMA_VERSION,
    PlanArtifactSpec,
    format_edge,
)


def __getattr__(name: str) -> object:
    if name in {"BuildPlan", "ModuleDescriptor", "ModulePlan", "PlanSummary"}:
        from contract.models import (
            BuildPlan,
            ModuleDescriptor,
            ModulePlan,
            PlanSummary,
        )

        return {
            "BuildPlan": BuildPlan,
            "ModuleDescriptor": ModuleDescriptor,
            "ModulePlan": ModulePlan,
            "PlanSummary": PlanSummary,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "BUILD_PLAN_JSON",
    "DEPS_EDGELIST",
    "PLAN_ARTIFACT_SPECS",
    "PLAN_SCHEMA_VERSION",
    "BuildPlan",
    "ModuleDescriptor",
    "ModulePlan",
    "PlanArtifactSpec",
    "PlanSummary",
    "ValidationMessage",
    "ValidationResult",
    "format_edge",
    "validate_artifacts",
]
