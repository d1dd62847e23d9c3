"""Build plan models.

These are the outputs of one resolution pass: the build order, the parallel
build waves and the per-module interface information.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from artifacts.models.artifacts.descriptors import ModuleKind, PchPolicy
from artifacts.models.artifacts.environment import BuildEnvironment


def _plan_schema_version() -> int:
    from contract.artifacts import PLAN_SCHEMA_VERSION

    return PLAN_SCHEMA_VERSION


class ModulePlan(BaseModel):
    """Resolved view of a single module."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: ModuleKind
    pch_policy: PchPolicy
    toolchain_version: int
    public_dependencies: tuple[str, ...] = ()
    private_dependencies: tuple[str, ...] = ()
    public_closure: tuple[str, ...] = Field(
        default=(),
        description="Modules re-exported to consumers, directly or transitively",
    )
    visible_dependencies: tuple[str, ...] = Field(
        default=(),
        description="Every module this module compiles against",
    )


class PlanSummary(BaseModel):
    """Summary of dependency graph metrics."""

    model_config = ConfigDict(frozen=True)

    node_count: int
    edge_count: int
    public_edge_count: int = 0
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)
    top_modules: list[str] = Field(default_factory=list)


class BuildPlan(BaseModel):
    """Ordered build sequence plus each module's effective public interface."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = Field(default_factory=_plan_schema_version)
    environment: BuildEnvironment = Field(default_factory=BuildEnvironment)
    order: tuple[str, ...]
    ready_sets: tuple[tuple[str, ...], ...]
    modules: dict[str, ModulePlan]
    summary: PlanSummary

    def public_closure(self, name: str) -> frozenset[str]:
        return frozenset(self.modules[name].public_closure)

    def position(self, name: str) -> int:
        return self.order.index(name)


__all__ = ["BuildPlan", "ModulePlan", "PlanSummary"]
