"""Build environment passed explicitly to the resolver."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from artifacts.models.artifacts.descriptors import ModuleKind


class BuildEnvironment(BaseModel):
    """Target-wide settings that would otherwise be read from ambient state."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include_kinds: frozenset[ModuleKind] = Field(
        default=frozenset(ModuleKind),
        description="Module kinds that take part in this build",
    )
    max_toolchain_version: int | None = Field(
        default=None,
        description="Newest toolchain epoch the host toolchain supports",
    )

    @field_serializer("include_kinds")
    def _sorted_kinds(self, kinds: frozenset[ModuleKind]) -> list[str]:
        return sorted(kind.value for kind in kinds)

    def includes(self, kind: ModuleKind) -> bool:
        return kind in self.include_kinds


__all__ = ["BuildEnvironment"]
