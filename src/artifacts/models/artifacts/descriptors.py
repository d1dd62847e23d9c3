"""Module descriptor models.

A descriptor is the immutable declaration of a single module: its identity,
the modules it depends on (split by visibility), its precompiled-header
policy, its toolchain epoch and the kind of build it belongs to.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils import dedupe_preserving_order


class PchPolicy(str, Enum):
    """Precompiled-header strategies a module may declare."""

    NONE = "none"
    SHARED_ALLOWED = "shared_allowed"
    EXPLICIT_OR_SHARED_REQUIRED = "explicit_or_shared_required"


class ModuleKind(str, Enum):
    """Build flavours a module can belong to."""

    RUNTIME = "runtime"
    EDITOR_ONLY = "editor_only"
    TEST = "test"


class Visibility(str, Enum):
    """Visibility of a dependency edge."""

    PUBLIC = "public"
    PRIVATE = "private"


class ModuleDescriptor(BaseModel):
    """Declared identity, dependencies and policies of one module."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, description="Unique module name")
    public_dependencies: tuple[str, ...] = Field(
        default=(),
        description="Modules whose interface is re-exported to consumers",
    )
    private_dependencies: tuple[str, ...] = Field(
        default=(),
        description="Modules used internally only",
    )
    pch_policy: PchPolicy = Field(default=PchPolicy.SHARED_ALLOWED)
    toolchain_version: int = Field(
        default=0,
        description="Compatibility epoch; dependencies must not be newer",
    )
    kind: ModuleKind = Field(default=ModuleKind.RUNTIME)

    @field_validator("public_dependencies", "private_dependencies", mode="before")
    @classmethod
    def collapse_repeated_names(cls, v: Any) -> Any:
        """Drop repeated entries within one dependency list.

        Declarations frequently list the same module more than once; only the
        first occurrence is meaningful.
        """
        if v is None:
            return ()
        if isinstance(v, str):
            msg = "dependency lists must be sequences of module names"
            raise ValueError(msg)
        try:
            v = tuple(v)
        except TypeError as exc:
            msg = "dependency lists must be sequences of module names"
            raise ValueError(msg) from exc
        for name in v:
            if not isinstance(name, str) or not name:
                msg = f"Invalid dependency name {name!r}"
                raise ValueError(msg)
        return dedupe_preserving_order(v)

    def dependencies(self) -> list[tuple[str, Visibility]]:
        """Return every declared dependency, public first, in declared order."""
        return [(dep, Visibility.PUBLIC) for dep in self.public_dependencies] + [
            (dep, Visibility.PRIVATE) for dep in self.private_dependencies
        ]


__all__ = ["ModuleDescriptor", "ModuleKind", "PchPolicy", "Visibility"]
