"""Resolution error taxonomy.

Every error carries the module names involved so a caller can render a
precise diagnostic or serialize it with ``to_dict()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from utils import format_path

if TYPE_CHECKING:
    from collections.abc import Sequence


class ResolutionError(Exception):
    """Base class for every failure that aborts a resolution pass."""

    kind = "resolution_error"

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "message": str(self)}


class UnknownModuleError(ResolutionError):
    """A dependency references a module that is not part of the input set."""

    kind = "unknown_module"

    def __init__(self, module: str, dependency: str, *, excluded: bool = False):
        self.module = module
        self.dependency = dependency
        self.excluded = excluded
        if excluded:
            msg = (
                f"{module!r} depends on {dependency!r}, which the build "
                "environment excludes"
            )
        else:
            msg = f"{module!r} depends on unknown module {dependency!r}"
        super().__init__(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "module": self.module,
            "dependency": self.dependency,
            "excluded": self.excluded,
        }


class DuplicateModuleError(ResolutionError):
    """Two descriptors declare the same module name."""

    kind = "duplicate_module"

    def __init__(self, module: str):
        self.module = module
        super().__init__(f"module {module!r} is declared more than once")

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "module": self.module}


class DuplicateEdgeError(ResolutionError):
    """The same dependency is declared both public and private."""

    kind = "duplicate_edge"

    def __init__(self, module: str, dependency: str):
        self.module = module
        self.dependency = dependency
        super().__init__(
            f"{module!r} lists {dependency!r} as both a public and a private "
            "dependency"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "module": self.module,
            "dependency": self.dependency,
        }


class CyclicDependencyError(ResolutionError):
    """The dependency graph contains a cycle."""

    kind = "cyclic_dependency"

    def __init__(self, cycle: Sequence[str]):
        self.cycle = tuple(cycle)
        super().__init__(f"dependency cycle: {format_path(self.cycle)}")

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "cycle": list(self.cycle)}


class InvalidLayeringError(ResolutionError):
    """A module depends on a module of a kind it may not require."""

    kind = "invalid_layering"

    def __init__(
        self,
        source: str,
        target: str,
        source_kind: str,
        target_kind: str,
        path: Sequence[str] = (),
    ):
        self.source = source
        self.target = target
        self.source_kind = source_kind
        self.target_kind = target_kind
        self.path = tuple(path) or (source, target)
        msg = (
            f"{source_kind} module {source!r} depends on {target_kind} module "
            f"{target!r}"
        )
        if len(self.path) > 2:
            msg += f" via {format_path(self.path)}"
        super().__init__(msg)

    @property
    def edge(self) -> tuple[str, str]:
        return (self.source, self.target)

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "source": self.source,
            "target": self.target,
            "source_kind": self.source_kind,
            "target_kind": self.target_kind,
            "path": list(self.path),
        }


class IncompatiblePCHPolicyError(ResolutionError):
    """A module requiring shared/explicit PCHs depends on one using none."""

    kind = "incompatible_pch_policy"

    def __init__(
        self, module: str, dependency: str, module_policy: str, dependency_policy: str
    ):
        self.module = module
        self.dependency = dependency
        self.module_policy = module_policy
        self.dependency_policy = dependency_policy
        super().__init__(
            f"{module!r} ({module_policy}) cannot depend on {dependency!r} "
            f"({dependency_policy})"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "module": self.module,
            "dependency": self.dependency,
            "module_policy": self.module_policy,
            "dependency_policy": self.dependency_policy,
        }


class ToolchainVersionSkewError(ResolutionError):
    """A module depends on a module built for a newer toolchain epoch.

    ``dependent`` is ``None`` when the limit comes from the build environment
    rather than from another module.
    """

    kind = "toolchain_version_skew"

    def __init__(
        self,
        dependent: str | None,
        dependency: str,
        dependent_version: int,
        dependency_version: int,
    ):
        self.dependent = dependent
        self.dependency = dependency
        self.dependent_version = dependent_version
        self.dependency_version = dependency_version
        if dependent is None:
            msg = (
                f"{dependency!r} requires toolchain version {dependency_version}, "
                f"newer than the build environment's {dependent_version}"
            )
        else:
            msg = (
                f"{dependent!r} (toolchain version {dependent_version}) depends on "
                f"{dependency!r} (toolchain version {dependency_version})"
            )
        super().__init__(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "dependent": self.dependent,
            "dependency": self.dependency,
            "dependent_version": self.dependent_version,
            "dependency_version": self.dependency_version,
        }


__all__ = [
    "CyclicDependencyError",
    "DuplicateEdgeError",
    "DuplicateModuleError",
    "IncompatiblePCHPolicyError",
    "InvalidLayeringError",
    "ResolutionError",
    "ToolchainVersionSkewError",
    "UnknownModuleError",
]
