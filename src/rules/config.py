from __future__ import annotations

from pathlib import Path

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from artifacts.models.artifacts.descriptors import ModuleKind
from artifacts.models.artifacts.environment import BuildEnvironment

CONFIG_FILENAME = "modplan.toml"

DEFAULT_MANIFEST = "modules.toml"


class KindRule(BaseModel):
    """Module kinds a module of one kind may depend on."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    from_kind: ModuleKind = Field(alias="from", description="Dependent kind")
    to: list[ModuleKind] = Field(
        default_factory=list,
        description="Kinds this kind may depend on, directly or transitively",
    )


def _default_kind_rules() -> list[KindRule]:
    return [
        KindRule(from_kind=ModuleKind.RUNTIME, to=[ModuleKind.RUNTIME]),
        KindRule(
            from_kind=ModuleKind.EDITOR_ONLY,
            to=[ModuleKind.RUNTIME, ModuleKind.EDITOR_ONLY, ModuleKind.TEST],
        ),
        KindRule(
            from_kind=ModuleKind.TEST,
            to=[ModuleKind.RUNTIME, ModuleKind.EDITOR_ONLY, ModuleKind.TEST],
        ),
    ]


class LayeringConfig(BaseModel):
    """Allowed dependencies between module kinds."""

    model_config = ConfigDict(extra="forbid")

    rules: list[KindRule] = Field(
        default_factory=_default_kind_rules,
        description="Allowed dependency rules between module kinds",
    )

    @field_validator("rules")
    @classmethod
    def runtime_stays_runtime_only(cls, v: list[KindRule]) -> list[KindRule]:
        """Runtime modules may never be allowed to reach editor or test code."""
        for rule in v:
            if rule.from_kind is not ModuleKind.RUNTIME:
                continue
            forbidden = sorted(
                kind.value for kind in rule.to if kind is not ModuleKind.RUNTIME
            )
            if forbidden:
                msg = (
                    "runtime modules may only depend on runtime modules; "
                    f"got {', '.join(forbidden)}"
                )
                raise ValueError(msg)
        return v


class ModPlanConfig(BaseModel):
    """Configuration for modplan build planning."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".modplan",
        description="Output directory for generated plan artifacts",
    )
    manifest: str = Field(
        default=DEFAULT_MANIFEST,
        description="Descriptor manifest path, relative to the project root",
    )
    parallel_checks: bool = Field(
        default=False,
        description="Run independent resolver passes on a thread pool",
    )
    environment: BuildEnvironment = Field(
        default_factory=BuildEnvironment,
        description="Build environment passed to the resolver",
    )
    layering: LayeringConfig = Field(
        default_factory=LayeringConfig,
        description="Module kind layering rules",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the project root.

    The config output_dir must be a non-empty relative path that remains
    within the project root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    if output_dir.startswith("~"):
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_path.is_absolute():
        msg = "output_dir must be a relative path within the project root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the project root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> ModPlanConfig:
    """Load configuration from modplan.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ModPlanConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ModPlanConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
