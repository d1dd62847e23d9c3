"""Validation helpers for build plan artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from contract.artifacts import (
    EDGELIST_LINE,
    PLAN_ARTIFACT_SPECS,
    PLAN_SCHEMA_VERSION,
)
from contract.models import BuildPlan

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    plan: BuildPlan | None = None
    for artifact_name, spec in PLAN_ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        if spec.format == "json":
            plan = _validate_build_plan(
                artifact_name,
                path,
                result,
                strict_schema_version=strict_schema_version,
            )
        elif spec.format == "edgelist":
            _validate_edgelist(artifact_name, path, plan, result)
        else:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message=f"Unsupported artifact format: {spec.format}.",
                )
            )

    return result


def _validate_build_plan(
    artifact_name: str,
    path: Path,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> BuildPlan | None:
    try:
        raw = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Invalid JSON: {exc}.",
            )
        )
        return None

    if not isinstance(raw, dict):
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message="Expected JSON object for build_plan.json.",
            )
        )
        return None

    schema_present = "schema_version" in raw
    try:
        plan = BuildPlan.model_validate(raw)
    except ValidationError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Schema validation failed: {exc}.",
            )
        )
        return None

    _check_schema_version(
        artifact_name,
        path,
        schema_present,
        plan.schema_version,
        result,
        strict_schema_version=strict_schema_version,
    )
    for message in _plan_consistency_errors(plan):
        result.errors.append(
            ValidationMessage(artifact=artifact_name, path=path, message=message)
        )
    return plan


def _plan_consistency_errors(plan: BuildPlan) -> list[str]:
    """Check that the plan's order and waves respect every declared edge."""
    errors: list[str] = []

    if sorted(plan.order) != sorted(plan.modules):
        errors.append("Build order does not list every module exactly once.")
        return errors

    flattened = [name for wave in plan.ready_sets for name in wave]
    if sorted(flattened) != sorted(plan.order):
        errors.append("Ready sets do not list every module exactly once.")
        return errors

    position = {name: index for index, name in enumerate(plan.order)}
    wave_of = {name: i for i, wave in enumerate(plan.ready_sets) for name in wave}
    for name in plan.order:
        module = plan.modules[name]
        for dependency in (*module.public_dependencies, *module.private_dependencies):
            if dependency not in position:
                errors.append(f"Module {name!r} depends on unplanned {dependency!r}.")
                continue
            if position[dependency] >= position[name]:
                errors.append(
                    f"Module {name!r} is ordered before its dependency "
                    f"{dependency!r}."
                )
            if wave_of[dependency] >= wave_of[name]:
                errors.append(
                    f"Module {name!r} shares or precedes the ready set of its "
                    f"dependency {dependency!r}."
                )
    return errors


def _check_schema_version(
    artifact_name: str,
    path: Path,
    schema_present: bool,
    schema_version: int,
    result: ValidationResult,
    *,
    strict_schema_version: bool,
) -> None:
    if schema_present and schema_version == PLAN_SCHEMA_VERSION:
        return

    if schema_present:
        message = (
            f"Schema version {schema_version} does not match expected "
            f"{PLAN_SCHEMA_VERSION}."
        )
    else:
        message = "Missing schema_version; assuming current version."

    target = result.errors if strict_schema_version else result.warnings
    target.append(ValidationMessage(artifact=artifact_name, path=path, message=message))


def _validate_edgelist(
    artifact_name: str,
    path: Path,
    plan: BuildPlan | None,
    result: ValidationResult,
) -> None:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: invalid UTF-8 ({exc}).",
            )
        )
        return
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return

    for line_number, raw_line in enumerate(lines, 1):
        line = raw_line.strip()
        if not line:
            continue
        match = EDGELIST_LINE.match(line)
        if match is None:
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line_number,
                    message=(
                        "Malformed edgelist line "
                        "(expected 'source -> target [visibility]')."
                    ),
                )
            )
            continue
        if plan is not None and not _edge_declared(
            plan, match["source"], match["target"], match["visibility"]
        ):
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    line=line_number,
                    message="Edge is not declared by the build plan.",
                )
            )


def _edge_declared(
    plan: BuildPlan, source: str, target: str, visibility: str
) -> bool:
    module = plan.modules.get(source)
    if module is None:
        return False
    if visibility == "public":
        return target in module.public_dependencies
    return target in module.private_dependencies
