"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import ModPlanConfig


def generate_plan_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ModPlanConfig | None = None,
    manifest: str | None = None,
    parallel: bool | None = None,
) -> dict[str, object]:
    """Generate plan artifacts via lazy import to avoid package import cycles."""
    from artifacts.write import generate_plan_artifacts as _generate_plan_artifacts

    return _generate_plan_artifacts(
        root=root,
        out_dir=out_dir,
        config=config,
        manifest=manifest,
        parallel=parallel,
    )


__all__ = ["generate_plan_artifacts"]
