from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.generators import DepsGenerator, PlanGenerator
from resolve.resolver import resolve
from rules.config import load_config, resolve_output_dir
from scan.manifest import load_descriptors, manifest_path

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import ModPlanConfig

logger = logging.getLogger(__name__)


def generate_plan_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ModPlanConfig | None = None,
    manifest: str | None = None,
    parallel: bool | None = None,
) -> dict[str, object]:
    """Resolve a project's descriptors and write the build plan artifacts.

    Args:
        root: Project root holding modplan.toml and the descriptor manifest
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from ``root`` when omitted
        manifest: Optional manifest path overriding the configured one
        parallel: Optional override of the configured ``parallel_checks``

    Returns:
        Dictionary with counts and list of generated artifact paths.

    Raises:
        ResolutionError: The descriptors do not resolve to a valid plan.
            Nothing is written in that case.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    if parallel is None:
        parallel = config.parallel_checks

    descriptors = load_descriptors(manifest_path(root, config, manifest))
    result = resolve(
        descriptors,
        environment=config.environment,
        layering=config.layering,
        parallel=parallel,
    )
    plan = result.unwrap()

    artifacts_list: list[str] = []
    for generator in (PlanGenerator(), DepsGenerator()):
        artifacts_list.append(generator.generate(plan, out_dir))
        logger.debug("Generator %s wrote %s", generator.name, artifacts_list[-1])

    return {
        "module_count": plan.summary.node_count,
        "edge_count": plan.summary.edge_count,
        "ready_set_count": len(plan.ready_sets),
        "artifacts": [str(out_dir / name) for name in artifacts_list],
    }
