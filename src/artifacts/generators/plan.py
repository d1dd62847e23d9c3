"""Build plan generator for modplan artifacts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.utils import _write_json
from contract.artifacts import BUILD_PLAN_JSON

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.artifacts.plan import BuildPlan

logger = logging.getLogger(__name__)


class PlanGenerator:
    """Generator for build_plan.json."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "plan"

    def generate(self, plan: BuildPlan, out_dir: Path) -> str:
        out_dir.mkdir(parents=True, exist_ok=True)
        _write_json(out_dir / BUILD_PLAN_JSON, plan)
        logger.debug("Wrote build plan for %d modules", len(plan.order))
        return BUILD_PLAN_JSON


__all__ = ["BUILD_PLAN_JSON", "PlanGenerator"]
