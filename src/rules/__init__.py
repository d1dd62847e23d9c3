"""Rule definitions for modplan."""

from rules.config import (
    ConfigError,
    LayeringConfig,
    ModPlanConfig,
    load_config,
)
from rules.layers import (
    build_allowed_kinds,
    check_layering,
    find_layering_violation,
    is_violation,
)
from rules.policy import check_pch_policies, check_policies, check_toolchain_versions

__all__ = [
    "ConfigError",
    "LayeringConfig",
    "ModPlanConfig",
    "build_allowed_kinds",
    "check_layering",
    "check_pch_policies",
    "check_policies",
    "check_toolchain_versions",
    "find_layering_violation",
    "is_violation",
    "load_config",
]
