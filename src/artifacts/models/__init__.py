"""Model namespace for modplan descriptor and plan schemas."""

from artifacts.models.artifacts.descriptors import (
    ModuleDescriptor,
    ModuleKind,
    PchPolicy,
    Visibility,
)
from artifacts.models.artifacts.environment import BuildEnvironment
from artifacts.models.artifacts.plan import BuildPlan, ModulePlan, PlanSummary

__all__ = [
    "BuildEnvironment",
    "BuildPlan",
    "ModuleDescriptor",
    "ModuleKind",
    "ModulePlan",
    "PchPolicy",
    "PlanSummary",
    "Visibility",
]
